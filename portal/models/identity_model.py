# /portal/models/identity_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, EmailStr, field_validator

from .common import CamelModel


class Role(str, Enum):
    ADMIN = "ADMIN"
    RESPONSIBLE = "RESPONSIBLE"  # Class delegate
    STUDENT = "STUDENT"


class Identity(CamelModel):
    """
    The resolved, application-level user record derived from an
    authenticated session. Every authorization decision is taken against
    this object.
    """
    id: str
    display_name: str
    email: str
    role: Role
    class_label: str
    avatar_url: str


class AuthSession(BaseModel):
    """The claims carried by a validated access token."""
    user_id: str
    email: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RegisterResponse(CamelModel):
    id: str
    email: str


class PasswordUpdate(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class ProfileRecord(CamelModel):
    """A stored profile as listed in the admin console."""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    class_label: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def unknown_role_is_student(cls, v):
        if v is None or isinstance(v, Role):
            return v
        return v if v in {role.value for role in Role} else Role.STUDENT
