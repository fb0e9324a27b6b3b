# /portal/db/models/identity_models.py

"""
SQLAlchemy models for credentials, user profiles and school classes.

`AuthUser` is the credential record the login flow checks; `Profile` is the
application-level identity row keyed by the same id. A profile may be missing
right after self-registration, which the identity resolver tolerates.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base
from ._columns import utcnow


class AuthUser(Base):
    __tablename__ = "auth_users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Deleting the credential removes the profile with it.
    profile = relationship("Profile", back_populates="auth_user", uselist=False, cascade="all, delete-orphan")


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, ForeignKey("auth_users.id"), primary_key=True, index=True)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    # Stored as plain strings; the resolver supplies defaults when absent.
    role = Column(String, nullable=True)
    class_label = Column(String, nullable=True, index=True)
    avatar_url = Column(String, nullable=True)

    auth_user = relationship("AuthUser", back_populates="profile")


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    contact_email = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
