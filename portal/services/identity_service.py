# /portal/services/identity_service.py

"""
Turns an authenticated session into an application-level `Identity`, and
owns the credential flows (registration, login, password change).

Resolution deliberately never fails for a missing profile: right after
self-registration the profile row may not be provisioned yet, so a usable
STUDENT identity is synthesised from the session's email instead.
"""

import logging
import uuid
from typing import Optional
from urllib.parse import quote_plus

from sqlalchemy.exc import SQLAlchemyError

from ..core import security
from ..core.config import settings
from ..models.identity_model import AuthSession, Identity, Role
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Identifiants incorrects. Veuillez vérifier votre email et mot de passe."


def build_avatar_url(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote_plus(name)}&background=random"


def _email_local_part(email: str) -> str:
    return email.split("@")[0]


def parse_role(value: Optional[str]) -> Role:
    try:
        return Role(value) if value else Role.STUDENT
    except ValueError:
        logger.warning("Unknown role %r stored on a profile; treating as STUDENT.", value)
        return Role.STUDENT


def fallback_identity(user_id: str, email: str) -> Identity:
    """The identity used while no profile row exists for the session."""
    display_name = _email_local_part(email)
    return Identity(
        id=user_id,
        display_name=display_name,
        email=email,
        role=Role.STUDENT,
        class_label=settings.DEFAULT_CLASS_LABEL,
        avatar_url=build_avatar_url(display_name),
    )


def identity_from_profile(profile, email: str) -> Identity:
    """Maps a stored profile to an Identity, filling every absent field with its default."""
    display_name = profile.full_name or email
    return Identity(
        id=profile.id,
        display_name=display_name,
        email=profile.email or email,
        role=parse_role(profile.role),
        class_label=profile.class_label or settings.DEFAULT_CLASS_LABEL,
        avatar_url=profile.avatar_url or build_avatar_url(display_name),
    )


def resolve_identity(session: AuthSession, db: DatabaseService) -> Identity:
    """
    Resolves the identity for an authenticated session.

    A store failure is logged and propagated (the caller reports the service
    as unavailable); a missing profile yields the fallback identity.
    """
    try:
        profile = db.get_profile_by_id(session.user_id)
    except SQLAlchemyError:
        logger.exception("Profile lookup failed for user %s", session.user_id)
        raise

    if profile is None:
        logger.warning("No profile for user %s yet; using fallback identity.", session.user_id)
        return fallback_identity(session.user_id, session.email)
    return identity_from_profile(profile, session.email)


# --- Credential Flows ---

def register_user(email: str, password: str, db: DatabaseService):
    """Creates a credential only; the profile is provisioned separately by an administrator."""
    if not settings.ALLOW_SELF_REGISTRATION:
        raise PermissionError("Self-registration is disabled on this portal.")
    normalized_email = email.strip().lower()
    if db.get_auth_user_by_email(normalized_email):
        raise ValueError("Email already registered")
    return db.add_auth_user({
        "id": f"usr_{uuid.uuid4().hex[:12]}",
        "email": normalized_email,
        "hashed_password": security.get_password_hash(password),
    })


def authenticate(email: str, password: str, db: DatabaseService) -> Optional[str]:
    """Returns a signed access token, or None when the credentials are wrong."""
    user = db.get_auth_user_by_email(email.strip().lower())
    if not user or not security.verify_password(password, user.hashed_password):
        logger.info("Failed login attempt for %s", email)
        return None
    return security.create_access_token(subject=user.id, email=user.email)


def change_password(session: AuthSession, current_password: str, new_password: str, db: DatabaseService) -> None:
    user = db.get_auth_user_by_id(session.user_id)
    if not user or not security.verify_password(current_password, user.hashed_password):
        raise ValueError("Le mot de passe actuel est incorrect.")
    db.update_password(user.id, security.get_password_hash(new_password))
