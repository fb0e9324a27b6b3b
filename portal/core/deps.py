# /portal/core/deps.py

"""
FastAPI dependencies that authenticate the bearer token and resolve the
caller's `Identity`. Every protected router depends on one of these.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from ..models.identity_model import AuthSession, Identity, Role
from ..services import identity_service
from ..services.database_service import DatabaseService, get_db_service
from . import security

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Session invalide ou expirée. Veuillez vous reconnecter.",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_current_session(
    token: str = Depends(oauth2_scheme),
    db: DatabaseService = Depends(get_db_service),
) -> AuthSession:
    """Validates the token and checks that its credential still exists."""
    try:
        payload = security.decode_access_token(token)
    except ValueError:
        raise _CREDENTIALS_EXCEPTION

    if db.get_auth_user_by_id(payload["sub"]) is None:
        raise _CREDENTIALS_EXCEPTION
    return AuthSession(user_id=payload["sub"], email=payload["email"])


def get_current_identity(
    session: AuthSession = Depends(get_current_session),
    db: DatabaseService = Depends(get_db_service),
) -> Identity:
    return identity_service.resolve_identity(session, db)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != Role.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator access required.")
    return identity
