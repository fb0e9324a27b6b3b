# /portal/routers/auth_router.py

"""
This module defines the public-facing API for all authentication-related actions.

It includes endpoints for:
- Self-registration of a credential (`/register`)
- Login and token generation (`/token`)
- Retrieving the caller's resolved identity (`/me`)
- Changing the password (`/password`) and logging out (`/logout`)

Tokens are stateless JWTs, so logging out is acknowledged by the server and
completed by the client discarding its token.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from ..core.deps import get_current_identity, get_current_session
from ..models.identity_model import AuthSession, Identity, PasswordUpdate, RegisterRequest, RegisterResponse, Token
from ..services import identity_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(user_in: RegisterRequest, db: DatabaseService = Depends(get_db_service)):
    """Creates a credential only; an administrator provisions the profile."""
    try:
        new_user = identity_service.register_user(user_in.email, user_in.password, db)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return RegisterResponse(id=new_user.id, email=new_user.email)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: DatabaseService = Depends(get_db_service),
):
    """OAuth2 password flow: the email goes in the `username` field."""
    access_token = identity_service.authenticate(form_data.username, form_data.password, db)
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=identity_service.INVALID_CREDENTIALS_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=access_token, token_type="bearer")


@router.get("/me", response_model=Identity)
def read_current_identity(identity: Identity = Depends(get_current_identity)):
    return identity


@router.put("/password", status_code=status.HTTP_204_NO_CONTENT)
def update_password(
    payload: PasswordUpdate,
    session: AuthSession = Depends(get_current_session),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        identity_service.change_password(session, payload.current_password, payload.new_password, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(session: AuthSession = Depends(get_current_session)):
    return Response(status_code=status.HTTP_204_NO_CONTENT)
