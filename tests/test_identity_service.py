# /tests/test_identity_service.py

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from portal.core import security
from portal.core.config import settings
from portal.models.identity_model import AuthSession, Role
from portal.services import identity_service


def test_missing_profile_yields_fallback_identity(db_service):
    session = AuthSession(user_id="usr_new", email="etu@test.sn")
    identity = identity_service.resolve_identity(session, db_service)

    assert identity.id == "usr_new"
    assert identity.display_name == "etu"
    assert identity.role == Role.STUDENT
    assert identity.class_label == settings.DEFAULT_CLASS_LABEL == "Licence 2 - Info"
    assert identity.avatar_url == "https://ui-avatars.com/api/?name=etu&background=random"


def test_profile_fields_are_mapped(db_service):
    db_service.add_user_with_profile(
        {"id": "usr_1", "email": "moussa@test.sn", "hashed_password": "x"},
        {"full_name": "Moussa Ndiaye", "email": "moussa@test.sn", "role": "RESPONSIBLE",
         "class_label": "Licence 3 - Info", "avatar_url": "https://cdn/m.png"},
    )
    identity = identity_service.resolve_identity(AuthSession(user_id="usr_1", email="moussa@test.sn"), db_service)
    assert identity.display_name == "Moussa Ndiaye"
    assert identity.role == Role.RESPONSIBLE
    assert identity.class_label == "Licence 3 - Info"
    assert identity.avatar_url == "https://cdn/m.png"


def test_incomplete_profile_gets_defaults(db_service):
    db_service.add_user_with_profile(
        {"id": "usr_2", "email": "fatou@test.sn", "hashed_password": "x"},
        {"full_name": None, "email": None, "role": None, "class_label": None, "avatar_url": None},
    )
    identity = identity_service.resolve_identity(AuthSession(user_id="usr_2", email="fatou@test.sn"), db_service)
    assert identity.display_name == "fatou@test.sn"
    assert identity.email == "fatou@test.sn"
    assert identity.role == Role.STUDENT
    assert identity.class_label == settings.DEFAULT_CLASS_LABEL
    assert identity.avatar_url.startswith("https://ui-avatars.com/api/?name=")


def test_store_failure_propagates():
    db = MagicMock()
    db.get_profile_by_id.side_effect = OperationalError("SELECT", {}, Exception("down"))
    with pytest.raises(OperationalError):
        identity_service.resolve_identity(AuthSession(user_id="usr_x", email="x@test.sn"), db)


def test_register_creates_credential_without_profile(db_service):
    user = identity_service.register_user("New@Test.sn", "secret123", db_service)
    assert user.email == "new@test.sn"
    assert db_service.get_profile_by_id(user.id) is None


def test_register_rejects_duplicate_email(db_service):
    identity_service.register_user("dup@test.sn", "secret123", db_service)
    with pytest.raises(ValueError, match="already registered"):
        identity_service.register_user("dup@test.sn", "secret123", db_service)


def test_authenticate_returns_token_with_claims(db_service):
    user = identity_service.register_user("login@test.sn", "secret123", db_service)
    token = identity_service.authenticate("login@test.sn", "secret123", db_service)
    payload = security.decode_access_token(token)
    assert payload["sub"] == user.id
    assert payload["email"] == "login@test.sn"


def test_authenticate_rejects_wrong_password(db_service):
    identity_service.register_user("login@test.sn", "secret123", db_service)
    assert identity_service.authenticate("login@test.sn", "wrong", db_service) is None
    assert identity_service.authenticate("nobody@test.sn", "secret123", db_service) is None


def test_change_password_requires_current_password(db_service):
    user = identity_service.register_user("pw@test.sn", "secret123", db_service)
    session = AuthSession(user_id=user.id, email=user.email)

    with pytest.raises(ValueError):
        identity_service.change_password(session, "not-it", "newsecret", db_service)

    identity_service.change_password(session, "secret123", "newsecret", db_service)
    assert identity_service.authenticate("pw@test.sn", "newsecret", db_service) is not None


def test_tampered_token_is_rejected():
    token = security.create_access_token(subject="usr_1", email="a@test.sn")
    with pytest.raises(ValueError):
        security.decode_access_token(token + "x")
