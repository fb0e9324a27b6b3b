# /tests/conftest.py

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.core import security
from portal.db import base  # registers every model on Base.metadata
from portal.db.database import get_db
from portal.main import app
from portal.models.identity_model import Identity, Role
from portal.services.database_service import DatabaseService
from portal.services.storage_service import LocalObjectStorage, get_storage


def make_identity(role: Role = Role.STUDENT, class_label: str = "L2", user_id: str = None) -> Identity:
    """An in-memory identity for service-level tests."""
    user_id = user_id or f"usr_{uuid.uuid4().hex[:8]}"
    return Identity(
        id=user_id,
        display_name=f"{role.value.title()} {class_label}",
        email=f"{user_id}@test.sn",
        role=role,
        class_label=class_label,
        avatar_url="https://ui-avatars.com/api/?name=test",
    )


@pytest.fixture
def session_factory():
    """A fresh in-memory SQLite database for EACH test function."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    base.Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    base.Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def storage(tmp_path):
    return LocalObjectStorage(str(tmp_path / "bucket"), "http://testserver")


@pytest.fixture
def client(session_factory, storage):
    """A TestClient wired to the test database and the temporary bucket."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_account(db_service):
    """
    Factory fixture: provisions a credential and its profile, and returns the
    user id together with ready-to-use Authorization headers.
    """
    def _create(role: Role = Role.STUDENT, class_label: str = "L2", full_name: str = None, password: str = "secret123"):
        user_id = f"usr_{uuid.uuid4().hex[:8]}"
        email = f"{user_id}@test.sn"
        db_service.add_user_with_profile(
            {"id": user_id, "email": email, "hashed_password": security.get_password_hash(password)},
            {
                "full_name": full_name or f"{role.value.title()} {class_label}",
                "email": email,
                "role": role.value,
                "class_label": class_label,
                "avatar_url": None,
            },
        )
        token = security.create_access_token(subject=user_id, email=email)
        return user_id, {"Authorization": f"Bearer {token}"}

    return _create
