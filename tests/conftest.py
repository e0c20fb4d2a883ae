"""
Shared test fixtures.

Every test runs against its own in-memory SQLite database; the app's get_db
dependency is overridden to hand out the test session.
"""
import os

# Must be set before the app modules read settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import rbac_admin.models  # noqa: F401
from rbac_admin.core.security import create_access_token, hash_password
from rbac_admin.db.base import Base
from rbac_admin.db.seeds import seed_all
from rbac_admin.db.session import get_db
from rbac_admin.main import app
from rbac_admin.models import Permission, Role, User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _fk_on(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """HTTP client whose requests share the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session: Session) -> Session:
    """Default roles, permissions and the admin user."""
    seed_all(db_session)
    return db_session


@pytest.fixture
def admin_user(seeded: Session) -> User:
    return seeded.query(User).filter(User.username == "admin").one()


@pytest.fixture
def plain_user(seeded: Session) -> User:
    """An enabled user holding the 'user' role, which has no permissions."""
    role = seeded.query(Role).filter(Role.code == "user").one()
    user = User(
        username="alice",
        hashed_password=hash_password("alice123"),
        realname="Alice",
        email="alice@example.com",
        role_id=role.id,
    )
    seeded.add(user)
    seeded.commit()
    seeded.refresh(user)
    return user


@pytest.fixture
def auth_headers(admin_user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(admin_user.id, admin_user.username)}"}


@pytest.fixture
def user_headers(plain_user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(plain_user.id, plain_user.username)}"}


@pytest.fixture
def make_permission(db_session: Session):
    """Factory inserting a bare permission row."""

    def _make(code: str, parent_code: str = "", type: int = 1, sort: int = 0) -> Permission:
        permission = Permission(
            name=code, code=code, parent_code=parent_code, path="", type=type, sort=sort, description="",
        )
        db_session.add(permission)
        db_session.commit()
        db_session.refresh(permission)
        return permission

    return _make
