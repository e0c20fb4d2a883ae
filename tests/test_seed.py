"""Schema creation and default data."""
from rbac_admin.core.security import verify_password
from rbac_admin.db.init_db import init_db
from rbac_admin.db.seeds import seed_all
from rbac_admin.models import Permission, Role, User


def test_seed_creates_defaults(db_session):
    assert seed_all(db_session) is True

    assert {r.code for r in db_session.query(Role).all()} == {"admin", "user"}
    assert db_session.query(Permission).count() == 15

    admin = db_session.query(User).filter(User.username == "admin").one()
    assert verify_password("admin123", admin.hashed_password)
    assert admin.role.code == "admin"
    assert len(admin.role.permissions) == 15

    user_role = db_session.query(Role).filter(Role.code == "user").one()
    assert user_role.permissions == []


def test_seed_skips_once_users_exist(db_session):
    seed_all(db_session)
    db_session.query(Role).filter(Role.code == "user").delete()
    db_session.commit()

    assert seed_all(db_session) is False
    assert db_session.query(Role).filter(Role.code == "user").first() is None


def test_forced_seed_is_idempotent(db_session):
    seed_all(db_session)
    seed_all(db_session, force=True)

    assert db_session.query(Role).count() == 2
    assert db_session.query(Permission).count() == 15
    assert db_session.query(User).count() == 1


def test_forced_seed_restores_missing_defaults(db_session):
    seed_all(db_session)
    db_session.query(Permission).filter(Permission.code == "dashboard").delete()
    db_session.commit()

    seed_all(db_session, force=True)

    db_session.expire_all()
    admin_role = db_session.query(Role).filter(Role.code == "admin").one()
    assert "dashboard" in {p.code for p in admin_role.permissions}


def test_init_db_creates_schema_and_seeds(engine, session_factory):
    init_db(engine=engine, session_factory=session_factory, seed=True)
    db = session_factory()
    try:
        assert db.query(User).count() == 1
    finally:
        db.close()


def test_init_db_without_seed(engine, session_factory):
    init_db(engine=engine, session_factory=session_factory, seed=False)
    db = session_factory()
    try:
        assert db.query(User).count() == 0
    finally:
        db.close()
