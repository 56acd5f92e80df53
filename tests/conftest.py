"""Shared fixtures: per-test SQLite file, app with get_db overridden."""

import itertools
import os

# Settings are read at import time.
os.environ["AUTH_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("REDIS_URL", None)
os.environ.pop("STRICT_SLOT_GRID", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from clinic_booking.config import settings
from clinic_booking.database import get_db, init_db, make_engine
from clinic_booking.models import Bookings, Users
from clinic_booking.services.security import hash_password, issue_token
from clinic_booking.services.users import identity_of


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'clinic.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(session_factory):
    """Insert a user and return it (detached-safe: attributes loaded)."""
    counter = itertools.count(1)

    def _make(name: str = "Test User", role: str = "patient", password: str = "secret123") -> Users:
        with session_factory() as session:
            user = Users(
                name=name,
                email=f"user{next(counter)}@example.com",
                password_hash=hash_password(password),
                role=role,
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user

    return _make


@pytest.fixture
def make_booking(session_factory):
    def _make(user: Users, start: str, end: str) -> Bookings:
        with session_factory() as session:
            booking = Bookings(
                user_id=user.id,
                user_name=user.name,
                slot_start_time=start,
                slot_end_time=end,
            )
            session.add(booking)
            session.commit()
            session.refresh(booking)
            session.expunge(booking)
            return booking

    return _make


@pytest.fixture
def client(session_factory):
    from clinic_booking.main import create_app

    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _headers(user: Users) -> dict:
        token = issue_token(identity_of(user), settings.auth_secret)
        return {"Authorization": f"Bearer {token}"}

    return _headers
