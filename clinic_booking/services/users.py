# clinic_booking/services/users.py
"""
Account registration, login and admin bootstrap.
"""

import logging
import unicodedata
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Users as DBUsers
from .errors import InvalidCredentials, InvalidRequest, StoreUnavailable, UserExists
from .security import (
    ROLE_ADMIN,
    ROLE_PATIENT,
    CallerIdentity,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


def identity_of(user: DBUsers) -> CallerIdentity:
    return CallerIdentity(id=user.id, name=user.name, role=user.role)


def _create_user(db: Session, name: str, email: str, password: str, role: str) -> DBUsers:
    user = DBUsers(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # users.email is UNIQUE
        db.rollback()
        raise UserExists() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"User insert failed: {e}")
        raise StoreUnavailable() from e

    db.refresh(user)
    return user


def _has_control_chars(value: str) -> bool:
    return any(unicodedata.category(ch).startswith("C") for ch in value)


def register(db: Session, name: Optional[str], email: Optional[str], password: Optional[str]) -> DBUsers:
    """Create a patient account."""
    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name or not email or not password:
        raise InvalidRequest("Please provide name, email, and password.")
    if _has_control_chars(name) or _has_control_chars(email):
        raise InvalidRequest("Name and email must not contain control characters.")

    user = _create_user(db, name, email, password, ROLE_PATIENT)
    logger.info(f"User registered: id={user.id}")
    return user


def authenticate(db: Session, email: Optional[str], password: Optional[str]) -> DBUsers:
    if not email or not password:
        raise InvalidRequest("Please provide email and password.")

    try:
        user = (
            db.query(DBUsers)
            .filter(DBUsers.email == email.strip().lower())
            .first()
        )
    except SQLAlchemyError as e:
        logger.error(f"User lookup failed: {e}")
        raise StoreUnavailable() from e

    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user


def seed_admin(
    db: Session,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> bool:
    """
    Create the admin account if configured and missing.

    Returns:
        True when a new admin was created.
    """
    if not email or not password:
        return False

    email = email.strip().lower()
    try:
        exists = db.query(DBUsers).filter(DBUsers.email == email).first()
    except SQLAlchemyError as e:
        logger.error(f"Admin lookup failed: {e}")
        raise StoreUnavailable() from e
    if exists:
        return False

    try:
        _create_user(db, name or "Administrator", email, password, ROLE_ADMIN)
    except UserExists:
        # another worker seeded it first
        return False

    logger.info(f"Admin user seeded: {email}")
    return True
