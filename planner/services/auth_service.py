# File: planner/services/auth_service.py

"""
Authentication service.

  - User registration (unique, case-insensitive email)
  - Password verification
  - Token generation for the API layer
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from planner.core.errors import ConflictError
from planner.core.logging import get_logger
from planner.core.security import create_access_token, hash_password, verify_password
from planner.models.user import ROLE_USER, User

logger = get_logger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email == email.strip().lower())).first()


def register_user(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    if get_user_by_email(db, email) is not None:
        raise ConflictError("User already exists")

    user = User(
        name=name,
        email=email.strip().lower(),
        hashed_password=hash_password(password),
        role=ROLE_USER,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> Optional[User]:
    """
    Return the user when ``password`` matches the stored hash, else None.
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning("Failed login attempt for %s", email)
        return None
    return user


def issue_token(user: User) -> str:
    return create_access_token(user.id)
