# File: planner/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from planner.core.errors import UnauthorizedError
from planner.core.logging import get_logger
from planner.core.security import decode_access_token
from planner.db.session import SessionLocal
from planner.models.user import User

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the caller from the ``Authorization: Bearer <token>`` header.

    Any failure (no header, bad signature, expired token, unknown user) is a
    401 before the route body runs.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Not authorized to access this route")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        logger.warning("Rejected invalid or expired bearer token")
        raise UnauthorizedError("Not authorized to access this route")

    user = db.get(User, user_id)
    if user is None:
        logger.warning("Bearer token references unknown user %s", user_id)
        raise UnauthorizedError("Not authorized to access this route")
    return user
