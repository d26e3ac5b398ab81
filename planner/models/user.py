# File: planner/models/user.py

"""
User model.

Emails are stored lower-cased so uniqueness and lookups are case-insensitive.
Only the bcrypt hash of the password is persisted.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from planner.models.base import Base, IdentifiedMixin

ROLE_USER = "user"
ROLE_ADMIN = "admin"
USER_ROLES = (ROLE_USER, ROLE_ADMIN)


class User(IdentifiedMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)

    def __repr__(self):
        return f"<User {self.email}>"
