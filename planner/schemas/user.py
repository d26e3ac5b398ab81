# File: planner/schemas/user.py

from typing import Annotated

from pydantic import BaseModel, EmailStr, StringConstraints, field_validator

from planner.schemas.common import CamelModel

UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class UserBase(BaseModel):
    email: EmailStr

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserCreate(UserBase):
    name: UserName
    password: Annotated[str, StringConstraints(min_length=6)]


class UserLogin(UserBase):
    password: Annotated[str, StringConstraints(min_length=1)]


class UserSummary(CamelModel):
    id: str
    name: str
    email: str


class UserRead(UserSummary):
    role: str


class UserWithToken(UserRead):
    token: str
