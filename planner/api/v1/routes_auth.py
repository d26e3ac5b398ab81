# File: planner/api/v1/routes_auth.py

"""
Auth API routes: registration, login and the current-user lookup.
Tokens are stateless JWTs; logging out is the client dropping its token.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from planner.api.deps import get_current_user, get_db
from planner.core.errors import UnauthorizedError
from planner.models.user import User
from planner.schemas.common import DataResponse
from planner.schemas.user import UserCreate, UserLogin, UserRead, UserWithToken
from planner.services import auth_service

router = APIRouter()


def with_token(user: User) -> UserWithToken:
    return UserWithToken(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        token=auth_service.issue_token(user),
    )


@router.post(
    "/register",
    response_model=DataResponse[UserWithToken],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    user = auth_service.register_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return DataResponse(data=with_token(user))


@router.post("/login", response_model=DataResponse[UserWithToken], summary="User login")
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = auth_service.authenticate_user(db, email=payload.email, password=payload.password)
    if user is None:
        raise UnauthorizedError("Invalid credentials")
    return DataResponse(data=with_token(user))


@router.get("/me", response_model=DataResponse[UserRead], summary="Current user")
def me(current_user: User = Depends(get_current_user)):
    return DataResponse(data=UserRead.model_validate(current_user))
