"""
Users router.

- GET /api/users - List users
- GET /api/users/{user_id} - Get one user
- POST /api/users - Sign up a new user
"""

import logging

from fastapi import APIRouter, status

from api.schemas import CreateUserRequest, ErrorResponse, UserListResponse
from catalog import store
from catalog.models import User
from catalog.store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListResponse, summary="List users")
def list_users() -> UserListResponse:
    return UserListResponse(users=store.list_users())


@router.get(
    "/{user_id}",
    response_model=User,
    responses={404: {"model": ErrorResponse}},
    summary="Get a user",
)
def get_user(user_id: str) -> User:
    user = store.find_user_by_id(user_id)
    if user is None:
        raise StoreError("User not found.", status.HTTP_404_NOT_FOUND)
    return user


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    summary="Sign up a user",
)
def create_user(payload: CreateUserRequest) -> User:
    """
    Create a user.

    E-mail addresses are stored lower-cased and must be unique (409 otherwise).
    """
    user = store.create_user(payload)
    logger.info("Created user %s", user.id)
    return user
