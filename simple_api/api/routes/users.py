"""User Routes - list, fetch and create users.

Invariants:
    - Routes hold no business logic; UserService does validation and storage
    - Errors are raised, never rendered here (api/error_handlers.py renders them)
    - POST returns 201 with the stored user, including id and created_at
"""

import logging

from fastapi import APIRouter, Depends, status

from simple_api.core.repository_protocols import UserRepository
from simple_api.infrastructure.database import get_user_repository
from simple_api.schemas.user import ErrorResponse, UserCreate, UserResponse
from simple_api.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(repository)


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    """All users in stored order."""
    users = await service.list_users()
    return [UserResponse.from_stored(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def get_user(
    user_id: str, service: UserService = Depends(get_user_service),
):
    user = await service.get_user(user_id)
    return UserResponse.from_stored(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Create a user from {name, email}."""
    user = await service.create_user(body.name, body.email)
    return UserResponse.from_stored(user)
