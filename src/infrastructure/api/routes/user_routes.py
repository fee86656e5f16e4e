from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from src.application.dtos.common_dto import CreatedResponse
from src.application.dtos.user_dto import CreateUserRequest, UpdateUserRequest, UserResponse
from src.infrastructure.api.dependencies import get_user_repo, json_body, user_id_param
from src.infrastructure.database.postgres_client import StorageError
from src.infrastructure.database.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        400: {"description": "Bad Request - Malformed body or invalid user id"},
        405: {"description": "Method Not Allowed"},
        500: {"description": "Internal Server Error - Storage failure"},
    },
)


def _storage_failure(operation: str, exc: StorageError) -> HTTPException:
    logger.error("[user_routes.%s] storage error: %s", operation, exc, exc_info=True)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
)
def create_user(
    body: CreateUserRequest = Depends(json_body(CreateUserRequest)),
    users: UserRepository = Depends(get_user_repo),
):
    """Insert a user and return its identity."""
    try:
        user_id = users.create(body.email, body.name)
    except StorageError as exc:
        raise _storage_failure("create_user", exc) from exc
    return CreatedResponse(id=user_id)


@router.get(
    "/{user_id:path}",
    response_model=UserResponse,
    summary="Get User",
    responses={404: {"description": "Not Found - No user with this id"}},
)
def get_user(
    user_id: int = Depends(user_id_param),
    users: UserRepository = Depends(get_user_repo),
):
    try:
        user = users.get(user_id)
    except StorageError as exc:
        raise _storage_failure("get_user", exc) from exc
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return UserResponse.from_entity(user)


@router.put(
    "/{user_id:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Rename User",
    responses={404: {"description": "Not Found - No user with this id"}},
)
def update_user(
    user_id: int = Depends(user_id_param),
    body: UpdateUserRequest = Depends(json_body(UpdateUserRequest)),
    users: UserRepository = Depends(get_user_repo),
):
    """Replace the user's name. Email and creation time are left as they are."""
    if body.name == "":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    try:
        updated = users.update_name(user_id, body.name)
    except StorageError as exc:
        raise _storage_failure("update_user", exc) from exc
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete User",
    responses={404: {"description": "Not Found - No user with this id"}},
)
def delete_user(
    user_id: int = Depends(user_id_param),
    users: UserRepository = Depends(get_user_repo),
):
    try:
        deleted = users.delete(user_id)
    except StorageError as exc:
        raise _storage_failure("delete_user", exc) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
