from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.application.dtos.common_dto import CreatedResponse
from src.application.dtos.profile_dto import CreateProfileRequest, ProfileResponse
from src.infrastructure.api.dependencies import get_profile_repo, json_body, profile_id_param
from src.infrastructure.database.postgres_client import StorageError
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    responses={
        400: {"description": "Bad Request - Malformed body or invalid profile id"},
        405: {"description": "Method Not Allowed"},
        500: {"description": "Internal Server Error - Storage failure"},
    },
)


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Profile",
    description="""
    Create a profile for a user.

    Only a zero `user_id` is rejected. The referenced user is not looked up,
    so a profile may point at a user that does not exist.
    """,
)
def create_profile(
    body: CreateProfileRequest = Depends(json_body(CreateProfileRequest)),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    if body.user_id == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    try:
        profile_id = profiles.create(body.user_id, body.bio, body.age)
    except StorageError as exc:
        logger.error("[profile_routes.create_profile] storage error: %s", exc, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR) from exc
    return CreatedResponse(id=profile_id)


@router.get(
    "/{profile_id:path}",
    response_model=ProfileResponse,
    summary="Get Profile",
    responses={404: {"description": "Not Found - No profile with this id"}},
)
def get_profile(
    profile_id: int = Depends(profile_id_param),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    try:
        profile = profiles.get(profile_id)
    except StorageError as exc:
        logger.error("[profile_routes.get_profile] storage error: %s", exc, exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR) from exc
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return ProfileResponse.from_entity(profile)
