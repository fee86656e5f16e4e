from __future__ import annotations

import re
from typing import Annotated, Callable, TypeVar

from fastapi import HTTPException, Path, Request, status
from pydantic import BaseModel, ValidationError

from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository

ModelT = TypeVar("ModelT", bound=BaseModel)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_IDENTITY = re.compile(r"[+-]?[0-9]+")


def get_user_repo(request: Request) -> UserRepository:
    return request.app.state.user_repo


def get_profile_repo(request: Request) -> ProfileRepository:
    return request.app.state.profile_repo


def json_body(model: type[ModelT]) -> Callable:
    """Decode the raw request body as JSON into ``model`` whatever its Content-Type.

    A JSON ``null`` yields the model's defaults. Anything that does not decode
    or validate is a 400.
    """

    async def decode(request: Request) -> ModelT:
        raw = await request.body()
        if raw.strip() == b"null":
            return model()
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST) from exc

    return decode


def parse_identity(raw: str, minimum: int = INT64_MIN) -> int:
    """Parse a path segment as a signed decimal 64-bit id, or raise 400.

    Routes use the ``:path`` convertor, so an empty suffix or one with extra
    segments arrives here too.
    """
    if not _IDENTITY.fullmatch(raw):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    value = int(raw)
    if not minimum <= value <= INT64_MAX:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    return value


def user_id_param(user_id: Annotated[str, Path(description="Identity of the user")]) -> int:
    return parse_identity(user_id, minimum=0)


def profile_id_param(profile_id: Annotated[str, Path(description="Identity of the profile")]) -> int:
    return parse_identity(profile_id)
