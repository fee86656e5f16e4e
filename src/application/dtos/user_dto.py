from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, StrictStr

from src.domain.entities.user import UserEntity


class CreateUserRequest(BaseModel):
    """Request body for creating a user. Neither field is checked for emptiness."""
    email: StrictStr = Field("", description="Email address of the user", example="ada@example.com")
    name: StrictStr = Field("", description="Display name of the user", example="Ada Lovelace")


class UpdateUserRequest(BaseModel):
    """Request body for renaming a user."""
    name: StrictStr = Field("", description="New display name, must not be empty", example="Ada King")


class UserResponse(BaseModel):
    id: int = Field(..., description="Identity of the user")
    email: str = Field(..., description="Email address of the user")
    name: str = Field(..., description="Display name of the user")
    created_at: datetime = Field(..., description="Timestamp assigned by storage on insert")

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "UserResponse":
        return cls(id=entity.id, email=entity.email, name=entity.name, created_at=entity.created_at)
