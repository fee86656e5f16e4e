from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, StrictInt, StrictStr

from src.domain.entities.profile import ProfileEntity

# Values outside a signed 64-bit column are malformed input.
Int64 = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]


class CreateProfileRequest(BaseModel):
    """Request body for creating a profile.

    ``user_id`` must be non-zero; whether that user exists is not checked.
    """
    user_id: Int64 = Field(0, description="Identity of the owning user", example=1)
    bio: StrictStr = Field("", description="Free-text biography, may be empty", example="Mathematician")
    age: Int64 = Field(0, description="Age in years", example=36)


class ProfileResponse(BaseModel):
    id: int = Field(..., description="Identity of the profile")
    user_id: int = Field(..., description="Identity of the owning user")
    bio: str = Field(..., description="Free-text biography")
    age: int = Field(..., description="Age in years")

    @classmethod
    def from_entity(cls, entity: ProfileEntity) -> "ProfileResponse":
        return cls(id=entity.id, user_id=entity.user_id, bio=entity.bio, age=entity.age)
