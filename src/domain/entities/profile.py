from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProfileEntity:
    id: int
    user_id: int  # not checked against users
    bio: str
    age: int
