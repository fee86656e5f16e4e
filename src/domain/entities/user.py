from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserEntity:
    id: int  # assigned by storage on insert, never changes
    email: str
    name: str
    created_at: datetime
