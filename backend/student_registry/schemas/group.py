# student_registry/schemas/group.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import APIModel


class GroupCreate(APIModel):
    name: str = Field(..., min_length=1)
    created_at: Optional[datetime] = None


class GroupRead(APIModel):
    id: int
    name: str
    created_at: datetime
