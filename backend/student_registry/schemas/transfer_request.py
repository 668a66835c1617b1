# student_registry/schemas/transfer_request.py
from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from ..database.models.transfer_request import TransferStatus
from .base import APIModel


class TransferRequestCreate(APIModel):
    student_id: int
    from_school: str = Field(..., min_length=1)
    to_school: str = Field(..., min_length=1)
    transfer_reason: Optional[str] = None
    request_date: Optional[date] = None
    status: Optional[TransferStatus] = None

    @field_validator("request_date", mode="before")
    @classmethod
    def date_part_only(cls, value):
        # Browsers send full ISO timestamps; only the calendar date is kept
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value


class TransferRequestRead(APIModel):
    id: int
    student_id: int
    from_school: str
    to_school: str
    transfer_reason: Optional[str] = None
    request_date: date
    status: TransferStatus
