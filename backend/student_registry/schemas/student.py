# student_registry/schemas/student.py
from typing import Optional

from pydantic import Field, field_validator

from .base import APIModel


class StudentFields(APIModel):
    """Optional descriptive fields shared by every student shape"""
    group_id: Optional[int] = None
    class_code: Optional[str] = None
    serial_number: Optional[int] = None
    class_room: Optional[str] = None
    student_code: Optional[str] = None
    stage: Optional[str] = None
    birth_date: Optional[str] = None
    birth_day: Optional[int] = None
    birth_month: Optional[int] = None
    birth_year: Optional[int] = None
    birth_governorate: Optional[str] = None
    gender: Optional[str] = None
    religion: Optional[str] = None
    nationality: Optional[str] = None
    guardian_name: Optional[str] = None
    student_address: Optional[str] = None
    orphan_status: Optional[str] = None
    last_certificate: Optional[str] = None
    last_school: Optional[str] = None
    total_score: Optional[str] = None
    enrollment_status: Optional[str] = None
    enrollment_date: Optional[str] = None
    tablet_serial: Optional[str] = None
    imei: Optional[str] = None
    insurance_number: Optional[str] = None
    notes: Optional[str] = None


class BlankAsMissing(APIModel):
    # Spreadsheet cells come through as "" when empty
    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if value == "":
            return None
        return value


# -----------------------------
# Create (POST /api/students)
# -----------------------------
class StudentCreate(StudentFields, BlankAsMissing):
    national_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


# -----------------------------
# Patch (PATCH /api/students/{id})
# -----------------------------
class StudentUpdate(StudentFields):
    national_id: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)


# -----------------------------
# Read
# -----------------------------
class StudentRead(StudentFields):
    id: int
    national_id: str
    name: str


# -----------------------------
# Import (POST /api/students/import)
# -----------------------------
class StudentImportRecord(StudentFields, BlankAsMissing):
    national_id: Optional[str] = None
    name: Optional[str] = None


class StudentImport(APIModel):
    students: list[StudentImportRecord]
    group_name: Optional[str] = None


class StudentImportResult(APIModel):
    students: list[StudentRead]
