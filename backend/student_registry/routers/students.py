# student_registry/routers/students.py
from fastapi import APIRouter, Depends, HTTPException, Query

from ..database.session import get_store
from ..schemas import (
    DeleteResult,
    StudentCreate,
    StudentImport,
    StudentImportResult,
    StudentRead,
    StudentUpdate,
    TransferRequestRead,
)
from ..services.record_store import RecordStore

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=list[StudentRead])
def list_students(store: RecordStore = Depends(get_store)):
    return store.list_students()


@router.post("", response_model=StudentRead)
def create_student(payload: StudentCreate, store: RecordStore = Depends(get_store)):
    return store.create_student(payload.model_dump(exclude_none=True))


@router.get("/search", response_model=list[StudentRead])
def search_students(
    q: str = "",
    search_type: str = Query("nationalId", alias="type"),
    store: RecordStore = Depends(get_store),
):
    """Substring search on national id (type=nationalId) or name (any other type)"""
    return store.search_students(q, search_type or "nationalId")


@router.post("/import", response_model=StudentImportResult)
def import_students(payload: StudentImport, store: RecordStore = Depends(get_store)):
    """
    Bulk import from a spreadsheet.

    Records without both a name and a national id are skipped; records that
    violate a constraint are logged and left out of the response.
    """
    records = [record.model_dump(exclude_none=True) for record in payload.students]
    created = store.bulk_create_students(records, payload.group_name)
    return {"students": created}


@router.get("/{student_id}", response_model=StudentRead)
def get_student(student_id: int, store: RecordStore = Depends(get_store)):
    student = store.get_student(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.patch("/{student_id}", response_model=StudentRead)
def update_student(student_id: int, payload: StudentUpdate, store: RecordStore = Depends(get_store)):
    student = store.update_student(student_id, payload.model_dump(exclude_unset=True))
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.delete("/{student_id}", response_model=DeleteResult)
def delete_student(student_id: int, store: RecordStore = Depends(get_store)):
    store.delete_student(student_id)
    return {"success": True}


@router.get("/{student_id}/transfer-requests", response_model=list[TransferRequestRead])
def list_transfer_requests(student_id: int, store: RecordStore = Depends(get_store)):
    return store.list_transfer_requests_by_student(student_id)
