# student_registry/routers/groups.py
from fastapi import APIRouter, Depends

from ..database.session import get_store
from ..schemas import DeleteResult, GroupCreate, GroupRead
from ..services.record_store import RecordStore

router = APIRouter(prefix="/api/groups", tags=["groups"])


@router.get("", response_model=list[GroupRead])
def list_groups(store: RecordStore = Depends(get_store)):
    return store.list_groups()


@router.post("", response_model=GroupRead)
def create_group(payload: GroupCreate, store: RecordStore = Depends(get_store)):
    return store.create_group(payload.name, payload.created_at)


@router.delete("/{group_id}", response_model=DeleteResult)
def delete_group(group_id: str, store: RecordStore = Depends(get_store)):
    """Delete the group together with its students and their transfer requests"""
    store.delete_group(group_id)
    return {"success": True}
