# student_registry/routers/transfer_requests.py
from fastapi import APIRouter, Depends

from ..database.session import get_store
from ..schemas import TransferRequestCreate, TransferRequestRead
from ..services.record_store import RecordStore

router = APIRouter(prefix="/api/transfer-requests", tags=["transfer-requests"])


@router.post("", response_model=TransferRequestRead)
def create_transfer_request(payload: TransferRequestCreate, store: RecordStore = Depends(get_store)):
    return store.create_transfer_request(payload.model_dump(exclude_none=True))
