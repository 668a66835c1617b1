# student_registry/client/local.py
"""Handlers that serve matched routes from a local RecordStore.

Every handler returns the same JSON-ready shape the HTTP API responds with.
"""
from typing import Any

from ..schemas import DeleteResult, GroupRead, StudentRead, TransferRequestRead, to_wire, to_wire_list
from ..services.record_store import RecordStore


def list_students(store: RecordStore, match, body) -> Any:
    return to_wire_list(StudentRead, store.list_students())


def create_student(store: RecordStore, match, body) -> Any:
    return to_wire(StudentRead, store.create_student(body.model_dump(exclude_none=True)))


def search_students(store: RecordStore, match, body) -> Any:
    query = match.query.get("q") or ""
    search_type = match.query.get("type") or "nationalId"
    return to_wire_list(StudentRead, store.search_students(query, search_type))


def import_students(store: RecordStore, match, body) -> Any:
    records = [record.model_dump(exclude_none=True) for record in body.students]
    created = store.bulk_create_students(records, body.group_name)
    return {"students": to_wire_list(StudentRead, created)}


def get_student(store: RecordStore, match, body) -> Any:
    student = store.get_student(match.params["student_id"])
    return to_wire(StudentRead, student) if student is not None else None


def update_student(store: RecordStore, match, body) -> Any:
    student = store.update_student(match.params["student_id"], body.model_dump(exclude_unset=True))
    return to_wire(StudentRead, student) if student is not None else None


def delete_student(store: RecordStore, match, body) -> Any:
    store.delete_student(match.params["student_id"])
    return DeleteResult(success=True).model_dump()


def list_student_transfer_requests(store: RecordStore, match, body) -> Any:
    rows = store.list_transfer_requests_by_student(match.params["student_id"])
    return to_wire_list(TransferRequestRead, rows)


def list_groups(store: RecordStore, match, body) -> Any:
    return to_wire_list(GroupRead, store.list_groups())


def create_group(store: RecordStore, match, body) -> Any:
    return to_wire(GroupRead, store.create_group(body.name, body.created_at))


def delete_group(store: RecordStore, match, body) -> Any:
    store.delete_group(match.params["group_id"])
    return DeleteResult(success=True).model_dump()


def create_transfer_request(store: RecordStore, match, body) -> Any:
    return to_wire(TransferRequestRead, store.create_transfer_request(body.model_dump(exclude_none=True)))
