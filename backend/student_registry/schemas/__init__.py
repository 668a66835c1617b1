from .base import APIModel, DeleteResult, to_wire, to_wire_list
from .group import GroupCreate, GroupRead
from .student import (
    StudentCreate,
    StudentImport,
    StudentImportRecord,
    StudentImportResult,
    StudentRead,
    StudentUpdate,
)
from .transfer_request import TransferRequestCreate, TransferRequestRead
