# Import all models so they are registered with Base
from .group import Group
from .student import Student
from .transfer_request import TransferRequest, TransferStatus
from .placeholder_sequence import PlaceholderSequence

__all__ = ["Group", "Student", "TransferRequest", "TransferStatus", "PlaceholderSequence"]
