# student_registry/database/models/transfer_request.py
from sqlalchemy import Column, Integer, String, ForeignKey, Date, Enum, Text
from sqlalchemy.orm import relationship
from datetime import date
from ..base import Base
import enum

class TransferStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class TransferRequest(Base):
    __tablename__ = "transfer_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    from_school = Column(String, nullable=False)
    to_school = Column(String, nullable=False)
    transfer_reason = Column(Text, nullable=True)
    request_date = Column(Date, nullable=False, default=date.today)
    status = Column(
        Enum(TransferStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=TransferStatus.PENDING,
    )

    # Relationships
    student = relationship("Student", back_populates="transfer_requests")
