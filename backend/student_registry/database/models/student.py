# student_registry/database/models/student.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from ..base import Base

class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("student_groups.id"), nullable=True, index=True)

    # Identity
    national_id = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False, index=True)

    # Class placement
    class_code = Column(String, nullable=True)
    serial_number = Column(Integer, nullable=True)
    class_room = Column(String, nullable=True)
    student_code = Column(String, nullable=True)
    stage = Column(String, nullable=True)

    # Birth
    birth_date = Column(String, nullable=True)
    birth_day = Column(Integer, nullable=True)
    birth_month = Column(Integer, nullable=True)
    birth_year = Column(Integer, nullable=True)
    birth_governorate = Column(String, nullable=True)

    # Personal
    gender = Column(String, nullable=True)
    religion = Column(String, nullable=True)
    nationality = Column(String, nullable=True)
    guardian_name = Column(String, nullable=True)
    student_address = Column(String, nullable=True)
    orphan_status = Column(String, nullable=True)

    # Schooling history
    last_certificate = Column(String, nullable=True)
    last_school = Column(String, nullable=True)
    total_score = Column(String, nullable=True)
    enrollment_status = Column(String, nullable=True)
    enrollment_date = Column(String, nullable=True)

    # Devices & insurance
    tablet_serial = Column(String, nullable=True)
    imei = Column(String, nullable=True)
    insurance_number = Column(String, nullable=True)

    notes = Column(Text, nullable=True)

    # Relationships
    group = relationship("Group", back_populates="students")
    transfer_requests = relationship("TransferRequest", back_populates="student", passive_deletes="all")
