# student_registry/database/models/group.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ..base import Base

class Group(Base):
    __tablename__ = "student_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships (no ORM cascade: the store deletes dependents explicitly)
    students = relationship("Student", back_populates="group", passive_deletes="all")
