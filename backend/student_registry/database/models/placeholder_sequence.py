# student_registry/database/models/placeholder_sequence.py
from sqlalchemy import Column, Integer
from ..base import Base

class PlaceholderSequence(Base):
    """One row per placeholder identity code handed out by bulk import"""
    __tablename__ = "placeholder_sequence"
    __table_args__ = {"sqlite_autoincrement": True}

    value = Column(Integer, primary_key=True, autoincrement=True)
