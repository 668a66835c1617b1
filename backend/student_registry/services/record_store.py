# student_registry/services/record_store.py
import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from pydantic.alias_generators import to_camel
from sqlalchemy import func, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..database.base import Base
from ..database.models import Group, PlaceholderSequence, Student, TransferRequest, TransferStatus
from ..database.session import build_engine, build_session_factory, ensure_sqlite_directory

logger = logging.getLogger(__name__)

STUDENT_COLUMNS = frozenset(c.key for c in inspect(Student).column_attrs) - {"id"}
STUDENT_ALIASES = {to_camel(column): column for column in STUDENT_COLUMNS}
TRANSFER_COLUMNS = frozenset(c.key for c in inspect(TransferRequest).column_attrs) - {"id"}
TRANSFER_ALIASES = {to_camel(column): column for column in TRANSFER_COLUMNS}
TRANSFER_REQUIRED = ("student_id", "from_school", "to_school")


class StoreClosedError(RuntimeError):
    """Raised when the store is used before open() or after close()"""


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _student_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase keys to column names and reject unknown fields"""
    normalized = {STUDENT_ALIASES.get(key, key): value for key, value in fields.items()}
    unknown = set(normalized) - STUDENT_COLUMNS
    if unknown:
        raise ValueError(f"Unknown student fields: {', '.join(sorted(unknown))}")
    return normalized


def _transfer_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    normalized = {TRANSFER_ALIASES.get(key, key): value for key, value in fields.items()}
    unknown = set(normalized) - TRANSFER_COLUMNS
    if unknown:
        raise ValueError(f"Unknown transfer request fields: {', '.join(sorted(unknown))}")
    missing = [key for key in TRANSFER_REQUIRED if not _present(normalized.get(key))]
    if missing:
        raise ValueError(f"Missing transfer request fields: {', '.join(missing)}")
    return normalized


class RecordStore:
    """
    Persistence for groups, students and transfer requests.

    The store owns its engine: open() connects and creates the schema,
    close() disposes the engine. Rows returned by the store are detached
    ORM objects whose attributes stay loaded.
    """

    def __init__(self, database_url: Optional[str] = None, wal: Optional[bool] = None):
        self.database_url = database_url or settings.DATABASE_URL
        self.wal = settings.SQLITE_WAL if wal is None else wal
        self._engine = None
        self._session_factory = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> "RecordStore":
        if self.is_open:
            return self
        ensure_sqlite_directory(self.database_url)
        self._engine = build_engine(self.database_url, wal=self.wal)
        Base.metadata.create_all(bind=self._engine)
        self._session_factory = build_session_factory(self._engine)
        logger.info(f"Record store opened at {self._engine.url.render_as_string(hide_password=True)}")
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Record store closed")
        self._engine = None
        self._session_factory = None

    def __enter__(self) -> "RecordStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise StoreClosedError("Record store is not open")
        with self._session_factory() as session:
            yield session

    # ------------------------------------------------------------------
    # Students
    # ------------------------------------------------------------------

    def list_students(self) -> List[Student]:
        with self._session() as db:
            return db.query(Student).order_by(Student.name).all()

    def search_students(self, query: Optional[str], search_type: str = "nationalId") -> List[Student]:
        """Case-sensitive substring search on national id or name"""
        if not query:
            return self.list_students()

        column = Student.national_id if search_type == "nationalId" else Student.name
        with self._session() as db:
            return (
                db.query(Student)
                .filter(func.instr(column, query) > 0)
                .order_by(Student.name)
                .all()
            )

    def get_student(self, student_id: int) -> Optional[Student]:
        with self._session() as db:
            return db.get(Student, student_id)

    def create_student(self, fields: Dict[str, Any]) -> Student:
        """
        Insert a student from the fields that carry a value.
        Absent, None and empty-string fields fall back to column defaults.
        A duplicate national id raises IntegrityError.
        """
        fields = _student_fields(fields)
        with self._session() as db:
            with db.begin():
                student = self._insert_student(db, fields)
            db.refresh(student)
            return student

    def update_student(self, student_id: int, fields: Dict[str, Any]) -> Optional[Student]:
        """Apply only the supplied fields; explicit None clears a column"""
        fields = _student_fields(fields)
        if not fields:
            return self.get_student(student_id)

        with self._session() as db:
            with db.begin():
                student = db.get(Student, student_id)
                if student is None:
                    return None
                for key, value in fields.items():
                    setattr(student, key, value)
            db.refresh(student)
            return student

    def delete_student(self, student_id: int) -> bool:
        with self._session() as db:
            with db.begin():
                db.query(TransferRequest).filter(
                    TransferRequest.student_id == student_id
                ).delete(synchronize_session=False)
                removed = db.query(Student).filter(
                    Student.id == student_id
                ).delete(synchronize_session=False)
        return removed > 0

    def bulk_create_students(
        self,
        records: Iterable[Dict[str, Any]],
        group_name: Optional[str] = None,
    ) -> List[Student]:
        """
        Import many students in one transaction.

        Each insert runs in its own SAVEPOINT: a row-level IntegrityError
        (duplicate national id, bad group reference) only drops that row and
        is logged. Any other database error rolls back the whole batch,
        including the group created for it.
        """
        created: List[Student] = []
        skipped = 0
        failed = 0

        with self._session() as db:
            with db.begin():
                group_id = None
                if group_name:
                    group = Group(name=group_name, created_at=datetime.utcnow())
                    db.add(group)
                    db.flush()
                    group_id = group.id

                for index, record in enumerate(records):
                    try:
                        normalized = _student_fields(record)
                    except ValueError as e:
                        failed += 1
                        logger.warning(f"Skipping import record {index}: {e}")
                        continue

                    cleaned = {key: value for key, value in normalized.items() if _present(value)}
                    if "name" not in cleaned and "national_id" not in cleaned:
                        skipped += 1
                        continue

                    if group_id is not None:
                        cleaned["group_id"] = group_id
                    if "name" not in cleaned:
                        cleaned["name"] = settings.PLACEHOLDER_NAME
                    if "national_id" not in cleaned:
                        cleaned["national_id"] = self._next_placeholder_id(db)

                    try:
                        with db.begin_nested():
                            student = self._insert_student(db, cleaned)
                        created.append(student)
                    except IntegrityError as e:
                        failed += 1
                        logger.warning(f"Skipping import record {index}: {e.orig}")

            for student in created:
                db.refresh(student)

        logger.info(
            f"Bulk import into group {group_name!r}: "
            f"{len(created)} created, {failed} failed, {skipped} skipped"
        )
        return created

    @staticmethod
    def _insert_student(db: Session, fields: Dict[str, Any]) -> Student:
        student = Student(**{key: value for key, value in fields.items() if _present(value)})
        db.add(student)
        db.flush()
        return student

    @staticmethod
    def _next_placeholder_id(db: Session) -> str:
        entry = PlaceholderSequence()
        db.add(entry)
        db.flush()
        return f"{settings.PLACEHOLDER_ID_PREFIX}{entry.value}"

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def list_groups(self) -> List[Group]:
        with self._session() as db:
            return db.query(Group).order_by(Group.created_at.desc()).all()

    def create_group(self, name: str, created_at: Optional[datetime] = None) -> Group:
        with self._session() as db:
            with db.begin():
                group = Group(name=name, created_at=created_at or datetime.utcnow())
                db.add(group)
            db.refresh(group)
            return group

    def delete_group(self, group_id: Union[int, str]) -> bool:
        """
        Delete a group with its students and their transfer requests.
        A non-numeric id matches no group.
        """
        if isinstance(group_id, str):
            if not (group_id.isascii() and group_id.isdigit()):
                return False
            group_id = int(group_id)

        with self._session() as db:
            with db.begin():
                member_ids = db.query(Student.id).filter(Student.group_id == group_id)
                db.query(TransferRequest).filter(
                    TransferRequest.student_id.in_(member_ids.scalar_subquery())
                ).delete(synchronize_session=False)
                db.query(Student).filter(
                    Student.group_id == group_id
                ).delete(synchronize_session=False)
                removed = db.query(Group).filter(
                    Group.id == group_id
                ).delete(synchronize_session=False)
        return removed > 0

    # ------------------------------------------------------------------
    # Transfer requests
    # ------------------------------------------------------------------

    def create_transfer_request(self, fields: Dict[str, Any]) -> TransferRequest:
        """
        Insert a transfer request. Keys may be snake_case or camelCase;
        unknown keys or a missing student id or school raise ValueError.
        """
        fields = _transfer_fields(fields)
        with self._session() as db:
            with db.begin():
                transfer = TransferRequest(
                    student_id=fields["student_id"],
                    from_school=fields["from_school"],
                    to_school=fields["to_school"],
                    transfer_reason=fields.get("transfer_reason") or None,
                    request_date=fields.get("request_date") or date.today(),
                    status=TransferStatus(fields.get("status") or TransferStatus.PENDING),
                )
                db.add(transfer)
            db.refresh(transfer)
            return transfer

    def list_transfer_requests_by_student(self, student_id: int) -> List[TransferRequest]:
        with self._session() as db:
            return db.query(TransferRequest).filter(TransferRequest.student_id == student_id).all()
