"""StudentStore - Main API for Student Store operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn, Protocol

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from registrar.logging import sanitize_for_log
from registrar.student_store.database import Database
from registrar.student_store.exceptions import StudentNotFoundError, StudentStoreError
from registrar.student_store.models import INTEGER_MAX, Student, StudentRecord

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class StudentRepository(Protocol):
    """Interface the HTTP layer needs from student storage."""

    def create_student(self, record: StudentRecord) -> Student:
        """Insert a student and return the stored row."""
        ...

    def list_students(self, search: str | None = None) -> list[Student]:
        """List students ordered by id, optionally filtered by name."""
        ...

    def get_student(self, student_id: int) -> Student:
        """Get one student by id."""
        ...

    def update_student(self, student_id: int, record: StudentRecord) -> Student:
        """Replace all fields of a student."""
        ...

    def delete_student(self, student_id: int) -> None:
        """Delete a student by id."""
        ...

    def count_students(self) -> int:
        """Count stored students."""
        ...


def _contains_pattern(term: str) -> str:
    """ILIKE pattern matching `term` literally anywhere in the value."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _not_found(student_id: int) -> StudentNotFoundError:
    return StudentNotFoundError(f"Student with id '{student_id}' not found")


def _in_range(student_id: int) -> bool:
    # Ids outside the Integer column cannot match a row
    return 1 <= student_id <= INTEGER_MAX


def _fail(session: Session, message: str, exc: SQLAlchemyError) -> NoReturn:
    session.rollback()
    logger.exception("%s: %s", message, sanitize_for_log(str(exc)))
    raise StudentStoreError(message) from exc


class StudentStore:
    """Main API for Student Store operations.

    Every operation runs as a single statement in its own session. Driver
    errors are logged and surfaced as StudentStoreError with a generic message.
    """

    def __init__(self, database_url: str = "sqlite:///registrar.db") -> None:
        """Initialize Student Store.

        Creates the students table if it doesn't exist.

        Args:
            database_url: SQLAlchemy URL or SQLite file path (":memory:" allowed)
        """
        self._db = Database(database_url)
        self._db.create_tables()
        logger.info(
            "Student store ready (%s)", self._db.url.render_as_string(hide_password=True)
        )

    @property
    def database(self) -> Database:
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def create_student(self, record: StudentRecord) -> Student:
        """Create a new student.

        Args:
            record: Validated student fields

        Returns:
            Created Student with its storage-assigned id

        Raises:
            StudentStoreError: If the database rejects the insert
        """
        session = self._db.get_session()
        try:
            student = Student.from_record(record)
            session.add(student)
            session.commit()
            session.refresh(student)
            logger.info("Created student %s", student.id)
            return student
        except SQLAlchemyError as e:
            _fail(session, "Failed to create student", e)
        finally:
            session.close()

    def list_students(self, search: str | None = None) -> list[Student]:
        """List students.

        Args:
            search: Case-insensitive substring matched against first and last
                    name, used as given. Empty or None returns every
                    student.

        Returns:
            Matching students, ordered by id ascending
        """
        session = self._db.get_session()
        try:
            stmt = select(Student)

            if search:
                pattern = _contains_pattern(search)
                stmt = stmt.where(
                    or_(
                        Student.first_name.ilike(pattern, escape="\\"),
                        Student.last_name.ilike(pattern, escape="\\"),
                    )
                )

            stmt = stmt.order_by(Student.id)
            return list(session.scalars(stmt).all())
        except SQLAlchemyError as e:
            _fail(session, "Failed to retrieve students", e)
        finally:
            session.close()

    def get_student(self, student_id: int) -> Student:
        """Get student by ID.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        if not _in_range(student_id):
            raise _not_found(student_id)

        session = self._db.get_session()
        try:
            student = session.get(Student, student_id)
        except SQLAlchemyError as e:
            _fail(session, "Failed to retrieve student", e)
        finally:
            session.close()

        if student is None:
            raise _not_found(student_id)
        return student

    def update_student(self, student_id: int, record: StudentRecord) -> Student:
        """Replace every mutable field of a student.

        Args:
            student_id: The student's id
            record: Validated replacement fields

        Returns:
            The student as stored after the update

        Raises:
            StudentNotFoundError: If student doesn't exist
            StudentStoreError: If the database rejects the update
        """
        if not _in_range(student_id):
            raise _not_found(student_id)

        session = self._db.get_session()
        try:
            stmt = (
                update(Student)
                .where(Student.id == student_id)
                .values(
                    first_name=record.first_name,
                    last_name=record.last_name,
                    birth_date=record.birth_date,
                    course=record.course,
                    is_erasmus=record.is_erasmus,
                )
                .returning(Student)
            )
            student = session.scalars(stmt).one_or_none()
            session.commit()
        except SQLAlchemyError as e:
            _fail(session, "Failed to update student", e)
        finally:
            session.close()

        if student is None:
            raise _not_found(student_id)
        logger.info("Updated student %s", student_id)
        return student

    def delete_student(self, student_id: int) -> None:
        """Delete a student.

        Raises:
            StudentNotFoundError: If student doesn't exist
            StudentStoreError: If the database rejects the delete
        """
        if not _in_range(student_id):
            raise _not_found(student_id)

        session = self._db.get_session()
        try:
            stmt = delete(Student).where(Student.id == student_id).returning(Student.id)
            deleted = session.scalars(stmt).one_or_none()
            session.commit()
        except SQLAlchemyError as e:
            _fail(session, "Failed to delete student", e)
        finally:
            session.close()

        if deleted is None:
            raise _not_found(student_id)
        logger.info("Deleted student %s", student_id)

    def count_students(self) -> int:
        """Count stored students."""
        session = self._db.get_session()
        try:
            return session.scalar(select(func.count(Student.id))) or 0
        except SQLAlchemyError as e:
            _fail(session, "Failed to count students", e)
        finally:
            session.close()
