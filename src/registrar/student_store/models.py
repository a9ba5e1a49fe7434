"""SQLAlchemy models for Student Store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import Boolean, Date, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAME_MAX_LENGTH = 40
# Upper bound of a 32-bit signed Integer column (PostgreSQL INTEGER)
INTEGER_MAX = 2**31 - 1


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Student(Base):
    """Student model - one row per enrolled student."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    course: Mapped[int] = mapped_column(Integer, nullable=False)
    is_erasmus: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __init__(
        self,
        first_name: str,
        last_name: str,
        birth_date: date,
        course: int,
        is_erasmus: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.first_name = first_name
        self.last_name = last_name
        self.birth_date = birth_date
        self.course = course
        self.is_erasmus = is_erasmus

    @classmethod
    def from_record(cls, record: StudentRecord) -> Student:
        """Build an unsaved Student from a validated record."""
        return cls(
            first_name=record.first_name,
            last_name=record.last_name,
            birth_date=record.birth_date,
            course=record.course,
            is_erasmus=record.is_erasmus,
        )

    def __repr__(self) -> str:
        return (
            f"<Student(id={self.id!r}, first_name={self.first_name!r}, "
            f"last_name={self.last_name!r})>"
        )


@dataclass(frozen=True)
class StudentRecord:
    """The mutable fields of a student after validation, in storage types."""

    first_name: str
    last_name: str
    birth_date: date
    course: int
    is_erasmus: bool = False
