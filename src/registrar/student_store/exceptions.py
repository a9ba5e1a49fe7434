"""Custom exceptions for Student Store."""


class StudentStoreError(Exception):
    """Base exception for Student Store errors.

    Raised directly for storage failures. The message is safe to show to API
    clients and never contains driver details.
    """


class StudentNotFoundError(StudentStoreError):
    """Student with given ID does not exist."""
