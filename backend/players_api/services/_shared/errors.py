"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories, the
picture store, and application services.

The translation to HTTP responses is handled by
``players_api/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)$")


# --------------------------------------------------------------------------- #
# Integrity classification
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UniqueViolation:
    """
    A uniqueness constraint rejected the write.

    :param constraint: Constraint name reported by the engine, when available.
    :type constraint: str | None
    :param columns: Qualified ``table.column`` names, when the engine reports
        columns instead of a constraint name (SQLite).
    :type columns: tuple[str, ...]
    """

    constraint: str | None
    columns: tuple[str, ...] = ()

    def matches(self, constraint: str, column: str | None = None) -> bool:
        """Return ``True`` when this violation concerns ``constraint`` or ``column``."""
        if self.constraint is not None:
            return self.constraint == constraint
        return column is not None and column in self.columns


@dataclass(frozen=True, slots=True)
class OtherIntegrityViolation:
    """Any other integrity failure (NOT NULL, FK, CHECK, ...)."""

    detail: str


def classify_integrity_error(exc: IntegrityError) -> UniqueViolation | OtherIntegrityViolation:
    """
    Classify an :class:`IntegrityError` from its structured driver fields.

    PostgreSQL drivers expose the SQLSTATE (``pgcode`` on psycopg2,
    ``sqlstate`` on psycopg 3) and ``diag.constraint_name``. SQLite exposes
    neither, so its fixed ``UNIQUE constraint failed: t.c`` text is parsed for
    the column list instead.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.

    Returns
    -------
    UniqueViolation | OtherIntegrityViolation
        Tagged outcome.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        if sqlstate == UNIQUE_VIOLATION:
            diag = getattr(orig, "diag", None)
            return UniqueViolation(constraint=getattr(diag, "constraint_name", None))
        return OtherIntegrityViolation(detail=str(orig))

    message = str(orig) if orig is not None else str(exc)
    found = _SQLITE_UNIQUE.search(message)
    if found:
        columns = tuple(c.strip() for c in found.group("columns").split(","))
        return UniqueViolation(constraint=None, columns=columns)
    return OtherIntegrityViolation(detail=message)


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - ``BaseService.translate_exceptions`` maps them to ``APIError``.
    """

    pass


class ValidationError(ServiceError):
    """Client input was rejected; always safe to show to the caller."""


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class MissingFieldsError(ValidationError):
    """
    Raised when required registration fields are blank or absent.

    :param fields: Human-readable names of the missing fields, in form order.
    :type fields: Iterable[str]
    """

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = tuple(fields)
        super().__init__(
            "first name, last name, dob, and email are required "
            f"(missing: {', '.join(self.fields)})"
        )


class InvalidDateError(ValidationError):
    """Raised when a date of birth cannot be normalized."""

    def __init__(
        self, message: str = "date of birth must be valid and use MM-DD-YYYY or MM/DD/YYYY"
    ) -> None:
        super().__init__(message)


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Player").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateEmailError(ConflictError):
    """Raised when the email is already registered to another player."""

    def __init__(self, email: str | None = None) -> None:
        super().__init__("Player", "email already in use")
        self.email = email

    def __str__(self) -> str:
        return "A player with this email already exists."


class PictureStorageError(ServiceError):
    """Raised when an uploaded picture cannot be written to the upload directory."""

    def __init__(self, message: str = "failed to save picture") -> None:
        super().__init__(message)


class PersistenceError(ServiceError):
    """Raised for any storage failure other than a duplicate email."""

    def __init__(self, message: str = "unable to register player") -> None:
        super().__init__(message)
