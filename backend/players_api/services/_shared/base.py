"""Base class and request context shared by application services."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from players_api.core import errors as api_errors
from players_api.services._shared.errors import (
    ConflictError,
    PersistenceError,
    PictureStorageError,
    ServiceError,
    ValidationError,
)
from players_api.uow import SQLAlchemyUnitOfWork, UnitOfWork


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param request_id: Correlation id for logging/tracing.
    """

    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide the read-write Unit of Work (injectable for tests).
    * Centralize error translation.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    """

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        uow_factory: Callable[[], UnitOfWork] | None = None,
    ) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (tracing).
        :type ctx: ServiceContext | None
        :param uow_factory: Builds the Unit of Work for each write; defaults
            to :class:`SQLAlchemyUnitOfWork` on the Flask-scoped session.
        :type uow_factory: Callable[[], UnitOfWork] | None
        """
        self.ctx = ctx or ServiceContext()
        self._uow_factory = uow_factory or SQLAlchemyUnitOfWork

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> UnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: UnitOfWork
        """
        return self._uow_factory()

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, ValidationError):
            # → 400 Bad Request
            return api_errors.BadRequest(str(exc))

        if isinstance(exc, ConflictError):
            # → 409 Conflict
            return api_errors.Conflict(str(exc))

        if isinstance(exc, (PictureStorageError, PersistenceError)):
            # → 500, generic message only
            return api_errors.InternalError(str(exc))

        if isinstance(exc, ServiceError):
            return api_errors.InternalError()

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
