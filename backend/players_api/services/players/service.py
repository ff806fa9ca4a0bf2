"""
PlayerRegistrationService
=========================

Process-level service that registers a new player:

- Checks the four required fields and normalizes the date of birth.
- Stores the optional picture under a generated name.
- Inserts the record in one transaction; a duplicate email surfaces as
  :class:`DuplicateEmailError` straight from the unique constraint (no
  pre-check query, so concurrent submissions cannot both pass).
- Removes the stored picture again when the insert fails.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import replace
from typing import Final

from sqlalchemy.exc import SQLAlchemyError

from players_api.services._shared.base import BaseService, ServiceContext
from players_api.services._shared.errors import (
    DuplicateEmailError,
    MissingFieldsError,
    PersistenceError,
)
from players_api.services.players.dates import normalize_dob
from players_api.services.players.dto import (
    PlayerRecord,
    PlayerRegistrationIn,
    PlayerRegistrationOut,
)
from players_api.services.players.pictures import PUBLIC_PREFIX, discard_picture, save_picture
from players_api.uow import UnitOfWork

logger = logging.getLogger(__name__)

# (attribute, human-readable name) in form order
REQUIRED_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("first_name", "first name"),
    ("last_name", "last name"),
    ("dob", "dob"),
    ("email", "email"),
)


def _blank_to_none(value: str) -> str | None:
    value = value.strip()
    return value or None


class PlayerRegistrationService(BaseService):
    """
    Orchestrates the player registration process.
    """

    def __init__(
        self,
        *,
        upload_dir: str | os.PathLike[str],
        public_prefix: str = PUBLIC_PREFIX,
        ctx: ServiceContext | None = None,
        uow_factory: Callable[[], UnitOfWork] | None = None,
    ) -> None:
        super().__init__(ctx=ctx, uow_factory=uow_factory)
        self.upload_dir = upload_dir
        self.public_prefix = public_prefix

    def normalize(self, dto: PlayerRegistrationIn) -> PlayerRecord:
        """
        Validate and canonicalize the form fields.

        :param dto: Raw registration input.
        :type dto: :class:`PlayerRegistrationIn`
        :returns: Record without a picture path.
        :rtype: :class:`PlayerRecord`
        :raises MissingFieldsError: When a required field is blank.
        :raises InvalidDateError: When the date of birth is not a valid date.
        """
        missing = [label for attr, label in REQUIRED_FIELDS if not getattr(dto, attr).strip()]
        if missing:
            raise MissingFieldsError(missing)

        return PlayerRecord(
            first_name=dto.first_name.strip(),
            last_name=dto.last_name.strip(),
            dob=normalize_dob(dto.dob),
            email=dto.email.strip().lower(),
            address_1=_blank_to_none(dto.address_1),
            address_2=_blank_to_none(dto.address_2),
            city=_blank_to_none(dto.city),
            state=_blank_to_none(dto.state),
            zip=_blank_to_none(dto.zip),
            phone=_blank_to_none(dto.phone),
        )

    def register(self, dto: PlayerRegistrationIn) -> PlayerRegistrationOut:
        """
        Register a player.

        :param dto: Registration input.
        :type dto: :class:`PlayerRegistrationIn`
        :returns: Registration result payload.
        :rtype: :class:`PlayerRegistrationOut`
        :raises MissingFieldsError: Required field blank.
        :raises InvalidDateError: Date of birth rejected.
        :raises PictureStorageError: The picture could not be written.
        :raises DuplicateEmailError: Email already registered.
        :raises PersistenceError: Any other storage failure.
        """
        record = self.normalize(dto)

        picture_path = save_picture(self.upload_dir, dto.picture, public_prefix=self.public_prefix)
        if picture_path is not None:
            record = replace(record, picture_path=picture_path)

        try:
            player_id = self._write(record)
        except Exception:
            if picture_path is not None:
                discard_picture(self.upload_dir, picture_path, public_prefix=self.public_prefix)
            raise

        logger.info(
            "player.registered",
            extra={
                "request_id": self.ctx.request_id,
                "player_id": player_id,
                "picture_path": picture_path,
            },
        )
        return PlayerRegistrationOut(player_id=player_id, picture_path=picture_path)

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #

    def _write(self, record: PlayerRecord) -> int:
        """Insert ``record`` inside a read-write Unit of Work."""
        try:
            with self.rw_uow() as uow:
                return uow.players.insert(record)
        except DuplicateEmailError:
            logger.warning("player.duplicate_email", extra={"request_id": self.ctx.request_id})
            raise
        except SQLAlchemyError as exc:
            # Commit-time failures escape the repository untranslated
            raise PersistenceError() from exc
