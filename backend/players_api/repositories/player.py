"""Player repository: the record writer for registrations."""

from __future__ import annotations

from datetime import date

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from players_api.models.player import EMAIL_UNIQUE_CONSTRAINT, Player
from players_api.repositories.base import BaseRepository
from players_api.services._shared.errors import (
    DuplicateEmailError,
    PersistenceError,
    UniqueViolation,
    classify_integrity_error,
)
from players_api.services.players.dto import PlayerRecord


EMAIL_COLUMN = "players.email"


class PlayerRepository(BaseRepository[Player]):
    """Persistence-only repository for :class:`Player`."""

    model = Player

    def insert(self, record: PlayerRecord) -> int:
        """Insert ``record`` and return the database-assigned ``player_id``.

        Blank optional fields arrive as ``None`` on the record and are bound
        as SQL ``NULL``.

        :param record: Normalized registration.
        :type record: :class:`PlayerRecord`
        :returns: New ``player_id``.
        :rtype: int
        :raises DuplicateEmailError: When the email unique constraint fires.
        :raises PersistenceError: For any other database failure.
        """
        player = Player(
            first_name=record.first_name,
            last_name=record.last_name,
            dob=date.fromisoformat(record.dob),
            address_1=record.address_1,
            address_2=record.address_2,
            city=record.city,
            state=record.state,
            zip=record.zip,
            email=record.email,
            phone=record.phone,
            picture_path=record.picture_path,
        )
        try:
            self.add(player)
        except IntegrityError as exc:
            outcome = classify_integrity_error(exc)
            if isinstance(outcome, UniqueViolation) and outcome.matches(
                EMAIL_UNIQUE_CONSTRAINT, EMAIL_COLUMN
            ):
                raise DuplicateEmailError(record.email) from exc
            raise PersistenceError() from exc
        except SQLAlchemyError as exc:
            raise PersistenceError() from exc
        return player.player_id
