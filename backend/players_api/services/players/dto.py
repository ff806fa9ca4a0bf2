"""
DTOs for PlayerRegistrationService.

Contracts for the single registration use case: raw form input in, the
normalized record persisted, and the generated identifier out.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from werkzeug.datastructures import FileStorage

from players_api.services.players.fields import PICTURE_ALIASES, extract_fields, first_file

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PlayerRegistrationIn:
    """
    Raw registration input, trimmed but otherwise unvalidated.

    :param first_name: Given name (required).
    :param last_name: Family name (required).
    :param dob: Date of birth as typed, ``MM-DD-YYYY`` or ``MM/DD/YYYY`` (required).
    :param email: Contact email (required, unique).
    :param address_1: First address line.
    :param address_2: Second address line.
    :param city: City.
    :param state: State or region.
    :param zip: Postal code.
    :param phone: Phone number.
    :param picture: Uploaded picture part, if any.
    :type picture: :class:`werkzeug.datastructures.FileStorage` | None
    """

    first_name: str = ""
    last_name: str = ""
    dob: str = ""
    email: str = ""
    address_1: str = ""
    address_2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    phone: str = ""
    picture: FileStorage | None = None

    @classmethod
    def from_form(
        cls, form: Mapping[str, Any], files: Mapping[str, Any] | None = None
    ) -> PlayerRegistrationIn:
        """Build the input from parsed form data, resolving field aliases."""
        picture = first_file(files or {}, *PICTURE_ALIASES)
        return cls(**extract_fields(form), picture=picture)


# --------------------------------------------------------------------------- #
# Normalized record
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PlayerRecord:
    """
    Validated, canonical registration ready for persistence.

    Required fields are non-empty; optional blanks are ``None``; ``email`` is
    lower-cased; ``dob`` is ``YYYY-MM-DD``.
    """

    first_name: str
    last_name: str
    dob: str
    email: str
    address_1: str | None = None
    address_2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    phone: str | None = None
    picture_path: str | None = None


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PlayerRegistrationOut:
    """
    Output summary for the registration process.

    :param player_id: Identifier assigned by the database.
    :type player_id: int
    :param picture_path: Public path of the stored picture, if any.
    :type picture_path: str | None
    """

    player_id: int
    picture_path: str | None = None
