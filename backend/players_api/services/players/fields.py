"""Form-field extraction with ordered alias fallbacks.

The registration form has been served under two naming conventions: the
``player_*`` snake-case names (chosen to dodge browser autofill) and the older
camelCase / bare names. Every field is looked up through its aliases in order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

FIELD_ALIASES: Final[Mapping[str, tuple[str, ...]]] = {
    "first_name": ("player_first_name", "firstName"),
    "last_name": ("player_last_name", "lastName"),
    "dob": ("player_dob", "dob"),
    "address_1": ("player_address_1", "address_1", "address1"),
    "address_2": ("player_address_2", "address_2", "address2"),
    "city": ("player_city", "city"),
    "state": ("player_state", "state"),
    "zip": ("player_zip", "zip"),
    "email": ("player_email", "email"),
    "phone": ("player_phone", "phone"),
}

PICTURE_ALIASES: Final[tuple[str, ...]] = ("player_picture", "picture")


def first_value(form: Mapping[str, Any], *keys: str) -> str:
    """
    Return the first non-blank value found under ``keys``.

    :param form: Form data (``werkzeug`` ``MultiDict`` or any mapping).
    :param keys: Candidate key names, most preferred first.
    :returns: The trimmed value, or ``""`` when no key carries text.
    :rtype: str
    """
    for key in keys:
        value = form.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def extract_fields(form: Mapping[str, Any]) -> dict[str, str]:
    """Resolve every known field of the registration form to a trimmed string."""
    return {name: first_value(form, *aliases) for name, aliases in FIELD_ALIASES.items()}


def first_file(files: Mapping[str, Any], *keys: str) -> Any | None:
    """Return the first file part present under ``keys`` (or ``None``)."""
    for key in keys:
        upload = files.get(key)
        if upload is not None:
            return upload
    return None
