"""Date-of-birth normalization.

Accepts ``MM-DD-YYYY`` and ``MM/DD/YYYY`` (leading zeros optional) and emits
the canonical ``YYYY-MM-DD``. The canonical shape itself is accepted as well,
so normalizing an already normalized value is a no-op.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Final

from players_api.services._shared.errors import InvalidDateError

SEPARATORS: Final[str] = "-/"
MIN_YEAR: Final[int] = 1900
MAX_YEAR: Final[int] = 2100

_DIGITS = re.compile(r"[0-9]+")


def _to_int(part: str) -> int:
    """Parse an ASCII-digit component, rejecting anything else."""
    if not _DIGITS.fullmatch(part):
        raise InvalidDateError()
    return int(part)


def _separator(text: str) -> str:
    """Return the first ``-`` or ``/`` found in ``text``."""
    for char in text:
        if char in SEPARATORS:
            return char
    raise InvalidDateError()


def normalize_dob(text: str) -> str:
    """
    Normalize a loosely formatted date of birth to ``YYYY-MM-DD``.

    :param text: User-supplied date, month first.
    :returns: Zero-padded ISO calendar date.
    :rtype: str
    :raises InvalidDateError: On any malformed, out-of-range, or impossible date.
    """
    value = (text or "").strip()
    if not value:
        raise InvalidDateError()

    sep = _separator(value)
    parts = value.split(sep)
    if len(parts) != 3:
        raise InvalidDateError()

    if sep == "-" and len(parts[0]) == 4 and not parts[0].startswith("0"):
        # Already canonical (year first); "0003" is still a padded month
        year_s, month_s, day_s = parts
    else:
        month_s, day_s, year_s = parts

    month = _to_int(month_s.lstrip("0") or "0")
    day = _to_int(day_s.lstrip("0") or "0")
    year = _to_int(year_s)

    if not (MIN_YEAR <= year <= MAX_YEAR and 1 <= month <= 12 and 1 <= day <= 31):
        raise InvalidDateError()

    try:
        parsed = date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError() from exc
    if (parsed.year, parsed.month, parsed.day) != (year, month, day):  # pragma: no cover
        raise InvalidDateError()

    return f"{year:04d}-{month:02d}-{day:02d}"
