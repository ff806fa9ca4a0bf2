"""Player model: one row per successful registration."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from players_api.core.extensions import db

from .base import ReprMixin

# Name PostgreSQL gives ``UNIQUE (email)`` on ``players``; kept explicit so the
# duplicate-email check works against tables created outside this app.
EMAIL_UNIQUE_CONSTRAINT = "players_email_key"


class Player(ReprMixin, db.Model):
    """
    Registered player.

    Fields
    ------
    player_id : int
        Surrogate key assigned by the database on insert.
    first_name, last_name : str
        Required, trimmed.
    dob : date
        Date of birth.
    address_1, address_2, city, state, zip, phone : str | None
        Optional contact data; blanks are stored as ``NULL``. ``zip`` is text
        to keep leading zeros and ZIP+4.
    email : str
        Stored lower-cased; unique across players.
    picture_path : str | None
        Public URL path of the uploaded picture, e.g. ``/uploads/<name>.png``.
    """

    __tablename__ = "players"

    player_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    address_1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address_2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    picture_path: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize email.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to normalize.
        :type value: str
        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        return value.strip().lower()
