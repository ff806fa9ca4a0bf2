"""Repository package exposing persistence-layer access for domain models."""

from __future__ import annotations

from players_api.repositories.base import BaseRepository
from players_api.repositories.player import PlayerRepository

__all__ = [
    "BaseRepository",
    "PlayerRepository",
]
