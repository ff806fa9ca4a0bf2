"""Convenience exports for application schemas."""

from __future__ import annotations

from .player import PlayerCreatedSchema

__all__ = [
    "PlayerCreatedSchema",
]
