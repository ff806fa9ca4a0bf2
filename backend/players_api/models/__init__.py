from players_api.models.player import EMAIL_UNIQUE_CONSTRAINT, Player

__all__ = [
    "EMAIL_UNIQUE_CONSTRAINT",
    "Player",
]
