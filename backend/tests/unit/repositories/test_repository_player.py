# tests/unit/repositories/test_repository_player.py
from __future__ import annotations

from datetime import date

import pytest

from players_api.models import Player
from players_api.repositories import PlayerRepository
from players_api.services._shared.errors import DuplicateEmailError
from players_api.services.players.dto import PlayerRecord
from tests.factories.player import PlayerFactory


def _record(**overrides) -> PlayerRecord:
    data = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "dob": "2012-12-10",
        "email": "ada@example.com",
    }
    data.update(overrides)
    return PlayerRecord(**data)


def test_insert_returns_generated_id(session):
    repo = PlayerRepository(session)
    first = repo.insert(_record())
    second = repo.insert(_record(email="grace@example.com"))

    assert isinstance(first, int)
    assert second != first
    assert session.query(Player).count() == 2


def test_insert_binds_blank_optionals_as_null(session):
    repo = PlayerRepository(session)
    player_id = repo.insert(_record(zip="02134", picture_path="/uploads/x.png"))
    session.commit()

    player = session.get(Player, player_id)
    assert player is not None
    assert player.dob == date(2012, 12, 10)
    assert player.zip == "02134"
    assert player.address_1 is None
    assert player.phone is None
    assert player.picture_path == "/uploads/x.png"


def test_insert_duplicate_email_raises_domain_error(session):
    PlayerFactory(email="ada@example.com")
    repo = PlayerRepository(session)

    with pytest.raises(DuplicateEmailError) as exc_info:
        repo.insert(_record(email="ada@example.com"))
    assert exc_info.value.email == "ada@example.com"
    session.rollback()
    assert session.query(Player).count() == 1


def test_model_lowercases_email():
    player = Player(email="  UPPER@Example.COM ")
    assert player.email == "upper@example.com"
