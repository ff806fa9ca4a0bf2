# tests/unit/services/test_player_registration_service.py
from __future__ import annotations

import io
import logging
from datetime import date

import pytest
from werkzeug.datastructures import FileStorage

from players_api.models import Player
from players_api.services._shared.base import ServiceContext
from players_api.services._shared.errors import (
    DuplicateEmailError,
    InvalidDateError,
    MissingFieldsError,
    PersistenceError,
    PictureStorageError,
)
from players_api.services.players.dto import PlayerRecord, PlayerRegistrationIn
from players_api.services.players.service import PlayerRegistrationService
from tests.factories.player import PlayerFactory


# ------------------------------ Doubles ----------------------------------- #
class FakePlayers:
    """In-memory record writer with a unique email index."""

    def __init__(self, *, fail_with: Exception | None = None) -> None:
        self.rows: list[PlayerRecord] = []
        self.fail_with = fail_with

    def insert(self, record: PlayerRecord) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        if any(r.email == record.email for r in self.rows):
            raise DuplicateEmailError(record.email)
        self.rows.append(record)
        return len(self.rows)


class FakeUnitOfWork:
    def __init__(self, players: FakePlayers) -> None:
        self.players = players
        self.committed = False

    def __enter__(self) -> FakeUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.committed = exc_type is None

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.committed = False


def _dto(**overrides) -> PlayerRegistrationIn:
    data = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "dob": "12/10/2012",
        "email": "Ada@Example.COM",
    }
    data.update(overrides)
    return PlayerRegistrationIn(**data)


def _picture(filename: str = "photo.PNG") -> FileStorage:
    return FileStorage(stream=io.BytesIO(b"img"), filename=filename)


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def players() -> FakePlayers:
    return FakePlayers()


@pytest.fixture()
def fake_service(tmp_path, players) -> PlayerRegistrationService:
    """Service wired to the in-memory writer; no database involved."""
    return PlayerRegistrationService(
        upload_dir=tmp_path,
        uow_factory=lambda: FakeUnitOfWork(players),
    )


# ------------------------------ Normalize --------------------------------- #
def test_normalize_canonicalizes_fields(fake_service):
    record = fake_service.normalize(_dto(city="  ", phone=" 555 ", address_2=""))
    assert record.dob == "2012-12-10"
    assert record.email == "ada@example.com"
    assert record.city is None
    assert record.address_2 is None
    assert record.phone == "555"


def test_normalize_lists_missing_fields_in_form_order(fake_service):
    with pytest.raises(MissingFieldsError) as exc_info:
        fake_service.normalize(PlayerRegistrationIn(last_name="L"))
    assert exc_info.value.fields == ("first name", "dob", "email")
    assert str(exc_info.value) == (
        "first name, last name, dob, and email are required (missing: first name, dob, email)"
    )


def test_normalize_rejects_bad_date(fake_service):
    with pytest.raises(InvalidDateError):
        fake_service.normalize(_dto(dob="2/30/2023"))


# ------------------------------ Register ---------------------------------- #
def test_register_with_fake_writer(fake_service, players):
    out = fake_service.register(_dto())
    assert out.player_id == 1
    assert out.picture_path is None
    assert players.rows[0].email == "ada@example.com"


def test_register_duplicate_with_fake_writer(fake_service):
    fake_service.register(_dto())
    with pytest.raises(DuplicateEmailError):
        fake_service.register(_dto(email="ADA@example.com"))


def test_validation_failure_writes_no_picture(fake_service, tmp_path, players):
    with pytest.raises(MissingFieldsError):
        fake_service.register(_dto(email="", picture=_picture()))
    assert list(tmp_path.iterdir()) == []
    assert players.rows == []


def test_picture_is_discarded_when_write_fails(tmp_path):
    players = FakePlayers(fail_with=PersistenceError())
    service = PlayerRegistrationService(
        upload_dir=tmp_path, uow_factory=lambda: FakeUnitOfWork(players)
    )
    with pytest.raises(PersistenceError):
        service.register(_dto(picture=_picture()))
    assert list(tmp_path.iterdir()) == []


def test_picture_failure_prevents_insert(tmp_path, players):
    service = PlayerRegistrationService(
        upload_dir=tmp_path / "missing", uow_factory=lambda: FakeUnitOfWork(players)
    )
    with pytest.raises(PictureStorageError):
        service.register(_dto(picture=_picture()))
    assert players.rows == []


# --------------------------- Against SQLAlchemy --------------------------- #
def test_register_persists_row(app, session, upload_dir):
    service = PlayerRegistrationService(upload_dir=upload_dir)
    out = service.register(_dto(picture=_picture(), zip="02134"))

    player = session.get(Player, out.player_id)
    assert player is not None
    assert player.dob == date(2012, 12, 10)
    assert player.email == "ada@example.com"
    assert player.zip == "02134"
    assert player.city is None
    assert player.picture_path == out.picture_path
    assert (upload_dir / out.picture_path.rsplit("/", 1)[-1]).exists()


def test_register_duplicate_email_against_database(app, session, upload_dir):
    PlayerFactory(email="ada@example.com")
    service = PlayerRegistrationService(upload_dir=upload_dir)

    with pytest.raises(DuplicateEmailError):
        service.register(_dto(email="ADA@EXAMPLE.com", picture=_picture()))

    assert session.query(Player).count() == 1
    assert list(upload_dir.iterdir()) == []


def test_translate_exceptions_maps_to_api_errors(fake_service):
    from players_api.core.errors import BadRequest, Conflict, InternalError

    assert isinstance(fake_service.translate_exceptions(MissingFieldsError(["email"])), BadRequest)
    assert isinstance(fake_service.translate_exceptions(DuplicateEmailError()), Conflict)
    internal = fake_service.translate_exceptions(PictureStorageError())
    assert isinstance(internal, InternalError)
    assert internal.message == "failed to save picture"
    boom = RuntimeError("boom")
    assert fake_service.translate_exceptions(boom) is boom


def test_registration_log_carries_context_request_id(tmp_path, players, caplog):
    service = PlayerRegistrationService(
        upload_dir=tmp_path,
        ctx=ServiceContext(request_id="req-42"),
        uow_factory=lambda: FakeUnitOfWork(players),
    )
    caplog.set_level(logging.INFO, logger="players_api.services.players.service")

    out = service.register(_dto())

    records = [r for r in caplog.records if r.getMessage() == "player.registered"]
    assert len(records) == 1
    assert records[0].request_id == "req-42"
    assert records[0].player_id == out.player_id


def test_duplicate_log_carries_context_request_id(tmp_path, players, caplog):
    service = PlayerRegistrationService(
        upload_dir=tmp_path,
        ctx=ServiceContext(request_id="req-43"),
        uow_factory=lambda: FakeUnitOfWork(players),
    )
    service.register(_dto())
    caplog.set_level(logging.INFO, logger="players_api.services.players.service")

    with pytest.raises(DuplicateEmailError):
        service.register(_dto())

    records = [r for r in caplog.records if r.getMessage() == "player.duplicate_email"]
    assert [r.request_id for r in records] == ["req-43"]
