"""Player resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class PlayerCreatedSchema(Schema):
    """Body returned after a successful registration."""

    player_id = fields.Integer(required=True, data_key="playerId")
