"""Player registration endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app, request
from werkzeug.exceptions import BadRequest as MalformedRequest
from werkzeug.exceptions import RequestEntityTooLarge

from players_api.api.deps import json_response, timing
from players_api.core.errors import BadRequest
from players_api.core.logger import ensure_request_id
from players_api.schemas import PlayerCreatedSchema
from players_api.services._shared.base import ServiceContext
from players_api.services._shared.errors import ServiceError
from players_api.services.players.dto import PlayerRegistrationIn
from players_api.services.players.service import PlayerRegistrationService

bp = Blueprint("players", __name__)

player_created_schema = PlayerCreatedSchema()


@bp.post("")
@timing
def create_player():
    """Register a player from a multipart (or urlencoded) form."""

    # Parsing is bounded by MAX_CONTENT_LENGTH; nothing is extracted on failure
    try:
        form, files = request.form, request.files
    except (RequestEntityTooLarge, MalformedRequest) as exc:
        raise BadRequest("invalid form data") from exc

    dto = PlayerRegistrationIn.from_form(form, files)
    service = PlayerRegistrationService(
        upload_dir=current_app.config["UPLOAD_DIR"],
        public_prefix=current_app.config.get("PUBLIC_UPLOAD_PREFIX", "/uploads"),
        ctx=ServiceContext(request_id=ensure_request_id()),
    )
    try:
        out = service.register(dto)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc

    return json_response(player_created_schema.dump(out))
