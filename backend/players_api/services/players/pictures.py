"""Picture store for optional registration uploads.

Files are written under the upload directory with a generated name
(``<nanoseconds>-<16 hex chars><ext>``); the client filename contributes its
extension only, so the public path never carries user-controlled text.
"""

from __future__ import annotations

import logging
import os
import re
import secrets
import shutil
import time
from pathlib import Path
from typing import Final

from werkzeug.datastructures import FileStorage

from players_api.services._shared.errors import PictureStorageError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION: Final[str] = ".bin"
PUBLIC_PREFIX: Final[str] = "/uploads"
RANDOM_BYTES: Final[int] = 8

_SAFE_EXTENSION = re.compile(r"\.[A-Za-z0-9]+")


def picture_extension(filename: str) -> str:
    """
    Return the extension of ``filename`` verbatim (case kept).

    :param filename: Client-supplied filename.
    :returns: ``".PNG"`` for ``"photo.PNG"``; :data:`DEFAULT_EXTENSION` when
        there is no extension or it holds anything but letters and digits.
    :rtype: str
    """
    # Clients on Windows may send full paths with backslashes
    base = filename.replace("\\", "/").rsplit("/", 1)[-1]
    ext = os.path.splitext(base)[1]
    if not _SAFE_EXTENSION.fullmatch(ext):
        return DEFAULT_EXTENSION
    return ext


def generate_picture_name(filename: str) -> str:
    """Build a collision-resistant storage name keeping only the extension."""
    return f"{time.time_ns()}-{secrets.token_hex(RANDOM_BYTES)}{picture_extension(filename)}"


def save_picture(
    upload_dir: str | os.PathLike[str],
    upload: FileStorage | None,
    *,
    public_prefix: str = PUBLIC_PREFIX,
) -> str | None:
    """
    Persist an optional uploaded picture.

    :param upload_dir: Directory receiving the file. It must already exist.
    :param upload: Uploaded file part, if any.
    :param public_prefix: URL prefix under which ``upload_dir`` is served.
    :returns: Public path such as ``/uploads/1700000000-ab12....png``, or
        ``None`` when no file was supplied (nothing is written).
    :rtype: str | None
    :raises PictureStorageError: When the directory is unavailable or the copy fails.
    """
    if upload is None or not upload.filename:
        return None

    name = generate_picture_name(upload.filename)
    dest = Path(upload_dir) / name
    try:
        upload.stream.seek(0)
        # "xb": never clobber an existing asset
        with open(dest, "xb") as out:
            shutil.copyfileobj(upload.stream, out)
    except OSError as exc:
        raise PictureStorageError() from exc

    return f"{public_prefix.rstrip('/')}/{name}"


def discard_picture(
    upload_dir: str | os.PathLike[str],
    public_path: str | None,
    *,
    public_prefix: str = PUBLIC_PREFIX,
) -> bool:
    """
    Best-effort removal of a picture stored by :func:`save_picture`.

    :param upload_dir: Directory the picture was written to.
    :param public_path: Path returned by :func:`save_picture`.
    :param public_prefix: Prefix used when the picture was saved.
    :returns: ``True`` when a file was removed.
    :rtype: bool
    """
    if not public_path:
        return False
    name = public_path[len(public_prefix.rstrip("/")) :].lstrip("/")
    if not name or "/" in name:
        return False
    try:
        (Path(upload_dir) / name).unlink()
    except FileNotFoundError:
        return False
    except OSError:
        logger.warning("picture.discard_failed", extra={"picture_path": public_path}, exc_info=True)
        return False
    return True
