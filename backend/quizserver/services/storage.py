"""Disk storage for question images."""

import logging
import uuid
from pathlib import Path
from typing import BinaryIO

from quizserver.config import settings
from quizserver.core.errors import StorageError

logger = logging.getLogger(__name__)


def save_image(stream: BinaryIO, filename: str | None) -> str:
    """Write an uploaded image under ``UPLOAD_DIR`` and return its public path.

    The stored name is random; only the original extension is kept.
    """
    upload_dir = settings.upload_path
    suffix = Path(filename or "").suffix.lower()
    name = f"{uuid.uuid4().hex}{suffix}"
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        with open(upload_dir / name, "wb") as f:
            f.write(stream.read())
    except OSError as exc:
        logger.exception("Failed to store upload %s", filename)
        raise StorageError("Could not store image") from exc

    logger.info("Stored image %s as %s", filename, name)
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{name}"


def delete_image(public_path: str | None) -> None:
    """Remove a previously stored image; missing files are ignored."""
    if not public_path:
        return
    name = Path(public_path).name
    try:
        (settings.upload_path / name).unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove image %s", public_path)
