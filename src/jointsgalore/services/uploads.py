"""Storage of uploaded image files.

Only the generated filename reaches the post collection; file bytes never
pass through the repositories.
"""
from __future__ import annotations

import logging
import secrets
from pathlib import Path

from jointsgalore.db.time import now_ms

logger = logging.getLogger(__name__)


def safe_filename(original_name: str | None) -> str:
    """Return a collision-resistant name keeping the lower-cased extension."""
    suffix = Path(original_name or "").suffix.lower()
    return f"{now_ms()}-{secrets.randbelow(10**9)}{suffix}"


def store_upload(upload_dir: Path, original_name: str | None, data: bytes) -> str:
    """Write ``data`` under a generated name in ``upload_dir`` and return the name."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = safe_filename(original_name)
    (upload_dir / filename).write_bytes(data)
    logger.debug("Stored upload %s (%d bytes)", filename, len(data))
    return filename


def discard_upload(upload_dir: Path, filename: str) -> None:
    """Remove a stored upload that never made it into the post collection."""
    (upload_dir / filename).unlink(missing_ok=True)
    logger.info("Discarded orphaned upload %s", filename)
