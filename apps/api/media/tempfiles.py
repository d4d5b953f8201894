"""
Temporary copies of uploads that ffprobe reads from disk.

Every file created here is removed when its scope exits, whatever the outcome.
The periodic sweep only catches files orphaned by a killed process.
"""

import logging
import os
import tempfile
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, Tuple

from fastapi import UploadFile

from errors import UploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
TEMP_PREFIX = "upload_"


def sanitize_filename(filename: Optional[str], default: str = "upload.mp4") -> str:
    base = os.path.basename(filename or default)
    safe = "".join(ch if ch.isalnum() or ch in ("-", "_", ".") else "_" for ch in base)
    return safe or default


@asynccontextmanager
async def scoped_upload_file(
    upload: UploadFile,
    max_bytes: int,
    temp_dir: str,
) -> AsyncIterator[Tuple[Path, int]]:
    """
    Stream an upload into a private temp file and yield ``(path, size)``.

    Raises UploadError (413) as soon as the stream exceeds ``max_bytes``.
    The file is deleted on exit, including when the body raises.
    """
    root = Path(temp_dir)
    root.mkdir(parents=True, exist_ok=True)
    suffix = Path(sanitize_filename(upload.filename)).suffix.lower()
    fd, raw_path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=suffix, dir=root)
    path = Path(raw_path)

    try:
        total_size = 0
        with os.fdopen(fd, "wb") as out:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                total_size += len(chunk)
                if total_size > max_bytes:
                    raise UploadError(
                        f"File too large (max {max_bytes // (1024 * 1024)}MB)",
                        status_code=413,
                    )
                out.write(chunk)
        yield path, total_size
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Temporary file deleted: %s", path.name)


def sweep_stale_files(temp_dir: str, max_age_seconds: float, now: Optional[float] = None) -> int:
    """Delete upload temp files older than ``max_age_seconds``. Returns how many were removed."""
    root = Path(temp_dir)
    if not root.exists():
        return 0

    cutoff = (now if now is not None else time.time()) - max_age_seconds
    removed = 0
    for path in root.glob(f"{TEMP_PREFIX}*"):
        if not path.is_file():
            continue
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink(missing_ok=True)
                removed += 1
                logger.info("Stale temporary file removed: %s", path.name)
        except OSError as exc:
            logger.warning("Could not cleanup stale temp file %s: %s", path, exc)
    return removed
