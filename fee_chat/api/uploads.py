"""Scoped temporary storage for uploaded documents.

An upload lives on disk only while the request that carried it is being
handled; the file is removed on every exit path.
"""

import logging
import os
import tempfile
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import UploadFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class UploadTooLargeError(Exception):
    """Raised when an upload exceeds the configured byte limit."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(
            f"File size exceeds maximum allowed ({max_bytes / (1024 * 1024):.0f}MB)"
        )


@asynccontextmanager
async def stored_upload(
    upload: UploadFile,
    directory: Path,
    max_bytes: int,
) -> AsyncGenerator[Path]:
    """Copy an upload into ``directory`` for the duration of the block.

    Args:
        upload: The multipart file received by the endpoint.
        directory: Where the temporary copy is written.
        max_bytes: Largest upload accepted.

    Yields:
        Path of the temporary copy.

    Raises:
        UploadTooLargeError: If the upload is bigger than ``max_bytes``.
    """
    directory.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix="upload-", suffix=".pdf", dir=directory)
    path = Path(name)
    try:
        size = 0
        with os.fdopen(fd, "wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                size += len(chunk)
                if size > max_bytes:
                    raise UploadTooLargeError(max_bytes)
                out.write(chunk)
        logger.debug(f"Stored upload {upload.filename!r} ({size} bytes) at {path.name}")
        yield path
    finally:
        path.unlink(missing_ok=True)
        await upload.close()
