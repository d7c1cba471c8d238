"""
Public-read file storage for binary assets (logos, avatars).

Files land under ``<root>/<bucket>/uploads/<random-token>.<ext>`` and are
addressed by a durable public URL ``<public_base_url>/<bucket>/uploads/...``.
The URL is returned verbatim for the caller to persist on an entity field;
it is never re-derived later.
"""

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Optional

from ..core.config import Config
from ..core.errors import UploadError

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads"


def file_extension(filename: str) -> str:
    """Text after the last dot; a name without a dot is its own extension."""
    return filename.rsplit(".", 1)[-1]


class FileStorage:
    """Directory-backed bucket served read-only by the HTTP shell."""

    def __init__(self, root: Path, public_base_url: str, bucket: str = "public"):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")
        self.bucket = bucket

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'FileStorage':
        config = config or Config()
        return cls(
            root=config.get_storage_directory(),
            public_base_url=config.get("public_url_base", "http://localhost:8000"),
            bucket=config.get("storage_bucket", "public"),
        )

    @property
    def bucket_path(self) -> Path:
        return self.root / self.bucket

    def generate_path(self, filename: str) -> str:
        """Randomized object path keeping the original extension."""
        return f"{UPLOAD_PREFIX}/{uuid.uuid4().hex}.{file_extension(filename)}"

    def public_url(self, object_path: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{object_path}"

    def _write(self, object_path: str, content: bytes) -> None:
        target = self.bucket_path / object_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

    async def upload_file(self, filename: str, content: bytes) -> str:
        """
        Store a file and return its public URL.

        Args:
            filename: Original file name (only its extension is kept)
            content: File bytes

        Raises:
            UploadError: if the file is empty or cannot be written
        """
        if not filename:
            raise UploadError("Upload needs a file name")
        if not content:
            raise UploadError(f"Cannot upload empty file '{filename}'")

        object_path = self.generate_path(filename)
        try:
            await asyncio.to_thread(self._write, object_path, content)
        except OSError as e:
            logger.error(f"Upload of {filename} failed: {e}")
            raise UploadError(f"Failed to upload {filename}", detail=str(e)) from e

        url = self.public_url(object_path)
        logger.info(f"Uploaded {filename} -> {url}")
        return url
