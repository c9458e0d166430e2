"""File storage service for uploaded row attachments.

Files are stored flat under the storage path with the key
``{timestamp_ms}_{original_filename}``. The value written into a row's data
bag is the public URL of that key, so the original name can be shown again
by stripping the timestamp prefix.
"""

import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from flexdata.core.config import get_settings
from flexdata.core.logging import get_logger

logger = get_logger(__name__)

# Characters allowed in the stored file name; everything else becomes "-"
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class FileMetadata:
    """Metadata for a stored file."""

    filename: str
    key: str
    size: int
    mime_type: str
    url: str

    def to_dict(self) -> dict[str, str | int]:
        return {
            "filename": self.filename,
            "key": self.key,
            "size": self.size,
            "mime_type": self.mime_type,
            "url": self.url,
        }


def sanitize_filename(filename: str) -> str:
    """Reduce an uploaded name to a safe single path component."""
    name = Path(filename.replace("\\", "/")).name
    name = UNSAFE_FILENAME_CHARS.sub("-", name).strip(".-")
    return name or "unnamed"


def build_storage_key(filename: str, timestamp_ms: int | None = None) -> str:
    """Storage key for an upload: ``{timestamp_ms}_{filename}``.

    Examples:
        >>> build_storage_key("My Song.mp3", 1712345678000)
        '1712345678000_My-Song.mp3'
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{timestamp_ms}_{sanitize_filename(filename)}"


class FileStorageService:
    """Service for managing file storage operations."""

    def __init__(self, storage_path: str | None = None, external_url: str | None = None):
        settings = get_settings()
        self.storage_path = Path(storage_path or settings.storage_path)
        self.external_url = (external_url or settings.external_url).rstrip("/")
        self.max_file_size = settings.max_file_size

    def validate_file_size(self, size: int) -> None:
        if size > self.max_file_size:
            max_size_mb = self.max_file_size / (1024 * 1024)
            actual_size_mb = size / (1024 * 1024)
            raise ValueError(
                f"File size ({actual_size_mb:.2f}MB) exceeds maximum allowed "
                f"size ({max_size_mb:.2f}MB)"
            )

    def public_url(self, key: str) -> str:
        return f"{self.external_url}/files/{key}"

    def save_file(
        self,
        file_content: BinaryIO,
        filename: str,
        mime_type: str,
        size: int,
    ) -> FileMetadata:
        """Store an uploaded file.

        Args:
            file_content: Readable binary stream.
            filename: Original file name as uploaded.
            mime_type: Content type reported by the client.
            size: Size in bytes.

        Returns:
            Metadata including the public URL to store in a row.

        Raises:
            ValueError: If the file is too large.
        """
        self.validate_file_size(size)

        key = build_storage_key(filename)
        file_path = self.storage_path / key
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "wb") as f:
            f.write(file_content.read())

        logger.info("File saved successfully", filename=filename, key=key, size=size)
        return FileMetadata(
            filename=filename,
            key=key,
            size=size,
            mime_type=mime_type,
            url=self.public_url(key),
        )

    def get_file_path(self, key: str) -> Path:
        """Resolve a storage key to an existing file.

        Raises:
            ValueError: If the key escapes the storage directory.
            FileNotFoundError: If no such file is stored.
        """
        root = self.storage_path.resolve()
        absolute_path = (self.storage_path / key).resolve()
        if absolute_path.parent != root:
            raise ValueError("Invalid file path")
        if not absolute_path.is_file():
            raise FileNotFoundError(f"File not found: {key}")
        return absolute_path

    def delete_file(self, key: str) -> None:
        self.get_file_path(key).unlink()
        logger.info("File deleted", key=key)
