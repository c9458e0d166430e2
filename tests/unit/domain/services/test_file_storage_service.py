"""Unit tests for FileStorageService."""

from io import BytesIO

import pytest

from flexdata.domain.services.file_storage_service import (
    FileStorageService,
    build_storage_key,
    sanitize_filename,
)
from flexdata.domain.services.record_mapper import display_file_name


@pytest.fixture
def service(tmp_path):
    return FileStorageService(storage_path=str(tmp_path), external_url="http://cdn.test/")


def test_storage_key_has_timestamp_prefix():
    assert build_storage_key("song.mp3", 1712345678000) == "1712345678000_song.mp3"


def test_sanitize_filename_strips_directories():
    assert sanitize_filename("../../etc/passwd") == "passwd"
    assert sanitize_filename("C:\\music\\my song.mp3") == "my-song.mp3"
    assert sanitize_filename("...") == "unnamed"


def test_save_file_writes_content_and_returns_public_url(service, tmp_path):
    metadata = service.save_file(
        file_content=BytesIO(b"ID3"),
        filename="track_01.mp3",
        mime_type="audio/mpeg",
        size=3,
    )

    assert (tmp_path / metadata.key).read_bytes() == b"ID3"
    assert metadata.url == f"http://cdn.test/files/{metadata.key}"
    assert display_file_name(metadata.url) == "track_01.mp3"


def test_file_size_limit(service):
    service.max_file_size = 10
    with pytest.raises(ValueError, match="exceeds maximum"):
        service.save_file(BytesIO(b"x" * 11), "big.bin", "application/octet-stream", 11)


def test_get_file_path(service, tmp_path):
    metadata = service.save_file(BytesIO(b"data"), "a.txt", "text/plain", 4)

    assert service.get_file_path(metadata.key) == (tmp_path / metadata.key).resolve()

    with pytest.raises(FileNotFoundError):
        service.get_file_path("1_missing.txt")
    with pytest.raises(ValueError):
        service.get_file_path("../outside.txt")


def test_delete_file(service, tmp_path):
    metadata = service.save_file(BytesIO(b"data"), "a.txt", "text/plain", 4)

    service.delete_file(metadata.key)

    assert not (tmp_path / metadata.key).exists()
