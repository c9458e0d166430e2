"""Integration tests for file upload and download."""

import re

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_upload_and_download(client: AsyncClient, storage_dir):
    response = await client.post(
        "/files/upload",
        files={"file": ("intro song.mp3", b"ID3-audio", "audio/mpeg")},
    )

    assert response.status_code == 201
    meta = response.json()["file"]
    assert re.match(r"^\d+_intro-song\.mp3$", meta["key"])
    assert meta["filename"] == "intro song.mp3"
    assert meta["size"] == 9
    assert meta["url"].endswith(f"/files/{meta['key']}")
    assert (storage_dir / meta["key"]).read_bytes() == b"ID3-audio"

    download = await client.get(f"/files/{meta['key']}")

    assert download.status_code == 200
    assert download.content == b"ID3-audio"
    assert "intro-song.mp3" in download.headers["content-disposition"]


@pytest.mark.asyncio
async def test_download_missing_file(client: AsyncClient, storage_dir):
    response = await client.get("/files/123_missing.txt")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file(client: AsyncClient, storage_dir, monkeypatch):
    monkeypatch.setenv("FLEXDATA_MAX_FILE_SIZE", "4")
    from flexdata.core.config import get_settings

    get_settings.cache_clear()

    response = await client.post(
        "/files/upload", files={"file": ("big.bin", b"0123456789", "application/octet-stream")}
    )

    assert response.status_code == 400
