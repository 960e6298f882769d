# tests/test_photo_storage.py
from pathlib import Path

import pytest

from catalogo.services.exceptions import PhotoStorageError
from catalogo.services.photo_storage import PhotoStorage


@pytest.mark.parametrize(
    "original, expected",
    [
        ("photo.jpg", "photo.jpg"),
        ("mi foto: v1.jpg", "mifotov1.jpg"),
        ("C:\\fotos\\sony.png", "Cfotossony.png"),
        ("../../etc/passwd", "passwd"),
        ("", ""),
        (None, ""),
    ],
)
def test_sanitize(original, expected):
    assert PhotoStorage.sanitize(original) == expected


def test_build_filename_adds_unique_prefix(tmp_path: Path):
    storage = PhotoStorage(tmp_path)
    first = storage.build_filename("photo.jpg")
    second = storage.build_filename("photo.jpg")

    assert first != second
    assert first.endswith("-photo.jpg")
    assert len(first) == 36 + len("-photo.jpg")


def test_build_filename_without_name_is_only_prefix(tmp_path: Path):
    name = PhotoStorage(tmp_path).build_filename(" : ")
    assert len(name) == 36
    assert "-" in name and not name.endswith("-")


@pytest.mark.asyncio
async def test_write_creates_directory(tmp_path: Path):
    storage = PhotoStorage(tmp_path / "nested" / "uploads")
    target = await storage.write("a.jpg", b"bytes")
    assert target.read_bytes() == b"bytes"


@pytest.mark.asyncio
async def test_write_failure_raises_storage_error(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(PhotoStorageError):
        await PhotoStorage(blocker).write("a.jpg", b"bytes")


@pytest.mark.asyncio
async def test_stage_keeps_file_on_success(tmp_path: Path):
    storage = PhotoStorage(tmp_path)
    async with storage.stage("photo.jpg", b"data") as foto:
        assert storage.path_for(foto).exists()
    assert storage.path_for(foto).read_bytes() == b"data"


@pytest.mark.asyncio
async def test_stage_discards_file_when_block_fails(tmp_path: Path):
    storage = PhotoStorage(tmp_path)
    with pytest.raises(ValueError):
        async with storage.stage("photo.jpg", b"data"):
            raise ValueError("save failed")
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_discard_missing_file_is_harmless(tmp_path: Path):
    storage = PhotoStorage(tmp_path)
    assert await storage.discard("does-not-exist.jpg") is True
    assert await storage.discard(None) is False
