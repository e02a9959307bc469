"""
Pytest configuration and shared fixtures.

- roots: isolated (source, output) directory pair under tmp_path
- normalizer: FakeNormalizer that copies bytes and records calls
- detect_mime: suffix-based MIME lookup standing in for `file`
- make_file: helper to create files with parents
- deny_listing: make one directory unreadable to os.walk
"""
import os
import shutil
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import patch

import pytest

from sound_sync.errors import NormalizationError

MIME_BY_SUFFIX = {
    ".mp3": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".wav": "audio/x-wav",
    ".txt": "text/plain",
    ".png": "image/png",
}


class FakeNormalizer:
    def __init__(self, fail_on=()):
        self.calls: list[tuple[Path, Path]] = []
        self.fail_on = set(fail_on)

    def normalize(self, src: Path, dst: Path) -> None:
        self.calls.append((src, dst))
        if src.name in self.fail_on:
            dst.write_bytes(b"half written")
            raise NormalizationError(f"cannot decode {src}")
        shutil.copyfile(src, dst)


@pytest.fixture
def roots(tmp_path) -> tuple[Path, Path]:
    source = tmp_path / "prenormalized"
    output = tmp_path / "sounds"
    source.mkdir()
    return source, output


@pytest.fixture
def normalizer() -> FakeNormalizer:
    return FakeNormalizer()


@pytest.fixture
def detect_mime():
    def detect(path: Path) -> str:
        return MIME_BY_SUFFIX.get(path.suffix, "application/octet-stream")
    return detect


@pytest.fixture
def make_file():
    def make(path: Path, data: bytes = b"RIFF") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
    return make


@contextmanager
def deny_listing(directory: Path):
    """Make os.scandir fail with EACCES for one directory."""
    real_scandir = os.scandir
    denied = os.fspath(directory)

    def scandir(path="."):
        if os.fspath(path) == denied:
            raise PermissionError(13, "Permission denied", denied)
        return real_scandir(path)

    with patch("os.scandir", side_effect=scandir):
        yield
