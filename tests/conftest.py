"""Shared pytest fixtures."""

from collections.abc import Generator
from pathlib import Path

import pytest

from epub_decoder import Epub, open_epub
from tests.fixtures import build_epub


@pytest.fixture
def epub_bytes() -> bytes:
    """The reference book as an in-memory archive."""
    return build_epub()


@pytest.fixture
def epub_path(tmp_path: Path, epub_bytes: bytes) -> Path:
    """The reference book written to disk."""
    path = tmp_path / "book.epub"
    path.write_bytes(epub_bytes)
    return path


@pytest.fixture
def book(epub_bytes: bytes) -> Generator[Epub, None, None]:
    """The reference book, loaded and closed after the test."""
    with open_epub(epub_bytes) as epub:
        yield epub
