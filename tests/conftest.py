# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fakes import write_office_document


@pytest.fixture
def media_files() -> dict[str, bytes]:
    """Incompressible media payloads keyed by archive path."""
    return {
        "word/media/image1.png": os.urandom(200_000),
        "word/media/nested/clip.mp4": os.urandom(150_000),
        "word/media/photo.JPEG": os.urandom(50_000),
    }


@pytest.fixture
def office_document(tmp_path: Path, media_files: dict[str, bytes]) -> Path:
    return write_office_document(
        tmp_path / "input.docx",
        media=media_files,
        extra={"word/styles.xml": b"<styles/>", "docProps/thumbnail.dat": b"thumb"},
    )
