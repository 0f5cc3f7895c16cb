# SPDX-License-Identifier: Apache-2.0
"""Tests for document input and output resolution."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from deepl_client.document.file_io import (
    BytesInput,
    PathInput,
    PathOutput,
    StreamInput,
    StreamOutput,
    as_document_input,
    as_document_output,
)
from deepl_client.errors import ArgumentError


class TestAsDocumentInput:
    """Tests for as_document_input."""

    @pytest.mark.asyncio
    async def test_path(self, tmp_path) -> None:
        """Paths take their filename from the basename."""
        path = tmp_path / "report.docx"
        path.write_bytes(b"data")

        for source in (path, str(path)):
            document = as_document_input(source)
            assert isinstance(document, PathInput)
            assert document.filename == "report.docx"
            assert await document.read_bytes() == b"data"

    @pytest.mark.asyncio
    async def test_bytes(self) -> None:
        """Bytes need an explicit filename."""
        document = as_document_input(bytearray(b"abc"), "a.txt")

        assert document == BytesInput(b"abc", "a.txt")
        assert await document.read_bytes() == b"abc"

    @pytest.mark.asyncio
    async def test_stream_is_closed_after_reading(self) -> None:
        """Streams are read once and closed."""
        stream = io.BytesIO(b"abc")
        document = as_document_input(stream, "a.txt")

        assert isinstance(document, StreamInput)
        assert await document.read_bytes() == b"abc"
        assert stream.closed

    @pytest.mark.parametrize("source", [b"abc", io.BytesIO(b"abc")])
    def test_filename_required(self, source) -> None:
        """Non-path inputs without a filename are rejected."""
        with pytest.raises(ArgumentError, match="filename must be specified"):
            as_document_input(source)

    def test_unsupported_type(self) -> None:
        """Other types are rejected."""
        with pytest.raises(ArgumentError, match="Unsupported document input type"):
            as_document_input(42, "a.txt")

    def test_resolved_input_is_passed_through(self) -> None:
        """Already resolved inputs are returned unchanged."""
        document = BytesInput(b"x", "a.txt")
        assert as_document_input(document) is document


class TestAsDocumentOutput:
    """Tests for as_document_output."""

    def test_path(self) -> None:
        """Strings and paths become path outputs."""
        assert as_document_output("out.docx") == PathOutput(Path("out.docx"))
        assert as_document_output(Path("out.docx")) == PathOutput(Path("out.docx"))

    def test_stream(self) -> None:
        """Writable objects become stream outputs."""
        buffer = io.BytesIO()
        assert as_document_output(buffer) == StreamOutput(buffer)

    def test_unsupported_type(self) -> None:
        """Other types are rejected."""
        with pytest.raises(ArgumentError):
            as_document_output(3.14)
