# SPDX-License-Identifier: Apache-2.0
"""File-like document inputs and outputs.

Public methods accept paths, bytes or binary file objects. They are resolved
once into one of the closed variants below, so the translation workflow only
ever sees bytes plus a filename on the way in and a path or stream on the way
out.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Union

from deepl_client.errors import ArgumentError

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class PathInput:
    """Document read from a file path. The filename is the path's basename."""

    path: Path

    @property
    def filename(self) -> str:
        return self.path.name

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


@dataclass(frozen=True)
class BytesInput:
    """Document held in memory."""

    data: bytes
    filename: str

    async def read_bytes(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class StreamInput:
    """Document read from a binary file object, closed after reading."""

    stream: IO[bytes]
    filename: str

    async def read_bytes(self) -> bytes:
        try:
            return await asyncio.to_thread(self.stream.read)
        finally:
            self.stream.close()


DocumentInput = Union[PathInput, BytesInput, StreamInput]


@dataclass(frozen=True)
class PathOutput:
    """Translated document written to a new file at ``path``."""

    path: Path


@dataclass(frozen=True)
class StreamOutput:
    """Translated document written to a caller-owned binary file object."""

    stream: IO[bytes]


DocumentOutput = Union[PathOutput, StreamOutput]


def as_document_input(
    source: PathLike | bytes | bytearray | IO[bytes] | DocumentInput,
    filename: str | None = None,
) -> DocumentInput:
    """Resolve a caller-supplied document source.

    Args:
        source: Path, bytes, binary file object, or an already resolved input.
        filename: Filename including extension. Required unless ``source`` is
            a path, since the server detects the format from it.

    Raises:
        ArgumentError: If ``filename`` is missing for a non-path source.
    """
    if isinstance(source, (PathInput, BytesInput, StreamInput)):
        return source
    if isinstance(source, (str, os.PathLike)):
        return PathInput(Path(source))

    if filename is None:
        raise ArgumentError("filename must be specified unless using input file path")

    if isinstance(source, (bytes, bytearray)):
        return BytesInput(bytes(source), filename)
    if hasattr(source, "read"):
        return StreamInput(source, filename)
    raise ArgumentError(f"Unsupported document input type: {type(source).__name__}")


def as_document_output(target: PathLike | IO[bytes] | DocumentOutput) -> DocumentOutput:
    """Resolve a caller-supplied output target."""
    if isinstance(target, (PathOutput, StreamOutput)):
        return target
    if isinstance(target, (str, os.PathLike)):
        return PathOutput(Path(target))
    if hasattr(target, "write"):
        return StreamOutput(target)
    raise ArgumentError(f"Unsupported document output type: {type(target).__name__}")
