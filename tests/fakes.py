# SPDX-License-Identifier: Apache-2.0
"""Fake transport, fake document service and test documents."""

from __future__ import annotations

import io
import json
import zipfile
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiohttp

from deepl_client.core.http_client import HttpResponse

DOCUMENT_XML = b"<w:document><w:body><w:t>Hello world</w:t></w:body></w:document>"
CONTENT_TYPES_XML = b'<?xml version="1.0"?><Types></Types>'


class FakeStreamReader:
    """Minimal stand-in for aiohttp.StreamReader."""

    def __init__(self, body: bytes) -> None:
        self._body = body

    async def iter_chunked(self, size: int) -> AsyncIterator[bytes]:
        for start in range(0, len(self._body), size):
            yield self._body[start : start + size]


def make_client_response(status: int, body: bytes = b"") -> MagicMock:
    """Mock aiohttp.ClientResponse that passes isinstance checks."""
    response = MagicMock(spec=aiohttp.ClientResponse)
    response.status = status
    response.text = AsyncMock(return_value=body.decode("utf-8", errors="replace"))
    response.content = FakeStreamReader(body)
    response.release = MagicMock()
    return response


def json_response(status: int, payload: Any) -> HttpResponse:
    return HttpResponse(status, json.dumps(payload))


@dataclass
class RecordedRequest:
    method: str
    path: str
    data: list[tuple[str, str]]
    file_buffer: bytes | None
    filename: str | None
    response_as_stream: bool


class FakeHttpClient:
    """Records requests and answers them with a handler function."""

    server_url = "https://fake.deepl.test"

    def __init__(self, handler: Callable[[RecordedRequest], HttpResponse]) -> None:
        self._handler = handler
        self.requests: list[RecordedRequest] = []
        self.closed = False

    async def send_request_with_backoff(
        self,
        method: str,
        path: str,
        *,
        data: Any = None,
        headers: dict[str, str] | None = None,
        file_buffer: bytes | None = None,
        filename: str | None = None,
        response_as_stream: bool = False,
    ) -> HttpResponse:
        request = RecordedRequest(
            method, path, list(data or []), file_buffer, filename, response_as_stream
        )
        self.requests.append(request)
        return self._handler(request)

    async def close(self) -> None:
        self.closed = True

    def paths(self) -> list[str]:
        return [request.path for request in self.requests]


@dataclass
class FakeDocumentServer:
    """In-memory document translation service.

    Uploaded documents go through ``statuses`` one poll at a time; the result
    is ``translate(uploaded_bytes)``.
    """

    statuses: list[dict[str, Any]] = field(
        default_factory=lambda: [
            {"status": "queued"},
            {"status": "translating", "seconds_remaining": 1},
            {"status": "done", "billed_characters": 11},
        ]
    )
    translate: Callable[[bytes], bytes] = lambda content: content.upper()
    fail_download: BaseException | None = None
    document_id: str = "DOC-1"
    document_key: str = "KEY-1"
    uploaded: bytes | None = None
    uploaded_filename: str | None = None

    def __call__(self, request: RecordedRequest) -> HttpResponse:
        if request.path == "/v2/document":
            self.uploaded = request.file_buffer
            self.uploaded_filename = request.filename
            return json_response(
                200, {"document_id": self.document_id, "document_key": self.document_key}
            )
        if request.path == f"/v2/document/{self.document_id}":
            assert ("document_key", self.document_key) in request.data
            status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
            return json_response(200, status)
        if request.path == f"/v2/document/{self.document_id}/result":
            if self.fail_download is not None:
                raise self.fail_download
            assert self.uploaded is not None
            return HttpResponse(200, make_client_response(200, self.translate(self.uploaded)))
        return json_response(404, {"message": f"unknown path {request.path}"})

    def count(self, client: FakeHttpClient, path: str) -> int:
        return sum(1 for request in client.requests if request.path == path)


def write_office_document(
    path: Path,
    media: dict[str, bytes] | None = None,
    extra: dict[str, bytes] | None = None,
) -> Path:
    """Write a minimal zip-based office document."""
    entries = {
        "[Content_Types].xml": CONTENT_TYPES_XML,
        "word/document.xml": DOCUMENT_XML,
        **(extra or {}),
        **(media or {}),
    }
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return path


def read_zip(path: Path) -> dict[str, bytes]:
    with zipfile.ZipFile(path) as archive:
        return {name: archive.read(name) for name in archive.namelist()}


def uppercase_document_xml(content: bytes) -> bytes:
    """Fake translation of a zipped office document: uppercase document.xml."""
    source = zipfile.ZipFile(io.BytesIO(content))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as target:
        for info in source.infolist():
            data = source.read(info.filename)
            if info.filename == "word/document.xml":
                data = data.upper()
            target.writestr(info.filename, data)
    return buffer.getvalue()


