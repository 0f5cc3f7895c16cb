# SPDX-License-Identifier: Apache-2.0
"""Maps HTTP status codes to client errors."""

from __future__ import annotations

import asyncio
import json
from http import HTTPStatus

import aiohttp

from deepl_client.errors import (
    AuthorizationError,
    DeepLError,
    DocumentNotReadyError,
    GlossaryNotFoundError,
    QuotaExceededError,
    TooManyRequestsError,
)


async def check_status_code(
    status_code: int,
    content: str | aiohttp.ClientResponse,
    using_glossary: bool = False,
    in_document_download: bool = False,
) -> None:
    """Raise the matching error unless the status code indicates success.

    The same codes mean different things on different endpoints, so callers
    pass whether a glossary endpoint or a document status/result endpoint
    was called.

    Args:
        status_code: HTTP status code.
        content: Response body text, or a streamed response which is read
            and released on failure.
        using_glossary: A 404 means the glossary does not exist.
        in_document_download: A 503 means the document is not ready yet.

    Raises:
        DeepLError: Or one of its subclasses, for any non-2xx/3xx status.
    """
    if 200 <= status_code < 400:
        return

    if isinstance(content, aiohttp.ClientResponse):
        response = content
        try:
            content = await response.text()
        except (aiohttp.ClientError, UnicodeDecodeError, asyncio.TimeoutError) as exc:
            content = f"Error occurred while reading response: {exc}"
        finally:
            response.release()

    message = _describe_content(content)

    if status_code == 403:
        raise AuthorizationError(f"Authorization failure, check auth_key{message}")
    if status_code == 456:
        raise QuotaExceededError(f"Quota for this billing period has been exceeded{message}")
    if status_code == 404:
        if using_glossary:
            raise GlossaryNotFoundError(f"Glossary not found{message}")
        raise DeepLError(f"Not found, check server_url{message}")
    if status_code == 400:
        raise DeepLError(f"Bad request{message}")
    if status_code == 429:
        raise TooManyRequestsError(
            "Too many requests, DeepL servers are currently experiencing high load"
            f"{message}"
        )
    if status_code == 503:
        if in_document_download:
            raise DocumentNotReadyError(f"Document not ready{message}")
        raise DeepLError(f"Service unavailable{message}")

    try:
        status_name = HTTPStatus(status_code).phrase
    except ValueError:
        status_name = "Unknown"
    raise DeepLError(
        f"Unexpected status code: {status_code} {status_name}{message}, content: {content}"
    )


def _describe_content(content: str) -> str:
    """Build the message suffix from a JSON error body or raw text."""
    try:
        obj = json.loads(content)
    except (json.JSONDecodeError, TypeError):
        return f", {content}"

    message = ""
    if isinstance(obj, dict):
        if obj.get("message") is not None:
            message += f", message: {obj['message']}"
        if obj.get("detail") is not None:
            message += f", detail: {obj['detail']}"
    return message
