# SPDX-License-Identifier: Apache-2.0
"""Error taxonomy for the DeepL client.

Every error raised by this package is a :class:`DeepLError`. The ``kind``
attribute identifies the failure so callers can either pattern-match on it::

    try:
        await translator.translate_document(...)
    except DeepLError as err:
        match err.kind:
            case ErrorKind.QUOTA_EXCEEDED:
                ...
            case ErrorKind.DOCUMENT_TRANSLATION:
                resume(err.document_handle)

or catch the thin subclass for one kind (``except QuotaExceededError``).
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deepl_client.core.models import DocumentHandle


class ErrorKind(str, Enum):
    """Machine-readable classification of a :class:`DeepLError`."""

    GENERIC = "generic"
    ARGUMENT = "argument"
    AUTHORIZATION = "authorization"
    QUOTA_EXCEEDED = "quota_exceeded"
    TOO_MANY_REQUESTS = "too_many_requests"
    CONNECTION = "connection"
    GLOSSARY_NOT_FOUND = "glossary_not_found"
    DOCUMENT_NOT_READY = "document_not_ready"
    DOCUMENT_TRANSLATION = "document_translation"
    DOCUMENT_MINIFICATION = "document_minification"
    DOCUMENT_DEMINIFICATION = "document_deminification"


class DeepLError(Exception):
    """Base exception for all client errors.

    Attributes:
        kind: Error classification.
        cause: Underlying exception, if any.
        should_retry: Only meaningful for connection errors.
        document_handle: Only set for document translation errors.
    """

    default_kind: ErrorKind = ErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        *,
        kind: ErrorKind | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.kind = kind if kind is not None else self.default_kind
        self.should_retry = False
        self.document_handle: DocumentHandle | None = None


class ArgumentError(DeepLError):
    """Invalid argument supplied by the caller."""

    default_kind = ErrorKind.ARGUMENT


class AuthorizationError(DeepLError):
    """Authentication key rejected (HTTP 403)."""

    default_kind = ErrorKind.AUTHORIZATION


class QuotaExceededError(DeepLError):
    """Quota for the billing period exhausted (HTTP 456)."""

    default_kind = ErrorKind.QUOTA_EXCEEDED


class TooManyRequestsError(DeepLError):
    """Rate limited (HTTP 429) after transport retries were exhausted."""

    default_kind = ErrorKind.TOO_MANY_REQUESTS


class ConnectionError(DeepLError):  # noqa: A001
    """Network-level failure; no HTTP response was received."""

    default_kind = ErrorKind.CONNECTION

    def __init__(
        self,
        message: str,
        should_retry: bool = False,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.should_retry = should_retry


class GlossaryNotFoundError(DeepLError):
    """Glossary does not exist (HTTP 404 on a glossary request)."""

    default_kind = ErrorKind.GLOSSARY_NOT_FOUND


class DocumentNotReadyError(DeepLError):
    """Translated document requested before it was ready (HTTP 503)."""

    default_kind = ErrorKind.DOCUMENT_NOT_READY


class DocumentTranslationError(DeepLError):
    """Failure during document upload, translation or download.

    The ``document_handle`` attribute holds the handle of the uploaded document
    if the upload succeeded, so the translation can be resumed manually.
    """

    default_kind = ErrorKind.DOCUMENT_TRANSLATION

    def __init__(
        self,
        message: str,
        document_handle: DocumentHandle | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.document_handle = document_handle


class DocumentMinificationError(DeepLError):
    """Failure while minifying a document before upload."""

    default_kind = ErrorKind.DOCUMENT_MINIFICATION


class DocumentDeminificationError(DeepLError):
    """Failure while reinserting media into a translated document."""

    default_kind = ErrorKind.DOCUMENT_DEMINIFICATION
