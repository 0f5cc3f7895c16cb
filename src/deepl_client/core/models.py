# SPDX-License-Identifier: Apache-2.0
"""Data models for DeepL API requests and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DocumentStatusCode(str, Enum):
    """Server-side state of a document translation."""

    QUEUED = "queued"
    TRANSLATING = "translating"
    ERROR = "error"
    DONE = "done"


class Formality(str, Enum):
    """Formality preference for translations."""

    LESS = "less"
    MORE = "more"
    DEFAULT = "default"
    PREFER_LESS = "prefer_less"
    PREFER_MORE = "prefer_more"


@dataclass(frozen=True)
class DocumentHandle:
    """Identifies one document translation job.

    Both fields are needed to poll the status or download the result, so keep
    the handle around if a translation fails midway.
    """

    document_id: str
    document_key: str


@dataclass
class DocumentStatus:
    """Result of one document status poll."""

    status: DocumentStatusCode
    seconds_remaining: int | None = None
    billed_characters: int | None = None
    error_message: str | None = None

    def ok(self) -> bool:
        """True unless the translation has failed."""
        return self.status in (
            DocumentStatusCode.QUEUED,
            DocumentStatusCode.TRANSLATING,
            DocumentStatusCode.DONE,
        )

    def done(self) -> bool:
        """True once the translated document can be downloaded."""
        return self.status == DocumentStatusCode.DONE


@dataclass(frozen=True)
class AppInfo:
    """Identifies the application using this library in the User-Agent."""

    app_name: str
    app_version: str


@dataclass
class DocumentTranslateOptions:
    """Options for document translation.

    Attributes:
        formality: Formality preference.
        glossary: Glossary ID or GlossaryInfo to apply.
        filename: Filename including extension. Required unless the input
            document is given as a path.
        extra_request_parameters: Extra fields passed through to the API.
        enable_document_minification: Strip media from .docx/.pptx files
            before upload and reinsert it after download.
    """

    formality: Formality | str | None = None
    glossary: str | GlossaryInfo | None = None
    filename: str | None = None
    extra_request_parameters: dict[str, str] = field(default_factory=dict)
    enable_document_minification: bool = False


@dataclass(frozen=True)
class TextResult:
    """A single text translation result."""

    text: str
    detected_source_lang: str
    billed_characters: int
    model_type_used: str | None = None

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Language:
    """A language supported by the API."""

    code: str
    name: str
    supports_formality: bool | None = None


@dataclass(frozen=True)
class GlossaryLanguagePair:
    """A language pair supported for glossaries."""

    source_lang: str
    target_lang: str


@dataclass(frozen=True)
class GlossaryInfo:
    """Information about a glossary, excluding its entries."""

    glossary_id: str
    name: str
    ready: bool
    source_lang: str
    target_lang: str
    creation_time: datetime
    entry_count: int


@dataclass(frozen=True)
class UsageDetail:
    """Usage count and limit for one usage type."""

    count: int
    limit: int

    @property
    def limit_reached(self) -> bool:
        return self.count >= self.limit


@dataclass(frozen=True)
class Usage:
    """Usage during the current billing period."""

    character: UsageDetail | None = None
    document: UsageDetail | None = None
    team_document: UsageDetail | None = None

    @property
    def any_limit_reached(self) -> bool:
        """True if any usage type has reached its limit."""
        details = (self.character, self.document, self.team_document)
        return any(detail is not None and detail.limit_reached for detail in details)

    def __str__(self) -> str:
        labelled = [
            ("Characters", self.character),
            ("Documents", self.document),
            ("Team documents", self.team_document),
        ]
        lines = [
            f"{label}: {detail.count} of {detail.limit}"
            for label, detail in labelled
            if detail is not None
        ]
        return "Usage this billing period:\n" + "\n".join(lines)
