# SPDX-License-Identifier: Apache-2.0
"""Core transport, classification and data model modules."""

from .backoff import BackoffTimer
from .http_client import HttpClient, HttpResponse
from .models import (
    AppInfo,
    DocumentHandle,
    DocumentStatus,
    DocumentStatusCode,
    DocumentTranslateOptions,
    Formality,
    GlossaryInfo,
    GlossaryLanguagePair,
    Language,
    TextResult,
    Usage,
    UsageDetail,
)
from .status import check_status_code

__all__ = [
    "AppInfo",
    "BackoffTimer",
    "DocumentHandle",
    "DocumentStatus",
    "DocumentStatusCode",
    "DocumentTranslateOptions",
    "Formality",
    "GlossaryInfo",
    "GlossaryLanguagePair",
    "HttpClient",
    "HttpResponse",
    "Language",
    "TextResult",
    "Usage",
    "UsageDetail",
    "check_status_code",
]
