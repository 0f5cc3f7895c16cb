# SPDX-License-Identifier: Apache-2.0
"""Asynchronous client library for the DeepL translation API.

Usage:
    from deepl_client import DocumentTranslateOptions, Translator

    async with Translator("your-auth-key") as translator:
        result = await translator.translate_text("Hello, world!", None, "de")
        status = await translator.translate_document(
            "report.docx",
            "report_de.docx",
            "en",
            "de",
            DocumentTranslateOptions(enable_document_minification=True),
        )
"""

from deepl_client._version import __version__
from deepl_client.core.models import (
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
from deepl_client.document.minifier import DocumentMinifier
from deepl_client.errors import (
    ArgumentError,
    AuthorizationError,
    ConnectionError,
    DeepLError,
    DocumentDeminificationError,
    DocumentMinificationError,
    DocumentNotReadyError,
    DocumentTranslationError,
    ErrorKind,
    GlossaryNotFoundError,
    QuotaExceededError,
    TooManyRequestsError,
)
from deepl_client.glossary_entries import GlossaryEntries
from deepl_client.translator import Translator, TranslatorOptions

__all__ = [
    "__version__",
    # Client
    "Translator",
    "TranslatorOptions",
    "DocumentMinifier",
    "GlossaryEntries",
    # Models
    "AppInfo",
    "DocumentHandle",
    "DocumentStatus",
    "DocumentStatusCode",
    "DocumentTranslateOptions",
    "Formality",
    "GlossaryInfo",
    "GlossaryLanguagePair",
    "Language",
    "TextResult",
    "Usage",
    "UsageDetail",
    # Errors
    "ErrorKind",
    "DeepLError",
    "ArgumentError",
    "AuthorizationError",
    "ConnectionError",
    "DocumentDeminificationError",
    "DocumentMinificationError",
    "DocumentNotReadyError",
    "DocumentTranslationError",
    "GlossaryNotFoundError",
    "QuotaExceededError",
    "TooManyRequestsError",
]
