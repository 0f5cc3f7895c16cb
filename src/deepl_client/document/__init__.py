# SPDX-License-Identifier: Apache-2.0
"""Document translation: file inputs, minification and the translation workflow."""

from .file_io import (
    BytesInput,
    DocumentInput,
    DocumentOutput,
    PathInput,
    PathOutput,
    StreamInput,
    StreamOutput,
    as_document_input,
    as_document_output,
)
from .minifier import DocumentMinifier
from .orchestrator import (
    DEFAULT_POLL_INTERVAL,
    DocumentService,
    DocumentState,
    DocumentTranslation,
    wait_until_document_translation_complete,
)

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "BytesInput",
    "DocumentInput",
    "DocumentMinifier",
    "DocumentOutput",
    "DocumentService",
    "DocumentState",
    "DocumentTranslation",
    "PathInput",
    "PathOutput",
    "StreamInput",
    "StreamOutput",
    "as_document_input",
    "as_document_output",
    "wait_until_document_translation_complete",
]
