# SPDX-License-Identifier: Apache-2.0
"""Parsing of DeepL API JSON responses into models."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from deepl_client.core.language import standardize_language_code
from deepl_client.core.models import (
    DocumentHandle,
    DocumentStatus,
    DocumentStatusCode,
    GlossaryInfo,
    GlossaryLanguagePair,
    Language,
    TextResult,
    Usage,
    UsageDetail,
)
from deepl_client.errors import DeepLError


def _load(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise DeepLError(f"Error parsing response JSON: {exc}", exc) from exc


def _parse_datetime(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 onwards
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_document_handle(content: str) -> DocumentHandle:
    obj = _load(content)
    try:
        return DocumentHandle(document_id=obj["document_id"], document_key=obj["document_key"])
    except (KeyError, TypeError) as exc:
        raise DeepLError(f"Error parsing response JSON: missing {exc}", exc) from exc


def parse_document_status(content: str) -> DocumentStatus:
    """Parse a document status response.

    Unknown status strings are treated as errors so that polling stops.
    """
    obj = _load(content)
    try:
        raw_status = obj["status"]
    except (KeyError, TypeError) as exc:
        raise DeepLError(f"Error parsing response JSON: missing {exc}", exc) from exc
    try:
        status = DocumentStatusCode(raw_status)
    except ValueError:
        status = DocumentStatusCode.ERROR
    return DocumentStatus(
        status=status,
        seconds_remaining=obj.get("seconds_remaining"),
        billed_characters=obj.get("billed_characters"),
        error_message=obj.get("error_message"),
    )


def parse_text_result_list(content: str) -> list[TextResult]:
    obj = _load(content)
    try:
        return [
            TextResult(
                text=item["text"],
                detected_source_lang=standardize_language_code(
                    item["detected_source_language"]
                ),
                billed_characters=item.get("billed_characters", 0),
                model_type_used=item.get("model_type_used"),
            )
            for item in obj["translations"]
        ]
    except (KeyError, TypeError) as exc:
        raise DeepLError(f"Error parsing response JSON: missing {exc}", exc) from exc


def _parse_usage_detail(obj: dict[str, Any], prefix: str) -> UsageDetail | None:
    count = obj.get(f"{prefix}_count")
    limit = obj.get(f"{prefix}_limit")
    if count is None or limit is None:
        return None
    return UsageDetail(count=count, limit=limit)


def parse_usage(content: str) -> Usage:
    obj = _load(content)
    if not isinstance(obj, dict):
        raise DeepLError("Error parsing response JSON: expected an object")
    return Usage(
        character=_parse_usage_detail(obj, "character"),
        document=_parse_usage_detail(obj, "document"),
        team_document=_parse_usage_detail(obj, "team_document"),
    )


def parse_language_list(content: str) -> list[Language]:
    obj = _load(content)
    try:
        return [
            Language(
                code=standardize_language_code(item["language"]),
                name=item["name"],
                supports_formality=item.get("supports_formality"),
            )
            for item in obj
        ]
    except (KeyError, TypeError) as exc:
        raise DeepLError(f"Error parsing response JSON: missing {exc}", exc) from exc


def parse_glossary_language_pair_list(content: str) -> list[GlossaryLanguagePair]:
    obj = _load(content)
    try:
        return [
            GlossaryLanguagePair(source_lang=item["source_lang"], target_lang=item["target_lang"])
            for item in obj["supported_languages"]
        ]
    except (KeyError, TypeError) as exc:
        raise DeepLError(f"Error parsing response JSON: missing {exc}", exc) from exc


def _parse_raw_glossary_info(obj: dict[str, Any]) -> GlossaryInfo:
    return GlossaryInfo(
        glossary_id=obj["glossary_id"],
        name=obj["name"],
        ready=obj["ready"],
        source_lang=obj["source_lang"],
        target_lang=obj["target_lang"],
        creation_time=_parse_datetime(obj["creation_time"]),
        entry_count=obj["entry_count"],
    )


def parse_glossary_info(content: str) -> GlossaryInfo:
    obj = _load(content)
    try:
        return _parse_raw_glossary_info(obj)
    except (KeyError, TypeError, ValueError) as exc:
        raise DeepLError(f"Error parsing response JSON: {exc}", exc) from exc


def parse_glossary_info_list(content: str) -> list[GlossaryInfo]:
    obj = _load(content)
    try:
        return [_parse_raw_glossary_info(item) for item in obj["glossaries"]]
    except (KeyError, TypeError, ValueError) as exc:
        raise DeepLError(f"Error parsing response JSON: {exc}", exc) from exc
