# SPDX-License-Identifier: Apache-2.0
"""Language code helpers and shared request parameter building."""

from __future__ import annotations

from deepl_client.core.models import Formality, GlossaryInfo
from deepl_client.errors import ArgumentError

FREE_ACCOUNT_KEY_SUFFIX = ":fx"


def is_free_account_auth_key(auth_key: str) -> bool:
    """Return True if the authentication key belongs to a free account."""
    return auth_key.endswith(FREE_ACCOUNT_KEY_SUFFIX)


def standardize_language_code(lang_code: str) -> str:
    """Normalize casing, e.g. "EN-us" -> "en-US"."""
    if not isinstance(lang_code, str) or not lang_code:
        raise ArgumentError("lang_code must be a non-empty string")
    lang, _, region = lang_code.partition("-")
    if not region:
        return lang.lower()
    return f"{lang.lower()}-{region.upper()}"


def non_regional_language_code(lang_code: str) -> str:
    """Drop the regional variant, e.g. "en-US" -> "en"."""
    if not isinstance(lang_code, str) or not lang_code:
        raise ArgumentError("lang_code must be a non-empty string")
    return lang_code.split("-", 1)[0].lower()


def glossary_id_of(glossary: str | GlossaryInfo) -> str:
    if isinstance(glossary, GlossaryInfo):
        return glossary.glossary_id
    if isinstance(glossary, str) and glossary:
        return glossary
    raise ArgumentError(
        "glossary option should be a string containing the Glossary ID or a GlossaryInfo object."
    )


def build_request_params(
    source_lang: str | None,
    target_lang: str,
    formality: Formality | str | None = None,
    glossary: str | GlossaryInfo | None = None,
    extra_request_parameters: dict[str, str] | None = None,
) -> list[tuple[str, str]]:
    """Validate and build the fields shared by text and document translation.

    Raises:
        ArgumentError: If the language codes or option combination are invalid.
    """
    target_lang = standardize_language_code(target_lang)
    if source_lang is not None:
        source_lang = standardize_language_code(source_lang)

    if glossary is not None and source_lang is None:
        raise ArgumentError("source_lang is required if using a glossary")

    if target_lang == "en":
        raise ArgumentError("target_lang='en' is deprecated, please use 'en-GB' or 'en-US' instead.")
    if target_lang == "pt":
        raise ArgumentError("target_lang='pt' is deprecated, please use 'pt-PT' or 'pt-BR' instead.")

    params: list[tuple[str, str]] = [("target_lang", target_lang)]
    if source_lang is not None:
        params.append(("source_lang", source_lang))
    if formality is not None:
        value = formality.value if isinstance(formality, Formality) else str(formality)
        params.append(("formality", value.lower()))
    if glossary is not None:
        params.append(("glossary_id", glossary_id_of(glossary)))
    for name, value in (extra_request_parameters or {}).items():
        # Extra parameters replace any field of the same name
        params = [(key, val) for key, val in params if key != name]
        params.append((name, value))
    return params
