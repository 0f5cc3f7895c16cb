# SPDX-License-Identifier: Apache-2.0
"""Integration tests against the live DeepL API.

Run with: RUN_INTEGRATION=1 DEEPL_AUTH_KEY=... pytest -m integration
"""

from __future__ import annotations

import os

import pytest
import pytest_asyncio

from deepl_client import DocumentStatusCode, Translator

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.environ.get("RUN_INTEGRATION") != "1" or not os.environ.get("DEEPL_AUTH_KEY"),
        reason="Integration tests disabled (set RUN_INTEGRATION=1 and DEEPL_AUTH_KEY to run)",
    ),
]


@pytest_asyncio.fixture
async def translator():
    async with Translator(os.environ["DEEPL_AUTH_KEY"]) as client:
        yield client


class TestLiveApi:
    """Round trips against the real service."""

    @pytest.mark.asyncio
    async def test_usage(self, translator) -> None:
        """Usage can be queried."""
        usage = await translator.get_usage()
        assert usage.character is not None

    @pytest.mark.asyncio
    async def test_translate_text(self, translator) -> None:
        """A short text is translated."""
        result = await translator.translate_text("Hello, world!", "en", "de")
        assert result.text
        assert result.detected_source_lang == "en"

    @pytest.mark.asyncio
    async def test_translate_document(self, translator, tmp_path) -> None:
        """A text document is translated end to end."""
        source = tmp_path / "hello.txt"
        source.write_text("Hello, world!", encoding="utf-8")
        output = tmp_path / "hello_de.txt"

        status = await translator.translate_document(source, output, "en", "de")

        assert status.status is DocumentStatusCode.DONE
        assert output.read_text(encoding="utf-8")
