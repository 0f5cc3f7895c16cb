#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Document translation example.

Shows the basic use of deepl-client: translating a document with optional
media minification, and resuming a download after a failure.
Change the settings below to try different options.

Usage:
    cd examples
    python translate_document.py

Environment variables (read from .env automatically):
    DEEPL_AUTH_KEY: DeepL authentication key (required)
    DEEPL_SERVER_URL: Override the API server URL (optional)
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the project to the path (for development)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

load_dotenv(PROJECT_ROOT / ".env")

from deepl_client import (  # noqa: E402
    DocumentTranslateOptions,
    DocumentTranslationError,
    Translator,
    TranslatorOptions,
)

# =============================================================================
# Settings - change these to customize the run
# =============================================================================

# Languages (SOURCE_LANG = None auto-detects)
SOURCE_LANG = "en"
TARGET_LANG = "de"

# Strip images, video and audio from .docx/.pptx before uploading and put
# them back afterwards. Large presentations upload much faster this way.
ENABLE_MINIFICATION = True

# Seconds between status checks
POLL_INTERVAL = 5.0

# Input and output paths
INPUT_DOCUMENT = Path(__file__).parent / "inputs" / "presentation.pptx"
OUTPUT_DIR = Path(__file__).parent / "outputs"

# Show request logs
VERBOSE = False

# =============================================================================
# Main (usually no changes needed)
# =============================================================================


async def main() -> None:
    auth_key = os.environ.get("DEEPL_AUTH_KEY")
    if not auth_key:
        print("Error: DEEPL_AUTH_KEY environment variable is not set")
        print("Set it with: export DEEPL_AUTH_KEY='your-auth-key'")
        sys.exit(1)

    if not INPUT_DOCUMENT.exists():
        print(f"Error: Input document not found: {INPUT_DOCUMENT}")
        sys.exit(1)

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    output_document = OUTPUT_DIR / f"{INPUT_DOCUMENT.stem}_{TARGET_LANG}{INPUT_DOCUMENT.suffix}"
    if output_document.exists():
        output_document.unlink()

    print("=" * 60)
    print("Document Translation Example")
    print("=" * 60)
    print(f"Input:        {INPUT_DOCUMENT}")
    print(f"Output:       {output_document}")
    print(f"Languages:    {SOURCE_LANG or 'auto'} -> {TARGET_LANG}")
    print(f"Minification: {ENABLE_MINIFICATION}")
    print("=" * 60)

    options = TranslatorOptions(
        server_url=os.environ.get("DEEPL_SERVER_URL") or None,
        poll_interval=POLL_INTERVAL,
    )
    async with Translator(auth_key, options) as translator:
        print("\nTranslating document...")
        try:
            status = await translator.translate_document(
                INPUT_DOCUMENT,
                output_document,
                SOURCE_LANG,
                TARGET_LANG,
                DocumentTranslateOptions(enable_document_minification=ENABLE_MINIFICATION),
            )
        except DocumentTranslationError as e:
            print(f"\nTranslation failed: {e}")
            if e.document_handle is None:
                sys.exit(1)
            # The document was uploaded, so the result can still be fetched.
            # Media stripped by minification is not restored on this path.
            print(f"Resuming document {e.document_handle.document_id}...")
            status = await translator.wait_until_document_translation_complete(e.document_handle)
            await translator.download_document(e.document_handle, output_document)

        usage = await translator.get_usage()

    print("\n" + "=" * 60)
    print("Translation Complete!")
    print("=" * 60)
    if status.billed_characters is not None:
        print(f"Billed characters: {status.billed_characters}")
    print(f"Output file:       {output_document}")
    print(f"File size:         {output_document.stat().st_size / 1024:.1f} KB")
    print(f"\n{usage}")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if VERBOSE else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    asyncio.run(main())
