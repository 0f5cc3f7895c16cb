# SPDX-License-Identifier: Apache-2.0
"""
DeepL Client - CLI Tool

Translates documents and texts with the DeepL API and reports account usage.

Usage:
    deepl-translate document <input> <output> --target <lang> [options]
    deepl-translate text <text>... --target <lang> [options]
    deepl-translate usage

Examples:
    deepl-translate document slides.pptx slides_de.pptx -t de --minify
    deepl-translate text "Hello, world!" -t ja
    deepl-translate usage
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

from dotenv import load_dotenv

from deepl_client.core.models import DocumentTranslateOptions
from deepl_client.errors import DeepLError, DocumentTranslationError
from deepl_client.translator import Translator, TranslatorOptions

logger = logging.getLogger(__name__)

AUTH_KEY_ENV_VAR = "DEEPL_AUTH_KEY"
SERVER_URL_ENV_VAR = "DEEPL_SERVER_URL"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="deepl-translate",
        description="DeepL API client - translate documents and texts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s document report.docx report_de.docx -t de      # Translate a document
  %(prog)s document slides.pptx out.pptx -t fr --minify   # Strip media before upload
  %(prog)s text "Hello" "Goodbye" -s en -t ja             # Translate texts
  %(prog)s usage                                          # Show account usage

Environment Variables (also read from .env):
  DEEPL_AUTH_KEY     DeepL authentication key
  DEEPL_SERVER_URL   Override the API server URL
""",
    )
    parser.add_argument("--auth-key", help=f"DeepL authentication key (or set {AUTH_KEY_ENV_VAR})")
    parser.add_argument("--server-url", help=f"API server URL (or set {SERVER_URL_ENV_VAR})")
    parser.add_argument(
        "--max-retries",
        type=int,
        default=5,
        help="Maximum retries per request (default: 5)",
    )
    parser.add_argument(
        "--no-platform-info",
        action="store_true",
        help="Do not send platform information in the User-Agent",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    doc_parser = subparsers.add_parser("document", help="Translate a document")
    doc_parser.add_argument("input", type=Path, help="Document to translate")
    doc_parser.add_argument("output", type=Path, help="Path of the translated document")
    _add_language_args(doc_parser)
    doc_parser.add_argument("--formality", help="Formality preference (e.g. more, less)")
    doc_parser.add_argument("--glossary", help="Glossary ID to apply")
    doc_parser.add_argument(
        "--minify",
        action="store_true",
        help="Strip media from .docx/.pptx before upload and reinsert it afterwards",
    )

    text_parser = subparsers.add_parser("text", help="Translate texts")
    text_parser.add_argument("texts", nargs="+", help="Texts to translate")
    _add_language_args(text_parser)
    text_parser.add_argument("--formality", help="Formality preference (e.g. more, less)")
    text_parser.add_argument("--context", help="Context that influences the translation")

    subparsers.add_parser("usage", help="Show usage for the current billing period")

    return parser.parse_args(argv)


def _add_language_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s",
        "--source",
        default=None,
        help="Source language code (default: auto-detect)",
    )
    parser.add_argument(
        "-t",
        "--target",
        required=True,
        help="Target language code (e.g. de, en-US, ja)",
    )


def create_translator(args: argparse.Namespace) -> Translator:
    """Create a Translator from arguments and environment.

    Raises:
        SystemExit: If no authentication key is available.
    """
    auth_key = args.auth_key or os.environ.get(AUTH_KEY_ENV_VAR, "")
    if not auth_key:
        print(
            "Error: DeepL authentication key is required.\n"
            f"  Set --auth-key option or {AUTH_KEY_ENV_VAR} environment variable.",
            file=sys.stderr,
        )
        sys.exit(1)

    options = TranslatorOptions(
        server_url=args.server_url or os.environ.get(SERVER_URL_ENV_VAR) or None,
        max_retries=args.max_retries,
        send_platform_info=not args.no_platform_info,
    )
    return Translator(auth_key, options)


async def run_document(translator: Translator, args: argparse.Namespace) -> int:
    input_path: Path = args.input
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1
    if args.output.exists():
        print(f"Error: Output file already exists: {args.output}", file=sys.stderr)
        return 1
    args.output.parent.mkdir(parents=True, exist_ok=True)

    options = DocumentTranslateOptions(
        formality=args.formality,
        glossary=args.glossary,
        enable_document_minification=args.minify,
    )
    print(f"Input: {input_path}")
    print(f"Output: {args.output}")
    print(f"Translation: {(args.source or 'auto').upper()} -> {args.target.upper()}")
    if args.minify:
        print("Minification: enabled")
    print()

    try:
        print("Translating...")
        status = await translator.translate_document(
            input_path, args.output, args.source, args.target, options
        )
    except DocumentTranslationError as e:
        print(f"Error: Translation failed: {e}", file=sys.stderr)
        if e.document_handle is not None:
            print(
                f"  Document ID: {e.document_handle.document_id}\n"
                f"  Document key: {e.document_handle.document_key}",
                file=sys.stderr,
            )
        return 1

    print(f"Complete: {args.output}")
    if status.billed_characters is not None:
        print(f"  Billed characters: {status.billed_characters}")
    return 0


async def run_text(translator: Translator, args: argparse.Namespace) -> int:
    results = await translator.translate_text(
        list(args.texts),
        args.source,
        args.target,
        formality=args.formality,
        context=args.context,
    )
    for result in results:
        print(result.text)
    return 0


async def run_usage(translator: Translator, args: argparse.Namespace) -> int:
    usage = await translator.get_usage()
    print(usage)
    if usage.any_limit_reached:
        print("Warning: a usage limit has been reached.", file=sys.stderr)
    return 0


COMMANDS = {
    "document": run_document,
    "text": run_text,
    "usage": run_usage,
}


async def run(args: argparse.Namespace) -> int:
    """Execute the selected command.

    Returns:
        Exit code (0: success, 1: failure).
    """
    translator = create_translator(args)
    try:
        return await COMMANDS[args.command](translator, args)
    except DeepLError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            logger.exception("Command %s failed", args.command)
        return 1
    finally:
        await translator.close()


def main() -> NoReturn:
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
