"""
Command-line client for the DeepL API.

Reads from STDIN and writes to STDOUT by default so it fits into shell
pipelines:

    shell> echo "Please go home." | deepl translate --from EN --to DE
    Bitte gehen Sie nach Hause.

    shell> deepl usage
    Available characters per billing period: 500000
    Characters already translated in the current billing period: 3317

    shell> deepl languages --type target
      BG    (Bulgarian)
      CS    (Czech)
      ...

The API key is taken from ``--api-key`` or the ``DEEPL_API_KEY``
environment variable.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence, TextIO

import httpx
from pydantic import ValidationError

from deepl_api import __version__
from deepl_api.client import DeepL
from deepl_api.config import get_settings
from deepl_api.errors import (
    AuthorizationError,
    BadRequestError,
    DeepLError,
    DeserializationError,
    NetworkError,
    NotFoundError,
    QuotaExceededError,
    ServerError,
    TooManyRequestsError,
)
from deepl_api.models import (
    Formality,
    Language,
    LanguageType,
    SplitSentences,
    TagHandling,
    TranslationOptions,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Exit codes
# =============================================================================

EXIT_OK = 0
EXIT_FAILURE = 1

EXIT_CODES: dict[type[DeepLError], int] = {
    AuthorizationError: 3,
    QuotaExceededError: 4,
    TooManyRequestsError: 5,
    BadRequestError: 6,
    NotFoundError: 7,
    ServerError: 8,
    NetworkError: 9,
    DeserializationError: 10,
}


def exit_code_for(error: DeepLError) -> int:
    """Map an error to the process exit status."""
    for error_type, code in EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return EXIT_FAILURE


# =============================================================================
# Argument parsing
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the ``deepl`` argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--api-key",
        help="DeepL API key (default: $DEEPL_API_KEY)"
    )
    common.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON"
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log HTTP requests to STDERR"
    )

    parser = argparse.ArgumentParser(
        prog="deepl",
        description="Command line client for the DeepL API"
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    usage = subparsers.add_parser(
        "usage",
        aliases=["usage-information"],
        parents=[common],
        help="Fetch information about account usage & limits"
    )
    usage.set_defaults(handler=run_usage)

    languages = subparsers.add_parser(
        "languages",
        parents=[common],
        help="Fetch list of available source and target languages"
    )
    languages.add_argument(
        "--type", "-t",
        dest="language_type",
        choices=[t.value for t in LanguageType],
        help="Only list source or target languages (default: both)"
    )
    languages.set_defaults(handler=run_languages)

    translate = subparsers.add_parser(
        "translate",
        parents=[common],
        help="Translate text"
    )
    translate.add_argument(
        "text",
        nargs="*",
        help="Text(s) to translate (default: read from --input-file or STDIN)"
    )
    translate.add_argument(
        "--to", "--target-language",
        dest="target_language",
        required=True,
        help="Target language, e.g. DE or EN-US (required)"
    )
    translate.add_argument(
        "--from", "--source-language",
        dest="source_language",
        help="Source language (default: auto-detect)"
    )
    translate.add_argument(
        "--formality",
        choices=[f.value for f in Formality],
        help="Lean towards formal or informal language"
    )
    translate.add_argument(
        "--split-sentences",
        choices=[s.value for s in SplitSentences],
        help="0: no splitting, 1: punctuation and newlines, nonewlines: punctuation only"
    )
    translate.add_argument(
        "--preserve-formatting",
        action="store_true",
        help="Respect the original formatting"
    )
    translate.add_argument(
        "--tag-handling",
        choices=[t.value for t in TagHandling],
        help="Treat the input as XML or HTML"
    )
    translate.add_argument(
        "--glossary-id",
        help="Glossary to use for the translation"
    )
    translate.add_argument(
        "--input-file", "-i",
        help="Read text from this file instead of STDIN"
    )
    translate.add_argument(
        "--output-file", "-o",
        help="Write translations to this file instead of STDOUT"
    )
    translate.set_defaults(handler=run_translate)

    return parser


def configure_logging(verbose: bool, log_level: str = "WARNING") -> None:
    """Send log output to STDERR at the requested level."""
    level = logging.DEBUG if verbose else log_level
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# =============================================================================
# Commands
# =============================================================================


def run_usage(deepl: DeepL, args: argparse.Namespace, out: TextIO) -> None:
    usage = deepl.usage_information()

    if args.json:
        _print_json(usage.model_dump(), out)
        return

    print(f"Available characters per billing period: {usage.character_limit}", file=out)
    print(f"Characters already translated in the current billing period: {usage.character_count}", file=out)


def run_languages(deepl: DeepL, args: argparse.Namespace, out: TextIO) -> None:
    if args.language_type:
        langs = deepl.languages(args.language_type)
        if args.json:
            _print_json([_dump_language(lang) for lang in langs], out)
        else:
            _print_languages(langs, out)
        return

    source_langs = deepl.source_languages()
    target_langs = deepl.target_languages()

    if args.json:
        _print_json(
            {
                "source": [_dump_language(lang) for lang in source_langs],
                "target": [_dump_language(lang) for lang in target_langs],
            },
            out,
        )
        return

    print("DeepL can translate from the following source languages:", file=out)
    _print_languages(source_langs, out)
    print(file=out)
    print("DeepL can translate to the following target languages:", file=out)
    _print_languages(target_langs, out)


def translation_options(args: argparse.Namespace) -> TranslationOptions:
    """Build translate options from the parsed flags."""
    return TranslationOptions(
        target_language=args.target_language.strip(),
        source_language=args.source_language.strip() if args.source_language else None,
        formality=args.formality,
        split_sentences=args.split_sentences,
        preserve_formatting=True if args.preserve_formatting else None,
        tag_handling=args.tag_handling,
        glossary_id=args.glossary_id,
    )


def run_translate(deepl: DeepL, args: argparse.Namespace, out: TextIO) -> None:
    texts = read_texts(args)
    translations = deepl.translate(texts, args.options)

    if args.json:
        output = json.dumps(
            [t.model_dump() for t in translations],
            ensure_ascii=False,
            indent=2,
        )
    else:
        output = "\n".join(t.text for t in translations)

    if args.output_file:
        with open(args.output_file, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info(f"Wrote {len(translations)} translation(s) to {args.output_file}")
    elif output:
        print(output, file=out)


def read_texts(args: argparse.Namespace) -> list[str]:
    """Collect input texts from arguments, the input file or STDIN."""
    if args.text:
        return list(args.text)

    if args.input_file:
        with open(args.input_file, encoding="utf-8") as f:
            content = f.read()
    else:
        content = sys.stdin.read()

    return [content] if content.strip() else []


# =============================================================================
# Output helpers
# =============================================================================


def _dump_language(lang: Language) -> dict[str, Any]:
    return lang.model_dump(by_alias=True, exclude_none=True)


def _print_languages(langs: list[Language], out: TextIO) -> None:
    for lang in langs:
        print(f"  {lang.code:<5} ({lang.name})", file=out)


def _print_json(data: Any, out: TextIO) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2), file=out)


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


# =============================================================================
# CLI Entry Point
# =============================================================================


def main(argv: Sequence[str] | None = None, transport: httpx.BaseTransport | None = None) -> int:
    """
    Run the ``deepl`` command.

    Args:
        argv: Arguments (default: ``sys.argv[1:]``)
        transport: Optional httpx transport for the client

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.handler is run_translate:
        if args.text and args.input_file:
            parser.error("text arguments and --input-file are mutually exclusive")
        try:
            args.options = translation_options(args)
        except ValidationError as e:
            parser.error(f"invalid translation options: {_first_error(e)}")

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid DEEPL_* configuration: {_first_error(e)}", file=sys.stderr)
        return EXIT_FAILURE
    configure_logging(args.verbose, settings.log_level)

    api_key = args.api_key or settings.api_key
    if not api_key or not api_key.strip():
        print(
            "Error: no DEEPL_API_KEY found. Please provide your API key in this "
            "environment variable or with --api-key.",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    try:
        deepl = DeepL(
            api_key,
            server_url=settings.server_url or None,
            timeout=httpx.Timeout(settings.timeout, connect=settings.connect_timeout),
            transport=transport,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        args.handler(deepl, args, sys.stdout)
    except DeepLError as e:
        print(f"Error: {e}", file=sys.stderr)
        return exit_code_for(e)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
