from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Tuple

from wordnik_client import WordnikClient
from wordnik_errors import WordnikError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

WORD_COMMANDS: Dict[str, Callable[..., Any]] = {
    "word": WordnikClient.get_word,
    "definitions": WordnikClient.get_definitions,
    "examples": WordnikClient.get_examples,
    "top-example": WordnikClient.get_top_example,
    "pronunciations": WordnikClient.get_text_pronunciations,
    "hyphenation": WordnikClient.get_hyphenation,
    "frequency": WordnikClient.get_frequency,
    "phrases": WordnikClient.get_phrases,
    "related": WordnikClient.get_related_words,
    "audio": WordnikClient.get_audio,
}
OTHER_COMMANDS = [
    "search",
    "random-word",
    "random-words",
    "word-of-the-day",
    "token-status",
]
COMMAND_OPTIONS: Dict[str, Tuple[str, ...]] = {
    "search": ("term", "limit", "skip"),
    "random-word": (),
    "random-words": ("limit",),
    "word-of-the-day": ("date",),
    "token-status": (),
}
WORD_COMMAND_OPTIONS = ("term", "limit")


def configure_logging(verbose: bool = False) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the Wordnik dictionary API.")
    parser.add_argument(
        "command",
        choices=[*WORD_COMMANDS, *OTHER_COMMANDS],
        help="Command to execute.",
    )
    parser.add_argument(
        "term",
        nargs="?",
        help="Word to look up, or the query for search.",
    )
    parser.add_argument("--limit", type=int, help="Maximum number of results.")
    parser.add_argument("--skip", type=int, help="Number of results to skip.")
    parser.add_argument("--date", help="Date for word-of-the-day (YYYY-MM-DD).")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log each request at debug level.",
    )
    return parser


def check_options(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    allowed = COMMAND_OPTIONS.get(args.command, WORD_COMMAND_OPTIONS)
    unused = [
        name
        for name in ("term", "limit", "skip", "date")
        if getattr(args, name) is not None and name not in allowed
    ]
    if unused:
        parser.error(f"{args.command} does not accept: {', '.join(unused)}")


def run_command(client: WordnikClient, args: argparse.Namespace) -> Any:
    if args.command in WORD_COMMANDS:
        return WORD_COMMANDS[args.command](client, args.term, limit=args.limit)
    if args.command == "search":
        return client.search_words(args.term, limit=args.limit, skip=args.skip)
    if args.command == "random-word":
        return client.get_random_word()
    if args.command == "random-words":
        return client.get_random_words(limit=args.limit)
    if args.command == "word-of-the-day":
        return client.get_word_of_the_day(date=args.date)
    return client.get_api_token_status()


def _print_result(result: Any) -> None:
    print(json.dumps(result, indent=2, sort_keys=True, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    check_options(parser, args)
    configure_logging(args.verbose)
    logger.debug("Running command %s", args.command)

    try:
        client = WordnikClient.from_config()
        result = run_command(client, args)
    except WordnikError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if result is None:
        print("No result found.")
        return 1
    _print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
