#!/usr/bin/env python3
from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Any, List, Optional, Tuple

from wordnik_client import WordnikClient
from wordnik_errors import WordnikError

SLEEP_SECONDS = 2.1  # be polite to the API


def fetch_definition(
    client: WordnikClient, word: str
) -> Tuple[Optional[str], Optional[str]]:
    try:
        definitions = client.get_definitions(word.lower(), limit=1)
    except WordnikError as exc:
        return None, str(exc)

    if definitions is None:
        return None, "word not found"
    if not isinstance(definitions, list):
        return None, "unexpected response structure"

    for definition in definitions:
        text = definition.get("text") if isinstance(definition, dict) else None
        if text:
            return text.strip(), None

    return None, "no definition found"


def verify_lines(
    client: WordnikClient,
    lines: List[str],
    length: Optional[int] = None,
    sleep_seconds: float = SLEEP_SECONDS,
) -> List[str]:
    kept = []

    for line in lines:
        parts = line.split(None, 1)
        if not parts:
            continue
        word = parts[0]

        print(word, end=" ", flush=True)

        if length is not None and len(word) != length:
            print(f"deleted: length {len(word)}")
            continue

        definition, error = fetch_definition(client, word)
        if definition:
            print("ok")
            kept.append(f"{word.upper()} {definition}")
        else:
            print(f"deleted: {error}")

        if sleep_seconds:
            time.sleep(sleep_seconds)

    return kept


def main(argv: Optional[List[str]] = None, client: Any = None) -> None:
    parser = argparse.ArgumentParser(
        description="Keep only the candidate words that Wordnik can define."
    )
    parser.add_argument("path", type=Path, help="Candidate words file.")
    parser.add_argument(
        "--length",
        type=int,
        help="Delete words that are not exactly this long.",
    )
    args = parser.parse_args(argv)

    if client is None:
        client = WordnikClient.from_config()

    lines = [
        line.rstrip("\n")
        for line in args.path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    kept = verify_lines(client, lines, length=args.length)

    with open(args.path, "w", encoding="utf-8") as f:
        for line in kept:
            f.write(line + "\n")


if __name__ == "__main__":
    main()
