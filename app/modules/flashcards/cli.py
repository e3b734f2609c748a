from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from app.core.errors import UpstreamError
from app.modules.flashcards.client import OpenRouterClient
from app.modules.flashcards.generator import generate_flashcards
from app.modules.flashcards.prompts import (
    DEFAULT_CARD_COUNT,
    MAX_CARD_COUNT,
    MIN_CARD_COUNT,
    build_prompt,
)


def _load_content(args: argparse.Namespace) -> str:
    if args.content and args.content_file:
        raise SystemExit("Provide either --content or --content-file, not both")
    if args.content_file:
        return Path(args.content_file).read_text(encoding="utf-8")
    if args.content:
        return args.content
    raise SystemExit("--content or --content-file is required")


def _card_count(value: str) -> int:
    count = int(value)
    if not MIN_CARD_COUNT <= count <= MAX_CARD_COUNT:
        raise argparse.ArgumentTypeError(
            f"count must be between {MIN_CARD_COUNT} and {MAX_CARD_COUNT}"
        )
    return count


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--content", "-c", help="Note text to build flashcards from")
    p.add_argument("--content-file", help="Path to a file containing the note text")
    p.add_argument(
        "--count", "-n", type=_card_count, default=DEFAULT_CARD_COUNT,
        help="Number of flashcards to ask for",
    )


def main(argv: list[str] | None = None, client: OpenRouterClient | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashcards-gen", description="Flashcards generator CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("prompt", help="Print the prompt that would be sent")
    _add_source_args(p)

    g = sub.add_parser("generate", help="Generate flashcards from note text")
    _add_source_args(g)

    args = parser.parse_args(argv)
    content = _load_content(args)

    if args.cmd == "prompt":
        print(build_prompt(content, args.count))
        return 0
    if args.cmd == "generate":
        try:
            result = asyncio.run(
                generate_flashcards(content, args.count, client or OpenRouterClient())
            )
        except UpstreamError as e:
            print(json.dumps({"error": e.message}, indent=2))
            return 1
        print(json.dumps([c.model_dump() for c in result.flashcards], indent=2))
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
