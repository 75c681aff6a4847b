"""Command line entry point: compose haiku from a memory passed as text."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, Sequence, TextIO

from memory_haiku.utils.logging_config import configure_logging

from .app import MemoryHaikuApp
from .services.result_formatter import format_candidates
from .services.session_service import GENERATE_SEEDS, HaikuCandidate


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memory-haiku",
        description="Turn a typed or transcribed memory into strict 5-7-5 haiku.",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Memory text. Read from stdin when omitted.",
    )
    picks = parser.add_mutually_exclusive_group()
    picks.add_argument(
        "--seed",
        type=int,
        action="append",
        metavar="N",
        help="Compose one haiku per seed instead of the default three (repeatable).",
    )
    picks.add_argument(
        "--select",
        type=int,
        metavar="INDEX",
        help="Pick haiku INDEX (1-3) from the first round; regenerate rounds then start from it.",
    )
    parser.add_argument(
        "--regenerate",
        type=int,
        default=0,
        metavar="ROUNDS",
        help="Run this many regenerate rounds after the initial generate.",
    )
    parser.add_argument(
        "--counts",
        action="store_true",
        help="Show the verified syllable count of each line.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of formatted text.",
    )
    parser.add_argument(
        "--pretty-json",
        action="store_true",
        help="Indent JSON output for readability (implies --json).",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (defaults to MEMORY_HAIKU_LOG_LEVEL or INFO).",
    )
    return parser


def _compose_rounds(app: MemoryHaikuApp, text: str, args: argparse.Namespace) -> List[List[HaikuCandidate]]:
    if args.seed:
        results = app.composer.compose_many(text, args.seed)
        return [[app.session.candidate_for(result) for result in results]]

    rounds = [app.generate(text)]
    if args.select is not None:
        app.select(args.select - 1)
    for _ in range(max(0, args.regenerate)):
        rounds.append(app.regenerate())
    return rounds


def main(
    argv: Sequence[str] | None = None,
    *,
    app: Optional[MemoryHaikuApp] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.select is not None and not 1 <= args.select <= len(GENERATE_SEEDS):
        parser.error(f"--select must be between 1 and {len(GENERATE_SEEDS)}")
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    configure_logging(args.log_level, stream=stderr)

    text = args.text if args.text is not None else stdin.read()
    if not (text or "").strip():
        stderr.write("memory-haiku: nothing to compose; pass some text\n")
        return 2

    app = app or MemoryHaikuApp()
    rounds = _compose_rounds(app, text.strip(), args)
    picked = None if args.select is None else args.select - 1

    if args.pretty_json or args.json:
        indent = 2 if args.pretty_json else None
        payload = [[candidate.as_dict() for candidate in batch] for batch in rounds]
        if picked is not None:
            payload[0][picked]["selected"] = True
        json.dump(payload, stdout, indent=indent, ensure_ascii=False, sort_keys=True)
        stdout.write("\n")
        return 0

    blocks = []
    for index, batch in enumerate(rounds):
        rendered = format_candidates(
            batch,
            show_counts=args.counts,
            selected_index=picked if index == 0 else None,
        )
        if len(rounds) > 1:
            rendered = f"== Round {index + 1} ==\n{rendered}"
        blocks.append(rendered)
    stdout.write("\n\n".join(blocks) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
