#!/usr/bin/env python3
"""Command-line interface that matches the blocks of a program against a registry."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from blockmatch import (
    AssemblyError,
    BlockRegistry,
    MatchError,
    MatchSummary,
    assemble,
    describe_matches,
    find_matches,
    serialize_matches,
)
from blockmatch.report import serialize_summary


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "program",
        help="Path to a program written in assembler syntax, or '-' to read stdin",
    )
    parser.add_argument(
        "--registry",
        type=Path,
        default=Path("blocks/known_blocks.json"),
        help="Location of the known block definition file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the matches as JSON instead of a text listing",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log registry and scanner details to stderr",
    )
    return parser.parse_args()


def read_program(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise SystemExit(f"missing input file: {path}")
    try:
        return path.read_text("utf-8")
    except UnicodeDecodeError as exc:
        raise SystemExit(f"error: {path} is not valid UTF-8: {exc}") from exc


def main() -> None:
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        registry = BlockRegistry.load(args.registry)
        program = assemble(read_program(args.program))
        results = find_matches(registry, program)
    except (AssemblyError, MatchError) as exc:
        raise SystemExit(f"error: {exc}") from exc

    summary = MatchSummary.from_results(results)
    if args.json:
        payload = {"matches": serialize_matches(results), "summary": serialize_summary(summary)}
        print(json.dumps(payload, indent=2))
        return

    for line in describe_matches(results, registry):
        print(line)
    for line in summary.describe():
        print(line)


if __name__ == "__main__":
    main()
