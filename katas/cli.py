#!/usr/bin/env python3
"""
Katas CLI - run and inspect exercises

Usage:
    katas list
    katas run <exercise> [--solution]
    katas hint <exercise>
    python -m katas run <exercise>
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from katas import style
from katas.catalog import ExerciseCatalog
from katas.config import KataConfig
from katas.exceptions import KataError
from katas.runner import ExercisePipeline

logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def cmd_list(catalog: ExerciseCatalog, args: argparse.Namespace) -> int:
    for exercise in catalog.load():
        kind = exercise.kind.display if exercise.kind else exercise.ext
        status = "✓" if exercise.done else " "
        print(f"  [{status}] {exercise.name:<24} {kind:<8} {exercise.terminal_link()}")
    return EXIT_PASSED


def cmd_hint(catalog: ExerciseCatalog, args: argparse.Namespace) -> int:
    exercise = catalog.get(args.exercise)
    print(exercise.hint or "No hint for this exercise.")
    return EXIT_PASSED


class TranscriptWriter:
    """Writes a transcript buffer to stdout, each byte once.

    The pipeline clears the buffer when a run starts, so a buffer shorter
    than what was already written starts over from the beginning.
    """

    def __init__(self, output: bytearray):
        self.output = output
        self.written = 0

    def flush(self) -> None:
        if self.written > len(self.output):
            self.written = 0
        pending = bytes(self.output[self.written:])
        self.written = len(self.output)
        sys.stdout.flush()
        sys.stdout.buffer.write(pending)
        sys.stdout.buffer.flush()

    def read_answer(self, prompt: str) -> str:
        """Show the question written so far, then prompt for a reply."""
        self.flush()
        return input(prompt)


def cmd_run(catalog: ExerciseCatalog, args: argparse.Namespace, config: KataConfig) -> int:
    exercise = catalog.get(args.exercise)
    output = bytearray()
    transcript = TranscriptWriter(output)
    pipeline = ExercisePipeline.from_config(config, read_answer=transcript.read_answer)

    try:
        if args.solution:
            success = pipeline.run_solution(exercise, output)
        else:
            success = pipeline.run_exercise(exercise, output)
    finally:
        transcript.flush()

    print()
    if success:
        print(style.success(f"✓ Exercise {exercise} passed"))
        return EXIT_PASSED
    print(style.failure(f"✗ Exercise {exercise} failed"))
    return EXIT_FAILED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="katas",
        description="Build, check and run exercises",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every stage and spawned command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all exercises")

    run_parser = subparsers.add_parser("run", help="Run one exercise")
    run_parser.add_argument("exercise", help="Exercise name")
    run_parser.add_argument(
        "--solution", "-s",
        action="store_true",
        help="Run the reference solution instead of the exercise",
    )

    hint_parser = subparsers.add_parser("hint", help="Show an exercise's hint")
    hint_parser.add_argument("exercise", help="Exercise name")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    load_dotenv()

    try:
        config = KataConfig.from_env()
        assert config.info_file is not None
        catalog = ExerciseCatalog(config.info_file)

        if args.command == "list":
            return cmd_list(catalog, args)
        elif args.command == "hint":
            return cmd_hint(catalog, args)
        return cmd_run(catalog, args, config)
    except KataError as e:
        logger.error("%s %s", e.message, e.details)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
