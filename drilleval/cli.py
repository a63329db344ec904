"""Command line interface for drilleval."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from drilleval.answer import ComparisonPolicy, compute_char_diff, create_evaluator, get_retry_hint
from drilleval.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drilleval",
        description="Check Arabic drill answers, show character diffs and retry hints.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override DRILLEVAL_LOG_LEVEL for this run (e.g. DEBUG).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare_parser = subparsers.add_parser(
        "compare", help="Compare an answer with the expected answer (exit status 1 if incorrect)."
    )
    compare_parser.add_argument("expected", help="The correct answer.")
    compare_parser.add_argument("actual", help="The learner's answer.")
    compare_parser.add_argument(
        "--strict",
        action="store_true",
        help="Require tashkeel to match exactly.",
    )

    diff_parser = subparsers.add_parser("diff", help="Show the character diff between two answers.")
    diff_parser.add_argument("expected", help="The correct answer.")
    diff_parser.add_argument("actual", help="The learner's answer.")

    hint_parser = subparsers.add_parser("hint", help="Show the retry hint for an attempt.")
    hint_parser.add_argument("answer", help="The correct answer.")
    hint_parser.add_argument(
        "--attempt",
        type=int,
        required=True,
        help="1-based attempt number.",
    )
    hint_parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Attempts allowed (default: DRILLEVAL_MAX_RETRY_ATTEMPTS).",
    )
    return parser


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _run_compare(args: argparse.Namespace) -> int:
    policy = ComparisonPolicy.STRICT if args.strict else ComparisonPolicy.LENIENT
    result = create_evaluator("text", args.expected, policy=policy).evaluate(args.actual)
    _emit(result.to_dict())
    return 0 if result.correct else 1


def _run_diff(args: argparse.Namespace) -> int:
    diff = compute_char_diff(args.expected, args.actual)
    _emit(
        {
            "distance": diff.distance,
            "similarity": diff.similarity,
            "entries": [entry.model_dump(mode="json") for entry in diff.entries],
            "expected": [c.model_dump() for c in diff.expected_view],
            "actual": [c.model_dump() for c in diff.actual_view],
        }
    )
    return 0


def _run_hint(args: argparse.Namespace) -> int:
    state = get_retry_hint(args.answer, args.attempt, args.max_attempts)
    _emit(state.model_dump())
    return 0


_COMMANDS = {
    "compare": _run_compare,
    "diff": _run_diff,
    "hint": _run_hint,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    logger.debug("Running command", extra={"extra_data": {"command": args.command}})
    try:
        return _COMMANDS[args.command](args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
