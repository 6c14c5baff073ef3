"""CLI entrypoint for the magnets puzzle solver."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from magnets.core.exceptions import MagnetsError, PuzzleLoadError, PuzzleSpecError
from magnets.engine.config import MagnetsConfig
from magnets.engine.runner import ENGINES, MagnetsSolver, SolverConfig
from magnets.io.loader import load_puzzle
from magnets.utils.logger import configure_logging
from magnets.utils.pretty import board_rows, format_pairs, pretty_print_board


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve a Magnets puzzle")
    parser.add_argument("puzzle", type=Path, help="Path to the puzzle file")
    parser.add_argument(
        "--engine",
        type=str,
        choices=ENGINES,
        default="backtrack",
        help="Search engine (default: backtrack)",
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        default=None,
        help="Abandon the backtracking search after this many configurations",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every configuration the backtracker visits (implies DEBUG logging)",
    )
    parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Skip the whole-board check of the solution",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="CP-SAT time limit in seconds",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.debug else args.log_level)
    if args.max_nodes is not None and args.max_nodes <= 0:
        parser.error("--max-nodes must be positive")
    if args.timeout <= 0:
        parser.error("--timeout must be positive")

    print(f"File: {args.puzzle}")
    try:
        spec = load_puzzle(args.puzzle)
    except (PuzzleLoadError, PuzzleSpecError) as exc:
        print(f"Invalid puzzle: {exc}", file=sys.stderr)
        return 2

    print(f"Rows: {spec.rows}, Columns: {spec.cols}")
    print("Pairs:")
    print(format_pairs(spec))
    pretty_print_board(MagnetsConfig.initial(spec), label="Initial config:")
    print()

    config = SolverConfig(
        engine=args.engine,
        max_nodes=args.max_nodes,
        debug=args.debug,
        verify=not args.no_verify,
        cpsat_timeout=args.timeout,
    )
    try:
        result = MagnetsSolver(config).solve(spec)
    except MagnetsError as exc:
        print(f"Search failed: {exc}", file=sys.stderr)
        return 1

    print(f"Elapsed time: {result.elapsed:.3f} seconds.")
    if result.solution is None:
        print("No solution!")
    else:
        pretty_print_board(result.solution, label="Solution:")

    if args.output:
        payload: Dict[str, Any] = {
            "puzzle": str(args.puzzle),
            "engine": result.engine,
            "solved": result.solved,
            "board": board_rows(result.solution) if result.solution is not None else None,
            "stats": result.stats,
            "elapsed": result.elapsed,
        }
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return 0 if result.solved else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
