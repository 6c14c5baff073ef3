"""Pretty-print helpers for magnets boards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import UNCONSTRAINED

if TYPE_CHECKING:
    from ..core.models import PuzzleSpec
    from ..engine.config import MagnetsConfig


def _target(value: int) -> str:
    return " " if value == UNCONSTRAINED else str(value)


def format_board(config: MagnetsConfig) -> str:
    """Render a configuration framed by its row and column targets.

    Positive targets run along the top and left edges, negative targets
    along the right and bottom edges. Unconstrained targets print as blanks::

        + 1
          ---
        1|+ -|1
          ---
            1  -
    """

    spec = config.spec
    rule = "-" * (2 * spec.cols - 1)
    lines: List[str] = []
    lines.append("+ " + " ".join(_target(v) for v in spec.pos_col))
    lines.append("  " + rule)
    for r in range(spec.rows):
        cells = " ".join(config.value(r, c).value for c in range(spec.cols))
        lines.append(f"{_target(spec.pos_row[r])}|{cells}|{_target(spec.neg_row[r])}")
    lines.append("  " + rule)
    lines.append("  " + "".join(_target(v) + " " for v in spec.neg_col) + " -")
    return "\n".join(lines)


def format_pairs(spec: PuzzleSpec) -> str:
    return "\n".join(" ".join(role.value for role in row) for row in spec.pairs)


def pretty_print_board(config: MagnetsConfig, *, label: str | None = None, stream=None) -> None:
    """Print a configuration in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_board(config), file=stream)


def board_rows(config: MagnetsConfig) -> List[str]:
    """Board as plain strings, one per row, e.g. ``["+-", "XX"]``."""
    return ["".join(cell.value for cell in row) for row in config.board]
