"""Puzzle file parsing.

A puzzle file is whitespace separated text::

    <rows> <cols>
    <positive row targets>
    <positive column targets>
    <negative row targets>
    <negative column targets>
    <rows lines of pair codes: L R T B, or . for an unpaired cell>

``-1`` marks an unconstrained target. Blank lines are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..core.exceptions import PuzzleLoadError
from ..core.models import PuzzleSpec
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def _ints(line: Sequence[str], count: int, label: str) -> List[int]:
    if len(line) < count:
        raise PuzzleLoadError(f"{label}: expected {count} values, found {len(line)}")
    try:
        return [int(field) for field in line[:count]]
    except ValueError as exc:
        raise PuzzleLoadError(f"{label}: {exc}") from exc


def parse_puzzle(text: str) -> PuzzleSpec:
    """Parse puzzle text into a validated :class:`PuzzleSpec`."""

    lines = [line.split() for line in text.splitlines() if line.strip()]
    if not lines:
        raise PuzzleLoadError("Puzzle text is empty")
    rows, cols = _ints(lines[0], 2, "dimensions")
    if rows <= 0 or cols <= 0:
        raise PuzzleLoadError(f"dimensions must be positive, got {rows}x{cols}")
    if len(lines) < 5 + rows:
        raise PuzzleLoadError(f"Expected {5 + rows} non-empty lines, found {len(lines)}")

    pos_row = _ints(lines[1], rows, "positive row targets")
    pos_col = _ints(lines[2], cols, "positive column targets")
    neg_row = _ints(lines[3], rows, "negative row targets")
    neg_col = _ints(lines[4], cols, "negative column targets")

    pairs: List[List[str]] = []
    for r, fields in enumerate(lines[5:5 + rows]):
        if len(fields) < cols:
            raise PuzzleLoadError(f"pair row {r}: expected {cols} codes, found {len(fields)}")
        pairs.append([field[0].upper() for field in fields[:cols]])

    return PuzzleSpec(
        rows=rows,
        cols=cols,
        pairs=pairs,
        pos_row=pos_row,
        neg_row=neg_row,
        pos_col=pos_col,
        neg_col=neg_col,
    )


def load_puzzle(path: Path | str) -> PuzzleSpec:
    """Read and parse a puzzle file."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PuzzleLoadError(f"Cannot read puzzle file {path}: {exc}") from exc
    spec = parse_puzzle(text)
    LOGGER.info("Loaded %s (%dx%d)", path, spec.rows, spec.cols)
    return spec
