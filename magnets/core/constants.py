"""Shared constants and enumerations for the magnets solver."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Polarity(str, Enum):
    """Values a board cell can hold."""

    EMPTY = "."
    BLANK = "X"
    POS = "+"
    NEG = "-"

    def opposite(self) -> "Polarity":
        """Return the value the other half of a magnet must hold."""
        if self is Polarity.POS:
            return Polarity.NEG
        if self is Polarity.NEG:
            return Polarity.POS
        return self


class PairRole(str, Enum):
    """Which half of a magnet a cell is."""

    LEFT = "L"
    RIGHT = "R"
    TOP = "T"
    BOTTOM = "B"
    UNPAIRED = "."


# Row/column target meaning "no count constraint".
UNCONSTRAINED = -1

# Successor order; it decides which solution is found first.
CANDIDATE_ORDER: Tuple[Polarity, ...] = (Polarity.POS, Polarity.NEG, Polarity.BLANK)

ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
