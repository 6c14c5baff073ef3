"""Data models for magnets puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from .constants import UNCONSTRAINED, PairRole, Polarity
from .exceptions import PuzzleSpecError

Board = Tuple[Tuple[Polarity, ...], ...]


def _as_roles(grid: Iterable[Iterable[Union[str, PairRole]]]) -> Tuple[Tuple[PairRole, ...], ...]:
    rows = []
    for r, row in enumerate(grid):
        roles = []
        for c, code in enumerate(row):
            try:
                roles.append(PairRole(code))
            except ValueError:
                raise PuzzleSpecError(f"Unknown pair code {code!r} at ({r},{c})") from None
        rows.append(tuple(roles))
    return tuple(rows)


def _as_targets(name: str, values: Iterable[int], expected: int) -> Tuple[int, ...]:
    targets = tuple(values)
    if len(targets) != expected:
        raise PuzzleSpecError(f"{name} has {len(targets)} entries, expected {expected}")
    for index, value in enumerate(targets):
        if isinstance(value, bool) or not isinstance(value, int):
            raise PuzzleSpecError(f"{name}[{index}] is {value!r}; targets must be integers")
        if value < 0 and value != UNCONSTRAINED:
            raise PuzzleSpecError(f"{name}[{index}] is {value}; use {UNCONSTRAINED} or a count >= 0")
    return targets


@dataclass(frozen=True)
class PuzzleSpec:
    """Immutable puzzle definition shared by every configuration of a search.

    ``pairs`` holds the magnet layout, ``pos_row``/``neg_row`` the per-row
    targets and ``pos_col``/``neg_col`` the per-column targets. A target of
    :data:`UNCONSTRAINED` disables that count. Inputs may be lists of
    strings; they are normalised to tuples and validated on construction.
    """

    rows: int
    cols: int
    pairs: Tuple[Tuple[PairRole, ...], ...]
    pos_row: Tuple[int, ...]
    neg_row: Tuple[int, ...]
    pos_col: Tuple[int, ...]
    neg_col: Tuple[int, ...]

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise PuzzleSpecError(f"Grid must be at least 1x1, got {self.rows}x{self.cols}")
        pairs = _as_roles(self.pairs)
        if len(pairs) != self.rows:
            raise PuzzleSpecError(f"Pair grid has {len(pairs)} rows, expected {self.rows}")
        for r, row in enumerate(pairs):
            if len(row) != self.cols:
                raise PuzzleSpecError(f"Pair row {r} has {len(row)} cells, expected {self.cols}")
        # frozen dataclass: normalised fields are written through object.__setattr__
        object.__setattr__(self, "pairs", pairs)
        object.__setattr__(self, "pos_row", _as_targets("pos_row", self.pos_row, self.rows))
        object.__setattr__(self, "neg_row", _as_targets("neg_row", self.neg_row, self.rows))
        object.__setattr__(self, "pos_col", _as_targets("pos_col", self.pos_col, self.cols))
        object.__setattr__(self, "neg_col", _as_targets("neg_col", self.neg_col, self.cols))
        self._check_pairing()

    def _check_pairing(self) -> None:
        for r in range(self.rows):
            for c in range(self.cols):
                role = self.pairs[r][c]
                if role is PairRole.UNPAIRED:
                    continue
                partner = self.partner(r, c)
                expected = {
                    PairRole.LEFT: PairRole.RIGHT,
                    PairRole.RIGHT: PairRole.LEFT,
                    PairRole.TOP: PairRole.BOTTOM,
                    PairRole.BOTTOM: PairRole.TOP,
                }[role]
                if partner is None or self.pairs[partner[0]][partner[1]] is not expected:
                    raise PuzzleSpecError(
                        f"Cell ({r},{c}) is {role.value} but has no {expected.value} partner"
                    )

    # ------------------------------------------------------------------
    # Geometry helpers
    # ------------------------------------------------------------------
    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def pair(self, row: int, col: int) -> PairRole:
        return self.pairs[row][col]

    def partner(self, row: int, col: int) -> Optional[Tuple[int, int]]:
        """Coordinates of the other half of the magnet at ``(row, col)``."""
        role = self.pairs[row][col]
        offset = {
            PairRole.LEFT: (0, 1),
            PairRole.RIGHT: (0, -1),
            PairRole.TOP: (1, 0),
            PairRole.BOTTOM: (-1, 0),
        }.get(role)
        if offset is None:
            return None
        pr, pc = row + offset[0], col + offset[1]
        return (pr, pc) if self.contains(pr, pc) else None

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def position(self, index: int) -> Tuple[int, int]:
        return divmod(index, self.cols)

    def empty_board(self) -> Board:
        row = tuple(Polarity.EMPTY for _ in range(self.cols))
        return tuple(row for _ in range(self.rows))

    @classmethod
    def from_lines(
        cls,
        pairs: Sequence[str],
        pos_row: Sequence[int],
        neg_row: Sequence[int],
        pos_col: Sequence[int],
        neg_col: Sequence[int],
    ) -> "PuzzleSpec":
        """Build a spec from compact pair rows such as ``["LR", "TT", "BB"]``."""
        grid = [list(line.replace(" ", "")) for line in pairs]
        return cls(
            rows=len(grid),
            cols=len(grid[0]) if grid else 0,
            pairs=grid,
            pos_row=pos_row,
            neg_row=neg_row,
            pos_col=pos_col,
            neg_col=neg_col,
        )
