"""Magnets search state: a partially filled board plus a row-major cursor.

Cells are filled strictly in row-major order, so when the cell under the
cursor is checked the only assigned orthogonal neighbours are the cell above
and the cell to the left. ``is_valid`` relies on that: it inspects the new
cell against those two neighbours and, when the cursor closes a row or a
column, checks that line's counts. Any change to the fill order has to
revisit these checks.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..core.constants import CANDIDATE_ORDER, UNCONSTRAINED, PairRole, Polarity
from ..core.models import Board, PuzzleSpec
from ..utils.pretty import format_board


class MagnetsConfig:
    """Immutable magnets configuration.

    Children share unchanged rows with their parent; rows are tuples, so no
    configuration can observe another's assignment.
    """

    __slots__ = ("spec", "board", "cursor_row", "cursor_col")

    def __init__(
        self,
        spec: PuzzleSpec,
        board: Optional[Board] = None,
        cursor_row: int = 0,
        cursor_col: int = -1,
    ) -> None:
        self.spec = spec
        self.board: Board = board if board is not None else spec.empty_board()
        self.cursor_row = cursor_row
        self.cursor_col = cursor_col

    @classmethod
    def initial(cls, spec: PuzzleSpec) -> "MagnetsConfig":
        return cls(spec)

    @classmethod
    def from_board(cls, spec: PuzzleSpec, board: Board) -> "MagnetsConfig":
        """Wrap a fully assigned board as a goal configuration."""
        return cls(spec, tuple(tuple(Polarity(v) for v in row) for row in board), spec.rows - 1, spec.cols - 1)

    # ------------------------------------------------------------------
    # Search protocol
    # ------------------------------------------------------------------
    @property
    def cursor(self) -> int:
        """Linear index of the last assigned cell, -1 before the first."""
        return self.cursor_row * self.spec.cols + self.cursor_col

    def _next_position(self) -> Tuple[int, int]:
        row, col = self.cursor_row, self.cursor_col + 1
        if col == self.spec.cols:
            return row + 1, 0
        return row, col

    def _with_value(self, row: int, col: int, value: Polarity) -> "MagnetsConfig":
        changed = self.board[row][:col] + (value,) + self.board[row][col + 1:]
        board = self.board[:row] + (changed,) + self.board[row + 1:]
        return MagnetsConfig(self.spec, board, row, col)

    def successors(self) -> List["MagnetsConfig"]:
        if self.is_goal():
            return []
        row, col = self._next_position()
        return [self._with_value(row, col, value) for value in CANDIDATE_ORDER]

    def is_valid(self) -> bool:
        if self.cursor_col < 0:
            return True
        row, col = self.cursor_row, self.cursor_col
        value = self.board[row][col]
        above = self.board[row - 1][col] if row > 0 else None
        left = self.board[row][col - 1] if col > 0 else None

        role = self.spec.pairs[row][col]
        if role is PairRole.RIGHT and left is not value.opposite():
            return False
        if role is PairRole.BOTTOM and above is not value.opposite():
            return False

        if value in (Polarity.POS, Polarity.NEG) and value in (above, left):
            return False

        if col == self.spec.cols - 1:
            line = self.board[row]
            if not _counts_match(line, self.spec.pos_row[row], self.spec.neg_row[row]):
                return False

        if row == self.spec.rows - 1:
            line = tuple(self.board[r][col] for r in range(self.spec.rows))
            if not _counts_match(line, self.spec.pos_col[col], self.spec.neg_col[col]):
                return False
        return True

    def is_goal(self) -> bool:
        return self.cursor_row == self.spec.rows - 1 and self.cursor_col == self.spec.cols - 1

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.spec.rows

    @property
    def cols(self) -> int:
        return self.spec.cols

    def pos_row_count(self, row: int) -> int:
        return self.spec.pos_row[row]

    def neg_row_count(self, row: int) -> int:
        return self.spec.neg_row[row]

    def pos_col_count(self, col: int) -> int:
        return self.spec.pos_col[col]

    def neg_col_count(self, col: int) -> int:
        return self.spec.neg_col[col]

    def pair(self, row: int, col: int) -> PairRole:
        return self.spec.pairs[row][col]

    def value(self, row: int, col: int) -> Polarity:
        return self.board[row][col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MagnetsConfig):
            return NotImplemented
        return (
            self.spec == other.spec
            and self.board == other.board
            and self.cursor == other.cursor
        )

    def __hash__(self) -> int:
        return hash((self.spec, self.board, self.cursor))

    def __repr__(self) -> str:
        return f"MagnetsConfig(cursor=({self.cursor_row},{self.cursor_col}), rows={self.rows}, cols={self.cols})"

    def __str__(self) -> str:
        return format_board(self)


def _counts_match(line: Tuple[Polarity, ...], pos_target: int, neg_target: int) -> bool:
    if pos_target != UNCONSTRAINED and line.count(Polarity.POS) != pos_target:
        return False
    if neg_target != UNCONSTRAINED and line.count(Polarity.NEG) != neg_target:
        return False
    return True
