"""Deterministic rule validation for finished magnets boards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..core.constants import ORTHOGONAL_STEPS, UNCONSTRAINED, Polarity
from ..core.exceptions import ValidationError
from ..core.models import Board, PuzzleSpec
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)


class BoardValidator:
    """Checks a complete board against every puzzle rule at once.

    The backtracker only ever checks the newest cell; this validator is the
    independent whole-board check used on results and in tests.
    """

    def validate(self, spec: PuzzleSpec, board: Board) -> ValidationResult:
        try:
            self._check_shape(spec, board)
            self._check_assigned(spec, board)
            self._check_pairs(spec, board)
            self._check_adjacency(spec, board)
            self._check_counts(spec, board)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True)

    def _check_shape(self, spec: PuzzleSpec, board: Board) -> None:
        if len(board) != spec.rows or any(len(row) != spec.cols for row in board):
            raise ValidationError(f"Board shape does not match {spec.rows}x{spec.cols}")

    def _check_assigned(self, spec: PuzzleSpec, board: Board) -> None:
        for r in range(spec.rows):
            for c in range(spec.cols):
                if board[r][c] == Polarity.EMPTY:
                    raise ValidationError(f"Unassigned cell at ({r},{c})")

    def _check_pairs(self, spec: PuzzleSpec, board: Board) -> None:
        for r in range(spec.rows):
            for c in range(spec.cols):
                partner = spec.partner(r, c)
                if partner is None:
                    continue
                value = Polarity(board[r][c])
                other = Polarity(board[partner[0]][partner[1]])
                if other is not value.opposite():
                    raise ValidationError(
                        f"Magnet ({r},{c})-{partner} holds {value.value}{other.value}"
                    )

    def _check_adjacency(self, spec: PuzzleSpec, board: Board) -> None:
        for r in range(spec.rows):
            for c in range(spec.cols):
                value = board[r][c]
                if value not in (Polarity.POS, Polarity.NEG):
                    continue
                for dr, dc in ORTHOGONAL_STEPS:
                    nr, nc = r + dr, c + dc
                    if spec.contains(nr, nc) and board[nr][nc] == value:
                        raise ValidationError(
                            f"Equal poles {Polarity(value).value} at ({r},{c}) and ({nr},{nc})"
                        )

    def _check_counts(self, spec: PuzzleSpec, board: Board) -> None:
        for r in range(spec.rows):
            self._check_line(f"row {r}", list(board[r]), spec.pos_row[r], spec.neg_row[r])
        for c in range(spec.cols):
            column = [board[r][c] for r in range(spec.rows)]
            self._check_line(f"column {c}", column, spec.pos_col[c], spec.neg_col[c])

    @staticmethod
    def _check_line(label: str, line: List[Polarity], pos_target: int, neg_target: int) -> None:
        for symbol, target in ((Polarity.POS, pos_target), (Polarity.NEG, neg_target)):
            if target == UNCONSTRAINED:
                continue
            found = line.count(symbol)
            if found != target:
                raise ValidationError(
                    f"{label} has {found} '{symbol.value}' cells, expected {target}"
                )
