"""CP-SAT magnets solver using OR-Tools.

Used as an alternative engine and as an independent cross-check of the
backtracker: the same rules expressed as a constraint model.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import ORTHOGONAL_STEPS, UNCONSTRAINED, Polarity
from ..core.exceptions import SearchLimitExceeded
from ..core.models import Board, PuzzleSpec
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

Cell = Tuple[int, int]


def solve_magnets_cpsat(
    spec: PuzzleSpec,
    timeout: float = 30.0,
    workers: int = 4,
) -> Optional[Board]:
    """Solve ``spec`` via CP-SAT.

    Args:
        spec: Validated puzzle definition.
        timeout: Solver time limit in seconds.
        workers: Number of CP-SAT search workers.

    Returns:
        The solved board, or None when the model is proven infeasible.

    Raises:
        SearchLimitExceeded: the time limit ran out before CP-SAT found a
            solution or proved there is none.
    """
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: one pos and one neg literal per cell, at most one true
    # ------------------------------------------------------------------
    pos: Dict[Cell, cp_model.IntVar] = {}
    neg: Dict[Cell, cp_model.IntVar] = {}
    for r in range(spec.rows):
        for c in range(spec.cols):
            pos[(r, c)] = model.new_bool_var(f"P_{r}_{c}")
            neg[(r, c)] = model.new_bool_var(f"N_{r}_{c}")
            model.add(pos[(r, c)] + neg[(r, c)] <= 1)

    # ------------------------------------------------------------------
    # Step 2: magnets are +/- or -/+ or both blank
    # ------------------------------------------------------------------
    for r in range(spec.rows):
        for c in range(spec.cols):
            partner = spec.partner(r, c)
            if partner is None or partner < (r, c):
                continue
            model.add(pos[(r, c)] == neg[partner])
            model.add(neg[(r, c)] == pos[partner])

    # ------------------------------------------------------------------
    # Step 3: equal poles never touch
    # ------------------------------------------------------------------
    for r in range(spec.rows):
        for c in range(spec.cols):
            for dr, dc in ORTHOGONAL_STEPS[:2]:
                nr, nc = r + dr, c + dc
                if not spec.contains(nr, nc):
                    continue
                model.add(pos[(r, c)] + pos[(nr, nc)] <= 1)
                model.add(neg[(r, c)] + neg[(nr, nc)] <= 1)

    # ------------------------------------------------------------------
    # Step 4: row and column counts
    # ------------------------------------------------------------------
    for r in range(spec.rows):
        cells = [(r, c) for c in range(spec.cols)]
        _add_count(model, pos, cells, spec.pos_row[r])
        _add_count(model, neg, cells, spec.neg_row[r])
    for c in range(spec.cols):
        cells = [(r, c) for r in range(spec.rows)]
        _add_count(model, pos, cells, spec.pos_col[c])
        _add_count(model, neg, cells, spec.neg_col[c])

    # ------------------------------------------------------------------
    # Step 5: solve and extract
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = workers

    LOGGER.info(
        "CP-SAT: %dx%d grid, %d literals, solving (timeout=%0.1fs)...",
        spec.rows, spec.cols, len(pos) + len(neg), timeout,
    )
    status = solver.solve(model)
    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: puzzle proven unsolvable")
        return None
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        # UNKNOWN: the time limit ran out before CP-SAT decided either way
        LOGGER.warning("CP-SAT: gave up (status=%s)", solver.status_name(status))
        raise SearchLimitExceeded(
            f"CP-SAT stopped with status {solver.status_name(status)} after {timeout}s"
        )
    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    board: List[Tuple[Polarity, ...]] = []
    for r in range(spec.rows):
        row = []
        for c in range(spec.cols):
            if solver.value(pos[(r, c)]):
                row.append(Polarity.POS)
            elif solver.value(neg[(r, c)]):
                row.append(Polarity.NEG)
            else:
                row.append(Polarity.BLANK)
        board.append(tuple(row))
    return tuple(board)


def _add_count(model: cp_model.CpModel, literals, cells: List[Cell], target: int) -> None:
    if target == UNCONSTRAINED:
        return
    model.add(sum(literals[cell] for cell in cells) == target)
