"""Solver orchestration: pick an engine, run it, check the result."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.exceptions import MagnetsError, ValidationError
from ..core.models import PuzzleSpec
from ..utils.logger import get_logger
from .backtracking import Backtracker
from .config import MagnetsConfig
from .solver import solve_magnets_cpsat
from .validator import BoardValidator

LOGGER = get_logger(__name__)

ENGINES = ("backtrack", "cpsat")


@dataclass
class SolverConfig:
    engine: str = "backtrack"
    max_nodes: Optional[int] = None
    debug: bool = False
    verify: bool = True
    cpsat_timeout: float = 30.0
    cpsat_workers: int = 4

    def __post_init__(self) -> None:
        if self.engine not in ENGINES:
            raise ValueError(f"Unknown engine {self.engine!r}; choose one of {ENGINES}")
        if self.max_nodes is not None and self.max_nodes <= 0:
            raise ValueError("max_nodes must be positive")
        if self.cpsat_timeout <= 0:
            raise ValueError("cpsat_timeout must be positive")
        if self.cpsat_workers <= 0:
            raise ValueError("cpsat_workers must be positive")

    def unused_options(self) -> List[str]:
        """Options that are set but have no effect on the chosen engine."""
        if self.engine == "cpsat":
            unused = []
            if self.max_nodes is not None:
                unused.append("max_nodes")
            if self.debug:
                unused.append("debug")
            return unused
        return []


@dataclass
class SolveResult:
    solution: Optional[MagnetsConfig]
    engine: str
    elapsed: float
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.solution is not None


class MagnetsSolver:
    """High-level entrypoint: backtracking search or CP-SAT, then checks."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()
        self.validator = BoardValidator()

    def solve(self, spec: PuzzleSpec) -> SolveResult:
        LOGGER.info(
            "Solving %dx%d puzzle with the %s engine", spec.rows, spec.cols, self.config.engine
        )
        for option in self.config.unused_options():
            LOGGER.warning("Option %s has no effect on the %s engine", option, self.config.engine)
        start = time.perf_counter()
        if self.config.engine == "cpsat":
            board = solve_magnets_cpsat(
                spec, timeout=self.config.cpsat_timeout, workers=self.config.cpsat_workers
            )
            solution = MagnetsConfig.from_board(spec, board) if board is not None else None
            stats: Dict[str, Any] = {}
        else:
            backtracker = Backtracker(debug=self.config.debug, max_nodes=self.config.max_nodes)
            solution = backtracker.solve(MagnetsConfig.initial(spec))
            stats = backtracker.stats.as_dict()
        elapsed = time.perf_counter() - start

        if solution is None:
            LOGGER.info("No solution after %.3fs", elapsed)
        else:
            LOGGER.info("Solution found after %.3fs", elapsed)
            if self.config.verify:
                self._verify(spec, solution)
        return SolveResult(solution=solution, engine=self.config.engine, elapsed=elapsed, stats=stats)

    def _verify(self, spec: PuzzleSpec, solution: MagnetsConfig) -> None:
        result = self.validator.validate(spec, solution.board)
        if not result.ok:
            raise ValidationError(f"Solver produced an invalid board: {result.messages}")


def solve(spec: PuzzleSpec, **overrides: Any) -> SolveResult:
    """Convenience wrapper: ``solve(spec, engine="cpsat")``."""
    try:
        config = SolverConfig(**overrides)
    except TypeError as exc:
        raise MagnetsError(f"Invalid solver option: {exc}") from exc
    return MagnetsSolver(config).solve(spec)
