import unittest
from pathlib import Path
from unittest.mock import patch

from magnets import solve
from magnets.core.constants import UNCONSTRAINED, Polarity
from magnets.core.exceptions import MagnetsError, SearchLimitExceeded, ValidationError
from magnets.core.models import PuzzleSpec
from magnets.engine.backtracking import Backtracker
from magnets.engine.config import MagnetsConfig
from magnets.engine.runner import MagnetsSolver, SolverConfig
from magnets.engine.solver import solve_magnets_cpsat
from magnets.engine.validator import BoardValidator
from magnets.io.loader import load_puzzle
from magnets.utils.pretty import board_rows

U = UNCONSTRAINED
DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class CpSatSolverTests(unittest.TestCase):
    def test_forced_blank_magnet(self) -> None:
        spec = PuzzleSpec.from_lines(["T", "B"], [U, U], [U, U], [0], [0])
        board = solve_magnets_cpsat(spec, timeout=10.0, workers=1)
        self.assertEqual(board, ((Polarity.BLANK,), (Polarity.BLANK,)))

    def test_infeasible_puzzle(self) -> None:
        spec = PuzzleSpec.from_lines(["LR"], [2], [0], [U, U], [U, U])
        self.assertIsNone(solve_magnets_cpsat(spec, timeout=10.0, workers=1))

    def test_time_limit_is_not_reported_as_unsolvable(self) -> None:
        spec = PuzzleSpec.from_lines(["LR" * 7] * 14, [U] * 14, [U] * 14, [U] * 14, [U] * 14)
        self.assertIsNotNone(Backtracker().solve(MagnetsConfig.initial(spec)))
        with self.assertRaises(SearchLimitExceeded):
            solve_magnets_cpsat(spec, timeout=1e-9, workers=1)
        solver = MagnetsSolver(SolverConfig(engine="cpsat", cpsat_timeout=1e-9, cpsat_workers=1))
        with self.assertRaises(SearchLimitExceeded):
            solver.solve(spec)

    def test_agrees_with_rules(self) -> None:
        spec = load_puzzle(DATA_DIR / "magnets-2.txt")
        board = solve_magnets_cpsat(spec, timeout=10.0, workers=1)
        assert board is not None
        self.assertTrue(BoardValidator().validate(spec, board).ok)


class MagnetsSolverTests(unittest.TestCase):
    def test_backtrack_engine_reports_stats(self) -> None:
        spec = load_puzzle(DATA_DIR / "magnets-1.txt")
        result = MagnetsSolver().solve(spec)
        self.assertTrue(result.solved)
        self.assertEqual(result.engine, "backtrack")
        assert result.solution is not None
        self.assertEqual(board_rows(result.solution), ["+-", "-+"])
        self.assertGreater(result.stats["visited"], 0)

    def test_cpsat_engine_returns_goal_config(self) -> None:
        spec = load_puzzle(DATA_DIR / "magnets-1.txt")
        result = MagnetsSolver(SolverConfig(engine="cpsat", cpsat_workers=1)).solve(spec)
        assert result.solution is not None
        self.assertTrue(result.solution.is_goal())

    def test_no_solution_is_not_an_error(self) -> None:
        spec = load_puzzle(DATA_DIR / "magnets-nosol.txt")
        for engine in ("backtrack", "cpsat"):
            with self.subTest(engine=engine):
                result = solve(spec, engine=engine, cpsat_workers=1)
                self.assertFalse(result.solved)
                self.assertIsNone(result.solution)

    def test_node_budget_propagates(self) -> None:
        spec = load_puzzle(DATA_DIR / "magnets-nosol.txt")
        with self.assertRaises(SearchLimitExceeded):
            solve(spec, max_nodes=1)

    def test_verify_rejects_bad_engine_output(self) -> None:
        spec = PuzzleSpec.from_lines(["LR"], [U], [U], [U, U], [U, U])
        bad = MagnetsConfig.from_board(spec, (("+", "+"),))
        with patch("magnets.engine.runner.Backtracker.solve", return_value=bad):
            with self.assertRaises(ValidationError):
                MagnetsSolver().solve(spec)
            result = MagnetsSolver(SolverConfig(verify=False)).solve(spec)
        self.assertIs(result.solution, bad)

    def test_config_rejects_unknown_engine(self) -> None:
        with self.assertRaises(ValueError):
            SolverConfig(engine="annealing")

    def test_config_rejects_non_positive_cpsat_settings(self) -> None:
        with self.assertRaises(ValueError):
            SolverConfig(engine="cpsat", cpsat_timeout=0)
        with self.assertRaises(ValueError):
            SolverConfig(engine="cpsat", cpsat_workers=0)

    def test_backtrack_options_warn_under_cpsat(self) -> None:
        config = SolverConfig(engine="cpsat", max_nodes=10, debug=True, cpsat_workers=1)
        self.assertEqual(config.unused_options(), ["max_nodes", "debug"])
        self.assertEqual(SolverConfig(max_nodes=10, debug=True).unused_options(), [])
        spec = load_puzzle(DATA_DIR / "magnets-1.txt")
        with self.assertLogs("magnets.engine.runner", level="WARNING") as captured:
            result = MagnetsSolver(config).solve(spec)
        self.assertTrue(result.solved)
        self.assertTrue(any("max_nodes" in line for line in captured.output))
        self.assertTrue(any("debug" in line for line in captured.output))

    def test_solve_rejects_unknown_option(self) -> None:
        spec = PuzzleSpec.from_lines(["LR"], [U], [U], [U, U], [U, U])
        with self.assertRaises(MagnetsError):
            solve(spec, colour="red")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
