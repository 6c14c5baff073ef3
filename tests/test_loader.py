import tempfile
import unittest
from pathlib import Path

from magnets.core.constants import UNCONSTRAINED, PairRole
from magnets.core.exceptions import PuzzleLoadError, PuzzleSpecError
from magnets.io.loader import load_puzzle, parse_puzzle

SAMPLE = """\
2 3
1 -1
1 0 -1
-1 1
0 -1 1

L R T
. . B
"""


class LoaderTests(unittest.TestCase):
    def test_parses_targets_and_pairs(self) -> None:
        spec = parse_puzzle(SAMPLE)
        self.assertEqual((spec.rows, spec.cols), (2, 3))
        self.assertEqual(spec.pos_row, (1, UNCONSTRAINED))
        self.assertEqual(spec.pos_col, (1, 0, UNCONSTRAINED))
        self.assertEqual(spec.neg_row, (UNCONSTRAINED, 1))
        self.assertEqual(spec.neg_col, (0, UNCONSTRAINED, 1))
        self.assertEqual(spec.pair(0, 2), PairRole.TOP)
        self.assertEqual(spec.pair(1, 0), PairRole.UNPAIRED)

    def test_load_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "puzzle.txt"
            path.write_text(SAMPLE, encoding="utf-8")
            spec = load_puzzle(path)
        self.assertEqual(spec.pair(1, 2), PairRole.BOTTOM)

    def test_missing_file(self) -> None:
        with self.assertRaises(PuzzleLoadError):
            load_puzzle("/nonexistent/magnets.txt")

    def test_empty_text(self) -> None:
        with self.assertRaises(PuzzleLoadError):
            parse_puzzle("\n\n")

    def test_truncated_pairs(self) -> None:
        with self.assertRaises(PuzzleLoadError):
            parse_puzzle("\n".join(SAMPLE.splitlines()[:-1]))

    def test_short_target_line(self) -> None:
        with self.assertRaises(PuzzleLoadError):
            parse_puzzle(SAMPLE.replace("1 0 -1", "1 0", 1))

    def test_non_integer_target(self) -> None:
        with self.assertRaises(PuzzleLoadError):
            parse_puzzle(SAMPLE.replace("1 -1", "one -1", 1))

    def test_structural_error_propagates(self) -> None:
        with self.assertRaises(PuzzleSpecError):
            parse_puzzle(SAMPLE.replace(". . B", ". . T"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
