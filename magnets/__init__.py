"""Backtracking solver for the Magnets logic puzzle.

This package exposes the public API surface via:

- ``magnets.core.models.PuzzleSpec``: the validated puzzle definition.
- ``magnets.engine.config.MagnetsConfig``: the search state explored by
  ``magnets.engine.backtracking.Backtracker``.
- ``magnets.engine.runner.MagnetsSolver``: engine selection and result checks.
- ``magnets.io.loader.load_puzzle``: puzzle file parsing.
"""

from .core.models import PuzzleSpec
from .engine.backtracking import Backtracker
from .engine.config import MagnetsConfig
from .engine.runner import MagnetsSolver, SolveResult, SolverConfig, solve
from .io.loader import load_puzzle, parse_puzzle

__all__ = [
    "Backtracker",
    "MagnetsConfig",
    "MagnetsSolver",
    "PuzzleSpec",
    "SolveResult",
    "SolverConfig",
    "load_puzzle",
    "parse_puzzle",
    "solve",
]

__version__ = "0.1.0"
