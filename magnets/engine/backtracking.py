"""Generic depth-first backtracking over puzzle configurations.

The engine knows nothing about magnets. Anything implementing
:class:`Configuration` can be solved: the backtracker expands successors in
the order the configuration returns them, discards every successor whose
``is_valid`` check fails (pruning its whole subtree) and stops at the first
valid configuration reporting ``is_goal``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

from ..core.exceptions import SearchLimitExceeded
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class Configuration(Protocol):
    """Capabilities the backtracker needs from a search state."""

    def successors(self) -> Sequence["Configuration"]:
        ...

    def is_valid(self) -> bool:
        ...

    def is_goal(self) -> bool:
        ...


C = TypeVar("C", bound=Configuration)


@dataclass
class SearchStats:
    visited: int = 0
    pruned: int = 0
    max_depth: int = 0

    def as_dict(self) -> dict:
        return {"visited": self.visited, "pruned": self.pruned, "max_depth": self.max_depth}


class Backtracker:
    """Iterative depth-first search with an explicit stack.

    ``max_nodes`` bounds the number of configurations popped from the stack;
    exceeding it raises :class:`SearchLimitExceeded`. With ``debug`` set every
    visited, valid and pruned configuration is logged at DEBUG level.
    """

    def __init__(self, debug: bool = False, max_nodes: Optional[int] = None) -> None:
        self.debug = debug
        self.max_nodes = max_nodes
        self.stats = SearchStats()

    def solve(self, initial: C) -> Optional[C]:
        self.stats = SearchStats()
        if not initial.is_valid():
            return None
        stack: List[Tuple[C, int]] = [(initial, 0)]
        while stack:
            config, depth = stack.pop()
            self.stats.visited += 1
            self.stats.max_depth = max(self.stats.max_depth, depth)
            if self.max_nodes is not None and self.stats.visited > self.max_nodes:
                LOGGER.warning("Search abandoned after %d configurations", self.max_nodes)
                raise SearchLimitExceeded(f"Node budget of {self.max_nodes} exhausted")
            if self.debug:
                LOGGER.debug("Current config (depth %d):\n%s", depth, config)
            if config.is_goal():
                return config

            valid: List[C] = []
            for child in config.successors():
                if child.is_valid():
                    if self.debug:
                        LOGGER.debug("\tValid successor:\n%s", child)
                    valid.append(child)
                else:
                    self.stats.pruned += 1
                    if self.debug:
                        LOGGER.debug("\tInvalid successor:\n%s", child)
            # pushed reversed so the first candidate is popped first
            for child in reversed(valid):
                stack.append((child, depth + 1))
        return None
