"""Logging helpers shared by the solver, loader and CLI."""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Map ``"debug"``/``"INFO"``/``10`` style values to a logging level."""

    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install a single stderr handler on the root logger.

    The CLI prints puzzles and solutions on stdout, so log records go to
    stderr and never mix with the rendered boards. ``--debug`` traces put a
    whole board in each record; records therefore carry only time, level and
    logger name as a prefix. Accepts a level number or a name such as
    ``"debug"``.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "magnets")
