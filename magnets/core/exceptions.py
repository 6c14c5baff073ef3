"""Custom exception hierarchy for the magnets solver."""


class MagnetsError(Exception):
    """Base exception for solver failures."""


class PuzzleSpecError(MagnetsError, ValueError):
    """Raised when a puzzle definition is structurally inconsistent."""


class PuzzleLoadError(MagnetsError):
    """Raised when a puzzle file cannot be read or parsed."""


class SearchLimitExceeded(MagnetsError):
    """Raised when the backtracker runs out of its node budget."""


class ValidationError(MagnetsError):
    """Raised when a finished board breaks a puzzle rule."""
