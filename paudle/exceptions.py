"""
Game Exceptions

Error types raised by the game services. Player mistakes are recoverable and
surface as notices; contract violations are assertions.
"""


class PaudleError(Exception):
    """Base class for recoverable game errors."""


class InvalidGuessError(PaudleError):
    """Raised when a submitted guess has the wrong length or is not a known word."""


class GameOverError(PaudleError):
    """Raised when an in-progress action is requested on a finished game."""


class GameInProgressError(PaudleError):
    """Raised when a new random game is requested before the current one ends."""


class StorageError(PaudleError):
    """Raised by a key-value store backend when a read or write fails."""


class EvaluationContractError(AssertionError):
    """Raised when the evaluator is handed inputs the caller should have rejected."""
