"""Exceptions raised by the fuzz harness."""


class FuzzError(Exception):
    """Base exception for fuzz harness errors."""
    pass


class ConfigurationError(FuzzError):
    """Raised before a run starts when the ruleset or options cannot be used."""
    pass


class EmptyPoolError(FuzzError):
    """Raised when drawing from a pool whose universe is empty."""
    pass


class MatchFailure(FuzzError):
    """Raised by a match runner when a simulated battle fails."""

    def __init__(self, message: str, detail: str = ""):
        super().__init__(message)
        self.detail = detail
