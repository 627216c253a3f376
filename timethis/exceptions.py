"""
Custom exceptions for timethis.
"""


class TimeThisError(Exception):
    """Base exception for timethis errors."""
    pass


class ConfigurationError(TimeThisError):
    """Raised when command-line options or parameters are invalid."""
    pass


class SpawnError(TimeThisError):
    """Raised when the target executable cannot be launched."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Failed to start '{executable}': {reason}")
