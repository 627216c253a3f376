"""
Run configuration for timethis.

Provides the validated run parameters and the command-line parser that
produces them.
"""

from .parameters import (
    DEFAULT_DROP_FIRST,
    DEFAULT_SAMPLE_COUNT,
    UNLIMITED_TIMEOUT,
    Parameters,
)
from .parser import ArgumentParser, ParsedArguments, parse_bool

__all__ = [
    "Parameters",
    "ArgumentParser",
    "ParsedArguments",
    "parse_bool",
    "DEFAULT_DROP_FIRST",
    "DEFAULT_SAMPLE_COUNT",
    "UNLIMITED_TIMEOUT",
]
