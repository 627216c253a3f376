"""
Command-line parsing for timethis.

Turns ``argv`` into validated :class:`Parameters`. Parse failures raise
:class:`ConfigurationError` instead of exiting, so the caller decides how
errors and usage text are shown.
"""

import argparse
from dataclasses import dataclass

from ..exceptions import ConfigurationError
from .parameters import (
    DEFAULT_DROP_FIRST,
    DEFAULT_SAMPLE_COUNT,
    UNLIMITED_TIMEOUT,
    Parameters,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean option value such as ``true`` or ``0``."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


@dataclass
class ParsedArguments:
    """Result of parsing the command line."""

    help_requested: bool = False
    verbose: bool = False
    parameters: Parameters | None = None


class ArgumentParser(argparse.ArgumentParser):
    """Parser for ``timethis [options] executable param1 ... paramN``."""

    def __init__(self, prog: str = "timethis", version: str | None = None):
        super().__init__(
            prog=prog,
            usage="%(prog)s [options] executable param1 ... paramN",
            description="Measure the wall-clock time of a command.",
            add_help=False,
        )
        self.add_argument("--help", "-H", action="store_true", help="produce help message")
        self.add_argument(
            "--timeout",
            type=int,
            default=UNLIMITED_TIMEOUT,
            metavar="SECONDS",
            help="set process timeout (negative means unlimited)",
        )
        self.add_argument(
            "--count",
            "-C",
            type=int,
            default=DEFAULT_SAMPLE_COUNT,
            metavar="N",
            help="number of samples (process runs)",
        )
        self.add_argument(
            "--drop-first",
            type=parse_bool,
            default=DEFAULT_DROP_FIRST,
            metavar="BOOL",
            help="if multiple samples are collected, skip first run",
        )
        self.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
        if version:
            self.add_argument(
                "--version", "-V", action="version", version=f"%(prog)s {version}"
            )

        self.add_argument("executable", nargs="?", help="program to run")
        # Everything after the executable belongs to the child, option-like or not
        self.add_argument("parameters", nargs=argparse.REMAINDER, help="program arguments")

    def error(self, message: str):
        raise ConfigurationError(message)

    def usage_text(self) -> str:
        """Usage and option summary, as printed for --help and after errors."""
        return self.format_help()

    def parse(self, argv: list[str] | None = None) -> ParsedArguments:
        """
        Parse command-line arguments.

        Args:
            argv: Arguments without the program name (defaults to sys.argv[1:])

        Returns:
            ParsedArguments; ``parameters`` is None when help was requested

        Raises:
            ConfigurationError: If an option is malformed or the executable is missing
        """
        namespace = self.parse_args(argv)

        if namespace.help:
            return ParsedArguments(help_requested=True, verbose=namespace.verbose)

        parameters = Parameters.from_options(
            executable=namespace.executable,
            arguments=namespace.parameters,
            timeout=namespace.timeout,
            count=namespace.count,
            drop_first=namespace.drop_first,
        )
        return ParsedArguments(verbose=namespace.verbose, parameters=parameters)
