"""timethis CLI - Main entry point.

Parses the command line, runs the sample loop and maps failures to exit
codes: 0 on success (a timeout included), 1 on configuration or spawn
errors, 130 when interrupted.
"""

import logging
import sys

from timethis import __version__
from timethis.config import ArgumentParser
from timethis.exceptions import TimeThisError
from timethis.process import LocalProcessLauncher, ProcessLauncher
from timethis.report import ConsoleReporter
from timethis.runner import SampleLoop, TimedRunExecutor

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr so stdout only carries timing lines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None, launcher: ProcessLauncher | None = None) -> int:
    """Main entry point for the timethis CLI."""
    parser = ArgumentParser(version=__version__)
    reporter = ConsoleReporter()
    verbose = False

    try:
        parsed = parser.parse(argv)
        verbose = parsed.verbose
        configure_logging(verbose)

        if parsed.help_requested:
            reporter.report_usage(parser.usage_text())
            return 0

        params = parsed.parameters
        logger.debug(
            "Timing %s: %d sample(s), timeout=%s, drop_first=%s",
            params.command,
            params.sample_count,
            params.timeout,
            params.drop_first_sample,
        )

        reporter.multi_run = params.multi_run
        executor = TimedRunExecutor(launcher or LocalProcessLauncher())
        SampleLoop(executor, reporter).run(params)
        return 0
    except KeyboardInterrupt:
        reporter.report_message("\nInterrupted")
        return 130
    except TimeThisError as e:
        reporter.report_error(str(e), parser.usage_text())
        return 1
    except Exception as e:
        reporter.report_message(f"Error: {e}")
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
