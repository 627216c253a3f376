"""
Console output for timing runs.

Formatting is kept separate from the run loop: the loop hands over
outcomes, this module turns them into lines. Single-run sessions use the
short ``Time <ms>ms`` form; multi-run sessions number each run and end
with an average.
"""

from rich.console import Console

from .runner import AggregateResult, Completed, RunOutcome


def format_average(average_ms: float) -> str:
    """
    Format an average duration without spurious decimals.

    Example:
        >>> format_average(200.0)
        '200'
        >>> format_average(233.33333)
        '233.333'
    """
    return f"{average_ms:.3f}".rstrip("0").rstrip(".")


class RunFormatter:
    """Static formatting methods for run output lines."""

    @staticmethod
    def format_run(outcome: RunOutcome, multi_run: bool) -> str:
        if isinstance(outcome, Completed):
            if multi_run:
                return f"Run #{outcome.sample_index} took {outcome.duration_ms}ms"
            return f"Time {outcome.duration_ms}ms"

        if multi_run:
            return f"Run #{outcome.sample_index} timeout!"
        return "Timeout!"

    @staticmethod
    def format_summary(result: AggregateResult) -> str:
        average = result.average_ms
        if average is None:
            return f"Total ({result.included_runs} runs) no runs to average"
        return f"Total ({result.included_runs} runs) {format_average(average)}ms"


class ConsoleReporter:
    """Prints run events to the console as plain lines."""

    def __init__(self, multi_run: bool = False, console: Console | None = None) -> None:
        self.multi_run = multi_run
        self.console = console or Console(highlight=False, soft_wrap=True)

    def report_message(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False)

    def report_run(self, outcome: RunOutcome) -> None:
        self.report_message(RunFormatter.format_run(outcome, self.multi_run))

    def report_summary(self, result: AggregateResult) -> None:
        # Single runs already printed their only line
        if not self.multi_run:
            return
        self.report_message()
        self.report_message(RunFormatter.format_summary(result))

    def report_usage(self, usage: str) -> None:
        self.report_message(usage.rstrip("\n"))

    def report_error(self, message: str, usage: str) -> None:
        self.report_message(message)
        self.report_usage(usage)
