"""
Timing runs and aggregating samples.

``TimedRunExecutor`` times a single run of the target program.
``SampleLoop`` drives it for every requested sample, applies the
drop-first policy and folds durations into an ``AggregateResult``.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .config import Parameters
from .process import LocalProcessLauncher, ProcessHandle, ProcessLauncher

logger = logging.getLogger(__name__)

NANOSECONDS_PER_MILLISECOND = 1_000_000


@dataclass(frozen=True)
class Completed:
    """A run that exited on its own."""

    sample_index: int
    duration_ms: int


@dataclass(frozen=True)
class TimedOut:
    """A run that exceeded the timeout and was killed."""

    sample_index: int


RunOutcome = Completed | TimedOut


class LoopState(Enum):
    RUNNING = "running"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class AggregateResult:
    """Running totals over the samples included in the average."""

    total_ms: int = 0
    included_runs: int = 0
    state: LoopState = LoopState.RUNNING
    durations_ms: list[int] = field(default_factory=list)

    @property
    def average_ms(self) -> float | None:
        """Mean duration of included runs, or None if there are none."""
        if self.included_runs == 0:
            return None
        return self.total_ms / self.included_runs

    @property
    def timed_out(self) -> bool:
        return self.state is LoopState.ABORTED

    def include(self, duration_ms: int) -> None:
        self.total_ms += duration_ms
        self.included_runs += 1


class RunReporter(Protocol):
    """Receives run events as they happen."""

    def report_run(self, outcome: RunOutcome) -> None: ...

    def report_summary(self, result: AggregateResult) -> None: ...


class TimedRunExecutor:
    """Runs the target program once and measures how long it took."""

    def __init__(
        self,
        launcher: ProcessLauncher | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        """
        Args:
            launcher: Process launcher (defaults to local processes)
            clock: Monotonic clock returning nanoseconds
        """
        self.launcher = launcher or LocalProcessLauncher()
        self.clock = clock

    def _wait(self, handle: ProcessHandle, timeout: float | None) -> bool:
        if timeout is None:
            self.launcher.wait(handle)
            return True
        return self.launcher.wait_for(handle, timeout)

    def run_once(self, params: Parameters, sample_index: int = 1) -> RunOutcome:
        """
        Time one run of ``params.command``.

        Raises:
            SpawnError: If the program cannot be started
        """
        start = self.clock()
        handle = self.launcher.start(params.executable, params.arguments)

        try:
            exited = self._wait(handle, params.timeout)
        except BaseException:
            # Interrupted mid-wait: the child must not outlive the run
            logger.debug("Wait for pid %d interrupted, terminating", handle.pid)
            self.launcher.terminate(handle)
            raise

        if not exited:
            self.launcher.terminate(handle)
            logger.debug("Run #%d exceeded %ss", sample_index, params.timeout)
            return TimedOut(sample_index=sample_index)

        elapsed_ns = self.clock() - start
        return Completed(
            sample_index=sample_index,
            duration_ms=max(0, elapsed_ns // NANOSECONDS_PER_MILLISECOND),
        )


class SampleLoop:
    """Collects samples sequentially and aggregates their durations."""

    def __init__(self, executor: TimedRunExecutor, reporter: RunReporter) -> None:
        self.executor = executor
        self.reporter = reporter

    def run(self, params: Parameters) -> AggregateResult:
        """
        Run every sample, stopping at the first timeout.

        The summary is only reported when all samples completed.

        Returns:
            AggregateResult in state DONE, or ABORTED after a timeout
        """
        result = AggregateResult()

        for index in range(params.sample_count):
            outcome = self.executor.run_once(params, sample_index=index + 1)
            self.reporter.report_run(outcome)

            if isinstance(outcome, TimedOut):
                result.state = LoopState.ABORTED
                logger.debug("Stopping after timeout in run #%d", outcome.sample_index)
                return result

            result.durations_ms.append(outcome.duration_ms)
            if params.skips_sample(index):
                logger.debug("Dropping run #%d from the average", outcome.sample_index)
                continue

            result.include(outcome.duration_ms)

        result.state = LoopState.DONE
        self.reporter.report_summary(result)
        return result
