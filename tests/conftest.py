"""Shared fixtures for the timethis test suite.

``FakeLauncher`` replays scripted runs against a ``FakeClock`` so timing
logic can be tested without spawning processes or sleeping.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from timethis.exceptions import SpawnError
from timethis.process import ProcessHandle, ProcessLauncher

NS_PER_MS = 1_000_000


class FakeClock:
    """Monotonic nanosecond clock that only moves when told to."""

    def __init__(self, start_ns: int = 5_000 * NS_PER_MS) -> None:
        self.now = start_ns

    def __call__(self) -> int:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += int(ms * NS_PER_MS)


class FakeLauncher(ProcessLauncher):
    """
    Launcher whose runs take scripted amounts of time.

    Each entry of ``durations_ms`` is the run time of one start() call;
    None means the run never finishes on its own.
    """

    def __init__(
        self,
        clock: FakeClock,
        durations_ms: Sequence[float | None] = (),
        missing: bool = False,
    ) -> None:
        self.clock = clock
        self.durations_ms = list(durations_ms)
        self.missing = missing
        self.started: list[list[str]] = []
        self.terminated: list[int] = []
        self.wait_calls: list[str] = []

    def start(self, executable, arguments):
        if self.missing:
            raise SpawnError(executable, "executable not found")
        command = [executable, *arguments]
        self.started.append(command)
        return ProcessHandle(pid=len(self.started), command=command)

    def _duration(self, handle: ProcessHandle) -> float | None:
        if handle.pid - 1 < len(self.durations_ms):
            return self.durations_ms[handle.pid - 1]
        return 0

    def wait(self, handle):
        self.wait_calls.append("wait")
        duration = self._duration(handle)
        assert duration is not None, "unbounded wait on a run that never exits"
        self.clock.advance_ms(duration)

    def wait_for(self, handle, timeout):
        self.wait_calls.append("wait_for")
        duration = self._duration(handle)
        if duration is None or duration > timeout * 1000:
            self.clock.advance_ms(timeout * 1000)
            return False
        self.clock.advance_ms(duration)
        return True

    def terminate(self, handle):
        self.terminated.append(handle.pid)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_launcher(clock):
    def _make(durations_ms=(), missing=False):
        return FakeLauncher(clock, durations_ms, missing=missing)

    return _make
