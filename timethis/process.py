"""
Child process control for timing runs.

The timing logic only needs four operations: start a program with its
output discarded, wait for it, wait for it with a bound, and kill it.
``ProcessLauncher`` defines them; ``LocalProcessLauncher`` implements them
for local processes with psutil.
"""

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

import psutil

from .exceptions import SpawnError

logger = logging.getLogger(__name__)


@dataclass
class ProcessHandle:
    """A started child process."""

    pid: int
    command: list[str]
    process: psutil.Popen | None = None


class ProcessLauncher:
    """Base class for starting and controlling child processes."""

    def start(self, executable: str, arguments: Sequence[str]) -> ProcessHandle:
        """
        Launch ``executable`` with stdout and stderr discarded.

        Raises:
            SpawnError: If the executable cannot be found or launched
        """
        raise NotImplementedError("Subclasses must implement start()")

    def wait(self, handle: ProcessHandle) -> None:
        """Block until the process exits."""
        raise NotImplementedError("Subclasses must implement wait()")

    def wait_for(self, handle: ProcessHandle, timeout: float) -> bool:
        """
        Block for at most ``timeout`` seconds.

        Returns:
            True if the process exited, False if it is still running
            (the process is left running and unreaped).
        """
        raise NotImplementedError("Subclasses must implement wait_for()")

    def terminate(self, handle: ProcessHandle) -> None:
        """Forcibly kill the process; a process that already exited is not an error."""
        raise NotImplementedError("Subclasses must implement terminate()")


class LocalProcessLauncher(ProcessLauncher):
    """Runs programs as local child processes via ``psutil.Popen``."""

    def start(self, executable: str, arguments: Sequence[str]) -> ProcessHandle:
        command = [executable, *arguments]
        try:
            process = psutil.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError as e:
            raise SpawnError(executable, "executable not found") from e
        except PermissionError as e:
            raise SpawnError(executable, "permission denied") from e
        except OSError as e:
            raise SpawnError(executable, e.strerror or str(e)) from e

        logger.debug("Started pid %d: %s", process.pid, command)
        return ProcessHandle(pid=process.pid, command=command, process=process)

    def wait(self, handle: ProcessHandle) -> None:
        returncode = handle.process.wait()
        logger.debug("pid %d exited with %s", handle.pid, returncode)

    def wait_for(self, handle: ProcessHandle, timeout: float) -> bool:
        try:
            returncode = handle.process.wait(timeout=timeout)
        except psutil.TimeoutExpired:
            logger.debug("pid %d still running after %ss", handle.pid, timeout)
            return False

        logger.debug("pid %d exited with %s", handle.pid, returncode)
        return True

    def terminate(self, handle: ProcessHandle) -> None:
        try:
            handle.process.kill()
        except psutil.NoSuchProcess:
            logger.debug("pid %d exited before it could be killed", handle.pid)

        # Reap the child so no zombie outlives the run
        handle.process.wait()
        logger.debug("pid %d terminated", handle.pid)
