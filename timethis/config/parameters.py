"""
Validated parameters for a timing session.
"""

from dataclasses import dataclass, field

from ..exceptions import ConfigurationError

# Defaults shared by the parser and programmatic callers
DEFAULT_SAMPLE_COUNT = 1
DEFAULT_DROP_FIRST = True
UNLIMITED_TIMEOUT = -1


@dataclass(frozen=True)
class Parameters:
    """
    Immutable description of what to run and how often.

    Args:
        executable: Path or name of the program to run.
        arguments: Arguments passed verbatim to the program.
        timeout: Per-run bound in seconds (0 allowed), or None to wait indefinitely.
        sample_count: Number of times the program is run.
        drop_first_sample: Exclude the first run from the average when
                           more than one sample is collected.
    """

    executable: str
    arguments: tuple[str, ...] = field(default_factory=tuple)
    timeout: float | None = None
    sample_count: int = DEFAULT_SAMPLE_COUNT
    drop_first_sample: bool = DEFAULT_DROP_FIRST

    def __post_init__(self) -> None:
        if not self.executable:
            raise ConfigurationError("Path to executable is required.")

        if self.sample_count < 1:
            raise ConfigurationError(
                f"Sample count must be at least 1, got {self.sample_count}"
            )

        if self.timeout is not None and self.timeout < 0:
            raise ConfigurationError(f"Timeout must not be negative, got {self.timeout}")

        # Accept any sequence but store a tuple so the dataclass stays hashable
        object.__setattr__(self, "arguments", tuple(self.arguments))

    @classmethod
    def from_options(
        cls,
        executable: str | None,
        arguments: list[str] | None = None,
        timeout: int = UNLIMITED_TIMEOUT,
        count: int = DEFAULT_SAMPLE_COUNT,
        drop_first: bool = DEFAULT_DROP_FIRST,
    ) -> "Parameters":
        """
        Build parameters from raw command-line values.

        A negative timeout means "no limit".
        """
        return cls(
            executable=executable or "",
            arguments=tuple(arguments or ()),
            timeout=None if timeout < 0 else timeout,
            sample_count=count,
            drop_first_sample=drop_first,
        )

    @property
    def multi_run(self) -> bool:
        return self.sample_count > 1

    @property
    def command(self) -> list[str]:
        """Full command line, executable first."""
        return [self.executable, *self.arguments]

    def skips_sample(self, index: int) -> bool:
        """Whether the zero-based sample ``index`` is left out of the aggregate."""
        return self.multi_run and index == 0 and self.drop_first_sample
