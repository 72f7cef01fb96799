"""
Command Results

What a command hands back to the REPL: either captured output to route,
or a request to end the session.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CommandResult:
    """
    Captured output of one command.

    Attributes:
        stdout: Standard output (empty string if none)
        stderr: Standard error (empty string if none)
        exit_code: 0 for success, non-zero for failure
    """
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @classmethod
    def success(cls, stdout: str) -> 'CommandResult':
        """Successful result with stdout only."""
        return cls(stdout=stdout)

    @classmethod
    def empty(cls) -> 'CommandResult':
        """Successful result with no output."""
        return cls()

    @classmethod
    def error(cls, stderr: str) -> 'CommandResult':
        """Failed result with stderr only and exit code 1."""
        return cls(stderr=stderr, exit_code=1)

    @property
    def is_success(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class Continue:
    """The command ran; route its result and read the next line."""
    result: CommandResult


@dataclass(frozen=True)
class Terminate:
    """The session is over; the shell exits with this code."""
    exit_code: int = 0


Outcome = Union[Continue, Terminate]
