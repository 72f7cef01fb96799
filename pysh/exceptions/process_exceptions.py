"""
Process Exceptions

Exceptions related to spawning external programs. A program that runs
and exits non-zero is not an error; these cover the cases where no
result could be captured at all.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any

from .shell_exceptions import ShellException


class ProcessException(ShellException):
    """
    Base exception for all process-related errors.

    Attributes:
        message: Human-readable error description
        command: Command name as typed by the user
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if command is not None:
            ctx["command"] = command
        super().__init__(
            message=message,
            error_code=error_code or 2000,
            context=ctx
        )
        self.command = command


class SpawnError(ProcessException):
    """
    The executable could not be started.

    Common causes:
    - Permission denied
    - File removed after resolution
    - Bad interpreter line

    Example:
        >>> raise SpawnError("ls", "/bin/ls", "Permission denied")
    """

    def __init__(
        self,
        command: str,
        path: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["path"] = path
        super().__init__(
            message=f"{command}: cannot execute: {reason}",
            command=command,
            error_code=2001,
            context=ctx
        )
        self.path = path
        self.reason = reason


class StreamUnavailableError(ProcessException):
    """The child's stdout or stderr pipe could not be opened."""

    def __init__(self, command: str, stream: str) -> None:
        super().__init__(
            message=f"{command}: {stream} pipe unavailable",
            command=command,
            error_code=2002,
            context={"stream": stream}
        )
        self.stream = stream
