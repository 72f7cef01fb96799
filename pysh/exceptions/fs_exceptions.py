"""
Filesystem Exceptions

Exceptions related to searching PATH directories and writing
redirection targets.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any

from .shell_exceptions import ShellException


class FileSystemException(ShellException):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=error_code or 4000,
            context=ctx
        )
        self.path = path


class PathResolutionError(FileSystemException):
    """
    A PATH directory exists but could not be listed.

    Missing directories are not an error; anything else aborts the
    lookup.

    Example:
        >>> raise PathResolutionError("/opt/bin", "Permission denied")
    """

    def __init__(
        self,
        directory: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"cannot search {directory}: {reason}",
            path=directory,
            error_code=4001,
            context=context
        )
        self.reason = reason


class RedirectionError(FileSystemException):
    """A redirection target could not be created or written."""

    def __init__(
        self,
        target: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{target}: {reason}",
            path=target,
            error_code=4002,
            context=context
        )
        self.reason = reason
