"""
Shell Exceptions

Exceptions raised while turning an input line into a command:
parsing, builtin failures and configuration errors.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell errors.

    Every exception in this package derives from it, so the REPL can
    report any per-line failure with a single handler and carry on.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error

    Example:
        >>> raise ShellException("Something went wrong", error_code=1000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code})"
        )


class ParseError(ShellException):
    """
    The input line could not be tokenized.

    The whole line is rejected before any command runs.
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if line is not None:
            ctx["line"] = line
        super().__init__(
            message=message,
            error_code=error_code or 1100,
            context=ctx
        )
        self.line = line


class UnclosedQuoteError(ParseError):
    """
    Input ended inside a single- or double-quoted section.

    Example:
        >>> raise UnclosedQuoteError("'", line="echo 'abc")
    """

    def __init__(self, quote: str, line: Optional[str] = None) -> None:
        super().__init__(
            message=f"unexpected EOF while looking for matching `{quote}'",
            line=line,
            error_code=1101
        )
        self.quote = quote


class RedirectionSyntaxError(ParseError):
    """A redirection operator is not followed by a target filename."""

    def __init__(self, token: str, line: Optional[str] = None) -> None:
        super().__init__(
            message=f"syntax error near unexpected token `{token}'",
            line=line,
            error_code=1102
        )
        self.token = token


class MissingCommandError(ParseError):
    """A non-blank line produced no command name."""

    def __init__(self, line: Optional[str] = None) -> None:
        super().__init__(
            message="syntax error: missing command",
            line=line,
            error_code=1103
        )


class BuiltinError(ShellException):
    """
    A builtin hit an unexpected I/O failure.

    User mistakes (a missing directory for ``cd``) are reported through
    the command result instead; this is for everything else.
    """

    def __init__(
        self,
        builtin: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["builtin"] = builtin
        super().__init__(
            message=f"{builtin}: {reason}",
            error_code=1200,
            context=ctx
        )
        self.builtin = builtin
        self.reason = reason


class ConfigError(ShellException):
    """
    Configuration could not be loaded.

    Common causes:
    - Configuration file missing
    - Invalid JSON
    - File unreadable
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
            error_code=error_code or 1300,
            context=ctx
        )
        self.path = path
