"""
Redirection Module

Sends a command's captured output to its redirection targets or to the
terminal.

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from pathlib import Path
from typing import Optional, TextIO, TYPE_CHECKING

from pysh.core.result import CommandResult
from pysh.exceptions import RedirectionError
from pysh.logger import get_logger

if TYPE_CHECKING:
    from pysh.core.context import ExecutionContext


class RedirectionRouter:
    """
    Disposes of a CommandResult's stdout and stderr.

    For each stream:
    - with a target, the content is written to that file (resolved
      against the working directory, parents created, existing file
      truncated), even when the command failed and even when empty
    - without a target, non-empty content is printed to the matching
      terminal stream followed by a newline

    Example:
        >>> router = RedirectionRouter(context)
        >>> router.route(CommandResult.success("hi"), stdout_target="out.txt")
    """

    def __init__(
        self,
        context: 'ExecutionContext',
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None
    ):
        self._context = context
        self._stdout = stdout
        self._stderr = stderr
        self._logger = get_logger('redirection')

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def route(
        self,
        result: CommandResult,
        stdout_target: Optional[str] = None,
        stderr_target: Optional[str] = None
    ) -> None:
        """
        Write or print both streams of a result.

        Stderr is still disposed of when the stdout target fails; the
        first failure is raised once both streams have been handled.

        Raises:
            RedirectionError: A target could not be created or written
        """
        stdout_path = self._context.resolve_path(stdout_target) if stdout_target else None
        stderr_path = self._context.resolve_path(stderr_target) if stderr_target else None

        if stdout_path and stderr_path and self._same_file(stdout_path, stderr_path):
            combined = "\n".join(s for s in (result.stdout, result.stderr) if s)
            self._write(stdout_target, stdout_path, combined)
            return

        failure: Optional[RedirectionError] = None

        if stdout_path:
            try:
                self._write(stdout_target, stdout_path, result.stdout)
            except RedirectionError as e:
                failure = e
        elif result.stdout:
            self._print(self.stdout, result.stdout)

        if stderr_path:
            try:
                self._write(stderr_target, stderr_path, result.stderr)
            except RedirectionError as e:
                failure = failure or e
        elif result.stderr:
            self._print(self.stderr, result.stderr)

        if failure is not None:
            raise failure

    @staticmethod
    def _same_file(first: str, second: str) -> bool:
        return os.path.realpath(first) == os.path.realpath(second)

    @staticmethod
    def _print(stream: TextIO, content: str) -> None:
        print(content, file=stream, flush=True)

    def _write(self, target: str, path: str, content: str) -> None:
        """Create parent directories and overwrite ``path`` with ``content``."""
        file_path = Path(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise RedirectionError(target, e.strerror or str(e))

        self._logger.debug(
            "Wrote redirection target",
            context={'path': path, 'bytes': len(content)}
        )
