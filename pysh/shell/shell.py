"""
PySH Shell Module

The interactive command-line shell.

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import Optional, TextIO

from .parser import CommandParser
from .builtins import BuiltinCommands
from pysh.core.config_loader import Config, get_config
from pysh.core.context import ExecutionContext
from pysh.core.result import Continue, Terminate, Outcome
from pysh.exceptions import ShellException
from pysh.filesystem.path_resolver import PathResolver
from pysh.filesystem.redirection import RedirectionRouter
from pysh.logger import get_logger
from pysh.process.executor import Executor


class Shell:
    """
    PySH Interactive Shell.

    Each line goes through the same pipeline:
    parse -> resolve -> execute -> route output.

    Example:
        >>> shell = create_shell()
        >>> shell.run()
    """

    def __init__(
        self,
        context: ExecutionContext,
        config: Optional[Config] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None
    ):
        self._config = config or get_config()
        self._context = context
        self._logger = get_logger('shell')
        self._parser = CommandParser()
        self._executor = Executor(context)
        self._stdout = stdout
        self._stderr = stderr
        self._router = RedirectionRouter(context, stdout=stdout, stderr=stderr)
        self._prompt = self._config.shell.prompt
        self._name = self._config.shell.name

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def executor(self) -> Executor:
        return self._executor

    @property
    def cwd(self) -> str:
        return self._context.cwd

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def run(self) -> int:
        """
        Run the interactive shell.

        This is the main REPL loop.

        Returns:
            Exit code for the shell process
        """
        while True:
            try:
                line = self._read_line()
            except EOFError:
                break
            except KeyboardInterrupt:
                self.stdout.write("\n")
                continue

            try:
                outcome = self.execute_line(line)
            except ShellException as e:
                self._report(e)
                continue
            except Exception as e:
                self._logger.exception("Unexpected shell error", exc=e)
                print(f"{self._name}: error: {e}", file=self.stderr, flush=True)
                continue

            if isinstance(outcome, Terminate):
                self._logger.debug("Exiting", context={'exit_code': outcome.exit_code})
                return outcome.exit_code

        return 0

    def _read_line(self) -> str:
        """Show the prompt and read one line."""
        self.stdout.write(self._prompt)
        self.stdout.flush()
        return input()

    def _report(self, error: ShellException) -> None:
        """Tell the user a line failed."""
        self._logger.warning(
            f"{type(error).__name__}: {error.message}",
            context={'error_code': error.error_code}
        )
        print(f"{self._name}: {error.message}", file=self.stderr, flush=True)

    def evaluate(self, line: str) -> Optional[Outcome]:
        """
        Parse and execute a line without routing its output.

        Returns:
            The outcome, or None for a blank line

        Raises:
            ShellException: Parsing or execution failed
        """
        cmd = self._parser.parse(line)
        if cmd is None:
            return None
        return self._executor.execute(cmd)

    def execute_line(self, line: str) -> Optional[Outcome]:
        """
        Execute a command line and route its output.

        Args:
            line: Command line string

        Returns:
            The outcome, or None for a blank line

        Raises:
            ShellException: The line failed before producing a result,
                or its output could not be redirected
        """
        cmd = self._parser.parse(line)
        if cmd is None:
            return None

        outcome = self._executor.execute(cmd)

        if isinstance(outcome, Continue):
            self._router.route(outcome.result, cmd.stdout_target, cmd.stderr_target)

        return outcome


def create_context(
    config: Optional[Config] = None,
    cwd: Optional[str] = None,
    home: Optional[str] = None,
    directories: Optional[list] = None
) -> ExecutionContext:
    """Build the session state from configuration."""
    config = config or get_config()
    resolver = PathResolver(
        directories,
        directory_cache_size=config.path.directory_cache_size,
        executable_cache_size=config.path.executable_cache_size,
    )
    return ExecutionContext(BuiltinCommands(), resolver, cwd=cwd, home=home)


def create_shell(config: Optional[Config] = None, **kwargs) -> Shell:
    """Factory function to create a shell."""
    config = config or get_config()
    context = create_context(config, **kwargs)
    return Shell(context, config=config)
