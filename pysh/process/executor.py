"""
Command Executor Module

Resolves a parsed command and runs it:
- Builtins run in-process against the execution context
- External programs are spawned with both output pipes drained
  concurrently
- Unknown names produce a "command not found" result

Author: YSNRFD
Version: 1.0.0
"""

import subprocess
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, List, IO, TYPE_CHECKING

from pysh.core.context import ExecutionContext
from pysh.core.result import CommandResult, Continue, Terminate, Outcome
from pysh.exceptions import SpawnError, StreamUnavailableError
from pysh.logger import get_logger

if TYPE_CHECKING:
    from pysh.shell.parser import ParsedCommand


READ_CHUNK_SIZE = 65536


class CommandKind(Enum):
    """How a command name resolved."""
    BUILTIN = auto()
    EXTERNAL = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class ResolvedCommand:
    """A command name together with what it resolved to."""
    name: str
    kind: CommandKind
    path: Optional[str] = None


class StreamReader(threading.Thread):
    """
    Drains one child pipe into its own buffer.

    One reader per stream keeps a chatty stderr from filling its pipe
    and blocking the child while stdout is still being read.
    """

    def __init__(self, stream: IO[bytes], label: str):
        super().__init__(name=f"pysh-{label}-reader", daemon=True)
        self._stream = stream
        self._chunks: List[bytes] = []
        self.label = label
        self.error: Optional[OSError] = None

    def run(self) -> None:
        try:
            with self._stream:
                for chunk in iter(lambda: self._stream.read(READ_CHUNK_SIZE), b''):
                    self._chunks.append(chunk)
        except OSError as e:
            self.error = e

    def text(self) -> str:
        """Everything read so far, decoded as UTF-8."""
        return b''.join(self._chunks).decode('utf-8', errors='replace')


def run_process(
    argv: List[str],
    executable: str,
    cwd: Optional[str] = None
) -> CommandResult:
    """
    Spawn a program and capture its output.

    Args:
        argv: Arguments, with argv[0] as the name the user typed
        executable: Resolved path of the program
        cwd: Working directory for the child

    Returns:
        CommandResult with trailing whitespace trimmed from both streams
        and the child's exit code (128 + N when killed by signal N)

    Raises:
        SpawnError: The program could not be started
        StreamUnavailableError: A pipe could not be opened or read
    """
    logger = get_logger('executor')
    name = argv[0]

    try:
        process = subprocess.Popen(
            argv,
            executable=executable,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        logger.error("Spawn failed", context={'name': name, 'path': executable, 'error': e})
        raise SpawnError(name, executable, e.strerror or str(e))

    if process.stdout is None or process.stderr is None:
        process.kill()
        process.wait()
        raise StreamUnavailableError(name, 'stdout' if process.stdout is None else 'stderr')

    logger.debug("Spawned process", context={'name': name, 'pid': process.pid})

    readers = [
        StreamReader(process.stdout, 'stdout'),
        StreamReader(process.stderr, 'stderr'),
    ]
    for reader in readers:
        reader.start()

    returncode = process.wait()

    for reader in readers:
        reader.join()

    for reader in readers:
        if reader.error is not None:
            raise StreamUnavailableError(name, reader.label)

    exit_code = 128 - returncode if returncode < 0 else returncode
    logger.debug("Process exited", context={'name': name, 'pid': process.pid, 'exit_code': exit_code})

    stdout_reader, stderr_reader = readers
    return CommandResult(
        stdout=stdout_reader.text().rstrip(),
        stderr=stderr_reader.text().rstrip(),
        exit_code=exit_code,
    )


class Executor:
    """
    Runs parsed commands against an execution context.

    Resolution order, first match wins:
    1. Builtin table
    2. Executable on the search path
    3. Unknown

    Example:
        >>> executor = Executor(context)
        >>> executor.execute(ParsedCommand(name='echo', args=['hi']))
        Continue(result=CommandResult(stdout='hi', stderr='', exit_code=0))
    """

    def __init__(self, context: ExecutionContext):
        self._context = context
        self._logger = get_logger('executor')

    @property
    def context(self) -> ExecutionContext:
        return self._context

    def resolve(self, name: str) -> ResolvedCommand:
        """Work out what a command name refers to."""
        if self._context.builtins.is_builtin(name):
            return ResolvedCommand(name, CommandKind.BUILTIN)

        path = self._context.path_resolver.resolve(name)
        if path is not None:
            return ResolvedCommand(name, CommandKind.EXTERNAL, path)

        return ResolvedCommand(name, CommandKind.UNKNOWN)

    def execute(self, command: 'ParsedCommand') -> Outcome:
        """
        Execute a parsed command.

        Returns:
            Continue with the command's result, or Terminate for ``exit``

        Raises:
            SpawnError: An external program could not be started
            StreamUnavailableError: Its output could not be captured
            PathResolutionError: The search path could not be read
            BuiltinError: A builtin failed unexpectedly
        """
        resolved = self.resolve(command.name)
        self._logger.debug(
            "Resolved command",
            context={'name': resolved.name, 'kind': resolved.kind.name, 'path': resolved.path}
        )

        if resolved.kind is CommandKind.BUILTIN:
            outcome = self._context.builtins.execute(command.name, self._context, command.args)
            if isinstance(outcome, Terminate):
                return outcome
            return Continue(outcome)

        if resolved.kind is CommandKind.EXTERNAL:
            return Continue(run_process(command.argv, resolved.path, cwd=self._context.cwd))

        return Continue(CommandResult.error(f"{command.name}: command not found"))
