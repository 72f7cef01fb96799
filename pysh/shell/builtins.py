"""
Shell Built-in Commands

Implements the commands the shell runs in-process.

Author: YSNRFD
Version: 1.0.0
"""

from types import MappingProxyType
from typing import Callable, List, Mapping, Union, TYPE_CHECKING

from pysh.core.result import CommandResult, Terminate
from pysh.exceptions import BuiltinError
from pysh.logger import get_logger

if TYPE_CHECKING:
    from pysh.core.context import ExecutionContext


BuiltinOutcome = Union[CommandResult, Terminate]
BuiltinHandler = Callable[['ExecutionContext', List[str]], BuiltinOutcome]


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands are executed directly by the shell without
    creating a new process. The table is fixed when the instance is
    created; lookups are exact and case-sensitive.
    """

    def __init__(self):
        self._logger = get_logger('builtins')
        self._commands: Mapping[str, BuiltinHandler] = MappingProxyType({
            'exit': self.cmd_exit,
            'echo': self.cmd_echo,
            'type': self.cmd_type,
            'pwd': self.cmd_pwd,
            'cd': self.cmd_cd,
        })

    def get_commands(self) -> Mapping[str, BuiltinHandler]:
        """Get all built-in commands."""
        return self._commands

    @property
    def names(self) -> List[str]:
        return sorted(self._commands)

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(
        self,
        name: str,
        context: 'ExecutionContext',
        args: List[str]
    ) -> BuiltinOutcome:
        """
        Execute a built-in command.

        Args:
            name: Command name
            context: Session state the builtin may read or change
            args: Command arguments

        Returns:
            The command result, or Terminate for ``exit``

        Raises:
            KeyError: ``name`` is not a builtin
            BuiltinError: The builtin hit an unexpected I/O failure
        """
        handler = self._commands[name]
        self._logger.debug("Running builtin", context={'name': name, 'argc': len(args)})
        return handler(context, args)

    # Command implementations

    def cmd_exit(self, context: 'ExecutionContext', args: List[str]) -> Terminate:
        """Exit the shell."""
        return Terminate(exit_code=0)

    def cmd_echo(self, context: 'ExecutionContext', args: List[str]) -> CommandResult:
        """Print arguments separated by single spaces."""
        return CommandResult.success(' '.join(args))

    def cmd_pwd(self, context: 'ExecutionContext', args: List[str]) -> CommandResult:
        """Print working directory."""
        return CommandResult.success(context.cwd)

    def cmd_cd(self, context: 'ExecutionContext', args: List[str]) -> CommandResult:
        """Change directory; no operand means the home directory."""
        path = args[0] if args else '~'

        try:
            context.change_directory(path)
        except FileNotFoundError:
            return CommandResult.error(f"cd: {path}: No such file or directory")
        except NotADirectoryError:
            return CommandResult.error(f"cd: {path}: Not a directory")
        except OSError as e:
            raise BuiltinError('cd', f"{path}: {e.strerror or e}")

        return CommandResult.empty()

    def cmd_type(self, context: 'ExecutionContext', args: List[str]) -> CommandResult:
        """Tell whether a name is a builtin, an executable or unknown."""
        if not args:
            return CommandResult.error("type: missing operand")

        name = args[0]

        if self.is_builtin(name):
            return CommandResult.success(f"{name} is a shell builtin")

        path = context.path_resolver.resolve(name)
        if path is not None:
            return CommandResult.success(f"{name} is {path}")

        return CommandResult.success(f"{name}: not found")
