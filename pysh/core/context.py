"""
Execution Context

Per-session state shared by every command: the current working
directory, the builtin table and the executable lookup caches.

Author: YSNRFD
Version: 1.0.0
"""

import errno
import os
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from pysh.filesystem.path_resolver import PathResolver
    from pysh.shell.builtins import BuiltinCommands


HOME_TILDE = '~'


def get_home_directory() -> str:
    """Return $HOME, falling back to the platform's idea of the user home."""
    home = os.environ.get('HOME')
    if home:
        return home
    return str(Path.home())


class ExecutionContext:
    """
    State that outlives a single command.

    Only builtins change the working directory, through
    ``change_directory``. External programs get it as their cwd and
    redirection targets are resolved against it; the process-wide
    ``os.getcwd()`` is never touched.

    Example:
        >>> ctx = ExecutionContext(BuiltinCommands(), PathResolver(), cwd='/tmp')
        >>> ctx.change_directory('..')
        >>> ctx.cwd
        '/'
    """

    def __init__(
        self,
        builtins: 'BuiltinCommands',
        path_resolver: 'PathResolver',
        cwd: Optional[str] = None,
        home: Optional[str] = None
    ):
        self._builtins = builtins
        self._path_resolver = path_resolver
        self._cwd = str(Path(cwd or os.getcwd()).resolve())
        self._home = home

    @property
    def builtins(self) -> 'BuiltinCommands':
        return self._builtins

    @property
    def path_resolver(self) -> 'PathResolver':
        return self._path_resolver

    @property
    def cwd(self) -> str:
        return self._cwd

    @property
    def home(self) -> str:
        return self._home or get_home_directory()

    def expand_home(self, path: str) -> str:
        """Replace a leading ``~`` with the home directory."""
        if path.startswith(HOME_TILDE):
            return self.home + path[len(HOME_TILDE):]
        return path

    def resolve_path(self, path: str) -> str:
        """Resolve ``path`` against the working directory (absolute paths win)."""
        return os.path.join(self._cwd, path)

    def change_directory(self, path: str) -> str:
        """
        Change the working directory.

        The target is tilde-expanded, resolved against the current
        directory and canonicalized (symlinks resolved).

        Args:
            path: Absolute, relative or ``~`` path

        Returns:
            The new working directory

        Raises:
            FileNotFoundError: The target does not exist
            NotADirectoryError: The target is not a directory
            PermissionError: The target cannot be entered
            OSError: Any other failure while resolving the target
        """
        target = Path(self.resolve_path(self.expand_home(path))).resolve(strict=True)

        if not target.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)

        if not os.access(target, os.X_OK):
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), path)

        self._cwd = str(target)
        return self._cwd
