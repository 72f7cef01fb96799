"""
PySH Exception Hierarchy

All custom exceptions inherit from ShellException, with sub-categories
for the different subsystems.

Architecture:
    ShellException (Base)
    ├── ParseError
    │   ├── UnclosedQuoteError
    │   ├── RedirectionSyntaxError
    │   └── MissingCommandError
    ├── BuiltinError
    ├── ConfigError
    ├── ProcessException
    │   ├── SpawnError
    │   └── StreamUnavailableError
    └── FileSystemException
        ├── PathResolutionError
        └── RedirectionError
"""

from .shell_exceptions import (
    ShellException,
    ParseError,
    UnclosedQuoteError,
    RedirectionSyntaxError,
    MissingCommandError,
    BuiltinError,
    ConfigError,
)

from .process_exceptions import (
    ProcessException,
    SpawnError,
    StreamUnavailableError,
)

from .fs_exceptions import (
    FileSystemException,
    PathResolutionError,
    RedirectionError,
)

__all__ = [
    # Base
    'ShellException',
    # Parsing
    'ParseError',
    'UnclosedQuoteError',
    'RedirectionSyntaxError',
    'MissingCommandError',
    # Builtins / config
    'BuiltinError',
    'ConfigError',
    # Process
    'ProcessException',
    'SpawnError',
    'StreamUnavailableError',
    # Filesystem
    'FileSystemException',
    'PathResolutionError',
    'RedirectionError',
]
