"""
PySH - An interactive POSIX-style command shell

This package provides a small shell with POSIX quoting, builtins,
PATH lookup, external program execution and output redirection,
implemented entirely in Python 3.10+ using only the standard library.
"""

import logging

__version__ = "1.0.0"
__author__ = "YSNRFD"

# Silent until pysh.logger.Logger.initialize() installs real handlers
logging.getLogger('pysh').addHandler(logging.NullHandler())

# Import main components for convenience
from .core.context import ExecutionContext
from .core.result import CommandResult, Continue, Terminate
from .shell.shell import Shell, create_shell, create_context

__all__ = [
    'ExecutionContext',
    'CommandResult',
    'Continue',
    'Terminate',
    'Shell',
    'create_shell',
    'create_context',
]
