"""
PySH Shell Module

Provides the interactive command-line shell:
- Command parsing
- Built-in commands
- I/O redirection
"""

from .parser import (
    CommandParser,
    ParsedCommand,
    ParserState,
    Token,
    TokenType,
    tokenize,
)
from .builtins import BuiltinCommands
from .shell import Shell, create_shell, create_context

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'ParserState',
    'Token',
    'TokenType',
    'tokenize',
    'BuiltinCommands',
    'Shell',
    'create_shell',
    'create_context',
]
