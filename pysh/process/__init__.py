"""
PySH Process Module

Command resolution and execution:
- Builtin / external / unknown dispatch
- External process spawning with concurrent output capture
"""

from .executor import (
    Executor,
    CommandKind,
    ResolvedCommand,
    StreamReader,
    run_process,
)

__all__ = [
    'Executor',
    'CommandKind',
    'ResolvedCommand',
    'StreamReader',
    'run_process',
]
