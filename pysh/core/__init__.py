"""
PySH Core Module

Core components including:
- Configuration Loader
- Command results and control outcomes
- Execution Context
"""

from .config_loader import (
    ConfigLoader,
    ConfigValidationError,
    Config,
    ShellConfig,
    PathConfig,
    LoggingConfig,
    get_config,
)
from .result import CommandResult, Continue, Terminate, Outcome
from .context import ExecutionContext, get_home_directory

__all__ = [
    # Config
    'ConfigLoader',
    'ConfigValidationError',
    'Config',
    'ShellConfig',
    'PathConfig',
    'LoggingConfig',
    'get_config',
    # Results
    'CommandResult',
    'Continue',
    'Terminate',
    'Outcome',
    # Context
    'ExecutionContext',
    'get_home_directory',
]
