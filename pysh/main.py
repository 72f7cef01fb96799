#!/usr/bin/env python3
"""
PySH - An interactive POSIX-style command shell

This is the main entry point for PySH.

Start-up sequence:
1. Load configuration (--config FILE, else $PYSH_CONFIG, else defaults)
2. Initialize logging
3. Build the execution context
4. Run the REPL until `exit` or end of input

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Optional, List

from pysh.core.config_loader import ConfigLoader, get_config
from pysh.exceptions import ConfigError
from pysh.logger import Logger, LogLevel, get_logger
from pysh.shell.shell import create_shell


CONFIG_ENV_VAR = 'PYSH_CONFIG'
USAGE = "usage: pysh [--config FILE]"


def _config_path(argv: List[str]) -> Optional[str]:
    """
    Pick the configuration file from the command line or environment.

    Raises:
        ValueError: The arguments are anything other than ``--config FILE``
    """
    if not argv:
        return os.environ.get(CONFIG_ENV_VAR) or None
    if len(argv) == 2 and argv[0] == '--config' and argv[1]:
        return argv[1]
    raise ValueError(USAGE)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for PySH.

    Returns:
        Exit code for the process: 2 for bad arguments, 1 when the
        configuration cannot be used, else the shell's exit code
    """
    argv = sys.argv[1:] if argv is None else argv

    try:
        config_path = _config_path(argv)
    except ValueError as e:
        print(f"pysh: {e}", file=sys.stderr)
        return 2

    loader = ConfigLoader()
    try:
        config = loader.load(config_path) if config_path else get_config()
        Logger.initialize(
            level=LogLevel.from_name(config.logging.level),
            log_file=config.logging.log_file,
            console_output=config.logging.console_output,
            use_colors=config.logging.use_colors,
        )
        shell = create_shell(config)
    except ConfigError as e:
        print(f"pysh: {e.message}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"pysh: {e}", file=sys.stderr)
        return 1

    get_logger('config').debug("Configuration in effect", context=loader.to_dict())
    return shell.run()


if __name__ == '__main__':
    sys.exit(main())
