"""
PySH Configuration Loader

Configuration management for the shell:
- JSON configuration file loading
- Default value handling
- Type checking of every configured value

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from pysh.exceptions import ConfigError


class ConfigValidationError(ConfigError):
    """Raised when a configuration value has the wrong shape or type."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration value for {key}: {reason}",
            error_code=1301,
            context={"key": key}
        )
        self.key = key
        self.reason = reason


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigValidationError(name, "expected a JSON object")
    return section


def _string(section: dict[str, Any], key: str, default: str) -> str:
    value = section.get(key.rsplit('.', 1)[-1], default)
    if not isinstance(value, str):
        raise ConfigValidationError(key, "expected a string")
    return value


def _boolean(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key.rsplit('.', 1)[-1], default)
    if not isinstance(value, bool):
        raise ConfigValidationError(key, "expected true or false")
    return value


def _positive_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key.rsplit('.', 1)[-1], default)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigValidationError(key, "expected a positive integer")
    return value


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    prompt: str = "$ "
    name: str = "pysh"


@dataclass
class PathConfig:
    """Executable lookup cache settings."""
    directory_cache_size: int = 64
    executable_cache_size: int = 256


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = False
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the shell.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    path: PathConfig = field(default_factory=PathConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files and providing
    the active configuration.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('pysh.json')
        >>> print(config.shell.prompt)
        $
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigError: If the file cannot be loaded or parsed
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file: {e}",
                path=config_path
            )
        except OSError as e:
            raise ConfigError(
                f"Cannot read configuration file: {e}",
                path=config_path
            )

        if not isinstance(data, dict):
            raise ConfigError(
                "Configuration root must be a JSON object",
                path=config_path
            )

        self._config = self._parse_config(data)
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """
        Parse configuration data into Config object.

        Raises:
            ConfigValidationError: A section is not an object or a value
                has the wrong type
        """
        config = Config()

        if 'shell' in data:
            shell_data = _section(data, 'shell')
            config.shell = ShellConfig(
                prompt=_string(shell_data, 'shell.prompt', config.shell.prompt),
                name=_string(shell_data, 'shell.name', config.shell.name),
            )

        if 'path' in data:
            path_data = _section(data, 'path')
            config.path = PathConfig(
                directory_cache_size=_positive_int(
                    path_data, 'path.directory_cache_size', config.path.directory_cache_size
                ),
                executable_cache_size=_positive_int(
                    path_data, 'path.executable_cache_size', config.path.executable_cache_size
                ),
            )

        if 'logging' in data:
            log_data = _section(data, 'logging')
            log_file = log_data.get('log_file', config.logging.log_file)
            if log_file is not None and not isinstance(log_file, str):
                raise ConfigValidationError('logging.log_file', "expected a string or null")
            config.logging = LoggingConfig(
                level=_string(log_data, 'logging.level', config.logging.level),
                log_file=log_file,
                console_output=_boolean(log_data, 'logging.console_output', config.logging.console_output),
                use_colors=_boolean(log_data, 'logging.use_colors', config.logging.use_colors),
            )

        return config

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if not self._loaded:
            return Config()
        return self._config

    def reset(self) -> None:
        """Drop any loaded configuration and return to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert the current configuration to a dictionary."""
        return asdict(self.config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    loader = ConfigLoader()
    return loader.config
