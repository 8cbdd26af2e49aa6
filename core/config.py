"""Configuration management using XDG Base Directory Specification.

This module provides centralized configuration management following Linux
standards for config and data directories.
"""

import configparser
import os
import shlex
from pathlib import Path
from typing import List, Optional

from core.exceptions import ConfigurationError

EXHAUSTION_POLICIES = ('wrap', 'stop')


class Config:
    """
    Configuration manager using XDG Base Directory Specification.

    Follows Linux standards:
    - Config: ~/.config/shuffleplayer/ (or XDG_CONFIG_HOME)
    - Data: ~/.local/share/shuffleplayer/ (or XDG_DATA_HOME)

    The config file location can be overridden with SHUFFLEPLAYER_CONFIG.
    """

    _instance: Optional['Config'] = None

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit config file path. Defaults to
                         SHUFFLEPLAYER_CONFIG or the XDG location.
        """
        # XDG Base Directory paths
        self.config_home = Path(os.getenv('XDG_CONFIG_HOME', Path.home() / '.config'))
        self.data_home = Path(os.getenv('XDG_DATA_HOME', Path.home() / '.local' / 'share'))

        # Application-specific directories
        self.app_name = 'shuffleplayer'
        self.config_dir = self.config_home / self.app_name
        self.data_dir = self.data_home / self.app_name

        if config_file is None:
            override = os.getenv('SHUFFLEPLAYER_CONFIG')
            config_file = Path(override) if override else self.config_dir / 'config.ini'
        self.config_file = Path(config_file)

        self.config = configparser.ConfigParser(interpolation=None)
        self._set_defaults()
        self._load_config()

    @classmethod
    def get_instance(cls) -> 'Config':
        """Get the singleton config instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _set_defaults(self) -> None:
        """Populate sensible defaults; values from the file override them."""
        self.config['playlist'] = {
            'file': str(self.config_dir / 'files.txt'),
            'on_exhausted': 'wrap',
        }
        self.config['state'] = {
            'file': str(self.data_dir / 'state.ini'),
        }
        self.config['player'] = {
            'command': 'mpv --no-video --really-quiet {track}',
        }
        self.config['http'] = {
            'host': '0.0.0.0',
            'port': '8000',
            'poll_timeout': '0.5',
        }

    def _load_config(self) -> None:
        """Load configuration from file or write the defaults out."""
        if self.config_file.exists():
            try:
                self.config.read(self.config_file, encoding='utf-8')
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Invalid config file {self.config_file}: {e}"
                ) from e
        else:
            self.save()

    def save(self) -> None:
        """
        Save configuration to file.

        Writes current configuration state to the config file.
        """
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                self.config.write(f)
        except OSError as e:
            from core.logging import get_logger
            logger = get_logger(__name__)
            logger.error("Failed to save config: %s", e, exc_info=True)

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """Get a configuration value."""
        return self.config.get(section, key, fallback=fallback)

    def set(self, section: str, key: str, value: str) -> None:
        """
        Set a configuration value.

        Args:
            section: Configuration section name
            key: Configuration key name
            value: Value to set
        """
        if section not in self.config:
            self.config.add_section(section)
        self.config.set(section, key, value)

    def get_int(self, section: str, key: str, fallback: int = 0) -> int:
        """Get an integer configuration value."""
        try:
            return self.config.getint(section, key, fallback=fallback)
        except ValueError as e:
            raise ConfigurationError(f"[{section}] {key} must be an integer") from e

    def get_float(self, section: str, key: str, fallback: float = 0.0) -> float:
        """Get a float configuration value."""
        try:
            return self.config.getfloat(section, key, fallback=fallback)
        except ValueError as e:
            raise ConfigurationError(f"[{section}] {key} must be a number") from e

    def get_path(self, section: str, key: str, fallback: Optional[Path] = None) -> Optional[Path]:
        """Get a path configuration value."""
        value = self.get(section, key)
        if value:
            return Path(value).expanduser()
        return fallback

    # Convenience properties
    @property
    def playlist_file(self) -> Path:
        """Get the raw track list path."""
        return self.get_path('playlist', 'file', self.config_dir / 'files.txt')

    @property
    def state_file(self) -> Path:
        """Get the persisted state path."""
        return self.get_path('state', 'file', self.data_dir / 'state.ini')

    @property
    def exhaustion_policy(self) -> str:
        """Get what to do once every track has been played."""
        policy = (self.get('playlist', 'on_exhausted', 'wrap') or '').strip().lower()
        if policy not in EXHAUSTION_POLICIES:
            raise ConfigurationError(
                f"[playlist] on_exhausted must be one of {', '.join(EXHAUSTION_POLICIES)}"
            )
        return policy

    @property
    def player_command(self) -> List[str]:
        """
        Get the external player command as an argument list.

        The literal token {track} marks where the track path goes.
        """
        raw = self.get('player', 'command', '') or ''
        try:
            args = shlex.split(raw)
        except ValueError as e:
            raise ConfigurationError(f"[player] command cannot be parsed: {e}") from e
        if not args:
            raise ConfigurationError("[player] command must not be empty")
        return args

    @property
    def http_host(self) -> str:
        """Get the control surface bind address."""
        return self.get('http', 'host', '0.0.0.0') or '0.0.0.0'

    @property
    def http_port(self) -> int:
        """Get the control surface port."""
        port = self.get_int('http', 'port', 8000)
        if not 0 <= port <= 65535:
            raise ConfigurationError("[http] port must be between 0 and 65535")
        return port

    @property
    def poll_timeout(self) -> float:
        """Get the longest time one loop iteration waits for a request."""
        timeout = self.get_float('http', 'poll_timeout', 0.5)
        if timeout <= 0:
            raise ConfigurationError("[http] poll_timeout must be positive")
        return timeout

    @property
    def log_dir(self) -> Path:
        """Get log directory."""
        return self.data_dir / 'logs'


# Convenience function
def get_config() -> Config:
    """Get the configuration instance."""
    return Config.get_instance()
