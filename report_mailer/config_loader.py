# Path: report_mailer/config_loader.py
"""
Configuration Loader for report_mailer

Process settings (logging, SMTP behaviour, chart geometry) come from
REPORT_MAILER_* environment variables, optionally seeded from a .env
file in the working directory. What a report contains lives in its
YAML definition, never here.

One ConfigLoader instance serves the whole process.
"""

import os
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from dotenv import load_dotenv


ENV_PREFIX = 'REPORT_MAILER_'

# Logging
DEFAULT_LOG_LEVEL: str = 'INFO'

# Delivery (seconds)
DEFAULT_SMTP_TIMEOUT: float = 30.0

# Chart size in inches, resolution in dots per inch
DEFAULT_CHART_WIDTH: float = 8.0
DEFAULT_CHART_HEIGHT: float = 4.5
DEFAULT_CHART_DPI: int = 100

_TRUE_WORDS = ('true', '1', 'yes', 'on')

T = TypeVar('T')


class ConfigLoader:
    """
    Process-wide settings.

    Nothing is required: a bare environment yields a working
    configuration. Unparseable numbers fall back to their defaults.

    Example:
        config = ConfigLoader()
        dpi = config.get('chart_dpi')      # int
        log_dir = config.get('log_dir')    # Path or None
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Read the environment once.

        A .env file in the current directory is loaded first; variables
        already present in the environment take precedence over it.
        """
        if ConfigLoader._initialized:
            return

        env_file = Path.cwd() / '.env'
        if env_file.exists():
            load_dotenv(dotenv_path=env_file, interpolate=True)

        self._config = self._read_settings()
        ConfigLoader._initialized = True

    def _read_settings(self) -> dict[str, Any]:
        return {
            # Logging
            'log_level': self._get_env('LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_dir': self._get_path('LOG_DIR'),
            'log_console': self._get_bool('LOG_CONSOLE', True),

            # Delivery
            'smtp_timeout': self._get_float('SMTP_TIMEOUT', DEFAULT_SMTP_TIMEOUT),
            'smtp_starttls': self._get_bool('SMTP_STARTTLS', True),

            # Charts
            'chart_width': self._get_float('CHART_WIDTH', DEFAULT_CHART_WIDTH),
            'chart_height': self._get_float('CHART_HEIGHT', DEFAULT_CHART_HEIGHT),
            'chart_dpi': self._get_int('CHART_DPI', DEFAULT_CHART_DPI),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a setting.

        Args:
            key: Setting name, e.g. 'chart_dpi'
            default: Returned for unknown keys

        Returns:
            Typed setting value
        """
        return self._config.get(key, default)

    @staticmethod
    def _raw(name: str) -> Optional[str]:
        return os.getenv(ENV_PREFIX + name)

    def _get_env(self, name: str, default: str = '') -> str:
        value = self._raw(name)
        return default if value is None else value

    def _get_path(self, name: str) -> Optional[Path]:
        """Path setting; empty or unset means None. ${VAR} is expanded."""
        value = self._raw(name)
        if not value:
            return None
        return Path(os.path.expandvars(value)).expanduser()

    def _parsed(self, name: str, parse: Callable[[str], T], default: T) -> T:
        value = self._raw(name)
        if value is None:
            return default
        try:
            return parse(value)
        except ValueError:
            return default

    def _get_int(self, name: str, default: int) -> int:
        return self._parsed(name, int, default)

    def _get_float(self, name: str, default: float) -> float:
        return self._parsed(name, float, default)

    def _get_bool(self, name: str, default: bool) -> bool:
        return self._parsed(name, lambda value: value.strip().lower() in _TRUE_WORDS, default)

    def __repr__(self) -> str:
        return (
            f"ConfigLoader(log_level={self._config.get('log_level')}, "
            f"log_dir={self._config.get('log_dir')}, "
            f"chart_dpi={self._config.get('chart_dpi')})"
        )


__all__ = ['ConfigLoader']
