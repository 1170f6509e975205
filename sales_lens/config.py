"""
Settings - environment-driven configuration for the API and the dashboard.
Values come from the process environment, with a local .env file loaded first.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_PORT = 3001
DEFAULT_CORS_ORIGIN = 'http://localhost:5173'
DEFAULT_DATA_PATH = 'data/sales.json'
DEFAULT_WATCH_INTERVAL = 1.0

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    cors_origin: str = DEFAULT_CORS_ORIGIN
    data_path: str = DEFAULT_DATA_PATH
    env: str = 'development'
    watch_interval: float = DEFAULT_WATCH_INTERVAL
    log_level: str = 'INFO'

    @property
    def watch_enabled(self) -> bool:
        """The file watcher only runs outside production."""
        return self.env != 'production'

    @classmethod
    def from_env(cls) -> 'Settings':
        """
        Build settings from the environment.

        Reads PORT, CORS_ORIGIN, SALES_DATA_PATH, APP_ENV, WATCH_INTERVAL and
        LOG_LEVEL. Malformed numbers fall back to the defaults.
        """
        load_dotenv()
        return cls(
            port=_env_int('PORT', DEFAULT_PORT),
            cors_origin=os.getenv('CORS_ORIGIN') or DEFAULT_CORS_ORIGIN,
            data_path=os.getenv('SALES_DATA_PATH') or DEFAULT_DATA_PATH,
            env=(os.getenv('APP_ENV') or 'development').strip().lower(),
            watch_interval=_env_float('WATCH_INTERVAL', DEFAULT_WATCH_INTERVAL),
            log_level=(os.getenv('LOG_LEVEL') or 'INFO').upper(),
        )


def _env_int(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name, default):
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def configure_logging(level='INFO'):
    """Configure root logging for the app. Safe to call more than once."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
