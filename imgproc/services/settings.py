"""
Settings management for the image processor.

Handles persistent storage of processing preferences in settings.ini.
"""

import logging
from configparser import ConfigParser, Error as ConfigError
from pathlib import Path
from typing import Optional, Union

from ..processing import DEFAULT_BAND_ROWS

logger = logging.getLogger(__name__)


class Settings:
    """Manages processing settings via settings.ini."""

    # Default settings file location (working directory)
    SETTINGS_FILE = Path("settings.ini")

    # Section and keys
    SECTION = "processing"
    KEY_BAND_ROWS = "band_rows"
    KEY_MAX_WORKERS = "max_workers"
    KEY_LOG_LEVEL = "log_level"
    KEY_DEFAULT_FACTOR = "default_factor"

    DEFAULTS = {
        KEY_BAND_ROWS: str(DEFAULT_BAND_ROWS),
        KEY_MAX_WORKERS: "1",
        KEY_LOG_LEVEL: "WARNING",
        KEY_DEFAULT_FACTOR: "1.0",
    }

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """Initialize settings from file or create defaults."""
        self.path = Path(path) if path is not None else self.SETTINGS_FILE
        self.config = ConfigParser()
        self._load()

    def _load(self) -> None:
        """Load settings from file or create defaults."""
        if self.path.exists():
            self.config.read(self.path)
            if not self.config.has_section(self.SECTION):
                self.config.add_section(self.SECTION)
        else:
            # Create default section
            self.config.add_section(self.SECTION)
            for key, value in self.DEFAULTS.items():
                self.config.set(self.SECTION, key, value)
            self._save()

    def _save(self) -> None:
        """Save settings to file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            self.config.write(f)

    def _set(self, key: str, value) -> None:
        if not self.config.has_section(self.SECTION):
            self.config.add_section(self.SECTION)
        self.config.set(self.SECTION, key, str(value))
        self._save()

    def _get_int(self, key: str, minimum: int) -> int:
        default = int(self.DEFAULTS[key])
        try:
            value = self.config.getint(self.SECTION, key, fallback=default)
        except (ConfigError, ValueError):
            logger.warning("Invalid %s in %s, using %d", key, self.path, default)
            return default
        return value if value >= minimum else default

    def get_band_rows(self) -> int:
        """Rows per band when filtering (default: 256)."""
        return self._get_int(self.KEY_BAND_ROWS, minimum=1)

    def set_band_rows(self, rows: int) -> None:
        """Set and save rows per band."""
        self._set(self.KEY_BAND_ROWS, int(rows))

    def get_max_workers(self) -> int:
        """Threads per filter pass (default: 1, no thread pool)."""
        return self._get_int(self.KEY_MAX_WORKERS, minimum=1)

    def set_max_workers(self, workers: int) -> None:
        """Set and save threads per filter pass."""
        self._set(self.KEY_MAX_WORKERS, int(workers))

    def get_log_level(self) -> str:
        """Get log level name (default: 'WARNING')."""
        value = self.config.get(self.SECTION, self.KEY_LOG_LEVEL, fallback="WARNING").upper()
        if not isinstance(logging.getLevelName(value), int):
            return self.DEFAULTS[self.KEY_LOG_LEVEL]
        return value

    def set_log_level(self, level: str) -> None:
        """Set and save log level."""
        self._set(self.KEY_LOG_LEVEL, level.upper())

    def get_default_factor(self) -> float:
        """Factor used when a step does not give one (default: 1.0)."""
        default = float(self.DEFAULTS[self.KEY_DEFAULT_FACTOR])
        try:
            return self.config.getfloat(self.SECTION, self.KEY_DEFAULT_FACTOR, fallback=default)
        except (ConfigError, ValueError):
            logger.warning("Invalid %s in %s, using %s", self.KEY_DEFAULT_FACTOR, self.path, default)
            return default

    def set_default_factor(self, factor: float) -> None:
        """Set and save default factor."""
        self._set(self.KEY_DEFAULT_FACTOR, float(factor))


def configure_logging(settings: Optional[Settings] = None, level: Optional[str] = None) -> logging.Logger:
    """Set the level of the package logger and attach a stderr handler once."""
    package_logger = logging.getLogger("imgproc")
    if level is None:
        level = settings.get_log_level() if settings is not None else "WARNING"
    package_logger.setLevel(level.upper())

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        package_logger.addHandler(handler)

    return package_logger
