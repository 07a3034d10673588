"""Logging setup for the calculator and its form window.

Loggers are configured from a YAML file (or built-in defaults), write to a
platform-aware log directory and rotate on every application start.

Platform-specific log locations:
    - macOS: ~/Library/Logs/AviaCalc/aviacalc.log
    - Linux: ~/.aviacalc/logs/aviacalc.log
    - Windows: %AppData%/AviaCalc/Logs/aviacalc.log

Typical usage example:
    from aviacalc.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.info("Fuel balance computed: economy=%.1f kg", economy)
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_overridden_loggers: set[str] = set()
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory:
        - macOS: ~/Library/Logs/AviaCalc
        - Linux: ~/.aviacalc/logs
        - Windows: %AppData%/AviaCalc/Logs
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "AviaCalc"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "AviaCalc" / "Logs"
    else:
        return Path.home() / ".aviacalc" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "aviacalc.log", keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    aviacalc.log becomes aviacalc.log.1, older numbered logs shift up by one
    and anything past keep_count is deleted.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename

    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        if old_log.exists():
            old_log.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(
    config_path: str | Path | None = None, use_platform_dir: bool = True, rotate: bool = True
) -> None:
    """Initialize the logging system from YAML configuration.

    Call once at application startup. Rotates the previous run's log and
    applies the per-logger overrides from the "loggers" section.

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.
        use_platform_dir: If True, log to the platform-specific directory.
            If False, use "log_dir" from the config (development/testing).
        rotate: If True, rotate the previous log and start a new file. If
            False, append to the current log file.

    Raises:
        LoggingError: If the configuration file is missing or invalid.

    Examples:
        >>> initialize_logging("config/logging.yaml")
        >>> get_logger("aviacalc.main").info("Logging initialized")
    """
    global _logging_config, _initialized

    if config_path:
        try:
            config_path = Path(config_path)
            if not config_path.exists():
                raise LoggingError(f"Logging config file not found: {config_path}")

            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}

        except LoggingError:
            raise
        except Exception as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e

        _logging_config = _get_default_config()
        _logging_config.update(loaded)
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    log_dir = Path(_logging_config.get("log_dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    if rotate:
        file_config = _logging_config.get("file", {})
        rotate_logs(
            log_dir,
            file_config.get("filename", "aviacalc.log"),
            file_config.get("backup_count", 5),
        )

    _configure_root_logger("w" if rotate else "a")
    _apply_logger_overrides()
    _loggers_cache.clear()

    _initialized = True


def _get_default_config() -> dict[str, Any]:
    """Get default logging configuration.

    Returns:
        Default logging configuration dictionary.
    """
    return {
        "version": 1,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "file": {
            "enabled": True,
            "filename": "aviacalc.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "loggers": {},
    }


def _reset_logger_overrides() -> None:
    for name in _overridden_loggers:
        logger = logging.getLogger(name)
        logger.setLevel(logging.NOTSET)
        logger.disabled = False
    _overridden_loggers.clear()


def _apply_logger_overrides() -> None:
    """Apply the "loggers" section to loggers created before or after setup."""
    _reset_logger_overrides()

    for name, logger_config in (_logging_config.get("loggers") or {}).items():
        logger_config = logger_config or {}
        logger = logging.getLogger(name)
        if "level" in logger_config:
            logger.setLevel(getattr(logging, logger_config["level"]))
        if not logger_config.get("enabled", True):
            logger.disabled = True
        _overridden_loggers.add(name)


def _configure_root_logger(file_mode: str = "w") -> None:
    """Attach console and file handlers to the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    console_config = _logging_config.get("console", {})
    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_config.get("level", "WARNING")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    file_config = _logging_config.get("file", {})
    if file_config.get("enabled", True):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_file = log_dir / file_config.get("filename", "aviacalc.log")

        # Rotation already happened in initialize_logging
        file_handler = logging.FileHandler(log_file, mode=file_mode, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module or component.

    Loggers are cached. A logger can be given its own level, or be disabled,
    under the "loggers" section of the logging YAML.

    Args:
        name: Logger name (typically the module's __name__).

    Returns:
        Configured logger instance.

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if not _initialized:
        # Implicit setup (e.g. at import time) appends to the current log;
        # only an explicit initialize_logging() starts a new run.
        initialize_logging(rotate=False)

    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush and close all handlers. Call at application shutdown."""
    global _initialized

    logging.shutdown()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()
    _reset_logger_overrides()
    _loggers_cache.clear()
    _initialized = False
