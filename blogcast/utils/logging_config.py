"""
Logging Setup for blogcast

One root-logger setup shared by the CLI commands and the API server.
Modules log through ``logging.getLogger(__name__)``; this module decides
where those records go:

- stderr, so CLI output on stdout stays clean for piping a post to a file
- an optional size-rotated log file
- debug dumps of the resolved AppConfig, with credentials masked
- elapsed-time lines for downloads and generation calls
"""

import logging
import logging.handlers
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class LogLevel(Enum):
    """Level names accepted by --log-level, BLOGCAST_LOG_LEVEL and logging.level."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


LEVELS = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.WARNING.value: logging.WARNING,
    LogLevel.ERROR.value: logging.ERROR,
}

# Config keys containing any of these are never written to a log
SENSITIVE_MARKERS = ("key", "password", "secret", "token")
MASK = "***MASKED***"

# Request-level chatter from the HTTP stack; the INFO line includes the URL
QUIET_LOGGERS = ("httpx", "httpcore")

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


class LoggingConfig:
    """
    Owns the handlers blogcast installs on the root logger.

    The first ``configure_logging`` call wins. Tests call ``reset`` to
    detach the handlers and start over.
    """

    def __init__(self):
        self._configured = False
        self._log_file_handler: Optional[logging.Handler] = None
        self._console_handler: Optional[logging.Handler] = None

    def configure_logging(
        self,
        level: str = "info",
        log_file: Optional[str] = None,
        include_timestamps: bool = True,
        include_module_names: bool = True,
        max_log_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5
    ) -> None:
        """
        Install the stderr handler and, when ``log_file`` is given, a rotating file handler.

        Args:
            level: One of debug, info, warning, error; anything else means info
            log_file: Path of the log file; parent directories are created
            include_timestamps: Prefix console lines with the time
            include_module_names: Show logger names on the console in debug mode
            max_log_file_size: Bytes written before the file is rotated
            backup_count: Rotated files kept next to the active one
        """
        if self._configured:
            return

        log_level = LEVELS.get(level.lower(), logging.INFO)
        debug_mode = log_level == logging.DEBUG

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.handlers.clear()

        self._console_handler = logging.StreamHandler(sys.stderr)
        self._console_handler.setLevel(log_level)
        self._console_handler.setFormatter(
            self._console_formatter(include_timestamps, include_module_names and debug_mode, debug_mode)
        )
        root_logger.addHandler(self._console_handler)

        if log_file:
            self._add_file_handler(log_file, log_level, max_log_file_size, backup_count)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

        self._configured = True
        logging.getLogger(__name__).debug(f"Logging ready: level={level}, file={log_file}")

    def reset(self) -> None:
        """Detach and close the handlers installed by ``configure_logging``."""
        root_logger = logging.getLogger()
        for handler in (self._console_handler, self._log_file_handler):
            if handler is not None:
                root_logger.removeHandler(handler)
                handler.close()
        self._console_handler = None
        self._log_file_handler = None
        self._configured = False

    @staticmethod
    def _console_formatter(with_time: bool, with_name: bool, debug_mode: bool) -> logging.Formatter:
        fields = []
        if with_time:
            fields.append("%(asctime)s")
        if with_name:
            fields.append("%(name)s")
        fields += ["%(levelname)s", "%(message)s"]
        return logging.Formatter(
            " - ".join(fields),
            datefmt=FILE_DATEFMT if debug_mode else "%H:%M:%S"
        )

    def _add_file_handler(self, log_file: str, log_level: int, max_size: int, backup_count: int) -> None:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_size,
                backupCount=backup_count,
                encoding='utf-8'
            )
        except OSError as e:
            logging.getLogger(__name__).warning(f"Cannot write log file {log_file}, logging to stderr only: {e}")
            return

        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        logging.getLogger().addHandler(handler)
        self._log_file_handler = handler

    def log_configuration_details(self, config: Dict[str, Any]) -> None:
        """Write the resolved settings at debug level, one line per key."""
        logger = logging.getLogger(__name__)
        if not logger.isEnabledFor(logging.DEBUG):
            return

        logger.debug("Resolved configuration:")
        for key, value in config.items():
            logger.debug(f"  {key}: {mask_value(key, value)}")

    def log_operation_timing(self, operation: str, duration: float) -> None:
        """Report how long ``operation`` took; sub-second runs only show in debug."""
        logger = logging.getLogger(__name__)
        if duration < 1.0:
            logger.debug(f"{operation} took {duration * 1000:.0f}ms")
        else:
            logger.info(f"{operation} took {duration:.1f}s")

    def is_debug_enabled(self) -> bool:
        return logging.getLogger().isEnabledFor(logging.DEBUG)


def mask_value(key: str, value: Any) -> Any:
    """Return ``value``, or a mask when ``key`` names a credential (None if unset)."""
    if any(marker in key.lower() for marker in SENSITIVE_MARKERS):
        return MASK if value else None
    return value


logging_config = LoggingConfig()


def configure_logging(level: str = "info", log_file: Optional[str] = None) -> None:
    """Configure the process-wide ``logging_config``."""
    logging_config.configure_logging(level=level, log_file=log_file)
