"""Logging setup for togglPy."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ..errors import ConfigError

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_SIZE = 10485760  # 10MB
BACKUP_COUNT = 5


def default_log_dir() -> Path:
    """Get the directory log files go to when none is configured.

    Returns:
        ~/.togglpy/logs
    """
    return Path.home() / ".togglpy" / "logs"


def setup_logging(verbosity: str = "info", log_dir: Optional[Union[str, Path]] = None) -> Path:
    """Configure the root logger.

    Log lines go to stderr at the requested level, to `info.log` at INFO
    and above, and to `error.log` at ERROR and above.

    Args:
        verbosity: One of error, warn, info, debug, trace
        log_dir: Directory for the log files (optional)

    Returns:
        The directory the log files are written to

    Raises:
        ConfigError: If the log directory cannot be created or written to
    """
    level = LEVELS[verbosity]
    log_dir = Path(log_dir) if log_dir else default_log_dir()

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(min(level, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    # stderr first so a bad log directory can still be reported
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        for filename, file_level in (("info.log", logging.INFO), ("error.log", logging.ERROR)):
            file_handler = RotatingFileHandler(
                log_dir / filename,
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setLevel(file_level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
    except OSError as e:
        raise ConfigError(f"Cannot use log directory '{log_dir}'") from e
    return log_dir
