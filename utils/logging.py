"""Logging setup for simulation runs."""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Top-level packages whose records go to the run log
PROJECT_LOGGERS = ("poker", "simulation", "config", "utils")


def configure_logging(level: str | int = "INFO", log_file: str | Path | None = None) -> list[logging.Logger]:
    """Configure the project's loggers for a run.

    Third-party loggers (matplotlib, etc.) and the root logger are left alone.

    Args:
        level: Logging level name or number
        log_file: Optional file to write log records to (overwritten each run)

    Returns:
        The configured project loggers
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    file_handler = None
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="w")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        file_handler._cardstats = True  # type: ignore[attr-defined]

    loggers = [logging.getLogger(name) for name in PROJECT_LOGGERS]
    closed = set()
    for logger in loggers:
        logger.setLevel(level)
        for handler in list(logger.handlers):
            if getattr(handler, "_cardstats", False):
                logger.removeHandler(handler)
                if id(handler) not in closed:
                    handler.close()
                    closed.add(id(handler))
        if file_handler is not None:
            logger.addHandler(file_handler)

    return loggers
