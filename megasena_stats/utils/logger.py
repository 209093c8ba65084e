"""
megasena_stats/utils/logger.py
Project logger: one "megasena" parent with Rich console + rotating file
output, and per-module children ("megasena.model.generator", ...) that
propagate to it. Every module writes to the same logs/megasena.log.

Env:
  LOG_LEVEL    level for the whole tree (default INFO)
  LOG_DIR      directory of the rotating file (default logs)
  LOG_TO_FILE  "0"/"false" keeps output on the console only
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

ROOT_NAME = "megasena"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _file_logging_enabled() -> bool:
    return os.getenv("LOG_TO_FILE", "1").strip().lower() not in ("0", "false", "no", "off")


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_NAME)
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level, logging.INFO))
    # records stop at the project logger
    root.propagate = False

    if not root.handlers:
        console = RichHandler(rich_tracebacks=True, show_path=False)
        console.setLevel(logging.DEBUG)
        root.addHandler(console)

        if _file_logging_enabled():
            log_dir = os.getenv("LOG_DIR", "logs")
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, f"{ROOT_NAME}.log"),
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            root.addHandler(file_handler)

    return root


def get_logger(name: str = ROOT_NAME) -> logging.Logger:
    """
    get_logger("ingestion.csv") -> logger "megasena.ingestion.csv".
    Handlers live only on the parent, so a child never logs a line twice.
    """
    qualified = name if name == ROOT_NAME or name.startswith(ROOT_NAME + ".") else f"{ROOT_NAME}.{name}"
    if qualified in _loggers:
        return _loggers[qualified]

    if ROOT_NAME not in _loggers:
        _loggers[ROOT_NAME] = _configure_root()

    logger = logging.getLogger(qualified)
    _loggers[qualified] = logger
    return logger
