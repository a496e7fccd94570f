import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    console: bool = False,
) -> logging.Logger:
    """Configure the ``mlbcli`` logger.

    - ``log_file`` attaches a file handler (the browser owns the terminal,
      so it only ever logs to a file).
    - ``console`` attaches a stderr handler for the plain commands.

    Safe to call more than once: previous handlers are replaced.
    """
    level_name = str(level or "WARNING").upper().strip()
    log_level = getattr(logging, level_name, logging.WARNING)

    logger = logging.getLogger("mlbcli")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(log_level)
    logger.propagate = False

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug("Logging configured (level=%s, file=%s)", level_name, log_file)
    return logger
