import logging
from logging.handlers import TimedRotatingFileHandler
import os
import sys
from datetime import datetime


class MicrosecondFormatter(logging.Formatter):
    """Formatter whose `datefmt` may contain `%f`, so that setpoint logs of
    a fast control loop can be told apart.
    """
    def formatTime(self, record, datefmt=None):
        if datefmt:
            return datetime.fromtimestamp(record.created).strftime(datefmt)
        return super().formatTime(record, datefmt)


def init_logger(
    name: str = "",
    log_file: str | None = None,
    level: int | str = logging.INFO,
    console: bool = True
) -> logging.Logger:
    """
    Configures the logger `name` for the command-line sampler.

    Parameters
    ----------
    name : str
        Name of the logger (empty string refers to the root logger).
    log_file : str, optional
        Path of a log file, rotated at midnight. Parent directories are
        created if needed. If None, nothing is logged to file.
    level : int or str
        Logging level, either as number or as name (e.g. "DEBUG").
    console : bool
        If True, log to sys.stderr; sys.stdout is reserved for the CSV
        setpoints.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False

    if logger.handlers:
        return logger

    formatter = MicrosecondFormatter(
        fmt="%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S.%f"
    )
    handlers: list[logging.Handler] = []
    if log_file is not None:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(TimedRotatingFileHandler(
            log_file, when="midnight", backupCount=7, encoding="utf-8"
        ))
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
