"""
Logging Configuration for the Projection Engine.

All modules obtain their logger through `get_logger(__name__)` so that
output format and destination are uniform across the package. The engine
itself logs at DEBUG for numerical diagnostics and at WARNING just before
a domain or convergence error is raised to the caller.

Applications embedding the engine can raise or lower the verbosity of
every engine logger at once with `set_engine_log_level`.
"""

import logging
import sys
from typing import Tuple, Union

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

ENGINE_PACKAGES: Tuple[str, ...] = ("common", "geotum", "validation")


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the projection engine.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Logger with a single stdout handler.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def set_engine_log_level(level: Union[int, str]) -> int:
    """Set the level of every logger created by the engine packages.

    Parameters
    ----------
    level : int or str
        Logging level, e.g. ``logging.DEBUG`` or ``"ERROR"``.

    Returns
    -------
    int
        Number of loggers updated.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    updated = 0
    for name in list(logging.root.manager.loggerDict):
        if name.split(".")[0] in ENGINE_PACKAGES:
            logging.getLogger(name).setLevel(level)
            updated += 1
    return updated
