"""Logging helpers for chartly.

Library modules only ever call ``get_logger(__name__)``.  Scripts and
notebooks that want to see chartly's log output call ``configure_logging()``
once; applications that already configured logging need do nothing, since
chartly records propagate to their handlers.
"""
from __future__ import annotations

import logging
import os
import sys

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: str | int | None = None,
    *,
    fmt: str | None = None,
    datefmt: str | None = None,
    force: bool = False,
) -> None:
    """Attach a stderr handler to the ``chartly`` logger (never the root).

    Parameters
    ----------
    level : str or int, optional
        Logging level.  Defaults to the ``CHARTLY_LOG_LEVEL`` environment
        variable, or ``"INFO"`` if unset.
    fmt, datefmt : str, optional
        Formatter settings.
    force : bool
        Replace existing handlers instead of leaving an already configured
        stderr handler in place.
    """
    if level is None:
        level = os.environ.get("CHARTLY_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("chartly")
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT,
                                  datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the named logger, or the package logger when *name* is None."""
    return logging.getLogger(name or "chartly")
