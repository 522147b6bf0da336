"""Logging configuration.

The interactive screen owns the terminal, so records go to a log file only.
"""
from __future__ import annotations

import logging
from pathlib import Path


def setup_logging(log_file: str | Path, level: str | int = logging.INFO) -> None:
    """
    Install a single file handler on the root logger.

    Call this ONCE, before the first logger.info. A log file that cannot be
    opened disables file logging instead of blocking startup.
    """
    log_file = Path(log_file)
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh: logging.Handler = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError:
        fh = logging.NullHandler()
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
