from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "etfcompare-stderr"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stderr handler to the package logger once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    pkg = logging.getLogger("etfcompare")
    pkg.setLevel(level)
    if not any(h.get_name() == HANDLER_NAME for h in pkg.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        pkg.addHandler(handler)
    return pkg
