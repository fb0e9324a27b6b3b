# /portal/core/logging_config.py

import logging
import sys

from .config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = None) -> None:
    """Configures the root logger once for the whole application."""
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(getattr(h, "_portal_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._portal_handler = True
        root.addHandler(handler)

    # SQL echo is far too chatty below WARNING.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
