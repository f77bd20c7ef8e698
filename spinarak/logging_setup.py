from __future__ import annotations

import logging
import os


def configure_logging(level: str | None = None, default: str = "INFO") -> None:
    """
    Configure root logging once. Level can be given explicitly or taken from
    LOG_LEVEL env var (falling back to *default*).
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", default)
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s:%(lineno)d | %(message)s",
    )
