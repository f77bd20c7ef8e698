"""Worker implementations used by the fetch pipeline."""

from __future__ import annotations

from .fetch import fetch_count, fetch_worker

__all__ = [
    "fetch_count",
    "fetch_worker",
]
