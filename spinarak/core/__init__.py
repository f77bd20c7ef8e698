from __future__ import annotations

from .counting import count_occurrences, READ_ERRORS

__all__ = [
    "count_occurrences",
    "READ_ERRORS",
]
