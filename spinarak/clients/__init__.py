"""HTTP clients."""

from __future__ import annotations

from .pages import PageClient

__all__ = ["PageClient"]
