"""Public package exports for the :mod:`spinarak` library."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "pipeline",
    "config",
    "workers",
    "constants",
    "models",
    "errors",
    "logging_setup",
    "core",
    "telemetry",
    "clients",
]
