from __future__ import annotations

# ──────────────────────────────────────────────────────────────────────────────
# Sentinel object to terminate workers
# ──────────────────────────────────────────────────────────────────────────────
STOP_FETCH: object = object()         # fetch-count workers

# ──────────────────────────────────────────────────────────────────────────────
# Defaults
# ──────────────────────────────────────────────────────────────────────────────
DEFAULT_WORKERS: int = 1
DEFAULT_CHUNK_SIZE: int = 8192
DEFAULT_MAX_TOKEN_SIZE: int = 64 * 1024
DEFAULT_ENCODING: str = "utf-8"
