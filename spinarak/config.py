"""Environment-based configuration loading for the fetch pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from spinarak import __version__
from spinarak.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_MAX_TOKEN_SIZE,
    DEFAULT_WORKERS,
)


@dataclass
class Config:
    """Configuration values derived from environment variables."""
    # Pool
    workers: int

    # HTTP
    follow_redirects: bool
    user_agent: str

    # Scanning
    chunk_size: int
    max_token_size: int
    encoding: str


def load_config() -> Config:
    """Load environment variables (and ``.env``) into a :class:`Config`.

    Invalid numbers raise ``ValueError``; range checks on ``workers`` are
    left to the CLI, which reports them as usage errors.
    """
    load_dotenv()

    return Config(
        workers=int(os.getenv("SPINARAK_WORKERS", str(DEFAULT_WORKERS))),
        follow_redirects=bool(int(os.getenv("SPINARAK_FOLLOW_REDIRECTS", "1"))),
        user_agent=os.getenv("SPINARAK_USER_AGENT", f"spinarak/{__version__}"),
        chunk_size=int(os.getenv("SPINARAK_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))),
        max_token_size=int(
            os.getenv("SPINARAK_MAX_TOKEN_SIZE", str(DEFAULT_MAX_TOKEN_SIZE))),
        encoding=os.getenv("SPINARAK_ENCODING", DEFAULT_ENCODING),
    )
