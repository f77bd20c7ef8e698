"""Entry point for invoking the word-count fetcher via the CLI."""

from __future__ import annotations

from spinarak.cli import main as cli_main

if __name__ == "__main__":
    cli_main()
