"""Top level orchestration of the fetch-and-count worker pool."""

from __future__ import annotations

import logging
import queue
import threading
from contextlib import nullcontext
from typing import Any, List, Sequence, Tuple

from spinarak.telemetry.metrics import Metrics
from spinarak.clients.pages import PageClient
from spinarak.config import Config, load_config
from spinarak.constants import STOP_FETCH
from spinarak.models import Result
from spinarak.workers.fetch import fetch_worker

logger = logging.getLogger(__name__)


def run_pipeline(
    word: str,
    links: Sequence[str],
    workers: int = 1,
    config: Config | None = None,
    client: PageClient | None = None,
) -> Tuple[List[Result], Metrics]:
    """Count *word* on every page in *links* using *workers* threads.

    Returns one :class:`Result` per link, in the order the results were
    completed (not the order of *links*), together with the run metrics.

    Parameters
    ----------
    word:
        Target token; matched exactly and case-sensitively.
    links:
        URLs to fetch. Duplicates are fetched and reported once per entry.
    workers:
        Number of fetch threads; fixed for the whole run.
    config:
        Optional :class:`Config` instance. If ``None``, environment variables
        are loaded via :func:`load_config`.
    client:
        Optional open :class:`PageClient`. If ``None``, one is built from
        *config* and closed before returning.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if config is None:
        config = load_config()

    metrics = Metrics()

    # ─── queues ──────────────────────────────────────────────────────────
    jobs_q:    queue.Queue[Any] = queue.Queue()
    results_q: queue.Queue[Result] = queue.Queue(maxsize=len(links))
    results: List[Result] = []

    if client is None:
        client_cm = PageClient(
            follow_redirects=config.follow_redirects,
            user_agent=config.user_agent,
        )
    else:
        client_cm = nullcontext(client)

    with client_cm as page_client:
        threads = [
            threading.Thread(
                target=fetch_worker,
                args=(i, jobs_q, results_q, page_client, word, metrics),
                kwargs={
                    "chunk_size": config.chunk_size,
                    "encoding": config.encoding,
                    "max_token_size": config.max_token_size,
                },
                name=f"fetcher-{i}",
                daemon=True,
            )
            for i in range(workers)
        ]
        for t in threads:
            t.start()

        for link in links:
            jobs_q.put(link)
        # no more jobs: one STOP per worker, queued behind every link
        for _ in threads:
            jobs_q.put(STOP_FETCH)
        logger.info("Queued %d links for %d fetchers", len(links), workers)

        # ─── collect exactly one result per link ─────────────────────
        for _ in range(len(links)):
            results.append(results_q.get())

        for t in threads:
            t.join()

    logger.info("Completed. Success: %d  Failures: %d",
                metrics.jobs_succeeded, metrics.jobs_failed)
    txt, _ = metrics.summary()
    logger.info("\n%s", txt)
    return results, metrics
