"""Worker that fetches pages and counts occurrences of the target word."""

from __future__ import annotations

import logging
import queue
from contextlib import closing
from time import perf_counter
from typing import Any

import httpx

from spinarak.clients.pages import PageClient
from spinarak.core.counting import count_occurrences
from spinarak.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_MAX_TOKEN_SIZE,
    STOP_FETCH,
)
from spinarak.errors import FetchError, ScanError, UnexpectedStatusError
from spinarak.models import Result
from spinarak.telemetry.metrics import Metrics
logger = logging.getLogger(__name__)


def fetch_count(
    link: str,
    client: PageClient,
    word: str,
    metrics: Metrics,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    encoding: str = DEFAULT_ENCODING,
    max_token_size: int = DEFAULT_MAX_TOKEN_SIZE,
) -> Result:
    """GET *link* once and count *word* in its body.

    Fetch, status and scan failures are returned on the :class:`Result`;
    they are never raised.
    """
    start = perf_counter()
    try:
        with closing(client.get(link)) as resp:
            metrics.observe_stage("fetch", perf_counter() - start)
            if resp.status_code != httpx.codes.OK:
                raise UnexpectedStatusError(
                    link, resp.status_code, resp.reason_phrase)

            scan_start = perf_counter()
            try:
                count = count_occurrences(
                    word,
                    resp.iter_bytes(chunk_size),
                    encoding=encoding,
                    max_token_size=max_token_size,
                )
            finally:
                metrics.observe_stage("count", perf_counter() - scan_start)
                metrics.add_bytes(resp.num_bytes_downloaded)

    except ScanError as exc:
        return Result(link=link, count=exc.count, error=exc)
    except (FetchError, UnexpectedStatusError) as exc:
        return Result(link=link, count=0, error=exc)

    return Result(link=link, count=count)


def fetch_worker(
    wid: int,
    jobs_q: queue.Queue[Any],
    results_q: queue.Queue[Result],
    client: PageClient,
    word: str,
    metrics: Metrics,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    encoding: str = DEFAULT_ENCODING,
    max_token_size: int = DEFAULT_MAX_TOKEN_SIZE,
) -> None:
    """
    Pulls links off *jobs_q* until it takes a **STOP_FETCH** sentinel, and
    pushes exactly one :class:`Result` per link onto *results_q*.  Each link is
    fetched once; failures travel on the result, so one bad link never stops
    the worker or the batch.
    """
    while True:
        item = jobs_q.get()
        if item is STOP_FETCH:
            logger.debug("Fetcher %d received STOP", wid)
            break

        link: str = item
        try:
            result = fetch_count(
                link, client, word, metrics,
                chunk_size=chunk_size,
                encoding=encoding,
                max_token_size=max_token_size,
            )
        except Exception as exc:
            # The dispatcher waits for one result per link.
            logger.exception(
                "Fetcher %d: unexpected failure on %s", wid, link)
            result = Result(link=link, count=0, error=exc)

        metrics.inc("jobs_total", 1)
        if result.ok:
            metrics.inc("jobs_succeeded", 1)
            metrics.add_matches(result.count)
            logger.debug(
                "Fetcher %d: %s has %d match(es)", wid, link, result.count)
        else:
            metrics.inc("jobs_failed", 1)
            metrics.record_error(result.error)
            logger.warning("Fetcher %d: %s", wid, result.error)

        results_q.put(result)
