"""Blocking HTTP client used by the fetch workers to stream page bodies."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from spinarak import __version__
from spinarak.errors import FetchError

logger = logging.getLogger(__name__)


class PageClient:
    """Thin wrapper around :class:`httpx.Client` shared by all workers."""
    def __init__(
        self,
        follow_redirects: bool = True,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Create a new page client.

        Parameters
        ----------
        follow_redirects:
            Follow 3xx responses to their final page before checking status.
        user_agent:
            ``User-Agent`` header value. Defaults to ``spinarak/<version>``.
        transport:
            Optional transport override, e.g. :class:`httpx.MockTransport`.
        """
        self.follow_redirects = follow_redirects
        self.user_agent = user_agent or f"spinarak/{__version__}"
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "PageClient":
        self._ensure_client()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client, if open."""
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> None:
        """Instantiate the underlying :class:`httpx.Client` if missing."""
        if self._client is None:
            # No timeouts: a hung GET blocks only the worker that issued it.
            self._client = httpx.Client(
                timeout=None,
                follow_redirects=self.follow_redirects,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            )

    def _require_client(self) -> httpx.Client:
        """Return the initialized HTTP client or raise ``RuntimeError``."""
        if self._client is None:
            raise RuntimeError(
                "Client not initialized; use 'with PageClient()'")
        return self._client

    def get(self, link: str) -> httpx.Response:
        """Send one GET for *link* and return the response with its body unread.

        The caller owns the response and must close it, typically with
        ``with closing(client.get(link)) as resp:``.

        Raises
        ------
        FetchError
            If the request could not be built or no response was received.
        """
        client = self._require_client()
        try:
            request = client.build_request("GET", link)
            resp = client.send(request, stream=True)
        # ValueError: hosts rejected by IDNA encoding, e.g. "xn--a.com"
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise FetchError(link, exc) from exc
        logger.debug("GET %s -> %d", link, resp.status_code)
        return resp
