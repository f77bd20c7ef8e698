"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest

from spinarak.clients.pages import PageClient

CAT_PAGE = b"a cat sat on a cat mat"


class FailingStream(httpx.SyncByteStream):
    """Body that yields a few bytes and then drops the connection."""

    def __iter__(self) -> Iterator[bytes]:
        yield b"cat dog cat "
        raise httpx.ReadError("connection reset by peer")


def site_handler(request: httpx.Request) -> httpx.Response:
    """Serve a tiny fake web for the worker and pipeline tests."""
    if request.url.host == "down.test":
        raise httpx.ConnectError("connection refused", request=request)

    path = request.url.path
    if path == "/cats":
        return httpx.Response(200, content=CAT_PAGE)
    if path == "/dogs":
        return httpx.Response(200, content=b"dog\tdog\ndog  cat")
    if path == "/empty":
        return httpx.Response(200, content=b"")
    if path == "/old-cats":
        return httpx.Response(301, headers={"Location": "/cats"})
    if path == "/broken":
        return httpx.Response(200, stream=FailingStream())
    if path == "/teapot":
        return httpx.Response(418)
    return httpx.Response(404)


@pytest.fixture
def site_transport() -> httpx.MockTransport:
    return httpx.MockTransport(site_handler)


@pytest.fixture
def page_client(site_transport: httpx.MockTransport) -> Iterator[PageClient]:
    """Open :class:`PageClient` backed by :func:`site_handler`."""
    with PageClient(transport=site_transport) as client:
        yield client
