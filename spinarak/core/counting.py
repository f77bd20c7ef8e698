"""Streaming whitespace tokenizer that counts exact matches of a word."""

from __future__ import annotations

import codecs
import re
from typing import Iterable, Iterator, List, Tuple, Union

import httpx

from spinarak.constants import DEFAULT_ENCODING, DEFAULT_MAX_TOKEN_SIZE
from spinarak.errors import ScanError

Chunk = Union[bytes, str]

# Failures raised while pulling chunks off a file or a response body.
READ_ERRORS = (
    OSError,
    httpx.HTTPError,
    httpx.StreamError,
)

# ASCII and Unicode spaces; the \x1c-\x1f separators are token characters.
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0"
    "\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000"
)
_TOKEN_RE = re.compile(f"[^{WHITESPACE}]+")
_TRAILING_SPACE_RE = re.compile(f"[{WHITESPACE}]\\Z")


class TokenTooLong(ValueError):
    """A single token outgrew ``max_token_size``."""


def _split_complete(text: str) -> Tuple[List[str], str]:
    """Split *text* into finished tokens and the unfinished trailing token."""
    tokens = _TOKEN_RE.findall(text)
    if tokens and not _TRAILING_SPACE_RE.search(text):
        return tokens, tokens.pop()
    return tokens, ""


def _check_length(token: str, max_token_size: int) -> str:
    if len(token) > max_token_size:
        raise TokenTooLong(f"token exceeds {max_token_size} characters")
    return token


def iter_tokens(
    stream: Iterable[Chunk],
    encoding: str = DEFAULT_ENCODING,
    max_token_size: int = DEFAULT_MAX_TOKEN_SIZE,
) -> Iterator[str]:
    """Yield the whitespace-delimited tokens of *stream* in order.

    Raises :class:`TokenTooLong` at the first token longer than
    *max_token_size*, however the stream happens to be chunked.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="surrogateescape")
    tail = ""
    for chunk in stream:
        if isinstance(chunk, bytes):
            chunk = decoder.decode(chunk)
        tokens, tail = _split_complete(tail + chunk)
        for token in tokens:
            yield _check_length(token, max_token_size)
        _check_length(tail, max_token_size)

    final = tail + decoder.decode(b"", final=True)
    for token in _TOKEN_RE.findall(final):
        yield _check_length(token, max_token_size)


def count_occurrences(
    word: str,
    stream: Iterable[Chunk],
    *,
    encoding: str = DEFAULT_ENCODING,
    max_token_size: int = DEFAULT_MAX_TOKEN_SIZE,
) -> int:
    """Count whitespace-delimited tokens in *stream* equal to *word*.

    Parameters
    ----------
    word:
        Target token. Matching is exact and case-sensitive.
    stream:
        Iterable of ``bytes`` or ``str`` chunks, e.g.
        :meth:`httpx.Response.iter_bytes` or an open file. Only the current
        chunk and one unfinished token are held at a time.
    encoding:
        Used to decode ``bytes`` chunks. Undecodable bytes are kept as
        surrogate escapes so they never equal a valid *word*.
    max_token_size:
        Longest token, in characters, the scanner will accept.

    Raises
    ------
    ScanError
        If reading the stream fails or a token is too long. The exception
        carries the number of matches among the tokens before the failure.
    """
    count = 0
    try:
        for token in iter_tokens(stream, encoding, max_token_size):
            if token == word:
                count += 1
    except (TokenTooLong, *READ_ERRORS) as exc:
        raise ScanError(count, exc) from exc
    return count
