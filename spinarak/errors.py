"""Per-link failures carried on a :class:`~spinarak.models.Result`.

None of these abort a run; workers catch them and attach them to the result
of the link that produced them.
"""

from __future__ import annotations


class SpinarakError(Exception):
    """Base exception for all per-link failures."""


class FetchError(SpinarakError):
    """The page could not be reached (connection, DNS, bad URL, ...)."""

    def __init__(self, link: str, cause: BaseException) -> None:
        self.link = link
        self.cause = cause
        super().__init__(f"GET {link}: {type(cause).__name__}: {cause}")


class UnexpectedStatusError(SpinarakError):
    """A response arrived but its status was not 200 OK."""

    def __init__(self, link: str, status_code: int, reason: str = "") -> None:
        self.link = link
        self.status_code = status_code
        self.reason = reason
        status = f"{status_code} {reason}".strip()
        super().__init__(f"GET {link}: unexpected status {status}")


class ScanError(SpinarakError):
    """Reading the body failed part way; ``count`` holds the partial tally."""

    def __init__(self, count: int, cause: BaseException) -> None:
        self.count = count
        self.cause = cause
        super().__init__(
            f"scan stopped after {count} matches: {type(cause).__name__}: {cause}"
        )
