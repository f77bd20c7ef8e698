from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class Result:
    link: str
    count: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        return f"{self.link}\n\tcount: {self.count}\n\terror: {self.error}"
