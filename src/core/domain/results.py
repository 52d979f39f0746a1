"""Values that flow through the request pipeline.

`ResolvedRequest` goes into the HTTP executor, `RawResponse` comes out of it,
and every operation ends as exactly one `Success` or `Failure`. The stream of
results for a run is closed by a single `RunCompleted`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from core.errors import HeavercError


@dataclass(frozen=True)
class ResolvedRequest:
    method: str
    url: str
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class RawResponse:
    """Transport-level response: status and the full body."""

    status_code: int
    content: bytes = b""


@dataclass(frozen=True)
class Success:
    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: HeavercError

    @property
    def ok(self) -> bool:
        return False

    @property
    def text(self) -> str:
        return self.error.message


Result = Union[Success, Failure]


@dataclass(frozen=True)
class RunCompleted:
    """End-of-stream marker for one run."""

    total: int
    failed: int = 0
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.failed == 0 and not self.cancelled


RunEvent = Union[Success, Failure, RunCompleted]
