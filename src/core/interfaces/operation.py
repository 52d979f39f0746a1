"""Contract shared by every queued operation.

Operations are plain data until they meet a `RunContext`: the URL and the
HTTP method are derived at resolution time, so the same operation object can
be inspected or tested without any context at all.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.context import RunContext
from core.domain.results import RawResponse, ResolvedRequest


@runtime_checkable
class Operation(Protocol):
    """Minimal contract for a queue entry.

    Rules:
    - `resolve` is pure apart from reading a key file for create.
    - `decode` returns the success text or raises a `HeavercError`.
    - `describe` renders the dry-run line for an already resolved request.
    """

    kind: str

    def resolve(self, context: RunContext) -> ResolvedRequest:
        ...

    def decode(self, response: RawResponse, context: RunContext) -> str:
        ...

    def describe(self, request: ResolvedRequest) -> str:
        ...
