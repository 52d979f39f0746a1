"""Ordered operation queue with post-hoc create parameters."""

from __future__ import annotations

from typing import Iterator, Sequence

from core.interfaces.operation import Operation
from core.services.operations import Create


class OperationQueue:
    """Operations in enqueue order.

    The `set_*` helpers attach parameters to every `Create` already queued,
    not only the latest one. A run normally queues a single create, so the
    two readings agree; operations enqueued after a setter call are not
    touched.
    """

    def __init__(self, operations: Sequence[Operation] = ()) -> None:
        self._operations: list[Operation] = list(operations)

    def enqueue(self, operation: Operation) -> None:
        self._operations.append(operation)

    def _creates(self) -> Iterator[Create]:
        return (op for op in self._operations if isinstance(op, Create))

    def set_image(self, images: Sequence[str]) -> None:
        for op in self._creates():
            op.images = list(images)

    def set_key_path(self, path: str) -> None:
        for op in self._creates():
            op.key_path = path

    def set_raw_key(self, key: str) -> None:
        for op in self._creates():
            op.raw_key = key

    def __iter__(self) -> Iterator[Operation]:
        return iter(list(self._operations))

    def __len__(self) -> int:
        return len(self._operations)
