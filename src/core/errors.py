"""Error taxonomy for the request pipeline.

Every `HeavercError` raised while handling one operation is captured as a
`Failure` for that operation; the rest of the queue keeps running.
`UnresolvedPlaceholderError` is deliberately outside the hierarchy: it means
a path template is wrong and must surface immediately.
"""

from __future__ import annotations

ERROR_NO_SUCH_CONTAINER = "No such container"


class HeavercError(Exception):
    """Base exception for client errors."""

    code = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(HeavercError):
    """Connection, timeout, DNS or read failure."""

    code = "transport"


class DecodeError(HeavercError):
    """Response body is not JSON or does not have the expected shape."""

    code = "decode"


class ApiError(HeavercError):
    """The API reported an error in the `error` field of its envelope."""

    code = "api"


class ConflictError(ApiError):
    """409 with an envelope explaining the conflict."""

    code = "conflict"


class NotFoundError(HeavercError):
    code = "not_found"

    def __init__(self, message: str = ERROR_NO_SUCH_CONTAINER) -> None:
        super().__init__(message)


class UnexpectedStatusError(HeavercError):
    """Status code outside the set defined for the operation."""

    code = "unexpected_status"

    def __init__(self, status_code: int, operation: str) -> None:
        self.status_code = status_code
        self.operation = operation
        super().__init__(f"Unexpected status {status_code} for {operation}")


class KeyFileError(HeavercError):
    code = "key_file"


class ConfigError(HeavercError):
    code = "config"


class OperationCancelledError(HeavercError):
    code = "cancelled"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} cancelled")


class UnresolvedPlaceholderError(RuntimeError):
    """A path template names an unknown placeholder or repeats one."""

    def __init__(self, template: str, placeholder: str) -> None:
        self.template = template
        self.placeholder = placeholder
        super().__init__(f"cannot resolve {placeholder!r} in {template!r}")
