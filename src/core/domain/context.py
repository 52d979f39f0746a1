"""Run context shared by every operation in the queue."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API_BASE_URL = "http://localhost:8081/"
API_VERSION = "v2"


@dataclass(frozen=True)
class RunContext:
    """Identifiers and endpoint for one run.

    Built once by the caller before the queue runs and read-only afterwards.
    Empty strings mean "not given"; a container operation with an empty name
    resolves to a path with an empty segment, as the server expects the
    caller to have validated that.
    """

    container_name: str = ""
    pool_name: str = ""
    host_name: str = ""
    api_base_url: str | None = None
    dry_run: bool = False

    @property
    def base_url(self) -> str:
        base = self.api_base_url or DEFAULT_API_BASE_URL
        if not base.endswith("/"):
            base += "/"
        return base
