"""httpx wrapper for the heaverd-ng API.

The builder centralizes timeout and headers so every call behaves the same;
tests swap the transport for an `httpx.MockTransport`.
"""

from __future__ import annotations

import json
import logging

import httpx

from core.config import AppSettings
from core.domain.results import RawResponse, ResolvedRequest
from core.errors import TransportError

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` configured from `settings`."""

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        },
        transport=transport,
    )


async def execute(client: httpx.AsyncClient, request: ResolvedRequest) -> RawResponse:
    """Send `request` and return its status and full body.

    Status codes are not interpreted here. Any failure to get a complete
    response (connect, DNS, timeout, read) is raised as `TransportError`.
    """

    content: bytes | None = None
    headers: dict[str, str] = {}
    if request.method == "POST" and request.body is not None:
        content = json.dumps(request.body).encode("utf-8")
        headers["Content-Type"] = "application/json"

    logger.debug("%s %s", request.method, request.url)
    try:
        response = await client.request(
            request.method,
            request.url,
            content=content,
            headers=headers,
        )
    except httpx.TransportError as exc:
        raise TransportError(f"{request.method} {request.url}: {exc}") from exc
    except httpx.InvalidURL as exc:
        raise TransportError(f"Invalid URL {request.url}: {exc}") from exc

    logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
    return RawResponse(status_code=response.status_code, content=response.content)
