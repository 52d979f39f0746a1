"""
Shared pytest fixtures for heaverc tests.

Provides:
- FakeApi: an httpx.MockTransport handler with canned per-route responses
  that records every request it receives
- RunContext fixtures with a fixed base URL
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from core.domain.context import RunContext

BASE_URL = "http://api.test:8081/"


@dataclass
class RecordedRequest:
    method: str
    url: str
    body: Optional[Any] = None


@dataclass
class FakeApi:
    """Route table keyed by (method, path) with a record of calls."""

    routes: Dict[Tuple[str, str], httpx.Response] = field(default_factory=dict)
    calls: List[RecordedRequest] = field(default_factory=list)

    def add(self, method: str, path: str, status: int = 200, payload: Any = None, text: str = None):
        if text is not None:
            response = httpx.Response(status, text=text)
        elif payload is not None:
            response = httpx.Response(status, json=payload)
        else:
            response = httpx.Response(status)
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append(RecordedRequest(request.method, str(request.url), body))
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(500, text="no route")
        return route

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def context():
    return RunContext(container_name="box1", api_base_url=BASE_URL)


@pytest.fixture
def dry_context():
    return RunContext(container_name="box1", api_base_url=BASE_URL, dry_run=True)
