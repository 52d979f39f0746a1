"""Per-operation decoding of heaverd-ng responses.

Each `decode_*` function takes the raw transport response and returns the
text of a successful result, or raises a `HeavercError` describing why the
operation failed. Malformed bodies raise `DecodeError`; errors reported by
the API itself raise `ApiError` (or one of its subclasses).
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from core.domain.models import ContainerInfo, Envelope, HostContainers, HostPools, HostStats
from core.domain.results import RawResponse
from core.errors import (
    ApiError,
    ConflictError,
    DecodeError,
    NotFoundError,
    UnexpectedStatusError,
)
from core.services import formatter

MESSAGE_CONTAINER_STARTED = "Container started"
MESSAGE_CONTAINER_STOPPED = "Container stopped"
MESSAGE_CONTAINER_DESTROYED = "Container destroyed"

ModelT = TypeVar("ModelT", bound=BaseModel)

_HOSTS_CONTAINERS = TypeAdapter(dict[str, HostContainers])
_HOSTS_STATS = TypeAdapter(dict[str, HostStats])
_HOSTS_POOLS = TypeAdapter(dict[str, HostPools])


def parse_json(content: bytes) -> Any:
    try:
        return json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Invalid JSON response: {exc}") from exc


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected {model.__name__} payload: {exc}") from exc


def _parse_hosts(adapter: TypeAdapter, data: Any) -> Any:
    # A host that reports nothing comes back as null.
    if isinstance(data, dict):
        data = {host: {} if entry is None else entry for host, entry in data.items()}
    return _parse_adapter(adapter, data, "hosts")


def _parse_adapter(adapter: TypeAdapter, data: Any, what: str) -> Any:
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected {what} payload: {exc}") from exc


def parse_envelope(content: bytes) -> Envelope:
    return parse_model(Envelope, parse_json(content))


def decode_create(response: RawResponse) -> str:
    envelope = parse_envelope(response.content)
    if envelope.error:
        raise ApiError(envelope.error)
    if envelope.msg is None:
        raise DecodeError("Create response carries neither error nor msg")
    container = parse_model(ContainerInfo, envelope.msg)
    return formatter.format_created(container)


def _decode_power(response: RawResponse, operation: str, message: str) -> str:
    if response.status_code == 204:
        return message
    if response.status_code == 404:
        raise NotFoundError()
    raise UnexpectedStatusError(response.status_code, operation)


def decode_start(response: RawResponse) -> str:
    return _decode_power(response, "start", MESSAGE_CONTAINER_STARTED)


def decode_stop(response: RawResponse) -> str:
    return _decode_power(response, "stop", MESSAGE_CONTAINER_STOPPED)


def decode_destroy(response: RawResponse) -> str:
    if response.status_code == 204:
        return MESSAGE_CONTAINER_DESTROYED
    if response.status_code == 404:
        raise NotFoundError()
    if response.status_code == 409:
        envelope = parse_envelope(response.content)
        raise ConflictError(envelope.error or "Conflict")
    raise UnexpectedStatusError(response.status_code, "destroy")


def decode_all_hosts_containers(response: RawResponse) -> str:
    hosts = _parse_hosts(_HOSTS_CONTAINERS, parse_json(response.content))
    return formatter.format_all_hosts_containers(
        {name: host.containers for name, host in hosts.items()}
    )


def decode_host_containers(response: RawResponse) -> str:
    host = parse_model(HostContainers, parse_json(response.content))
    return formatter.format_containers(host.containers)


def decode_hosts(response: RawResponse) -> str:
    hosts = _parse_hosts(_HOSTS_STATS, parse_json(response.content))
    return formatter.format_hosts(hosts)


def unique_pools(hosts: dict[str, HostPools]) -> list[str]:
    """Pools of every host (hosts in name order), first occurrence kept."""

    seen: set[str] = set()
    pools: list[str] = []
    for hostname in sorted(hosts):
        for pool in hosts[hostname].pools:
            if pool in seen:
                continue
            seen.add(pool)
            pools.append(pool)
    return pools


def decode_pools(response: RawResponse) -> str:
    hosts = _parse_hosts(_HOSTS_POOLS, parse_json(response.content))
    return formatter.format_pools(unique_pools(hosts))
