"""Queue entries: one class per user intent.

Each class implements `core.interfaces.operation.Operation`. Operations hold
only their own parameters; identifiers and the endpoint come from the
`RunContext` when the operation is resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from adapters.ssh_keys import resolve_key
from core.domain.context import RunContext
from core.domain.results import RawResponse, ResolvedRequest
from core.services import decoder, formatter, resolver


class _Describe:
    """Dry-run rendering shared by the parameterless operations."""

    def describe(self, request: ResolvedRequest) -> str:
        return formatter.format_dry_run(request)


@dataclass
class Create:
    images: list[str] = field(default_factory=list)
    key_path: str | None = None
    raw_key: str | None = None

    kind = "create"

    def resolve(self, context: RunContext) -> ResolvedRequest:
        template = resolver.CREATE_IN_POOL_PATH if context.pool_name else resolver.CREATE_PATH
        return ResolvedRequest(
            method="POST",
            url=resolver.api_url(template, context),
            body={
                "image": list(self.images),
                "key": resolve_key(raw_key=self.raw_key, key_path=self.key_path),
            },
        )

    def decode(self, response: RawResponse, context: RunContext) -> str:
        return decoder.decode_create(response)

    def describe(self, request: ResolvedRequest) -> str:
        # Show the key path rather than the file contents.
        return formatter.format_dry_run(
            request,
            images=self.images,
            key=self.raw_key or self.key_path,
        )


@dataclass
class Start(_Describe):
    kind = "start"

    def resolve(self, context: RunContext) -> ResolvedRequest:
        return ResolvedRequest("POST", resolver.api_url(resolver.START_PATH, context))

    def decode(self, response: RawResponse, context: RunContext) -> str:
        return decoder.decode_start(response)


@dataclass
class Stop(_Describe):
    kind = "stop"

    def resolve(self, context: RunContext) -> ResolvedRequest:
        return ResolvedRequest("POST", resolver.api_url(resolver.STOP_PATH, context))

    def decode(self, response: RawResponse, context: RunContext) -> str:
        return decoder.decode_stop(response)


@dataclass
class Destroy(_Describe):
    kind = "destroy"

    def resolve(self, context: RunContext) -> ResolvedRequest:
        return ResolvedRequest("DELETE", resolver.api_url(resolver.DESTROY_PATH, context))

    def decode(self, response: RawResponse, context: RunContext) -> str:
        return decoder.decode_destroy(response)


@dataclass
class ListContainers(_Describe):
    """Containers of every host, or of `context.host_name` when set."""

    kind = "list-containers"

    def resolve(self, context: RunContext) -> ResolvedRequest:
        template = resolver.HOST_STATS_PATH if context.host_name else resolver.HOSTS_PATH
        return ResolvedRequest("GET", resolver.api_url(template, context))

    def decode(self, response: RawResponse, context: RunContext) -> str:
        if context.host_name:
            return decoder.decode_host_containers(response)
        return decoder.decode_all_hosts_containers(response)


@dataclass
class ListHosts(_Describe):
    kind = "list-hosts"

    def resolve(self, context: RunContext) -> ResolvedRequest:
        return ResolvedRequest("GET", resolver.api_url(resolver.HOSTS_PATH, context))

    def decode(self, response: RawResponse, context: RunContext) -> str:
        return decoder.decode_hosts(response)


@dataclass
class ListPools(_Describe):
    kind = "list-pools"

    def resolve(self, context: RunContext) -> ResolvedRequest:
        return ResolvedRequest("GET", resolver.api_url(resolver.HOSTS_PATH, context))

    def decode(self, response: RawResponse, context: RunContext) -> str:
        return decoder.decode_pools(response)
