"""Deterministic text rendering for API results.

Map-keyed entries (hosts, containers) are always emitted in key order so the
same server state prints the same way on every run. Multi-line results are
newline-joined without a trailing newline.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from core.domain.models import ContainerInfo, HostStats
from core.domain.results import ResolvedRequest


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def container_lines(containers: Sequence[ContainerInfo]) -> list[str]:
    """One aligned line per container, in the given order.

    Names are right-justified to the longest name in `containers`.
    """

    width = max((len(c.name) for c in containers), default=0)
    return [
        f"{c.name:>{width}} (on {c.host}): {c.status}, ip: {c.primary_address()}"
        for c in containers
    ]


def sorted_containers(containers: Mapping[str, ContainerInfo]) -> list[ContainerInfo]:
    return [containers[key] for key in sorted(containers)]


def format_containers(containers: Mapping[str, ContainerInfo]) -> str:
    return join_lines(container_lines(sorted_containers(containers)))


def format_all_hosts_containers(hosts: Mapping[str, Mapping[str, ContainerInfo]]) -> str:
    """Flatten host listings (hosts in name order) into one aligned block."""

    flat: list[ContainerInfo] = []
    for hostname in sorted(hosts):
        flat.extend(sorted_containers(hosts[hostname]))
    return join_lines(container_lines(flat))


def format_host(hostname: str, stats: HostStats) -> str:
    lines = [
        hostname,
        "-" * len(hostname),
        f"score: {stats.score:.4f}/1",
        f"cpu: {stats.cpu_free}/{stats.cpu_capacity} %",
        f"ram: {stats.ram_free // 1024}/{stats.ram_capacity // 1024} MiB",
        f"disk: {stats.disk_free // 1024}/{stats.disk_capacity // 1024} MiB",
        "boxes:",
    ]
    boxes = format_containers(stats.containers)
    if boxes:
        lines.append(boxes)
    return join_lines(lines)


def format_hosts(hosts: Mapping[str, HostStats]) -> str:
    """One block per host, separated by a blank line."""

    return "\n\n".join(format_host(name, hosts[name]) for name in sorted(hosts))


def format_pools(pools: Iterable[str]) -> str:
    return join_lines(pools)


def format_created(container: ContainerInfo) -> str:
    addresses = ", ".join(container.all_addresses())
    return f"Created container {container.name} with addresses: {addresses}"


def format_dry_run(
    request: ResolvedRequest,
    *,
    images: Sequence[str] = (),
    key: str | None = None,
) -> str:
    """`METHOD URL` plus ` image=...` per image and ` key=...` when given."""

    text = f"{request.method} {request.url}"
    for image in images:
        text += f" image={image}"
    if key:
        text += f" key={key}"
    return text
