"""Domain models for heaverd-ng payloads (Pydantic v2).

The API is not consistent about field naming (`CpuCapacity`, `cpucapacity`,
`cpu_capacity`), so incoming keys are normalized: lower-cased with
underscores removed, then matched against the equally normalized field
names. Null and missing values both fall back to the field default (zero,
empty string, empty collection). Nulls nested inside maps and lists are
dropped or read as empty.

Models describe *what* the API returns, not *how* it is fetched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict


def _normalize_key(key: str) -> str:
    return key.replace("_", "").lower()


def _without_nulls(value: Any) -> Any:
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


class ApiModel(BaseModel):
    """Base model with case/underscore-insensitive field matching."""

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=_normalize_key,
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                _normalize_key(k) if isinstance(k, str) else k: v
                for k, v in data.items()
                if v is not None
            }
        return data


class Envelope(ApiModel):
    """`{"error": ..., "msg": ...}` wrapper used by create and destroy."""

    error: str = ""
    msg: Any = None


class ContainerInfo(ApiModel):
    name: str = Field(..., description="Container name.")
    host: str = Field(default="", description="Host the container lives on.")
    status: str = Field(default="", description="Lifecycle status reported by the host.")
    ip: str = Field(default="", description="Primary address, when reported flat.")
    ips: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Addresses by interface name.",
    )

    @field_validator("ips", mode="before")
    @classmethod
    def _empty_null_interfaces(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                iface: [addr for addr in addrs if addr is not None] if addrs is not None else []
                for iface, addrs in value.items()
            }
        return value

    def primary_address(self) -> str:
        """`ip`, else the first eth0 address, else the first address found."""

        if self.ip:
            return self.ip
        eth0 = self.ips.get("eth0") or []
        if eth0:
            return eth0[0]
        for iface in sorted(self.ips):
            if self.ips[iface]:
                return self.ips[iface][0]
        return ""

    def all_addresses(self) -> list[str]:
        if self.ip:
            return [self.ip]
        return [addr for iface in sorted(self.ips) for addr in self.ips[iface]]


class HostContainers(ApiModel):
    """Container listing of one host (`/h/:hid/stats` or one entry of `/h`)."""

    containers: dict[str, ContainerInfo] = Field(default_factory=dict)

    @field_validator("containers", mode="before")
    @classmethod
    def _drop_null_containers(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {name: info for name, info in value.items() if info is not None}
        return value


class HostPools(ApiModel):
    pools: list[str] = Field(default_factory=list)

    @field_validator("pools", mode="before")
    @classmethod
    def _drop_null_pools(cls, value: Any) -> Any:
        return _without_nulls(value)


class HostStats(HostContainers):
    """Capacity and usage of one host as reported by `/h`.

    RAM and disk figures are in KiB.
    """

    score: float = 0.0
    cpu_capacity: int = 0
    cpu_usage: int = 0
    ram_capacity: int = 0
    ram_free: int = 0
    disk_capacity: int = 0
    disk_free: int = 0
    pools: list[str] = Field(default_factory=list)

    @field_validator("pools", mode="before")
    @classmethod
    def _drop_null_pools(cls, value: Any) -> Any:
        return _without_nulls(value)

    @property
    def cpu_free(self) -> int:
        return self.cpu_capacity - self.cpu_usage
