from __future__ import annotations

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

import httpx
from pydantic import BaseModel, field_validator


class RegistryType(StrEnum):
    """Bootstrap registry kinds, one published JSON document each."""

    DNS = "dns"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    ASN = "asn"
    SERVICE_PROVIDER = "service_provider"

    @property
    def filename(self) -> str:
        """Document filename, also used as the cache key. e.g. ``asn.json``."""
        return f"{self.value}.json"


@dataclass(frozen=True)
class RegistryFile:
    """A parsed bootstrap registry document ({asn,dns,ipv4,ipv6}.json).

    ``entries`` maps each service key to its RDAP base URLs, e.g. in
    ipv6.json: ``"2c00::/12" -> (https://rdap.afrinic.net/rdap/, ...)``.
    Keys never map to an empty tuple. ``entries`` is a read-only view.
    """

    description: str
    publication: str
    version: str
    entries: Mapping[str, tuple[httpx.URL, ...]]
    json: bytes = field(repr=False)


@dataclass(frozen=True)
class ASNRange:
    """A range of AS numbers and their RDAP base URLs.

    A single AS number has ``min_asn == max_asn``.
    """

    min_asn: int
    max_asn: int
    urls: tuple[httpx.URL, ...]

    def __str__(self) -> str:
        if self.min_asn == self.max_asn:
            return f"AS{self.min_asn}"
        return f"AS{self.min_asn}-AS{self.max_asn}"


@dataclass(frozen=True)
class NetEntry:
    network: ipaddress.IPv4Network | ipaddress.IPv6Network
    urls: tuple[httpx.URL, ...]


@dataclass(frozen=True)
class Answer:
    """Result of bootstrapping a single query.

    ``query`` is the canonicalised input (lowercased domain, CIDR form of an
    address, bare AS number). ``entry`` is the matching service key, empty
    when nothing matched, in which case ``urls`` is empty too.
    """

    query: str
    entry: str = ""
    urls: tuple[httpx.URL, ...] = ()


class Question(BaseModel):
    registry_type: RegistryType
    query: str
    timeout: float | None = None  # Seconds; bounds any download the lookup triggers

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("timeout must be > 0")
        return v
