"""Typed bootstrap registries, one per ``RegistryType``."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from rdap_bootstrap.models.registry import RegistryType
from rdap_bootstrap.registries.asn import ASNRegistry
from rdap_bootstrap.registries.base import Registry
from rdap_bootstrap.registries.dns import DNSRegistry
from rdap_bootstrap.registries.net import NetRegistry
from rdap_bootstrap.registries.service_provider import ServiceProviderRegistry

# registry type → constructor from raw JSON bytes
REGISTRY_BUILDERS: dict[RegistryType, Callable[[bytes], Registry]] = {
    RegistryType.DNS: DNSRegistry.from_json,
    RegistryType.IPV4: partial(NetRegistry.from_json, ip_version=4),
    RegistryType.IPV6: partial(NetRegistry.from_json, ip_version=6),
    RegistryType.ASN: ASNRegistry.from_json,
    RegistryType.SERVICE_PROVIDER: ServiceProviderRegistry.from_json,
}


def build_registry(registry_type: RegistryType, data: bytes) -> Registry:
    """Build the typed registry for ``registry_type`` from a JSON document."""
    return REGISTRY_BUILDERS[registry_type](data)


__all__ = [
    "Registry",
    "DNSRegistry",
    "NetRegistry",
    "ASNRegistry",
    "ServiceProviderRegistry",
    "REGISTRY_BUILDERS",
    "build_registry",
]
