"""Shared fixtures: bootstrap registry snapshots and registries built from them."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from rdap_bootstrap.registries import (
    ASNRegistry,
    DNSRegistry,
    NetRegistry,
    ServiceProviderRegistry,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def registry_json(services: list[list[list[str]]], **fields: str) -> bytes:
    """Serialise a minimal registry document for inline test data."""
    return json.dumps({**fields, "services": services}).encode()


@pytest.fixture()
def load_fixture() -> Callable[[str], bytes]:
    """Return a loader for files under tests/fixtures, e.g. ``bootstrap/dns.json``."""

    def _load(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()

    return _load


@pytest.fixture()
def make_registry_json() -> Callable[..., bytes]:
    return registry_json


@pytest.fixture()
def dns_registry(load_fixture: Callable[[str], bytes]) -> DNSRegistry:
    return DNSRegistry.from_json(load_fixture("bootstrap/dns.json"))


@pytest.fixture()
def asn_registry(load_fixture: Callable[[str], bytes]) -> ASNRegistry:
    return ASNRegistry.from_json(load_fixture("bootstrap/asn.json"))


@pytest.fixture()
def ipv4_registry(load_fixture: Callable[[str], bytes]) -> NetRegistry:
    return NetRegistry.from_json(load_fixture("bootstrap/ipv4.json"), ip_version=4)


@pytest.fixture()
def ipv6_registry(load_fixture: Callable[[str], bytes]) -> NetRegistry:
    return NetRegistry.from_json(load_fixture("bootstrap/ipv6.json"), ip_version=6)


@pytest.fixture()
def service_provider_registry(load_fixture: Callable[[str], bytes]) -> ServiceProviderRegistry:
    return ServiceProviderRegistry.from_json(load_fixture("bootstrap/service_provider.json"))
