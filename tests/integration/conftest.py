"""Integration test fixtures.

Registry downloads are served by a respx router standing in for
data.iana.org and the experimental service provider host. Each route is
named after its registry type, so tests can inspect or re-mock one file:
``iana["dns"].call_count``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator

import httpx
import pytest
import respx

from rdap_bootstrap.client import BootstrapClient
from rdap_bootstrap.config import DEFAULT_BASE_URL, EXPERIMENTAL_BASE_URL
from rdap_bootstrap.models import RegistryType


@pytest.fixture()
def iana(load_fixture: Callable[[str], bytes]) -> Iterator[respx.MockRouter]:
    with respx.mock(assert_all_called=False) as router:
        for registry_type in RegistryType:
            base_url = (
                EXPERIMENTAL_BASE_URL
                if registry_type is RegistryType.SERVICE_PROVIDER
                else DEFAULT_BASE_URL
            )
            router.get(base_url + registry_type.filename, name=registry_type.value).mock(
                return_value=httpx.Response(
                    200, content=load_fixture(f"bootstrap/{registry_type.filename}")
                )
            )
        yield router


@pytest.fixture()
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def client(http_client: httpx.AsyncClient, iana: respx.MockRouter) -> BootstrapClient:
    """Client with the default in-memory cache and mocked downloads."""
    return BootstrapClient(http_client)
