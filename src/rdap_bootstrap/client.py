"""RDAP bootstrap client.

Given a query, finds the RDAP server base URLs which can answer it, using the
Service Registry files IANA publishes at https://data.iana.org/rdap/ (RFC 7484).

Basic usage::

    async with open_client() as client:
        answer = await client.lookup(Question(registry_type=RegistryType.DNS, query="google.cz"))
        for url in answer.urls:
            print(url)

Registry files are downloaded on first use and kept in the client's
``RegistryCache`` (24 hours by default). A long lived client therefore
downloads each file at most once per cache timeout, however many lookups it
serves. ``download()`` refreshes a file explicitly.

With a ``DiskCache``, several clients (or processes) can share one cache
directory: a client that finds a file newer than the one it last loaded
re-reads it from disk instead of downloading it.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

import httpx
import structlog

from rdap_bootstrap.cache import MemoryCache, build_cache
from rdap_bootstrap.config import DEFAULT_BASE_URL, BootstrapSettings, Settings
from rdap_bootstrap.errors import BootstrapError, ErrorCode
from rdap_bootstrap.fetcher import Fetcher, build_http_client
from rdap_bootstrap.models.cache import FileState
from rdap_bootstrap.models.registry import RegistryType
from rdap_bootstrap.registries import build_registry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from rdap_bootstrap.cache import RegistryCache
    from rdap_bootstrap.models.registry import Answer, Question
    from rdap_bootstrap.registries import (
        ASNRegistry,
        DNSRegistry,
        NetRegistry,
        Registry,
        ServiceProviderRegistry,
    )

log = structlog.get_logger()

# Registries fetched by download_all(). The experimental service provider
# registry is left out.
STANDARD_REGISTRIES = (RegistryType.ASN, RegistryType.DNS, RegistryType.IPV4, RegistryType.IPV6)


class BootstrapClient:
    """Resolves queries to RDAP base URLs, downloading registry files as needed.

    Each client owns its cache handle and its in-memory registries. Registries
    are replaced wholesale when a newer file is loaded, never mutated.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cache: RegistryCache | None = None,
        settings: BootstrapSettings | None = None,
    ) -> None:
        self.cache: RegistryCache = cache if cache is not None else MemoryCache()
        self._settings = settings or BootstrapSettings()
        self._fetcher = Fetcher(http_client)
        self._registries: dict[RegistryType, Registry | None] = dict.fromkeys(RegistryType)

    def registry_url(self, registry_type: RegistryType) -> str:
        """URL the registry file for ``registry_type`` is downloaded from."""
        base_url = self._settings.base_url
        if registry_type is RegistryType.SERVICE_PROVIDER and base_url == DEFAULT_BASE_URL:
            base_url = self._settings.service_provider_base_url

        return str(httpx.URL(base_url).join(registry_type.filename))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def lookup(self, question: Question) -> Answer:
        """Return the RDAP base URLs for ``question.query``.

        Downloads the registry file if it isn't cached or the cached copy has
        expired. ``question.timeout`` bounds that download.
        """
        registry_type = question.registry_type
        # Cache calls may touch the filesystem; keep them off the event loop.
        state = await asyncio.to_thread(self.cache.state, registry_type.filename)
        registry = self._registries[registry_type]

        if state is FileState.EXPIRED:
            registry = await self.download(registry_type, timeout=question.timeout)
        elif state is FileState.SHOULD_RELOAD or registry is None:
            reloaded = None
            if state is not FileState.ABSENT:
                reloaded = await asyncio.to_thread(self._reload_from_cache, registry_type)
            if reloaded is None:
                reloaded = await self.download(registry_type, timeout=question.timeout)
            registry = reloaded

        return registry.lookup(question.query)

    # ------------------------------------------------------------------
    # Downloads
    # ------------------------------------------------------------------

    async def download(self, registry_type: RegistryType, timeout: float | None = None) -> Registry:
        """Download one registry file, save it to the cache, and install it.

        Returns the installed registry. Cache freshness is not consulted. A
        malformed document or a cache write failure raises without replacing
        the current registry.
        """
        url = self.registry_url(registry_type)

        try:
            async with asyncio.timeout(timeout):
                data = await self._fetcher.fetch(url)
        except TimeoutError as exc:
            raise BootstrapError(
                ErrorCode.DOWNLOAD_TIMEOUT,
                f"Timed out after {timeout}s downloading {url}",
                recoverable=True,
            ) from exc

        registry = self._build(registry_type, data)
        await asyncio.to_thread(self.cache.save, registry_type.filename, data)
        self._registries[registry_type] = registry

        log.info(
            "registry_downloaded",
            registry=registry_type.value,
            url=url,
            entries=len(registry.file.entries),
        )
        return registry

    async def download_all(self, timeout: float | None = None) -> None:
        """Download the ASN, DNS, IPv4 and IPv6 registry files.

        Stops at the first failure. ``timeout`` applies to each download.
        """
        for registry_type in STANDARD_REGISTRIES:
            await self.download(registry_type, timeout=timeout)

    # ------------------------------------------------------------------
    # Registry accessors (never touch the network)
    # ------------------------------------------------------------------

    def registry(self, registry_type: RegistryType) -> Registry | None:
        """Return the current registry, or None if it hasn't been loaded.

        Picks up a newer cached file first if the cache has one.
        """
        if self.cache.state(registry_type.filename) is FileState.SHOULD_RELOAD:
            self._reload_from_cache(registry_type)
        return self._registries[registry_type]

    def asn(self) -> ASNRegistry | None:
        return cast("ASNRegistry | None", self.registry(RegistryType.ASN))

    def dns(self) -> DNSRegistry | None:
        return cast("DNSRegistry | None", self.registry(RegistryType.DNS))

    def ipv4(self) -> NetRegistry | None:
        return cast("NetRegistry | None", self.registry(RegistryType.IPV4))

    def ipv6(self) -> NetRegistry | None:
        return cast("NetRegistry | None", self.registry(RegistryType.IPV6))

    def service_provider(self) -> ServiceProviderRegistry | None:
        return cast("ServiceProviderRegistry | None", self.registry(RegistryType.SERVICE_PROVIDER))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reload_from_cache(self, registry_type: RegistryType) -> Registry | None:
        """Rebuild a registry from its cached file. Returns None on failure."""
        try:
            data = self.cache.load(registry_type.filename)
            registry = self._build(registry_type, data)
        except BootstrapError as exc:
            log.warning(
                "registry_reload_failed",
                registry=registry_type.value,
                code=exc.code.value,
                error=exc.message,
            )
            return None

        self._registries[registry_type] = registry
        log.debug("registry_reloaded", registry=registry_type.value)
        return registry

    @staticmethod
    def _build(registry_type: RegistryType, data: bytes) -> Registry:
        if not data:
            raise BootstrapError(
                ErrorCode.EMPTY_REGISTRY_FILE, f"Empty {registry_type.filename} registry file"
            )
        return build_registry(registry_type, data)


@asynccontextmanager
async def open_client(settings: Settings | None = None) -> AsyncIterator[BootstrapClient]:
    """Build a client (HTTP client and cache included) from settings."""
    settings = settings or Settings()

    async with build_http_client(settings.http) as http_client:
        yield BootstrapClient(
            http_client,
            cache=build_cache(settings.cache),
            settings=settings.bootstrap,
        )
