"""Bootstrap registry document parsing.

The document format is specified in RFC 7484 section 3 (and the draft object
tag registry for service providers)::

    {
        "description": "RDAP bootstrap file for Domain Name System registrations",
        "publication": "2024-01-01T00:00:00Z",
        "version": "1.0",
        "services": [
            [["com", "net"], ["https://rdap.verisign.com/com/v1/"]],
            [["org"], ["https://rdap.publicinterestregistry.org/rdap/"]],
            ...
        ]
    }
"""

from __future__ import annotations

from types import MappingProxyType

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from rdap_bootstrap.errors import BootstrapError, ErrorCode
from rdap_bootstrap.models.registry import RegistryFile

log = structlog.get_logger()


class _RegistryDocument(BaseModel):
    description: str | None = None
    publication: str | None = None
    version: str | None = None
    services: list[list[list[str]]]


def parse_registry_file(data: bytes) -> RegistryFile:
    """Parse a registry JSON document into a ``RegistryFile``.

    Unparsable URLs are dropped; a service whose URLs are all dropped
    contributes no keys. Raises ``BootstrapError(MALFORMED_REGISTRY)`` for
    invalid JSON or a structurally bad ``services`` array.
    """
    try:
        doc = _RegistryDocument.model_validate_json(data)
    except ValidationError as exc:
        raise BootstrapError(
            ErrorCode.MALFORMED_REGISTRY,
            f"Malformed bootstrap: {exc.error_count()} validation error(s): "
            f"{exc.errors()[0]['msg']}",
        ) from exc

    entries: dict[str, tuple[httpx.URL, ...]] = {}

    for service in doc.services:
        if len(service) != 2:
            raise BootstrapError(
                ErrorCode.MALFORMED_REGISTRY, "Malformed bootstrap (bad services array)"
            )

        keys, raw_urls = service

        urls: list[httpx.URL] = []
        for raw_url in raw_urls:
            try:
                urls.append(httpx.URL(raw_url))
            except httpx.InvalidURL:
                log.debug("registry_url_skipped", url=raw_url)

        if urls:
            for key in keys:
                entries[key] = tuple(urls)

    return RegistryFile(
        description=doc.description or "",
        publication=doc.publication or "",
        version=doc.version or "",
        entries=MappingProxyType(entries),
        json=data,
    )
