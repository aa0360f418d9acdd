from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from rdap_bootstrap.errors import BootstrapError, ErrorCode
from rdap_bootstrap.registry_file import parse_registry_file

if TYPE_CHECKING:
    from rdap_bootstrap.models.registry import Answer, RegistryFile


class Registry(Protocol):
    """A queryable bootstrap registry built from one ``RegistryFile``."""

    file: RegistryFile

    def lookup(self, query: str) -> Answer: ...


def parse_for(kind: str, data: bytes) -> RegistryFile:
    """Parse ``data``, prefixing any parse error with the registry kind."""
    try:
        return parse_registry_file(data)
    except BootstrapError as exc:
        raise BootstrapError(
            ErrorCode.MALFORMED_REGISTRY, f"Error parsing {kind} registry: {exc.message}"
        ) from exc
