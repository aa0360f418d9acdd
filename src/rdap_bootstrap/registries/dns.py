from __future__ import annotations

from typing import TYPE_CHECKING

from rdap_bootstrap.models.registry import Answer
from rdap_bootstrap.registries.base import parse_for

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from rdap_bootstrap.models.registry import RegistryFile


class DNSRegistry:
    """Domain name bootstrap registry (RFC 7484 section 4).

    Keys are domain labels ("com", "co.uk", or "" for the root zone). A
    lookup walks up the name one label at a time, so the longest registered
    suffix wins.
    """

    def __init__(self, file: RegistryFile) -> None:
        self.file = file

    @classmethod
    def from_json(cls, data: bytes) -> DNSRegistry:
        return cls(parse_for("DNS", data))

    @property
    def entries(self) -> Mapping[str, tuple[httpx.URL, ...]]:
        return self.file.entries

    def lookup(self, query: str) -> Answer:
        query = query.removesuffix(".").lower()

        # e.g. for an.example.com: "an.example.com", "example.com", "com", "".
        fqdn = query
        while True:
            urls = self.file.entries.get(fqdn)
            if urls is not None:
                return Answer(query=query, entry=fqdn, urls=urls)
            if fqdn == "":
                return Answer(query=query)
            _, _, fqdn = fqdn.partition(".")
