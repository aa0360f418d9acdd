from __future__ import annotations

from rdap_bootstrap.models.registry import Answer, RegistryFile
from rdap_bootstrap.registries.base import parse_for

# "~" is the current separator, "-" the one used by earlier drafts.
_TAG_SEPARATORS = ("~", "-")


class ServiceProviderRegistry:
    """Experimental entity handle (object tag) bootstrap registry.

    Handles look like ``53774930~VRSN``: the service tag after the last
    separator selects the RDAP base URLs. Missing, malformed and unknown tags
    are not errors; they produce an empty ``Answer``.
    """

    def __init__(self, file: RegistryFile) -> None:
        self.file = file

    @classmethod
    def from_json(cls, data: bytes) -> ServiceProviderRegistry:
        return cls(parse_for("Service Provider", data))

    def lookup(self, query: str) -> Answer:
        offset = max(query.rfind(sep) for sep in _TAG_SEPARATORS)
        if offset == -1 or offset == len(query) - 1:
            return Answer(query=query)

        tag = query[offset + 1 :]
        urls = self.file.entries.get(tag)
        if urls is None:
            return Answer(query=query)

        return Answer(query=query, entry=tag, urls=urls)
