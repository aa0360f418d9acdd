from __future__ import annotations

import re
from bisect import bisect_left

import structlog

from rdap_bootstrap.errors import BootstrapError, ErrorCode
from rdap_bootstrap.models.registry import Answer, ASNRange, RegistryFile
from rdap_bootstrap.registries.base import parse_for

log = structlog.get_logger()

_MAX_ASN = 2**32 - 1
_ASN_QUERY = re.compile(r"^(?:as)?(\d+)$", re.IGNORECASE | re.ASCII)


def parse_asn(query: str) -> int:
    """Parse "1234", "AS1234" or "as1234" into an AS number."""
    match = _ASN_QUERY.match(query.strip())
    if match is None or int(match.group(1)) > _MAX_ASN:
        raise BootstrapError(ErrorCode.INVALID_QUERY, f"Invalid AS number: {query!r}")
    return int(match.group(1))


def parse_asn_range(key: str) -> tuple[int, int]:
    """Parse a registry key ("1-100" or "7") into an ordered (min, max) pair."""
    parts = key.split("-")
    if len(parts) not in (1, 2) or not all(p.isdigit() for p in parts):
        raise ValueError(f"Malformed ASN range: {key!r}")

    min_asn = int(parts[0])
    max_asn = int(parts[-1])
    if max(min_asn, max_asn) > _MAX_ASN:
        raise ValueError(f"ASN out of range: {key!r}")

    if min_asn > max_asn:
        min_asn, max_asn = max_asn, min_asn

    return min_asn, max_asn


class ASNRegistry:
    """Autonomous System number bootstrap registry (RFC 7484 section 5.3)."""

    def __init__(self, file: RegistryFile) -> None:
        self.file = file

        ranges: list[ASNRange] = []
        for key, urls in file.entries.items():
            try:
                min_asn, max_asn = parse_asn_range(key)
            except ValueError:
                log.debug("asn_range_skipped", key=key)
                continue
            ranges.append(ASNRange(min_asn=min_asn, max_asn=max_asn, urls=urls))

        ranges.sort(key=lambda r: r.min_asn)

        self.asns: tuple[ASNRange, ...] = tuple(ranges)
        self._max_asns = [r.max_asn for r in ranges]

    @classmethod
    def from_json(cls, data: bytes) -> ASNRegistry:
        return cls(parse_for("ASN", data))

    def lookup(self, query: str) -> Answer:
        asn = parse_asn(query)

        index = bisect_left(self._max_asns, asn)
        if index < len(self.asns) and self.asns[index].min_asn <= asn:
            match = self.asns[index]
            return Answer(query=str(asn), entry=str(match), urls=match.urls)

        return Answer(query=str(asn))
