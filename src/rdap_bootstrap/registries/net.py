from __future__ import annotations

import ipaddress
from bisect import bisect_right

import structlog

from rdap_bootstrap.errors import BootstrapError, ErrorCode
from rdap_bootstrap.models.registry import Answer, NetEntry, RegistryFile
from rdap_bootstrap.registries.base import parse_for

log = structlog.get_logger()

_MAX_PREFIX_LEN = {4: 32, 6: 128}


class NetRegistry:
    """IPv4 or IPv6 bootstrap registry (RFC 7484 sections 5.1 and 5.2).

    Entries are bucketed by prefix length, each bucket sorted by network
    address. A lookup searches buckets from the most specific applicable
    prefix length downwards, so the first hit is the longest-prefix match.
    """

    def __init__(self, file: RegistryFile, ip_version: int) -> None:
        if ip_version not in _MAX_PREFIX_LEN:
            raise ValueError(f"Unknown IP version {ip_version}")

        self.file = file
        self.ip_version = ip_version

        buckets: dict[int, list[NetEntry]] = {}
        for cidr, urls in file.entries.items():
            try:
                network = ipaddress.ip_network(cidr, strict=False)
            except ValueError:
                log.debug("network_entry_skipped", key=cidr, reason="unparsable")
                continue
            if network.version != ip_version:
                log.debug("network_entry_skipped", key=cidr, reason="address_family")
                continue
            buckets.setdefault(network.prefixlen, []).append(NetEntry(network, urls))

        self.networks: dict[int, tuple[NetEntry, ...]] = {}
        self._starts: dict[int, list[int]] = {}
        for prefix_len, entries in buckets.items():
            entries.sort(key=lambda e: int(e.network.network_address))
            self.networks[prefix_len] = tuple(entries)
            self._starts[prefix_len] = [int(e.network.network_address) for e in entries]

        self._prefix_lens = sorted(self.networks, reverse=True)

    @classmethod
    def from_json(cls, data: bytes, ip_version: int) -> NetRegistry:
        return cls(parse_for(f"IPv{ip_version}", data), ip_version)

    def lookup(self, query: str) -> Answer:
        try:
            if "/" in query:
                lookup_net = ipaddress.ip_network(query, strict=False)
            else:
                # Bare address: a /32 or /128 network.
                lookup_net = ipaddress.ip_network(ipaddress.ip_address(query))
        except ValueError as exc:
            raise BootstrapError(ErrorCode.INVALID_QUERY, f"Invalid IP network: {exc}") from exc

        query = str(lookup_net)

        if lookup_net.version != self.ip_version:
            raise BootstrapError(
                ErrorCode.ADDRESS_FAMILY_MISMATCH,
                f"Lookup address {query!r} is not an IPv{self.ip_version} address",
            )

        start = int(lookup_net.network_address)

        for prefix_len in self._prefix_lens:
            # A containing network is never more specific than the query itself.
            if prefix_len > lookup_net.prefixlen:
                continue

            index = bisect_right(self._starts[prefix_len], start) - 1
            if index < 0:
                continue

            entry = self.networks[prefix_len][index]
            if lookup_net.network_address in entry.network:
                return Answer(query=query, entry=str(entry.network), urls=entry.urls)

        return Answer(query=query)
