"""Unit tests for rdap_bootstrap.registries.dns."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from rdap_bootstrap.errors import BootstrapError, ErrorCode
from rdap_bootstrap.registries import DNSRegistry


class TestDNSLookup:
    def test_exact_tld(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("br")
        assert answer.entry == "br"
        assert [str(u) for u in answer.urls] == ["https://rdap.registro.br/"]

    def test_domain_under_tld(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("example.br")
        assert answer.entry == "br"
        assert [str(u) for u in answer.urls] == ["https://rdap.registro.br/"]

    def test_longest_registered_suffix_wins(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("sub.example.com")
        assert answer.entry == "example.com"
        assert [str(u) for u in answer.urls] == [
            "https://rdap.example.com/v1/",
            "http://rdap.example.com/v1/",
        ]

    def test_sibling_falls_back_to_tld(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("other.com")
        assert answer.entry == "com"

    def test_no_match(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("xyz")
        assert answer.query == "xyz"
        assert answer.entry == ""
        assert answer.urls == ()

    def test_deep_name_no_match(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("a.b.c.invalid")
        assert answer.entry == ""
        assert answer.urls == ()

    def test_canonicalises_case_and_trailing_dot(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("WWW.Example.CZ.")
        assert answer.query == "www.example.cz"
        assert answer.entry == "cz"

    def test_empty_query_without_root_entry(self, dns_registry: DNSRegistry) -> None:
        answer = dns_registry.lookup("")
        assert answer.entry == ""
        assert answer.urls == ()


class TestDNSRootZone:
    def test_root_entry_catches_everything(self, make_registry_json: Callable[..., bytes]) -> None:
        registry = DNSRegistry.from_json(
            make_registry_json(
                [
                    [[""], ["https://rdap.root.example/"]],
                    [["com"], ["https://rdap.verisign.com/com/v1/"]],
                ]
            )
        )
        assert registry.lookup("example.org").entry == ""
        assert [str(u) for u in registry.lookup("example.org").urls] == [
            "https://rdap.root.example/"
        ]
        assert registry.lookup("example.com").entry == "com"


class TestDNSRegistryConstruction:
    def test_entries_lists_supported_tlds(self, dns_registry: DNSRegistry) -> None:
        assert sorted(dns_registry.entries) == ["br", "com", "cz", "example.com", "net", "org"]

    def test_malformed_document_raises(self) -> None:
        with pytest.raises(BootstrapError) as exc_info:
            DNSRegistry.from_json(b'{"services": [[["com"]]]}')
        assert exc_info.value.code == ErrorCode.MALFORMED_REGISTRY
        assert exc_info.value.message.startswith("Error parsing DNS registry")

    def test_reparse_answers_identically(self, load_fixture: Callable[[str], bytes]) -> None:
        data = load_fixture("bootstrap/dns.json")
        first = DNSRegistry.from_json(data)
        second = DNSRegistry.from_json(data)
        for query in ("example.br", "sub.example.com", "xyz", "net"):
            assert first.lookup(query) == second.lookup(query)

    def test_entries_are_read_only(self, dns_registry: DNSRegistry) -> None:
        with pytest.raises(TypeError):
            dns_registry.entries["zz"] = ()  # type: ignore[index]
        with pytest.raises(AttributeError):
            dns_registry.entries.clear()  # type: ignore[attr-defined]

        assert dns_registry.lookup("example.com").entry == "example.com"
        assert len(dns_registry.file.entries) == 6
