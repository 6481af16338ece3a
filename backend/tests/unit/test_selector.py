"""Tests for indicator classification and analyzer entry resolution."""

import pytest

from ioc_pivot.analyzers.registry import SEARCHERS
from ioc_pivot.models.enums import IndicatorType
from ioc_pivot.selector import RECOGNIZERS, Selector, classify, matching_types

MD5 = "d41d8cd98f00b204e9800998ecf8427e"
SHA1 = "da39a3ee5e6b4b0d3255bfef95601890afd80709"
SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
SHA512 = (
    "cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
    "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e"
)

CANONICAL = [
    ("8.8.8.8", IndicatorType.IP),
    ("2001:4860:4860::8888", IndicatorType.IPV6),
    ("example.com", IndicatorType.DOMAIN),
    ("sub.example.co.uk", IndicatorType.DOMAIN),
    ("https://example.com/path?q=1", IndicatorType.URL),
    ("user@example.com", IndicatorType.EMAIL),
    (MD5, IndicatorType.MD5),
    (SHA1, IndicatorType.SHA1),
    (SHA256, IndicatorType.SHA256),
    (SHA512, IndicatorType.SHA512),
    ("CVE-2021-44228", IndicatorType.CVE),
    ("1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa", IndicatorType.BTC),
    ("bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq", IndicatorType.BTC),
    ("0x742d35Cc6634C0532925a3b844Bc454e4438f44e", IndicatorType.ETH),
    ("AS13335", IndicatorType.ASN),
    ("UA-12345678-1", IndicatorType.GA_TRACK_ID),
    ("pub-1234567890123456", IndicatorType.GA_PUB_ID),
]


class TestClassify:

    @pytest.mark.parametrize("text,expected", CANONICAL)
    def test_canonical_forms(self, text, expected):
        assert classify(text) == expected

    @pytest.mark.parametrize("text,expected", CANONICAL)
    def test_stable_under_surrounding_whitespace(self, text, expected):
        assert classify(f"  {text}\n\t") == expected

    def test_md5_example(self):
        assert classify(MD5) == IndicatorType.MD5

    def test_hashes_case_insensitive(self):
        assert classify(SHA256.upper()) == IndicatorType.SHA256

    def test_asn_case_insensitive(self):
        assert classify("as13335") == IndicatorType.ASN

    def test_cve_case_sensitive(self):
        assert classify("cve-2021-44228") is None

    def test_uppercase_domain(self):
        assert classify("EXAMPLE.COM") == IndicatorType.DOMAIN

    def test_defanged_domain(self):
        assert classify("example[.]com") == IndicatorType.DOMAIN

    def test_defanged_url(self):
        assert classify("hxxps://evil[.]example[.]com/login") == IndicatorType.URL

    def test_whitespace_only(self):
        assert classify("   \n ") is None

    def test_empty(self):
        assert classify("") is None

    def test_free_text(self):
        assert classify("hello world") is None

    def test_no_substring_matches(self):
        assert classify("visit example.com today") is None

    def test_invalid_ipv4(self):
        assert classify("999.1.1.1") is None

    def test_wrong_hash_length(self):
        assert classify("d41d8cd98f00b204e9800998ecf8427") is None


class TestPrecedence:

    def test_md5_beats_btc(self):
        ambiguous = "1abcdef23456789abcdef123456789ab"
        assert matching_types(ambiguous) == [IndicatorType.MD5, IndicatorType.BTC]
        assert classify(ambiguous) == IndicatorType.MD5

    def test_url_beats_domain(self):
        assert IndicatorType.URL in matching_types("http://example.com")
        assert classify("http://example.com") == IndicatorType.URL

    def test_recognizer_order_is_total(self):
        types = [t for t, _ in RECOGNIZERS]
        assert len(types) == len(set(types))
        assert IndicatorType.TEXT not in types
        assert types.index(IndicatorType.SHA256) < types.index(IndicatorType.MD5)
        assert types.index(IndicatorType.URL) < types.index(IndicatorType.DOMAIN)
        assert types.index(IndicatorType.IPV6) < types.index(IndicatorType.DOMAIN)


class TestSelectorEntries:

    def test_ip_entries_follow_registry_order(self):
        entries = Selector("8.8.8.8").get_searcher_entries()
        expected = [s.name for s in SEARCHERS if s.supports(IndicatorType.IP)]
        assert [e.name for e in entries] == expected
        assert all(e.type == IndicatorType.IP for e in entries)
        assert all(e.query == "8.8.8.8" for e in entries)

    def test_shodan_url(self):
        entries = Selector("8.8.8.8").get_searcher_entries()
        shodan = next(e for e in entries if e.name == "Shodan")
        url = shodan.build()
        assert "8.8.8.8" in url
        assert "shodan.io" in url

    def test_entry_types_supported_by_analyzer(self):
        for text, _ in CANONICAL:
            selector = Selector(text)
            for entry in selector.get_searcher_entries() + selector.get_scanner_entries():
                assert entry.analyzer.supports(entry.type)

    def test_whitespace_returns_no_entries(self):
        selector = Selector("  ")
        assert selector.get_searcher_entries() == []
        assert selector.get_scanner_entries() == []

    def test_unclassified_text_falls_back_to_web_search(self):
        entries = Selector("some random phrase").get_searcher_entries()
        assert [e.name for e in entries] == ["Google", "Bing", "DuckDuckGo"]
        assert all(e.type == IndicatorType.TEXT for e in entries)

    def test_unclassified_text_has_no_scanners(self):
        assert Selector("some random phrase").get_scanner_entries() == []

    def test_include_generic_prepends_web_search(self):
        entries = Selector("example.com").get_searcher_entries(include_generic=True)
        assert [e.name for e in entries[:3]] == ["Google", "Bing", "DuckDuckGo"]
        assert entries[0].type == IndicatorType.TEXT
        assert entries[3].type == IndicatorType.DOMAIN

    def test_url_scanners(self):
        entries = Selector("https://example.com/").get_scanner_entries()
        assert [e.name for e in entries] == ["HybridAnalysis", "urlscan.io", "VirusTotal"]

    def test_btc_has_no_scanners(self):
        assert Selector("1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa").get_scanner_entries() == []

    def test_query_is_refanged(self):
        selector = Selector(" evil[.]example[.]com ")
        assert selector.query == "evil.example.com"
        assert selector.type == IndicatorType.DOMAIN

    def test_nested_defang_refanged_once(self):
        selector = Selector("evil[[.]]com")
        assert selector.query == "evil[.]com"
        assert selector.type is None
        assert selector.type == classify("evil[[.]]com")
        entries = selector.get_searcher_entries()
        assert [e.name for e in entries] == ["Google", "Bing", "DuckDuckGo"]
        assert all(e.query == "evil[.]com" for e in entries)

    def test_has_specific_entries(self):
        assert Selector("example.com").has_specific_entries() is True
        assert Selector("some random phrase").has_specific_entries() is False
        assert Selector("").has_specific_entries() is False
