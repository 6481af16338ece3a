"""
Selector — classifies selected text and resolves analyzer entries.

Classification runs the explicit RECOGNIZERS list top to bottom; the first
predicate that accepts the whole (refanged, trimmed) input decides the type.
Order is the precedence: exact-length hashes before anything hex-like,
URL before email before bare domain, addresses before domains.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from typing import Callable, Optional
from urllib.parse import urlparse

from ioc_pivot.analyzers.registry import analyzers_for, generic_searchers
from ioc_pivot.models.enums import AnalyzerKind, IndicatorType
from ioc_pivot.models.schemas import AnalyzerEntry
from ioc_pivot.utils.domain_utils import refang, validate_domain

logger = logging.getLogger(__name__)

URL_RE = re.compile(r"^(?:https?|ftp)://\S+$", re.IGNORECASE)
EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@(?P<domain>[^@\s]+)$")
CVE_RE = re.compile(r"^CVE-\d{4}-\d{4,}$")
SHA512_RE = re.compile(r"^[a-f0-9]{128}$", re.IGNORECASE)
SHA256_RE = re.compile(r"^[a-f0-9]{64}$", re.IGNORECASE)
SHA1_RE = re.compile(r"^[a-f0-9]{40}$", re.IGNORECASE)
MD5_RE = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)
ETH_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
# Base58 legacy/P2SH or bech32 (segwit) addresses; case-sensitive
BTC_RE = re.compile(r"^(?:[13][a-km-zA-HJ-NP-Z1-9]{25,34}|bc1[ac-hj-np-z02-9]{11,71})$")
ASN_RE = re.compile(r"^AS\d{1,10}$", re.IGNORECASE)
GA_TRACK_ID_RE = re.compile(r"^UA-\d{4,10}-\d{1,4}$")
GA_PUB_ID_RE = re.compile(r"^pub-\d{10,20}$")


def _is_url(text: str) -> bool:
    if URL_RE.match(text) is None:
        return False
    try:
        return bool(urlparse(text).hostname)
    except ValueError:
        return False


def _is_email(text: str) -> bool:
    m = EMAIL_RE.match(text)
    return m is not None and validate_domain(m.group("domain"))


def _is_ipv4(text: str) -> bool:
    try:
        ipaddress.IPv4Address(text)
    except ValueError:
        return False
    return True


def _is_ipv6(text: str) -> bool:
    try:
        ipaddress.IPv6Address(text)
    except ValueError:
        return False
    return True


def _matches(pattern: re.Pattern[str]) -> Callable[[str], bool]:
    return lambda text: pattern.match(text) is not None


# Precedence order: first match wins.
RECOGNIZERS: tuple[tuple[IndicatorType, Callable[[str], bool]], ...] = (
    (IndicatorType.URL, _is_url),
    (IndicatorType.EMAIL, _is_email),
    (IndicatorType.CVE, _matches(CVE_RE)),
    (IndicatorType.SHA512, _matches(SHA512_RE)),
    (IndicatorType.SHA256, _matches(SHA256_RE)),
    (IndicatorType.SHA1, _matches(SHA1_RE)),
    (IndicatorType.MD5, _matches(MD5_RE)),
    (IndicatorType.ETH, _matches(ETH_RE)),
    (IndicatorType.BTC, _matches(BTC_RE)),
    (IndicatorType.ASN, _matches(ASN_RE)),
    (IndicatorType.GA_TRACK_ID, _matches(GA_TRACK_ID_RE)),
    (IndicatorType.GA_PUB_ID, _matches(GA_PUB_ID_RE)),
    (IndicatorType.IP, _is_ipv4),
    (IndicatorType.IPV6, _is_ipv6),
    (IndicatorType.DOMAIN, validate_domain),
)


def normalize(text: str) -> str:
    """Refang and trim raw selected text into the query used everywhere else."""
    return refang(text or "")


def _classify_normalized(query: str) -> Optional[IndicatorType]:
    if not query:
        return None
    for ioc_type, predicate in RECOGNIZERS:
        if predicate(query):
            return ioc_type
    return None


def classify(text: str) -> Optional[IndicatorType]:
    """Return the indicator type of the whole input, or None if nothing matches."""
    return _classify_normalized(normalize(text))


def matching_types(text: str) -> list[IndicatorType]:
    """Every type whose recognizer accepts the input, in precedence order."""
    query = normalize(text)
    if not query:
        return []
    return [ioc_type for ioc_type, predicate in RECOGNIZERS if predicate(query)]


class Selector:
    """
    Resolves the analyzers applicable to a piece of selected text.

    Usage:
        selector = Selector("8.8.8.8")
        selector.type                    # IndicatorType.IP
        selector.get_searcher_entries()  # [AnalyzerEntry(AbuseIPDB ...), ...]
    """

    def __init__(self, text: str):
        self.text = text
        self.query = normalize(text)
        self.type = _classify_normalized(self.query)
        logger.debug(
            f"[selector] {self.query[:80]!r} classified as "
            f"{self.type.value if self.type else 'none'}"
        )

    def _entries(self, analyzers, ioc_type: IndicatorType) -> list[AnalyzerEntry]:
        return [
            AnalyzerEntry(analyzer=a, query=self.query, type=ioc_type)
            for a in analyzers
        ]

    def _generic_entries(self) -> list[AnalyzerEntry]:
        return self._entries(generic_searchers(), IndicatorType.TEXT)

    def get_searcher_entries(self, include_generic: bool = False) -> list[AnalyzerEntry]:
        """
        Searcher entries for the held text.

        - blank text → []
        - unclassified text → generic web search entries (type `text`)
        - classified text → searchers for its type in registry order,
          preceded by the generic entries when include_generic is set
        """
        if not self.query:
            return []
        if self.type is None:
            return self._generic_entries()

        typed = self._entries(analyzers_for(self.type, AnalyzerKind.SEARCHER), self.type)
        if not typed:
            return self._generic_entries()
        if include_generic:
            return self._generic_entries() + typed
        return typed

    def get_scanner_entries(self) -> list[AnalyzerEntry]:
        """Scanner entries for the held text; no fallback."""
        if self.type is None:
            return []
        return self._entries(analyzers_for(self.type, AnalyzerKind.SCANNER), self.type)

    def has_specific_entries(self) -> bool:
        """True if at least one type-specific searcher applies (enables "on all")."""
        return any(not e.analyzer.generic for e in self.get_searcher_entries())
