"""
Shared enums — single source of truth for indicator and action values.

Every IndicatorType value is a single word token so it can sit inside an
encoded menu-entry id ("... as a <type> on ...").
"""

import enum


class IndicatorType(str, enum.Enum):
    """Indicator types the selector can recognise."""
    IP = "ip"
    IPV6 = "ipv6"
    DOMAIN = "domain"
    URL = "url"
    EMAIL = "email"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"
    CVE = "cve"
    BTC = "btc"
    ETH = "eth"
    ASN = "asn"
    GA_TRACK_ID = "ga_track_id"       # Google Analytics UA-XXXX-Y
    GA_PUB_ID = "ga_pub_id"           # AdSense pub-XXXXXXXX
    TEXT = "text"                     # Catch-all for unclassified input


class AnalyzerKind(str, enum.Enum):
    """How an analyzer produces its destination URL."""
    SEARCHER = "searcher"             # Pure URL templating
    SCANNER = "scanner"               # Remote API call, needs credentials


class CommandAction(str, enum.Enum):
    """Decoded menu action."""
    SEARCH = "search"
    SEARCH_ALL = "search_all"
    SCAN = "scan"
