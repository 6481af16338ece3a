"""
Searcher catalog — every search service, one template per indicator type.

Declaration order is the menu order. Generic engines come first and only
handle the `text` catch-all; everything after them is type-specific.
"""

from __future__ import annotations

from urllib.parse import quote

from ioc_pivot.analyzers.base import Searcher
from ioc_pivot.models.enums import IndicatorType as T
from ioc_pivot.utils.hashing import b64_str, sha256_str


def _asn_number(query: str) -> str:
    """AS13335 / as13335 → 13335"""
    return query[2:] if query[:2].upper() == "AS" else query


def _fofa(field: str):
    def build(query: str) -> str:
        qbase64 = b64_str(f'{field}="{query}"')
        return f"https://fofa.info/result?qbase64={quote(qbase64, safe='')}"
    return build


def _pulsedive(query: str) -> str:
    return f"https://pulsedive.com/indicator/?ioc={quote(b64_str(query), safe='')}"


def _vt_url(query: str) -> str:
    return f"https://www.virustotal.com/gui/url/{sha256_str(query)}"


_HASHES = (T.MD5, T.SHA1, T.SHA256)


# ── General web search (fallback for unclassified text) ──────────────────────

GOOGLE = Searcher(
    "Google",
    {T.TEXT: "https://www.google.com/search?q={query}"},
    generic=True,
)
BING = Searcher(
    "Bing",
    {T.TEXT: "https://www.bing.com/search?q={query}"},
    generic=True,
)
DUCKDUCKGO = Searcher(
    "DuckDuckGo",
    {T.TEXT: "https://duckduckgo.com/?q={query}"},
    generic=True,
)

# ── Type-specific services ───────────────────────────────────────────────────

ABUSEIPDB = Searcher("AbuseIPDB", {
    T.IP: "https://www.abuseipdb.com/check/{query}",
    T.IPV6: "https://www.abuseipdb.com/check/{query}",
    T.DOMAIN: "https://www.abuseipdb.com/check/{query}",
})

ARCHIVE_ORG = Searcher("Archive.org", {
    T.URL: "https://web.archive.org/web/*/{query}",
    T.DOMAIN: "https://web.archive.org/web/*/{query}",
})

BGPVIEW = Searcher("BGPView", {
    T.IP: "https://bgpview.io/ip/{query}",
    T.ASN: lambda q: f"https://bgpview.io/asn/{_asn_number(q)}",
})

BLOCKCHAIR = Searcher("Blockchair", {
    T.BTC: "https://blockchair.com/bitcoin/address/{query}",
    T.ETH: "https://blockchair.com/ethereum/address/{query}",
})

CENSYS = Searcher("Censys", {
    T.IP: "https://search.censys.io/hosts/{query}",
    T.IPV6: "https://search.censys.io/hosts/{query}",
    T.DOMAIN: "https://search.censys.io/search?resource=hosts&q={query}",
    T.ASN: lambda q: (
        "https://search.censys.io/search?resource=hosts&q="
        + quote(f"autonomous_system.asn: {_asn_number(q)}", safe="")
    ),
})

CRTSH = Searcher("crt.sh", {
    T.DOMAIN: "https://crt.sh/?q={query}",
})

DNSLYTICS = Searcher("DNSlytics", {
    T.IP: "https://dnslytics.com/ip/{query}",
    T.DOMAIN: "https://dnslytics.com/domain/{query}",
    T.ASN: lambda q: f"https://dnslytics.com/bgp/as{_asn_number(q)}",
    T.GA_TRACK_ID: "https://dnslytics.com/reverse-analytics/{query}",
    T.GA_PUB_ID: "https://dnslytics.com/reverse-adsense/{query}",
})

DOMAINTOOLS = Searcher("DomainTools", {
    T.IP: "https://whois.domaintools.com/{query}",
    T.DOMAIN: "https://whois.domaintools.com/{query}",
})

EMAILREP = Searcher("EmailRep", {
    T.EMAIL: "https://emailrep.io/{query}",
})

ETHERSCAN = Searcher("Etherscan", {
    T.ETH: "https://etherscan.io/address/{query}",
})

FOFA = Searcher("FOFA", {
    T.IP: _fofa("ip"),
    T.DOMAIN: _fofa("domain"),
})

GOOGLE_SAFE_BROWSING = Searcher("Google Safe Browsing", {
    T.DOMAIN: "https://transparencyreport.google.com/safe-browsing/search?url={query}",
    T.URL: "https://transparencyreport.google.com/safe-browsing/search?url={query}",
})

GREYNOISE = Searcher("GreyNoise", {
    T.IP: "https://viz.greynoise.io/ip/{query}",
})

HYBRID_ANALYSIS = Searcher("HybridAnalysis", {
    T.IP: "https://www.hybrid-analysis.com/search?query={query}",
    T.DOMAIN: "https://www.hybrid-analysis.com/search?query={query}",
    T.MD5: "https://www.hybrid-analysis.com/search?query={query}",
    T.SHA1: "https://www.hybrid-analysis.com/search?query={query}",
    T.SHA256: "https://www.hybrid-analysis.com/search?query={query}",
    T.SHA512: "https://www.hybrid-analysis.com/search?query={query}",
})

IPINFO = Searcher("IPinfo", {
    T.IP: "https://ipinfo.io/{query}",
    T.IPV6: "https://ipinfo.io/{query}",
    T.ASN: lambda q: f"https://ipinfo.io/AS{_asn_number(q)}",
})

MALWAREBAZAAR = Searcher("MalwareBazaar", {
    T.MD5: "https://bazaar.abuse.ch/browse.php?search=md5%3A{query}",
    T.SHA1: "https://bazaar.abuse.ch/browse.php?search=sha1%3A{query}",
    T.SHA256: "https://bazaar.abuse.ch/browse.php?search=sha256%3A{query}",
})

NVD = Searcher("NVD", {
    T.CVE: "https://nvd.nist.gov/vuln/detail/{query}",
})

OTX = Searcher("OTX", {
    T.IP: "https://otx.alienvault.com/indicator/ip/{query}",
    T.IPV6: "https://otx.alienvault.com/indicator/ip/{query}",
    T.DOMAIN: "https://otx.alienvault.com/indicator/domain/{query}",
    T.URL: "https://otx.alienvault.com/indicator/url/{query}",
    T.MD5: "https://otx.alienvault.com/indicator/file/{query}",
    T.SHA1: "https://otx.alienvault.com/indicator/file/{query}",
    T.SHA256: "https://otx.alienvault.com/indicator/file/{query}",
    T.CVE: "https://otx.alienvault.com/indicator/cve/{query}",
})

PULSEDIVE = Searcher("Pulsedive", {
    T.IP: _pulsedive,
    T.DOMAIN: _pulsedive,
    T.URL: _pulsedive,
})

SECURITYTRAILS = Searcher("SecurityTrails", {
    T.IP: "https://securitytrails.com/list/ip/{query}",
    T.DOMAIN: "https://securitytrails.com/domain/{query}/dns",
})

SHODAN = Searcher("Shodan", {
    T.IP: "https://www.shodan.io/host/{query}",
    T.IPV6: "https://www.shodan.io/host/{query}",
    T.DOMAIN: "https://www.shodan.io/search?query=hostname%3A{query}",
    T.ASN: "https://www.shodan.io/search?query=asn%3A{query}",
})

SPYONWEB = Searcher("SpyOnWeb", {
    T.IP: "https://spyonweb.com/{query}",
    T.DOMAIN: "https://spyonweb.com/{query}",
    T.GA_TRACK_ID: "https://spyonweb.com/{query}",
    T.GA_PUB_ID: "https://spyonweb.com/{query}",
})

TALOS = Searcher("Talos", {
    T.IP: "https://talosintelligence.com/reputation_center/lookup?search={query}",
    T.DOMAIN: "https://talosintelligence.com/reputation_center/lookup?search={query}",
})

THREATMINER = Searcher("ThreatMiner", {
    T.IP: "https://www.threatminer.org/host.php?q={query}",
    T.DOMAIN: "https://www.threatminer.org/domain.php?q={query}",
    **{h: "https://www.threatminer.org/sample.php?q={query}" for h in _HASHES},
})

URLSCAN = Searcher("urlscan.io", {
    T.IP: "https://urlscan.io/ip/{query}",
    T.DOMAIN: "https://urlscan.io/domain/{query}",
    T.URL: "https://urlscan.io/search/#page.url%3A%22{query}%22",
})

VIEWDNS = Searcher("ViewDNS", {
    T.IP: "https://viewdns.info/reverseip/?host={query}&t=1",
    T.DOMAIN: "https://viewdns.info/iphistory/?domain={query}",
    T.EMAIL: "https://viewdns.info/reversewhois/?q={query}",
})

VIRUSTOTAL = Searcher("VirusTotal", {
    T.IP: "https://www.virustotal.com/gui/ip-address/{query}",
    T.DOMAIN: "https://www.virustotal.com/gui/domain/{query}",
    T.URL: _vt_url,
    **{h: "https://www.virustotal.com/gui/file/{query}" for h in _HASHES},
})

VULMON = Searcher("Vulmon", {
    T.CVE: "https://vulmon.com/vulnerabilitydetails?qid={query}",
})

XFORCE_EXCHANGE = Searcher("X-Force Exchange", {
    T.IP: "https://exchange.xforce.ibmcloud.com/ip/{query}",
    T.IPV6: "https://exchange.xforce.ibmcloud.com/ip/{query}",
    T.DOMAIN: "https://exchange.xforce.ibmcloud.com/url/{query}",
    T.URL: "https://exchange.xforce.ibmcloud.com/url/{query}",
    T.CVE: "https://exchange.xforce.ibmcloud.com/search/{query}",
    **{h: "https://exchange.xforce.ibmcloud.com/malware/{query}" for h in _HASHES},
})


SEARCHERS: tuple[Searcher, ...] = (
    GOOGLE,
    BING,
    DUCKDUCKGO,
    ABUSEIPDB,
    ARCHIVE_ORG,
    BGPVIEW,
    BLOCKCHAIR,
    CENSYS,
    CRTSH,
    DNSLYTICS,
    DOMAINTOOLS,
    EMAILREP,
    ETHERSCAN,
    FOFA,
    GOOGLE_SAFE_BROWSING,
    GREYNOISE,
    HYBRID_ANALYSIS,
    IPINFO,
    MALWAREBAZAAR,
    NVD,
    OTX,
    PULSEDIVE,
    SECURITYTRAILS,
    SHODAN,
    SPYONWEB,
    TALOS,
    THREATMINER,
    URLSCAN,
    VIEWDNS,
    VIRUSTOTAL,
    VULMON,
    XFORCE_EXCHANGE,
)
