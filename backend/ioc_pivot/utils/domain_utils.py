"""
Domain validation and refang utilities.
"""

from __future__ import annotations

import re

import tldextract

# Valid domain regex (simplified but practical)
DOMAIN_PATTERN = re.compile(
    r"^(?:[a-zA-Z0-9_](?:[a-zA-Z0-9_-]{0,61}[a-zA-Z0-9])?\.)+"
    r"[a-zA-Z][a-zA-Z0-9-]{0,61}[a-zA-Z0-9]$"
)

# Bundled public suffix snapshot only — never fetch the list over the network.
_TLD_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())

# Defanged notation → original characters. Order matters: "hxxps" before "hxxp".
_REFANG_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^hxxps", re.IGNORECASE), "https"),
    (re.compile(r"^hxxp", re.IGNORECASE), "http"),
    (re.compile(r"^fxp", re.IGNORECASE), "ftp"),
    (re.compile(r"\[:\]|\(:\)"), ":"),
    (re.compile(r"\[(?:\.|dot)\]|\((?:\.|dot)\)|\{(?:\.|dot)\}", re.IGNORECASE), "."),
    (re.compile(r"\[(?:@|at)\]|\((?:@|at)\)", re.IGNORECASE), "@"),
    (re.compile(r"\[/\]"), "/"),
]


def refang(raw: str) -> str:
    """
    Undo common indicator defanging.

    Handles:
    - hxxp://evil[.]com → http://evil.com
    - evil(dot)com → evil.com
    - user[@]evil[.]com → user@evil.com
    - 1.2.3[.]4 → 1.2.3.4
    """
    text = raw.strip()
    for pattern, replacement in _REFANG_RULES:
        text = pattern.sub(replacement, text)
    return text


def validate_domain(domain: str) -> bool:
    """Check if a string is a domain name ending in a known public suffix."""
    if not domain or len(domain) > 253:
        return False
    if DOMAIN_PATTERN.match(domain) is None:
        return False
    return bool(_TLD_EXTRACT(domain.lower()).suffix)
