"""
VirusTotal Scanner — queries VT API v3 and hands back the GUI report page.

Supports: domain, IP, URL, file hash (md5/sha1/sha256).

- URL: submitted for a fresh analysis (POST /api/v3/urls)
- IP / domain / hash: existing object report is looked up first so a
  404 turns into a clear "not found" message instead of an empty GUI page

Requires: VirusTotal API key (ApiKeys.virustotal / VIRUSTOTAL_API_KEY)
Free tier: 4 requests/min, 500/day.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from ioc_pivot.analyzers.base import BaseScanner
from ioc_pivot.config import Settings
from ioc_pivot.errors import UpstreamError
from ioc_pivot.models.enums import IndicatorType
from ioc_pivot.utils.hashing import sha256_str

logger = logging.getLogger(__name__)

VT_API = "https://www.virustotal.com/api/v3"
VT_GUI = "https://www.virustotal.com/gui"

# Indicator type → (API collection, GUI path segment)
_OBJECT_PATHS: dict[IndicatorType, tuple[str, str]] = {
    IndicatorType.IP: ("ip_addresses", "ip-address"),
    IndicatorType.DOMAIN: ("domains", "domain"),
    IndicatorType.MD5: ("files", "file"),
    IndicatorType.SHA1: ("files", "file"),
    IndicatorType.SHA256: ("files", "file"),
}


class VirusTotalScanner(BaseScanner):
    name = "VirusTotal"
    supported_types = frozenset({IndicatorType.URL, *_OBJECT_PATHS})
    api_key_name = "virustotal"

    def build(self, query: str, ioc_type: IndicatorType) -> str:
        if not self.supports(ioc_type):
            raise self._unsupported(ioc_type)
        if ioc_type == IndicatorType.URL:
            return f"{VT_GUI}/url/{sha256_str(query)}"
        _, gui_path = _OBJECT_PATHS[ioc_type]
        return f"{VT_GUI}/{gui_path}/{quote(query, safe='')}"

    def _scan(
        self,
        query: str,
        ioc_type: IndicatorType,
        api_key: str,
        settings: Settings,
    ) -> str:
        headers = {"x-apikey": api_key, "User-Agent": settings.user_agent}
        if ioc_type == IndicatorType.URL:
            return self._scan_url(query, headers, settings.http_timeout)
        return self._lookup_object(query, ioc_type, headers, settings.http_timeout)

    # ── URL ───────────────────────────────────────────────────────────────────

    def _scan_url(self, url: str, headers: dict, timeout: int) -> str:
        """Submit URL to VT for analysis."""
        resp = requests.post(
            f"{VT_API}/urls",
            headers={**headers, "Content-Type": "application/x-www-form-urlencoded"},
            data={"url": url},
            timeout=timeout,
        )
        data = self._check_response(resp)

        # Analysis id looks like "u-<sha256 of url>-<timestamp>"
        analysis_id = str((data.get("data") or {}).get("id") or "")
        parts = analysis_id.split("-")
        url_hash = parts[1] if len(parts) == 3 and len(parts[1]) == 64 else sha256_str(url)
        return f"{VT_GUI}/url/{url_hash}"

    # ── IP / domain / file ────────────────────────────────────────────────────

    def _lookup_object(
        self,
        query: str,
        ioc_type: IndicatorType,
        headers: dict,
        timeout: int,
    ) -> str:
        """Fetch the object report to confirm VT knows about it."""
        collection, gui_path = _OBJECT_PATHS[ioc_type]
        resp = requests.get(
            f"{VT_API}/{collection}/{quote(query, safe='')}",
            headers=headers,
            timeout=timeout,
        )

        if resp.status_code == 404:
            raise UpstreamError(
                f"{query} is not found in VirusTotal", resp.status_code
            )

        data = self._check_response(resp)
        object_id = (data.get("data") or {}).get("id") or query
        return f"{VT_GUI}/{gui_path}/{object_id}"
