"""
urlscan.io Scanner — submits an observable for a live scan.

Supports: domain, ip, url

Flow:
1. Submit: POST /api/v1/scan/ with the target URL
2. Return the result page (https://urlscan.io/result/{uuid}/)

The result page renders a progress view until the scan finishes, so there
is no polling here.

Requires: urlscan API key (ApiKeys.urlscan / URLSCAN_API_KEY)
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from ioc_pivot.analyzers.base import BaseScanner
from ioc_pivot.config import Settings
from ioc_pivot.errors import UpstreamError
from ioc_pivot.models.enums import IndicatorType

logger = logging.getLogger(__name__)

URLSCAN_API = "https://urlscan.io/api/v1"
URLSCAN_WEB = "https://urlscan.io"


class URLScanScanner(BaseScanner):
    name = "urlscan.io"
    supported_types = frozenset({IndicatorType.DOMAIN, IndicatorType.IP, IndicatorType.URL})
    api_key_name = "urlscan"

    def build(self, query: str, ioc_type: IndicatorType) -> str:
        if not self.supports(ioc_type):
            raise self._unsupported(ioc_type)
        if ioc_type == IndicatorType.IP:
            return f"{URLSCAN_WEB}/ip/{quote(query, safe='')}"
        if ioc_type == IndicatorType.DOMAIN:
            return f"{URLSCAN_WEB}/domain/{quote(query, safe='')}"
        return f"{URLSCAN_WEB}/search/#{quote(query, safe='')}"

    def _scan(
        self,
        query: str,
        ioc_type: IndicatorType,
        api_key: str,
        settings: Settings,
    ) -> str:
        # ── Build target URL from observable ─────────────────────────────────
        if ioc_type == IndicatorType.URL:
            target_url = query
        elif ioc_type == IndicatorType.IP:
            target_url = f"http://{query}"
        else:
            target_url = f"https://{query}"

        resp = requests.post(
            f"{URLSCAN_API}/scan/",
            headers={
                "API-Key": api_key,
                "Content-Type": "application/json",
                "User-Agent": settings.user_agent,
            },
            json={"url": target_url, "visibility": settings.urlscan_visibility},
            timeout=settings.http_timeout,
        )
        data = self._check_response(resp)

        scan_uuid = data.get("uuid")
        if not scan_uuid:
            raise UpstreamError(f"{self.name} returned no scan UUID", resp.status_code)

        logger.debug(f"[urlscan] Submitted {target_url} as {scan_uuid}")
        return data.get("result") or f"{URLSCAN_WEB}/result/{scan_uuid}/"
