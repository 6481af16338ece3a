"""
Hybrid Analysis Scanner — quick-scans a URL in the Falcon Sandbox.

Supports: url

Requires: Hybrid Analysis API key (ApiKeys.hybrid_analysis / HYBRID_ANALYSIS_API_KEY)
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

HYBRID_ANALYSIS_API = "https://www.hybrid-analysis.com/api/v2"
HYBRID_ANALYSIS_WEB = "https://www.hybrid-analysis.com"


class HybridAnalysisScanner(BaseScanner):
    name = "HybridAnalysis"
    supported_types = frozenset({IndicatorType.URL})
    api_key_name = "hybrid_analysis"

    def build(self, query: str, ioc_type: IndicatorType) -> str:
        if not self.supports(ioc_type):
            raise self._unsupported(ioc_type)
        return f"{HYBRID_ANALYSIS_WEB}/search?query={quote(query, safe='')}"

    def _scan(
        self,
        query: str,
        ioc_type: IndicatorType,
        api_key: str,
        settings: Settings,
    ) -> str:
        resp = requests.post(
            f"{HYBRID_ANALYSIS_API}/quick-scan/url",
            headers={
                "accept": "application/json",
                "api-key": api_key,
                # The API rejects requests without this exact agent
                "user-agent": "Falcon Sandbox",
            },
            data={"scan_type": "all", "url": query},
            timeout=settings.http_timeout,
        )
        data = self._check_response(resp, ok=(200, 201))

        sha256 = data.get("sha256")
        if not sha256:
            raise UpstreamError(f"{self.name} returned no sample hash", resp.status_code)

        logger.debug(f"[hybrid_analysis] Quick scan {data.get('id')} for {query}")
        return f"{HYBRID_ANALYSIS_WEB}/sample/{sha256}"
