"""
Analyzer Registry — ordered catalog of searchers and scanners.

To add a new analyzer:
1. Declare it (searchers.py, or a BaseScanner subclass under scanners/)
2. Add it to SEARCHERS / SCANNERS at the position it should appear
3. Selector and Command pick it up automatically
"""

from __future__ import annotations

from typing import Optional

from ioc_pivot.analyzers.base import BaseAnalyzer, BaseScanner, Searcher
from ioc_pivot.analyzers.scanners import (
    HybridAnalysisScanner,
    URLScanScanner,
    VirusTotalScanner,
)
from ioc_pivot.analyzers.searchers import SEARCHERS
from ioc_pivot.models.enums import AnalyzerKind, IndicatorType


SCANNERS: tuple[BaseScanner, ...] = (
    HybridAnalysisScanner(),
    URLScanScanner(),
    VirusTotalScanner(),
)

REGISTRY: dict[AnalyzerKind, tuple[BaseAnalyzer, ...]] = {
    AnalyzerKind.SEARCHER: SEARCHERS,
    AnalyzerKind.SCANNER: SCANNERS,
}


def analyzers_for(ioc_type: IndicatorType, kind: AnalyzerKind) -> list[BaseAnalyzer]:
    """All analyzers of a kind handling ioc_type, in declaration order (maybe empty)."""
    return [a for a in REGISTRY[kind] if a.supports(ioc_type)]


def generic_searchers() -> list[Searcher]:
    """General-purpose engines used when text matches no indicator type."""
    return [s for s in SEARCHERS if s.generic]


def get_analyzer(
    name: str,
    kind: AnalyzerKind,
    ioc_type: Optional[IndicatorType] = None,
) -> BaseAnalyzer | None:
    """Look up an analyzer by name, optionally requiring support for ioc_type."""
    for analyzer in REGISTRY[kind]:
        if analyzer.name != name:
            continue
        if ioc_type is not None and not analyzer.supports(ioc_type):
            return None
        return analyzer
    return None


def available_analyzers(kind: AnalyzerKind) -> list[str]:
    """List all registered analyzer names of a kind."""
    return [a.name for a in REGISTRY[kind]]
