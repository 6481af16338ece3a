from ioc_pivot.analyzers.base import BaseAnalyzer, BaseScanner, Searcher
from ioc_pivot.analyzers.registry import (
    REGISTRY,
    SCANNERS,
    SEARCHERS,
    analyzers_for,
    available_analyzers,
    generic_searchers,
    get_analyzer,
)
