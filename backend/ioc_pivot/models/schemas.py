"""
Pydantic schemas — the data contract between selector, command and glue.

Three records:
1. AnalyzerEntry (analyzer bound to a concrete query)
2. ApiKeys (scanner credentials)
3. MenuEntry (encoded id + title handed to the host menu)
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ioc_pivot.analyzers.base import BaseAnalyzer
from ioc_pivot.models.enums import IndicatorType


class AnalyzerEntry(BaseModel):
    """An analyzer paired with the query and type it will be run against."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    analyzer: BaseAnalyzer
    query: str
    type: IndicatorType

    @model_validator(mode="after")
    def _check_supported(self) -> "AnalyzerEntry":
        if not self.analyzer.supports(self.type):
            raise ValueError(
                f"{self.analyzer.name} does not support {self.type.value}"
            )
        return self

    @property
    def name(self) -> str:
        return self.analyzer.name

    def build(self) -> str:
        return self.analyzer.build(self.query, self.type)


class ApiKeys(BaseModel):
    """Scanner credentials, keyed by each scanner's api_key_name."""
    urlscan: Optional[str] = None
    virustotal: Optional[str] = None
    hybrid_analysis: Optional[str] = None

    def get(self, key_name: str) -> str | None:
        value = getattr(self, key_name, None)
        return value or None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ApiKeys":
        data = data or {}
        return cls(**{k: v for k, v in data.items() if k in cls.model_fields})

    @classmethod
    def from_settings(cls, settings: Any) -> "ApiKeys":
        return cls(
            urlscan=settings.urlscan_api_key or None,
            virustotal=settings.virustotal_api_key or None,
            hybrid_analysis=settings.hybrid_analysis_api_key or None,
        )


class MenuEntry(BaseModel):
    """One context-menu item: id is an encoded Command."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
