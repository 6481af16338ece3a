"""
Base analyzers — the two shapes every registered service takes.

Provides:
- BaseAnalyzer: name, kind, supported indicator types, build(query, type)
- Searcher: URL templating only, no credentials
- BaseScanner: credential check, threaded HTTP call, error normalisation

To add a new searcher:
1. Add a Searcher(...) with one template per supported type to searchers.py
2. Keep the declaration order (it is the order users see)

To create a new scanner:
1. Inherit from BaseScanner
2. Set `name`, `supported_types` and `api_key_name` class attributes
3. Implement `_scan()` returning the report URL
4. Register it in registry.py
"""

from __future__ import annotations

import abc
import asyncio
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping, Union
from urllib.parse import quote

import requests

from ioc_pivot.config import Settings, get_settings
from ioc_pivot.errors import MissingCredentialError, UnknownAnalyzerError, UpstreamError
from ioc_pivot.models.enums import AnalyzerKind, IndicatorType

if TYPE_CHECKING:
    from ioc_pivot.models.schemas import ApiKeys

logger = logging.getLogger(__name__)

# A template is either a format string with a {query} placeholder
# (query gets percent-encoded) or a callable receiving the raw query.
Template = Union[str, Callable[[str], str]]


class BaseAnalyzer(abc.ABC):

    name: str = "base"
    kind: AnalyzerKind = AnalyzerKind.SEARCHER
    supported_types: frozenset[IndicatorType] = frozenset()
    # General-purpose engines that accept any text (Google, Bing, ...)
    generic: bool = False

    def supports(self, ioc_type: IndicatorType) -> bool:
        return ioc_type in self.supported_types

    @abc.abstractmethod
    def build(self, query: str, ioc_type: IndicatorType) -> str:
        """Return the destination URL for a query of the given type."""
        ...

    def _unsupported(self, ioc_type: IndicatorType) -> UnknownAnalyzerError:
        return UnknownAnalyzerError(f"{self.name} is not supported for {ioc_type.value}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class Searcher(BaseAnalyzer):
    """A search service reached through plain URL templating."""

    kind = AnalyzerKind.SEARCHER

    def __init__(
        self,
        name: str,
        templates: Mapping[IndicatorType, Template],
        generic: bool = False,
    ):
        self.name = name
        self.generic = generic
        self.templates = MappingProxyType(dict(templates))
        self.supported_types = frozenset(self.templates)

    def build(self, query: str, ioc_type: IndicatorType) -> str:
        template = self.templates.get(ioc_type)
        if template is None:
            raise self._unsupported(ioc_type)
        if callable(template):
            return template(query)
        return template.format(query=quote(query, safe=""))


class BaseScanner(BaseAnalyzer):
    """A service that needs an API key and a remote call to produce a report URL."""

    kind = AnalyzerKind.SCANNER
    # Field of ApiKeys (or key of a plain mapping) holding this scanner's key
    api_key_name: str = ""

    async def scan(
        self,
        query: str,
        ioc_type: IndicatorType,
        api_keys: "ApiKeys | Mapping[str, Any] | None",
    ) -> str:
        """
        Run the scan and return the report URL.

        Raises:
            UnknownAnalyzerError: the scanner does not handle ioc_type
            MissingCredentialError: no key under api_key_name (no request is sent)
            UpstreamError: transport failure or non-success response
        """
        if not self.supports(ioc_type):
            raise self._unsupported(ioc_type)

        api_key = api_keys.get(self.api_key_name) if api_keys is not None else None
        if not api_key:
            raise MissingCredentialError(
                f"Please set your {self.name} API key ({self.api_key_name}) in the options.",
                key_name=self.api_key_name,
            )

        settings = get_settings()
        logger.info(f"[{self.name}] Scanning {ioc_type.value}: {query}")
        try:
            url = await asyncio.to_thread(self._scan, query, ioc_type, api_key, settings)
        except requests.exceptions.RequestException as e:
            logger.warning(f"[{self.name}] Request failed: {e}")
            raise UpstreamError(f"{self.name} request failed: {e}") from e
        except (AttributeError, KeyError, TypeError) as e:
            logger.warning(f"[{self.name}] Unexpected response shape: {e}")
            raise UpstreamError(f"{self.name} returned an unexpected response") from e

        logger.info(f"[{self.name}] Report ready: {url}")
        return url

    @abc.abstractmethod
    def _scan(
        self,
        query: str,
        ioc_type: IndicatorType,
        api_key: str,
        settings: Settings,
    ) -> str:
        """Blocking scan call, run in a worker thread. Returns the report URL."""
        ...

    def _check_response(self, resp: requests.Response, ok: tuple[int, ...] = (200,)) -> dict:
        """Return the JSON body, or raise UpstreamError for an unexpected status."""
        if resp.status_code in ok:
            try:
                body = resp.json()
            except ValueError as e:
                raise UpstreamError(
                    f"{self.name} returned an invalid JSON body", resp.status_code
                ) from e
            if not isinstance(body, dict):
                raise UpstreamError(
                    f"{self.name} returned an unexpected response", resp.status_code
                )
            return body

        if resp.status_code == 429:
            raise UpstreamError(f"{self.name} API rate limit exceeded", resp.status_code)

        message = _upstream_message(resp)
        raise UpstreamError(
            f"{self.name} returned {resp.status_code}: {message}", resp.status_code
        )


def _upstream_message(resp: requests.Response) -> str:
    """Best-effort error text from a JSON error body, else the raw body prefix."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        for key in ("message", "description", "error"):
            if body.get(key):
                return str(body[key])
    return resp.text[:200]
