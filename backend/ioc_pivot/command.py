"""
Command — the decoded form of a chosen menu entry.

Menu-entry ids double as the wire format between menu construction and the
click handler:

    Search <query> as a <type> on <analyzer name>
    Search <query> as a <type> on all
    Scan <query> as a <type> on <analyzer name>

`Command.decode(cmd.encode()) == cmd` holds for every valid command.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from ioc_pivot.analyzers.registry import analyzers_for, get_analyzer
from ioc_pivot.errors import CommandError, ParseError, UnknownAnalyzerError
from ioc_pivot.models.enums import AnalyzerKind, CommandAction, IndicatorType

logger = logging.getLogger(__name__)

ALL_TARGET = "all"

# The query is greedy so an indicator that itself contains " as a " still
# splits on the last separator; analyzer names never contain it.
COMMAND_RE = re.compile(
    r"^(?P<verb>(?i:search|scan)) (?P<query>.+) as a (?P<type>\w+) on (?P<target>.+)$",
    re.DOTALL,
)

_VERBS: dict[CommandAction, str] = {
    CommandAction.SEARCH: "Search",
    CommandAction.SEARCH_ALL: "Search",
    CommandAction.SCAN: "Scan",
}


def is_enabled(searcher_states: Mapping[str, bool] | None, name: str) -> bool:
    """Searchers are on unless the persisted states explicitly switch them off."""
    if not searcher_states:
        return True
    return bool(searcher_states.get(name, True))


class Command(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: CommandAction
    query: str
    type: IndicatorType
    target: str

    @model_validator(mode="after")
    def _check_shape(self) -> "Command":
        if not self.query.strip():
            raise ValueError("query must not be blank")
        if not self.target:
            raise ValueError("target must not be empty")
        if (self.target == ALL_TARGET) != (self.action == CommandAction.SEARCH_ALL):
            raise ValueError(f"target '{ALL_TARGET}' is reserved for search_all")
        return self

    # ── Encoding ──────────────────────────────────────────────────────────────

    @classmethod
    def decode(cls, encoded: str) -> "Command":
        """Parse a menu-entry id. Raises ParseError on anything off-grammar."""
        m = COMMAND_RE.match(encoded or "")
        if m is None:
            raise ParseError(f"Unrecognized command: {encoded!r}")

        try:
            ioc_type = IndicatorType(m.group("type"))
        except ValueError:
            raise ParseError(f"Unknown indicator type: {m.group('type')!r}")

        target = m.group("target")
        if target == ALL_TARGET:
            action = CommandAction.SEARCH_ALL
        elif m.group("verb").lower() == "scan":
            action = CommandAction.SCAN
        else:
            action = CommandAction.SEARCH

        try:
            return cls(action=action, query=m.group("query"), type=ioc_type, target=target)
        except ValidationError as e:
            raise ParseError(f"Invalid command {encoded!r}: {e}") from e

    @classmethod
    def try_decode(cls, encoded: str) -> Optional["Command"]:
        """decode() that returns None instead of raising."""
        try:
            return cls.decode(encoded)
        except ParseError as e:
            logger.debug(f"[command] Ignoring {e}")
            return None

    def encode(self) -> str:
        return f"{_VERBS[self.action]} {self.query} as a {self.type.value} on {self.target}"

    def title(self) -> str:
        """Human label for the menu entry."""
        return f"{_VERBS[self.action]} this {self.type.value} on {self.target}"

    # ── Execution ─────────────────────────────────────────────────────────────

    def _require(self, action: CommandAction) -> None:
        if self.action != action:
            raise CommandError(
                f"Cannot run a {self.action.value} command as {action.value}"
            )

    def search(self) -> str:
        """Destination URL on the single named searcher."""
        self._require(CommandAction.SEARCH)
        searcher = get_analyzer(self.target, AnalyzerKind.SEARCHER, self.type)
        if searcher is None:
            raise UnknownAnalyzerError(f"{self.target} is not supported for {self.type.value}")
        return searcher.build(self.query, self.type)

    def search_all(self, searcher_states: Mapping[str, bool] | None = None) -> list[str]:
        """One URL per enabled searcher for the type, in registry order."""
        self._require(CommandAction.SEARCH_ALL)
        return [
            searcher.build(self.query, self.type)
            for searcher in analyzers_for(self.type, AnalyzerKind.SEARCHER)
            if is_enabled(searcher_states, searcher.name)
        ]

    async def scan(self, api_keys: Any) -> str:
        """Run the named scanner and return its report URL."""
        self._require(CommandAction.SCAN)
        scanner = get_analyzer(self.target, AnalyzerKind.SCANNER, self.type)
        if scanner is None:
            raise UnknownAnalyzerError(f"{self.target} is not supported for {self.type.value}")
        return await scanner.scan(self.query, self.type, api_keys)

    async def execute(
        self,
        searcher_states: Mapping[str, bool] | None = None,
        api_keys: Any = None,
    ) -> list[str]:
        """Run whichever action this command carries; returns URLs to open."""
        if self.action == CommandAction.SEARCH:
            return [self.search()]
        if self.action == CommandAction.SEARCH_ALL:
            return self.search_all(searcher_states)
        return [await self.scan(api_keys)]
