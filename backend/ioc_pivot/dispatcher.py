"""
Dispatcher — the boundary between the core and its host runtime.

The host (browser extension, desktop tray, CLI) plugs in four callbacks:

    open_url(url)               open a destination
    notify(message)             show one user-visible message
    load_searcher_states()      persisted {analyzer name: enabled}
    load_api_keys()             ApiKeys or {api_key_name: key}

Settings are loaded on every call, never cached here.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from ioc_pivot.command import ALL_TARGET, Command, is_enabled
from ioc_pivot.errors import PivotError
from ioc_pivot.models.enums import CommandAction
from ioc_pivot.models.schemas import MenuEntry
from ioc_pivot.selector import Selector

logger = logging.getLogger(__name__)

UrlOpener = Callable[[str], Union[None, Awaitable[None]]]
Notifier = Callable[[str], Union[None, Awaitable[None]]]


def _no_states() -> dict[str, bool]:
    return {}


def _no_keys() -> dict[str, str]:
    return {}


async def _call(fn: Callable[[str], Any], arg: str) -> None:
    """Invoke a host callback that may be sync or async."""
    result = fn(arg)
    if inspect.isawaitable(result):
        await result


class Dispatcher:

    def __init__(
        self,
        open_url: UrlOpener,
        notify: Notifier,
        load_searcher_states: Optional[Callable[[], Mapping[str, bool]]] = None,
        load_api_keys: Optional[Callable[[], Any]] = None,
    ):
        self.open_url = open_url
        self.notify = notify
        self.load_searcher_states = load_searcher_states or _no_states
        self.load_api_keys = load_api_keys or _no_keys

    def build_menu(self, selection: str) -> list[MenuEntry]:
        """
        Menu entries for a selection.

        Order: enabled web search engines, enabled type-specific searchers,
        then "on all" (only when type-specific searchers exist), then scanners.
        """
        states = self.load_searcher_states()
        selector = Selector(selection)
        entries: list[MenuEntry] = []

        for entry in selector.get_searcher_entries(include_generic=True):
            if not is_enabled(states, entry.name):
                continue
            command = Command(
                action=CommandAction.SEARCH,
                query=entry.query,
                type=entry.type,
                target=entry.name,
            )
            entries.append(MenuEntry(id=command.encode(), title=command.title()))

        if selector.has_specific_entries():
            command = Command(
                action=CommandAction.SEARCH_ALL,
                query=selector.query,
                type=selector.type,
                target=ALL_TARGET,
            )
            entries.append(MenuEntry(id=command.encode(), title=command.title()))

        for entry in selector.get_scanner_entries():
            command = Command(
                action=CommandAction.SCAN,
                query=entry.query,
                type=entry.type,
                target=entry.name,
            )
            entries.append(MenuEntry(id=command.encode(), title=command.title()))

        logger.debug(f"[dispatcher] {len(entries)} menu entries for {selector.query[:80]!r}")
        return entries

    async def handle_click(self, menu_item_id: str) -> list[str]:
        """
        Execute a clicked menu entry and open its destination(s).

        Malformed ids are ignored. Any PivotError becomes exactly one
        notification carrying the error message. Returns the opened URLs.
        """
        command = Command.try_decode(menu_item_id)
        if command is None:
            return []

        try:
            urls = await command.execute(
                searcher_states=self.load_searcher_states(),
                api_keys=self.load_api_keys(),
            )
        except PivotError as e:
            logger.info(f"[dispatcher] {command.action.value} on {command.target} failed: {e}")
            await _call(self.notify, str(e))
            return []

        for url in urls:
            await _call(self.open_url, url)
        return urls
