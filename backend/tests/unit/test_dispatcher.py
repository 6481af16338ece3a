"""Tests for menu construction and click handling."""

from __future__ import annotations

import asyncio

from ioc_pivot.command import Command
from ioc_pivot.dispatcher import Dispatcher
from ioc_pivot.models.enums import CommandAction


class _Host:
    """Records what the dispatcher asks the host to do."""

    def __init__(self, states=None, keys=None):
        self.opened: list[str] = []
        self.notifications: list[str] = []
        self.states = states or {}
        self.keys = keys or {}
        self.state_reads = 0

    def load_states(self):
        self.state_reads += 1
        return self.states

    def dispatcher(self) -> Dispatcher:
        return Dispatcher(
            open_url=self.opened.append,
            notify=self.notifications.append,
            load_searcher_states=self.load_states,
            load_api_keys=lambda: self.keys,
        )


class TestBuildMenu:

    def test_ip_menu_layout(self):
        entries = _Host().dispatcher().build_menu("8.8.8.8")
        ids = [e.id for e in entries]

        assert "Search 8.8.8.8 as a ip on Shodan" in ids
        assert "Search 8.8.8.8 as a ip on all" in ids
        assert ids[-2:] == [
            "Scan 8.8.8.8 as a ip on urlscan.io",
            "Scan 8.8.8.8 as a ip on VirusTotal",
        ]
        all_index = ids.index("Search 8.8.8.8 as a ip on all")
        assert all(i.startswith("Search") for i in ids[:all_index])

    def test_web_search_listed_first(self):
        ids = [e.id for e in _Host().dispatcher().build_menu("8.8.8.8")]
        assert ids[:4] == [
            "Search 8.8.8.8 as a text on Google",
            "Search 8.8.8.8 as a text on Bing",
            "Search 8.8.8.8 as a text on DuckDuckGo",
            "Search 8.8.8.8 as a ip on AbuseIPDB",
        ]

    def test_web_search_can_be_disabled(self):
        ids = [e.id for e in _Host(states={"Google": False}).dispatcher().build_menu("8.8.8.8")]
        assert "Search 8.8.8.8 as a text on Google" not in ids
        assert ids[0] == "Search 8.8.8.8 as a text on Bing"

    def test_titles(self):
        entries = _Host().dispatcher().build_menu("8.8.8.8")
        titles = {e.id: e.title for e in entries}
        assert titles["Search 8.8.8.8 as a ip on Shodan"] == "Search this ip on Shodan"
        assert titles["Search 8.8.8.8 as a ip on all"] == "Search this ip on all"

    def test_disabled_searchers_skipped(self):
        entries = _Host(states={"Shodan": False}).dispatcher().build_menu("8.8.8.8")
        ids = [e.id for e in entries]
        assert "Search 8.8.8.8 as a ip on Shodan" not in ids
        assert "Search 8.8.8.8 as a ip on Censys" in ids

    def test_every_id_decodes(self):
        for text in ("8.8.8.8", "https://example.com/a b", "free text here", "CVE-2021-44228"):
            for entry in _Host().dispatcher().build_menu(text):
                assert Command.decode(entry.id).encode() == entry.id

    def test_free_text_has_no_all_entry(self):
        ids = [e.id for e in _Host().dispatcher().build_menu("free text here")]
        assert ids == [
            "Search free text here as a text on Google",
            "Search free text here as a text on Bing",
            "Search free text here as a text on DuckDuckGo",
        ]

    def test_blank_selection(self):
        assert _Host().dispatcher().build_menu("   ") == []

    def test_states_read_fresh(self):
        host = _Host()
        dispatcher = host.dispatcher()
        dispatcher.build_menu("8.8.8.8")
        dispatcher.build_menu("8.8.8.8")
        assert host.state_reads == 2


class TestHandleClick:

    def test_search_opens_url(self):
        host = _Host()
        urls = asyncio.run(host.dispatcher().handle_click("Search 8.8.8.8 as a ip on Shodan"))
        assert urls == ["https://www.shodan.io/host/8.8.8.8"]
        assert host.opened == urls
        assert host.notifications == []

    def test_search_all_respects_states(self):
        host = _Host(states={"NVD": False, "OTX": False})
        asyncio.run(host.dispatcher().handle_click("Search CVE-2021-44228 as a cve on all"))
        assert host.opened == [
            "https://vulmon.com/vulnerabilitydetails?qid=CVE-2021-44228",
            "https://exchange.xforce.ibmcloud.com/search/CVE-2021-44228",
        ]

    def test_malformed_id_is_ignored(self):
        host = _Host()
        assert asyncio.run(host.dispatcher().handle_click("not a command")) == []
        assert host.opened == []
        assert host.notifications == []

    def test_unknown_analyzer_notifies(self):
        host = _Host()
        asyncio.run(host.dispatcher().handle_click("Search 8.8.8.8 as a ip on Nowhere"))
        assert host.opened == []
        assert host.notifications == ["Nowhere is not supported for ip"]

    def test_missing_key_notifies_once(self, record_requests, mock_response):
        calls = record_requests(mock_response(200, {"uuid": "u1"}))
        host = _Host()
        asyncio.run(host.dispatcher().handle_click("Scan example.com as a domain on urlscan.io"))
        assert calls == []
        assert len(host.notifications) == 1
        assert "urlscan" in host.notifications[0]

    def test_scan_opens_report(self, record_requests, mock_response):
        record_requests(mock_response(200, {"uuid": "u1"}))
        host = _Host(keys={"urlscan": "k"})
        asyncio.run(host.dispatcher().handle_click("Scan example.com as a domain on urlscan.io"))
        assert host.opened == ["https://urlscan.io/result/u1/"]

    def test_upstream_error_message_unchanged(self, record_requests, mock_response):
        record_requests(mock_response(500, {"message": "internal"}))
        host = _Host(keys={"urlscan": "k"})
        asyncio.run(host.dispatcher().handle_click("Scan example.com as a domain on urlscan.io"))
        assert host.notifications == ["urlscan.io returned 500: internal"]

    def test_unexpected_body_notifies_once(self, record_requests, mock_response):
        record_requests(mock_response(200, []))
        host = _Host(keys={"urlscan": "k"})
        urls = asyncio.run(host.dispatcher().handle_click("Scan example.com as a domain on urlscan.io"))
        assert urls == []
        assert host.opened == []
        assert host.notifications == ["urlscan.io returned an unexpected response"]

    def test_null_lookup_data_still_opens_report(self, record_requests, mock_response):
        record_requests(mock_response(200, {"data": None}))
        host = _Host(keys={"virustotal": "k"})
        asyncio.run(host.dispatcher().handle_click("Scan 8.8.8.8 as a ip on VirusTotal"))
        assert host.opened == ["https://www.virustotal.com/gui/ip-address/8.8.8.8"]
        assert host.notifications == []

    def test_async_host_callbacks(self):
        opened: list[str] = []

        async def open_url(url: str) -> None:
            opened.append(url)

        async def notify(message: str) -> None:
            raise AssertionError(message)

        dispatcher = Dispatcher(open_url=open_url, notify=notify)
        command = Command(action=CommandAction.SEARCH, query="example.com", type="domain", target="crt.sh")
        asyncio.run(dispatcher.handle_click(command.encode()))
        assert opened == ["https://crt.sh/?q=example.com"]
