"""
Unit tests for the ConferenceResolver facade (catalog first, live search second).
"""

import unittest
from datetime import datetime

from conftrip.catalog import Catalog
from conftrip.live import LiveConferenceInfo
from conftrip.model import TemporalStatus
from conftrip.resolver import ConferenceResolver


LIVE = LiveConferenceInfo(name="Binance Blockchain Week 2026", dates="Dec 3-4, 2026",
                          city="Dubai", country="UAE", airport="DXB")


class FakeLiveSearch:
    def __init__(self, result=None) -> None:
        self.result = result
        self.calls: list[str] = []

    def __call__(self, name: str):
        self.calls.append(name)
        return self.result


class TestConferenceResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = Catalog()

    def test_lookup_and_status(self) -> None:
        resolver = ConferenceResolver(self.catalog, live_search=FakeLiveSearch())
        entry = resolver.lookup("ethdenver")
        assert entry is not None
        self.assertEqual(resolver.status(entry, datetime(2026, 6, 1)), TemporalStatus.PAST)

    def test_confirmed_entry_skips_live_search(self) -> None:
        live = FakeLiveSearch(LIVE)
        res = ConferenceResolver(self.catalog, live_search=live).resolve("token2049 singapore")
        self.assertEqual(res.entry.slug, "token2049-singapore-2026")
        self.assertIsNone(res.live)
        self.assertEqual(live.calls, [])

    def test_tbc_entry_uses_live_search(self) -> None:
        live = FakeLiveSearch(LIVE)
        res = ConferenceResolver(self.catalog, live_search=live).resolve("binance blockchain week")
        self.assertEqual(res.entry.slug, "binance-blockchain-week-2026")
        self.assertIs(res.live, LIVE)
        self.assertEqual(live.calls, ["binance blockchain week"])

    def test_unknown_without_live_result(self) -> None:
        live = FakeLiveSearch(None)
        res = ConferenceResolver(self.catalog, live_search=live).resolve("xyquzzplonk")
        self.assertIsNone(res.entry)
        self.assertIsNone(res.live)
        self.assertFalse(res.found)
        self.assertEqual(len(live.calls), 1)

    def test_tbc_entry_kept_when_live_search_finds_nothing(self) -> None:
        live = FakeLiveSearch(None)
        res = ConferenceResolver(self.catalog, live_search=live).resolve("binance blockchain week")
        self.assertEqual(res.entry.slug, "binance-blockchain-week-2026")
        self.assertIsNone(res.live)
        self.assertTrue(res.found)
        self.assertEqual(live.calls, ["binance blockchain week"])

    def test_lookup_many_and_detect(self) -> None:
        resolver = ConferenceResolver(self.catalog, live_search=FakeLiveSearch())
        pairs = resolver.lookup_many(["devcon", "ethcc"])
        self.assertEqual([e.slug for _, e in pairs], ["devcon-2026", "ethcc-2026"])
        self.assertEqual(resolver.detect("see you at devcon").slug, "devcon-2026")


if __name__ == "__main__":
    unittest.main()
