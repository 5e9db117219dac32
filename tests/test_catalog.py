"""
Unit tests for catalog loading.

Loader contract:
- the backing file is read once; later calls return the same mapping object
- missing / malformed data raises CatalogError on first access (no partial catalog)
- the loaded catalog is read-only
"""

import json
import tempfile
import threading
import time
import unittest
from dataclasses import FrozenInstanceError
from pathlib import Path
from unittest import mock

from conftrip import catalog as catalog_module
from conftrip.catalog import Catalog, default_catalog_path, load_catalog
from conftrip.model import CatalogError


def _record(name: str, **extra) -> dict:
    rec = {"name": name, "dates": "Oct 7-8, 2026", "city": "Singapore", "country": "Singapore", "airport": "SIN"}
    rec.update(extra)
    return rec


class TestCatalog(unittest.TestCase):
    def test_packaged_catalog_loads(self) -> None:
        catalog = Catalog()
        self.assertEqual(catalog.path, default_catalog_path())
        entries = catalog.load()
        self.assertIn("token2049-singapore-2026", entries)
        self.assertIn("ethdenver-2026", entries)
        for slug, entry in entries.items():
            self.assertEqual(slug, entry.slug)
            self.assertEqual(slug, slug.lower())

    def test_second_load_does_not_read_again(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            p.write_text(json.dumps({"alpha-2026": _record("Alpha")}), encoding="utf-8")

            catalog = Catalog(p)
            first = catalog.load()
            # deleting the file proves the second call is served from memory
            p.unlink()
            second = catalog.load()

            self.assertIs(first, second)
            self.assertEqual(catalog.load_count, 1)
            self.assertEqual(len(catalog), 1)

    def test_two_catalogs_are_structurally_identical(self) -> None:
        a = Catalog().load()
        b = Catalog().load()
        self.assertEqual(set(a), set(b))
        for slug in a:
            self.assertEqual(a[slug], b[slug])

    def test_catalog_order_follows_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            data = {"zeta": _record("Zeta"), "alpha": _record("Alpha"), "mid": _record("Mid")}
            p.write_text(json.dumps(data), encoding="utf-8")
            slugs = [e.slug for e in load_catalog(p).entries()]
            self.assertEqual(slugs, ["zeta", "alpha", "mid"])

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            catalog = Catalog(Path(d) / "missing.json")
            with self.assertRaises(CatalogError):
                catalog.load()

    def test_invalid_json_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(CatalogError):
                Catalog(p).load()

    def test_top_level_list_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            p.write_text(json.dumps([_record("Alpha")]), encoding="utf-8")
            with self.assertRaises(CatalogError):
                Catalog(p).load()

    def test_record_missing_fields_fails_whole_load(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            data = {"good": _record("Good"), "bad": {"name": "Bad"}}
            p.write_text(json.dumps(data), encoding="utf-8")
            with self.assertRaises(CatalogError):
                Catalog(p).load()

    def test_slug_mismatch_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            p.write_text(json.dumps({"alpha": _record("Alpha", slug="beta")}), encoding="utf-8")
            with self.assertRaises(CatalogError):
                Catalog(p).load()

    def test_slug_collision_after_normalizing_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            p.write_text(json.dumps({"alpha": _record("A"), "ALPHA": _record("B")}), encoding="utf-8")
            with self.assertRaises(CatalogError):
                Catalog(p).load()

    def test_failed_load_is_retried(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            catalog = Catalog(p)
            with self.assertRaises(CatalogError):
                catalog.load()
            p.write_text(json.dumps({"alpha": _record("Alpha")}), encoding="utf-8")
            self.assertIn("alpha", catalog.load())
            self.assertEqual(catalog.load_count, 2)

    def test_concurrent_first_load_parses_once(self) -> None:
        real_parse = catalog_module._parse_catalog

        def slow_parse(text, source):
            time.sleep(0.05)
            return real_parse(text, source)

        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "conferences.json"
            p.write_text(json.dumps({"alpha": _record("Alpha")}), encoding="utf-8")
            catalog = Catalog(p)
            results: list = []

            def worker() -> None:
                results.append(catalog.load())

            with mock.patch.object(catalog_module, "_parse_catalog", side_effect=slow_parse) as parse:
                threads = [threading.Thread(target=worker) for _ in range(8)]
                for t in threads:
                    t.start()
                for t in threads:
                    t.join()

            self.assertEqual(parse.call_count, 1)
            self.assertEqual(catalog.load_count, 1)
            self.assertEqual(len(results), 8)
            for r in results:
                self.assertIs(r, results[0])

    def test_catalog_is_read_only(self) -> None:
        entries = Catalog().load()
        with self.assertRaises(TypeError):
            entries["new"] = entries["devcon-2026"]  # type: ignore[index]
        with self.assertRaises(FrozenInstanceError):
            entries["devcon-2026"].name = "Changed"  # type: ignore[misc]
        self.assertIsInstance(entries["devcon-2026"].tags, tuple)

    def test_get_and_contains_normalize_slug(self) -> None:
        catalog = Catalog()
        self.assertIsNotNone(catalog.get(" DEVCON-2026 "))
        self.assertIn("Devcon-2026", catalog)
        self.assertNotIn("unknown", catalog)


if __name__ == "__main__":
    unittest.main()
