"""Tests for persisted viewer preferences."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazycomic.layout import Size
from lazycomic.runtime import config
from lazycomic.runtime.metrics import DEFAULT_CELL_SIZE
from lazycomic.viewer import PageMode


class ConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write(self, data: object) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_or_malformed_config_loads_empty(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})
        self._write([1, 2])
        self.assertEqual(config.load_config(), {})

    def test_page_mode_round_trip_keeps_other_keys(self) -> None:
        self._write({"cell_size": [8, 16]})

        config.save_page_mode(PageMode.RIGHT_TO_LEFT)

        self.assertIs(config.load_page_mode(), PageMode.RIGHT_TO_LEFT)
        self.assertEqual(config.load_config()["cell_size"], [8, 16])

    def test_unknown_page_mode_is_ignored(self) -> None:
        self._write({"page_mode": "sideways"})
        self.assertIsNone(config.load_page_mode())
        self._write({"page_mode": " RTL "})
        self.assertIs(config.load_page_mode(), PageMode.RIGHT_TO_LEFT)

    def test_cell_size_validation(self) -> None:
        self._write({"cell_size": [8, 16]})
        self.assertEqual(config.load_cell_size(), Size(8, 16))
        for bad in ([0, 16], [8], [True, 16], "8x16", [8.5, 16]):
            self._write({"cell_size": bad})
            self.assertEqual(config.load_cell_size(), DEFAULT_CELL_SIZE, bad)

    def test_poll_interval_defaults_and_cap(self) -> None:
        self.assertEqual(config.load_poll_interval_ms(), config.DEFAULT_POLL_INTERVAL_MS)
        self._write({"poll_interval_ms": 120})
        self.assertEqual(config.load_poll_interval_ms(), 120)
        self._write({"poll_interval_ms": 60_000})
        self.assertEqual(config.load_poll_interval_ms(), config.MAX_POLL_INTERVAL_MS)
        self._write({"poll_interval_ms": -5})
        self.assertEqual(config.load_poll_interval_ms(), config.DEFAULT_POLL_INTERVAL_MS)


if __name__ == "__main__":
    unittest.main()
