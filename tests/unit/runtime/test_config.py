"""Tests for config persistence and value validation.

Ensures malformed config data falls back to defaults and explicit CLI
overrides win over persisted values.
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyhub.runtime import config
from lazyhub.search.settings import SearchSettings


class ConfigBehaviorTests(unittest.TestCase):
    def _with_config(self, data: object):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        config_path = Path(tmp.name) / "config.json"
        config_path.write_text(json.dumps(data), encoding="utf-8")
        patcher = mock.patch("lazyhub.runtime.config.CONFIG_PATH", config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        return config_path

    def test_defaults_when_config_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazyhub.runtime.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_search_settings(), SearchSettings())
                self.assertEqual(config.load_api_base(), "https://api.github.com")
                self.assertEqual(config.load_style_name(), "monokai")

    def test_malformed_config_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("lazyhub.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_valid_values_are_loaded(self) -> None:
        self._with_config(
            {
                "debounce_ms": 250,
                "page_size": 10,
                "request_timeout_seconds": 4.5,
                "api_base": " https://ghe.example/api/v3 ",
            }
        )
        settings = config.load_search_settings()
        self.assertEqual(settings.debounce_seconds, 0.25)
        self.assertEqual(settings.page_size, 10)
        self.assertEqual(settings.request_timeout_seconds, 4.5)
        self.assertEqual(config.load_api_base(), "https://ghe.example/api/v3")

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        self._with_config({"debounce_ms": -1, "page_size": 1000, "request_timeout_seconds": True, "api_base": 5})
        self.assertEqual(config.load_search_settings(), SearchSettings())
        self.assertEqual(config.load_api_base(), "https://api.github.com")

    def test_explicit_overrides_win(self) -> None:
        self._with_config({"debounce_ms": 250, "page_size": 10})
        settings = config.load_search_settings(debounce_seconds=0.1, page_size=3, request_timeout_seconds=1.0)
        self.assertEqual(settings, SearchSettings(debounce_seconds=0.1, page_size=3, request_timeout_seconds=1.0))

    def test_style_name_round_trip(self) -> None:
        config_path = self._with_config({"page_size": 7})
        config.save_style_name("  friendly ")
        self.assertEqual(config.load_style_name(), "friendly")
        self.assertEqual(json.loads(config_path.read_text(encoding="utf-8"))["page_size"], 7)

    def test_token_comes_from_environment(self) -> None:
        with mock.patch.dict(os.environ, {"GITHUB_TOKEN": " abc "}):
            self.assertEqual(config.load_token(), "abc")
        with mock.patch.dict(os.environ, {"GITHUB_TOKEN": ""}):
            self.assertIsNone(config.load_token())


if __name__ == "__main__":
    unittest.main()
