"""Tests for config loading, legacy fallbacks, and typed views."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from summon import config


class ConfigLoadingTests(unittest.TestCase):
    def test_missing_config_raises_config_error_naming_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("summon.config.CONFIG_PATH", config_path):
                with self.assertRaises(config.ConfigError) as caught:
                    config.load_config()
        self.assertIn(str(config_path), str(caught.exception))

    def test_malformed_config_raises_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            for raw in ("{broken", "[1, 2]"):
                with self.subTest(raw=raw):
                    config_path.write_text(raw, encoding="utf-8")
                    with mock.patch("summon.config.CONFIG_PATH", config_path):
                        with self.assertRaises(config.ConfigError):
                            config.load_config_document()

    def test_save_and_load_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("summon.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "workingDirectory": tmp,
                        "repos": {"work": {"api": "/src/api"}},
                        "urls": {"docs": "https://docs.example.com"},
                        "urlGroups": {"morning": ["https://a.example", 3]},
                        "browser": " firefox ",
                        "yiren": {"kept": True},
                    }
                )
                loaded = config.load_config()
                document = config.load_config_document()

        self.assertEqual(loaded.working_directory, Path(tmp))
        self.assertEqual(loaded.repos, {"work": {"api": "/src/api"}})
        self.assertEqual(loaded.urls, {"docs": "https://docs.example.com"})
        self.assertEqual(loaded.url_groups, {"morning": ["https://a.example"]})
        self.assertEqual(loaded.browser, "firefox")
        self.assertEqual(document["yiren"], {"kept": True})

    def test_load_config_falls_back_to_legacy_path_when_default_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = Path(tmp) / "native" / "config.json"
            legacy_path = Path(tmp) / ".hsh" / "config.json"
            legacy_path.parent.mkdir()
            legacy_path.write_text('{"repos": {"work": {"api": "/src/api"}}}\n', encoding="utf-8")
            with mock.patch("summon.config.CONFIG_PATH", default_path), mock.patch(
                "summon.config.DEFAULT_CONFIG_PATH", default_path
            ), mock.patch("summon.config.LEGACY_CONFIG_PATH", legacy_path):
                loaded = config.load_config()
                self.assertEqual(config.save_config({"repos": {}}), legacy_path)
        self.assertEqual(loaded.repos, {"work": {"api": "/src/api"}})

    def test_load_config_does_not_use_legacy_for_custom_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            custom_path = Path(tmp) / "custom.json"
            default_path = Path(tmp) / "native" / "config.json"
            legacy_path = Path(tmp) / "legacy.json"
            legacy_path.write_text('{"repos": {}}\n', encoding="utf-8")
            with mock.patch("summon.config.CONFIG_PATH", custom_path), mock.patch(
                "summon.config.DEFAULT_CONFIG_PATH", default_path
            ), mock.patch("summon.config.LEGACY_CONFIG_PATH", legacy_path):
                with self.assertRaises(config.ConfigError):
                    config.load_config()


class ConfigDocumentTests(unittest.TestCase):
    def test_legacy_content_is_read_as_repos_map(self) -> None:
        legacy = {"work": {"api": "/src/api"}, "oss": {"summon": "/src/summon"}}
        with self.assertLogs("summon.config", level="WARNING"):
            loaded = config.SummonConfig.from_document(legacy)
        self.assertIsNone(loaded.working_directory)
        self.assertEqual(loaded.repos, legacy)
        self.assertEqual(config.migrate_document(legacy), {"repos": legacy})

    def test_structured_document_is_not_migrated(self) -> None:
        document = {"workingDirectory": "/src"}
        self.assertIs(config.migrate_document(document), document)
        loaded = config.SummonConfig.from_document(document)
        self.assertEqual(loaded.working_directory, Path("/src"))
        self.assertEqual(loaded.repos, {})

    def test_working_directory_expands_home_and_empty_means_unset(self) -> None:
        with mock.patch.dict("os.environ", {"HOME": "/home/tester"}):
            loaded = config.SummonConfig.from_document({"workingDirectory": "~/code", "repos": {}})
        self.assertEqual(loaded.working_directory, Path("/home/tester/code"))

        empty = config.SummonConfig.from_document({"workingDirectory": "", "repos": {"a": {"b": "/c"}}})
        self.assertIsNone(empty.working_directory)

    def test_whitespace_only_working_directory_is_an_error(self) -> None:
        with self.assertRaises(config.ConfigError):
            config.SummonConfig.from_document({"workingDirectory": "   ", "repos": {"a": {"b": "/c"}}})

    def test_malformed_sections_are_dropped(self) -> None:
        loaded = config.SummonConfig.from_document(
            {"repos": {"work": {"api": 1, "web": "/w"}, "bad": "shape"}, "urls": ["x"], "urlGroups": {"g": "x"}}
        )
        self.assertEqual(loaded.repos, {"work": {"web": "/w"}, "bad": {}})
        self.assertEqual(loaded.urls, {})
        self.assertEqual(loaded.url_groups, {})

    def test_save_config_output_is_pretty_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "config.json"
            config.save_config({"repos": {}}, target)
            raw = target.read_text(encoding="utf-8")
        self.assertEqual(json.loads(raw), {"repos": {}})
        self.assertTrue(raw.endswith("}\n"))
        self.assertIn('  "repos"', raw)


if __name__ == "__main__":
    unittest.main()
