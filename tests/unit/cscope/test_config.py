from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from cscopejump import config
from cscopejump.lookup import DEFAULT_CSCOPE, DEFAULT_TIMEOUT_SECONDS


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch("cscopejump.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _write(self, payload: object) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(payload), encoding="utf-8")

    def test_missing_config_uses_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        index_config = config.load_index_config()
        self.assertEqual(index_config.global_indexes, [])
        self.assertEqual(index_config.project_indexes, {})
        self.assertEqual(config.load_cscope_executable(), DEFAULT_CSCOPE)
        self.assertEqual(config.load_timeout_seconds(), DEFAULT_TIMEOUT_SECONDS)

    def test_malformed_config_falls_back_to_empty(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

        self._write(["not", "an", "object"])
        self.assertEqual(config.load_config(), {})

    def test_load_index_config_filters_invalid_entries(self) -> None:
        self._write(
            {
                "indexes": ["/g/cscope.out", 7, ""],
                "projects": {
                    "/proj": "/alt/db.out",
                    "/multi": ["/m1.out", None, "/m2.out"],
                    "/bad": 3,
                    "/empty": [],
                },
            }
        )
        index_config = config.load_index_config()
        self.assertEqual(index_config.global_indexes, ["/g/cscope.out"])
        self.assertEqual(
            index_config.project_indexes,
            {"/proj": "/alt/db.out", "/multi": ["/m1.out", "/m2.out"]},
        )

    def test_scalar_settings_validate_types(self) -> None:
        self._write({"cscope": "  /opt/cscope  ", "timeout_seconds": 2.5})
        self.assertEqual(config.load_cscope_executable(), "/opt/cscope")
        self.assertEqual(config.load_timeout_seconds(), 2.5)

        self._write({"cscope": "", "timeout_seconds": True})
        self.assertEqual(config.load_cscope_executable(), DEFAULT_CSCOPE)
        self.assertEqual(config.load_timeout_seconds(), DEFAULT_TIMEOUT_SECONDS)

        self._write({"timeout_seconds": -1})
        self.assertEqual(config.load_timeout_seconds(), DEFAULT_TIMEOUT_SECONDS)

    def test_add_project_index_grows_string_into_list(self) -> None:
        config.add_project_index("/proj", "/a.out")
        self.assertEqual(config.load_index_config().project_indexes, {"/proj": "/a.out"})

        config.add_project_index("/proj", "/b.out")
        config.add_project_index("/proj", "/c.out")
        self.assertEqual(config.load_index_config().project_indexes, {"/proj": ["/a.out", "/b.out", "/c.out"]})

    def test_add_global_index_appends(self) -> None:
        config.add_global_index("/one.out")
        config.add_global_index("/two.out")
        self.assertEqual(config.load_index_config().global_indexes, ["/one.out", "/two.out"])
        self.assertTrue(self.config_path.read_text(encoding="utf-8").endswith("\n"))


if __name__ == "__main__":
    unittest.main()
