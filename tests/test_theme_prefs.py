import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from theme_prefs import PREFS_ENV_VAR, ThemePreference, default_prefs_path


class TestThemePreference(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "nested" / "preferences.json"

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_is_light(self):
        self.assertFalse(ThemePreference(self.path).load())

    def test_save_and_load(self):
        prefs = ThemePreference(self.path)
        prefs.save(True)
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), {"theme": "dark"})
        self.assertTrue(ThemePreference(self.path).load())
        prefs.save(False)
        self.assertFalse(prefs.load())

    def test_toggle_persists(self):
        prefs = ThemePreference(self.path)
        self.assertTrue(prefs.toggle(False))
        self.assertTrue(prefs.load())
        self.assertFalse(prefs.toggle(True))
        self.assertFalse(prefs.load())

    def test_corrupt_file_is_light(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs('theme_prefs', level='WARNING'):
            self.assertFalse(ThemePreference(self.path).load())

    def test_unexpected_value_is_light(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"theme": "solarized"}), encoding="utf-8")
        self.assertFalse(ThemePreference(self.path).load())

    def test_env_override(self):
        with mock.patch.dict(os.environ, {PREFS_ENV_VAR: str(self.path)}):
            self.assertEqual(default_prefs_path(), self.path)
            self.assertEqual(ThemePreference().path, self.path)


if __name__ == "__main__":
    unittest.main()
