# tests/test_config.py
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from navtemplate.config import CONFIG_ENV_VAR, DEFAULT_CONFIG, Config
from navtemplate.errors import ConfigError


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def write(self, text, name="config.yaml"):
        path = self.tmp / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_file_uses_defaults(self):
        cfg = Config(str(self.tmp / "absent.yaml"))
        self.assertEqual(cfg.source, "defaults")
        self.assertIsNone(cfg.resolved_config_path)
        self.assertEqual(cfg.as_dict(), DEFAULT_CONFIG)

    def test_file_is_merged_over_defaults(self):
        path = self.write("menu:\n  bar_height: 70\nlogging:\n  level: DEBUG\n")
        cfg = Config(str(path))
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.get_nested("menu.bar_height"), 70)
        self.assertEqual(cfg.get_nested("menu.order_key"), "MenuItemOrder")
        self.assertEqual(cfg.get_nested("logging.level"), "DEBUG")
        self.assertEqual(cfg.get_nested("logging.max_lines"), 1000)

    def test_get_nested_missing(self):
        cfg = Config(str(self.tmp / "absent.yaml"))
        self.assertEqual(cfg.get_nested("menu.nope", 5), 5)
        self.assertEqual(cfg.get_nested("app_group.deeper", "x"), "x")
        self.assertIsNone(cfg.get_nested(""))

    def test_get_path_expands_home(self):
        cfg = Config(str(self.tmp / "absent.yaml"))
        self.assertEqual(cfg.get_path("data_dir"), Path("~/.navtemplate").expanduser())
        with self.assertRaises(ConfigError):
            cfg.get_path("menu.missing")

    def test_as_dict_is_a_copy(self):
        cfg = Config(str(self.tmp / "absent.yaml"))
        cfg.as_dict()["menu"]["bar_height"] = 1
        self.assertEqual(cfg.get_nested("menu.bar_height"), 90)

    def test_empty_file(self):
        cfg = Config(str(self.write("")))
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.as_dict(), DEFAULT_CONFIG)

    def test_malformed_yaml(self):
        with self.assertRaises(ConfigError):
            Config(str(self.write("menu: [unclosed")))

    def test_non_mapping(self):
        with self.assertRaises(ConfigError):
            Config(str(self.write("- a\n- b\n")))

    def test_env_var(self):
        path = self.write("app_group: from-env\n", name="env.yaml")
        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: str(path)}):
            cfg = Config()
        self.assertEqual(cfg.get("app_group"), "from-env")
        self.assertEqual(cfg.resolved_config_path, path.resolve())

    def test_reload(self):
        path = self.write("menu:\n  bar_height: 70\n")
        cfg = Config(str(path))
        path.write_text("menu:\n  bar_height: 60\n", encoding="utf-8")
        cfg.reload()
        self.assertEqual(cfg.get_nested("menu.bar_height"), 60)


if __name__ == '__main__':
    unittest.main()
