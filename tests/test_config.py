"""Tests for the environment / .env configuration loader"""
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from config.loader import ConfigLoader, get_config_loader, reset_config_loader


class TestConfigLoader(unittest.TestCase):

    def setUp(self):
        self.loader = ConfigLoader(env_path=os.path.join(tempfile.gettempdir(), "no-such-dir", ".env"))

    def test_default_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(self.loader.get("MS_CLIENT_ID", ""), "")
            self.assertEqual(self.loader.get("HTTP_TIMEOUT", 30.0), 30.0)

    def test_values_are_coerced_to_the_default_type(self):
        env = {"HTTP_TIMEOUT": "12.5", "RETRIES": "3", "VERBOSE": "yes", "MS_SCOPE": "XboxLive.signin"}
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(self.loader.get("HTTP_TIMEOUT", 30.0), 12.5)
            self.assertEqual(self.loader.get("RETRIES", 1), 3)
            self.assertIs(self.loader.get("VERBOSE", False), True)
            self.assertEqual(self.loader.get("MS_SCOPE", "default"), "XboxLive.signin")

    def test_bool_is_not_parsed_as_int(self):
        with patch.dict(os.environ, {"FLAG": "0"}, clear=True):
            self.assertIs(self.loader.get("FLAG", True), False)

    def test_unparseable_number_falls_back_to_default(self):
        with patch.dict(os.environ, {"HTTP_TIMEOUT": "soon", "RETRIES": "many"}, clear=True):
            with self.assertLogs("config.loader", level="WARNING"):
                self.assertEqual(self.loader.get("HTTP_TIMEOUT", 30.0), 30.0)
            self.assertEqual(self.loader.get("RETRIES", 1), 1)

    def test_url_override_must_be_http_or_https(self):
        default = "https://xsts.auth.xboxlive.com/xsts/authorize"
        with patch.dict(os.environ, {"XSTS_AUTH_URL": "http://127.0.0.1:8080/xsts"}, clear=True):
            self.assertEqual(self.loader.get_url("XSTS_AUTH_URL", default), "http://127.0.0.1:8080/xsts")
        with patch.dict(os.environ, {"XSTS_AUTH_URL": "xsts.local"}, clear=True):
            with self.assertLogs("config.loader", level="WARNING"):
                self.assertEqual(self.loader.get_url("XSTS_AUTH_URL", default), default)

    def test_env_file_is_loaded_without_overriding_environment(self):
        with tempfile.TemporaryDirectory() as tmp:
            env_file = Path(tmp) / ".env"
            env_file.write_text("MS_CLIENT_ID=from-file\nMS_SCOPE=file-scope\n")

            with patch.dict(os.environ, {"MS_SCOPE": "from-env"}, clear=True):
                loader = ConfigLoader(env_path=str(env_file))
                self.assertEqual(loader.get("MS_CLIENT_ID", ""), "from-file")
                self.assertEqual(loader.get("MS_SCOPE", ""), "from-env")

    def test_global_loader_is_shared_until_reset(self):
        reset_config_loader()
        try:
            first = get_config_loader()
            self.assertIs(get_config_loader(), first)
            reset_config_loader()
            self.assertIsNot(get_config_loader(), first)
        finally:
            reset_config_loader()


if __name__ == '__main__':
    unittest.main()
