import os
import unittest
from unittest import mock

from monday_dash.config import DEFAULT_API_URL, DEFAULT_API_VERSION, DEFAULT_PORT, load_settings, require_env


class TestSettings(unittest.TestCase):
    @mock.patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        s = load_settings()
        self.assertEqual(s.api_token, "")
        self.assertFalse(s.has_token)
        self.assertEqual(s.api_url, DEFAULT_API_URL)
        self.assertEqual(s.api_version, DEFAULT_API_VERSION)
        self.assertEqual(s.port, DEFAULT_PORT)

    @mock.patch.dict(os.environ, {
        "MONDAY_API_TOKEN": " abc ",
        "MONDAY_API_URL": "https://proxy.test/v2",
        "MONDAY_API_VERSION": "2024-01",
        "PORT": "8080",
    }, clear=True)
    def test_from_env(self) -> None:
        s = load_settings()
        self.assertEqual(s.api_token, "abc")
        self.assertTrue(s.has_token)
        self.assertEqual(s.api_url, "https://proxy.test/v2")
        self.assertEqual(s.api_version, "2024-01")
        self.assertEqual(s.port, 8080)

    @mock.patch.dict(os.environ, {"PORT": "eighty"}, clear=True)
    def test_bad_port(self) -> None:
        with self.assertRaises(RuntimeError):
            load_settings()

    @mock.patch.dict(os.environ, {"MONDAY_API_TOKEN": "  "}, clear=True)
    def test_require_env(self) -> None:
        with self.assertRaises(RuntimeError) as ctx:
            require_env("MONDAY_API_TOKEN")
        self.assertEqual(str(ctx.exception), "MONDAY_API_TOKEN missing/invalid")


if __name__ == "__main__":
    unittest.main(verbosity=2)
