import os
import unittest
from unittest import mock

from utils.config import (
    DEFAULT_API_URL,
    DEFAULT_LOGIN_DELAY,
    DEFAULT_PAGE_SIZE,
    Settings,
    load_settings,
)

_KEYS = (
    "FAKESTORE_API_URL",
    "FAKESTORE_HTTP_TIMEOUT",
    "ADMIN_PAGE_SIZE",
    "ADMIN_EXPORT_DIR",
    "ADMIN_SESSION_DB",
    "ADMIN_LOGIN_DELAY",
)


class SettingsTestCase(unittest.TestCase):
    def setUp(self):
        cleaned = {k: v for k, v in os.environ.items() if k not in _KEYS}
        patcher = mock.patch.dict(os.environ, cleaned, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_defaults(self):
        self.assertEqual(load_settings(use_dotenv=False), Settings())

    def test_values_from_environment(self):
        os.environ.update(
            {
                "FAKESTORE_API_URL": '"http://localhost:3000/"',
                "FAKESTORE_HTTP_TIMEOUT": "2.5",
                "ADMIN_PAGE_SIZE": "10",
                "ADMIN_EXPORT_DIR": "/tmp/out",
                "ADMIN_SESSION_DB": "/tmp/s.sqlite",
                "ADMIN_LOGIN_DELAY": "0",
            }
        )
        settings = load_settings(use_dotenv=False)
        self.assertEqual(settings.api_url, "http://localhost:3000")
        self.assertEqual(settings.http_timeout, 2.5)
        self.assertEqual(settings.page_size, 10)
        self.assertEqual(settings.export_dir, "/tmp/out")
        self.assertEqual(settings.session_db, "/tmp/s.sqlite")
        self.assertEqual(settings.login_delay, 0.0)

    def test_invalid_values_fall_back(self):
        os.environ.update(
            {
                "FAKESTORE_API_URL": "",
                "FAKESTORE_HTTP_TIMEOUT": "soon",
                "ADMIN_PAGE_SIZE": "0",
                "ADMIN_LOGIN_DELAY": "-1",
            }
        )
        settings = load_settings(use_dotenv=False)
        self.assertEqual(settings.api_url, DEFAULT_API_URL)
        self.assertIsNone(settings.http_timeout)
        self.assertEqual(settings.page_size, DEFAULT_PAGE_SIZE)
        self.assertEqual(settings.login_delay, DEFAULT_LOGIN_DELAY)


if __name__ == "__main__":
    unittest.main()
