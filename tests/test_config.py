import os
import unittest
from datetime import datetime, timezone
from unittest import mock

from chartfeed.config import get_settings, parse_instant


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = get_settings()

        self.assertEqual(settings.resolutions, ["30", "60", "360", "1D"])
        self.assertEqual(settings.sync_interval_mins, 5)
        self.assertTrue(settings.sync_on_startup)
        self.assertEqual(settings.split.amount, 0.0)
        self.assertIsNone(settings.split.cutover)
        self.assertIsNone(settings.ignore_trades_before)
        self.assertEqual((settings.host, settings.port), ("0.0.0.0", 3000))

    def test_from_env(self):
        env = {
            "RESOLUTIONS": "60, 1D ,1W",
            "SYNC_INTERVAL_MINS": "2",
            "SYNC_ON_STARTUP": "false",
            "SPLIT_TICKER": "halo",
            "SPLIT_AMOUNT": "10",
            "PRE_SPLIT_TIME": "2019-02-01T00:00:00Z",
            "IGNORE_TRADES_BEFORE": "2018-11-01T12:00:00",
            "HALODEX_BASE_URL": "https://dex.example/api/",
            "PORT": "8080",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = get_settings()

        self.assertEqual(settings.resolutions, ["60", "1D", "1W"])
        self.assertEqual(settings.sync_interval_mins, 2)
        self.assertFalse(settings.sync_on_startup)
        self.assertEqual(settings.split.ticker, "halo")
        self.assertEqual(settings.split.amount, 10.0)
        self.assertEqual(settings.split.cutover, datetime(2019, 2, 1, tzinfo=timezone.utc))
        self.assertEqual(settings.ignore_trades_before, datetime(2018, 11, 1, 12, tzinfo=timezone.utc))
        self.assertEqual(settings.halodex_base_url, "https://dex.example/api")
        self.assertEqual(settings.port, 8080)

    def test_bad_values_fail_fast(self):
        with mock.patch.dict(os.environ, {"SYNC_INTERVAL_MINS": "often"}, clear=True):
            with self.assertRaises(RuntimeError):
                get_settings()
        with mock.patch.dict(os.environ, {"PRE_SPLIT_TIME": "yesterday"}, clear=True):
            with self.assertRaises(RuntimeError):
                get_settings()

    def test_parse_instant_blank(self):
        self.assertIsNone(parse_instant("  ", "X"))


if __name__ == "__main__":
    unittest.main()
