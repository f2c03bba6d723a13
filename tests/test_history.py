import tempfile
import unittest

from chartfeed.candles.builder import build_bars
from chartfeed.candles.history import query_history
from chartfeed.candles.store import BarCache
from chartfeed.models.market import Resolution
from chartfeed.storage import JsonFileStore

from support import at, trades_desc


def ts(minutes):
    return int(at(minutes).timestamp())


class TestQueryHistory(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.storage = JsonFileStore(self._tmp.name)
        self.cache = BarCache(self.storage, [Resolution("60", 60)])
        trades = trades_desc(
            (0, 1.0, 1.0), (30, 2.0, 1.0),
            (300, 3.0, 1.0),
            (600, 4.0, 1.0), (610, 5.0, 2.0),
            (900, 6.0, 1.0),
        )
        # Bars at 0, 300, 600; the 900 bar is still open.
        self.cache.replace("halo", "60", build_bars(trades, 60))

    def tearDown(self):
        self._tmp.cleanup()

    def test_inclusive_window(self):
        h = query_history(self.cache, "halo", "60", ts(300), ts(600))

        self.assertEqual(h.s, "ok")
        self.assertEqual(h.t, [ts(300), ts(600)])
        self.assertEqual(h.o, [3.0, 4.0])
        self.assertEqual(h.c, [3.0, 5.0])
        self.assertEqual(h.v, [1.0, 3.0])
        self.assertIsNone(h.nextTime)

    def test_empty_window_points_at_earlier_bar(self):
        h = query_history(self.cache, "halo", "60", ts(700), ts(800))

        self.assertEqual(h.s, "no_data")
        self.assertEqual(h.nextTime, ts(600))
        self.assertIsNone(h.t)

    def test_window_before_any_bar(self):
        h = query_history(self.cache, "halo", "60", ts(-500), ts(-100))
        self.assertEqual(h.s, "no_data")
        self.assertIsNone(h.nextTime)

    def test_missing_bars_is_no_data(self):
        h = query_history(self.cache, "vet", "60", 0, ts(1000))
        self.assertEqual(h.s, "no_data")

    def test_reads_persisted_bars_on_miss(self):
        bars = self.cache.get("halo", "60")
        self.storage.save_bars("dbet", "60", bars)

        h = query_history(self.cache, "DBET", "60", ts(0), ts(1000))

        self.assertEqual(h.s, "ok")
        self.assertEqual(h.t, [ts(0), ts(300), ts(600)])


if __name__ == "__main__":
    unittest.main()
