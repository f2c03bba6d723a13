import unittest

from chartfeed.candles.split import apply_split
from chartfeed.config import SplitConfig

from support import at, trades_desc


class TestApplySplit(unittest.TestCase):
    def setUp(self):
        self.split = SplitConfig(ticker="HALO", amount=10.0, cutover=at(100))
        self.trades = trades_desc((50, 20.0, 1.0), (100, 2.0, 10.0), (150, 2.5, 4.0))

    def test_rescales_only_before_cutover(self):
        adjusted = apply_split("halo", self.trades, self.split)

        self.assertEqual(adjusted, 1)
        newest, at_cutover, oldest = self.trades
        self.assertEqual((oldest.price, oldest.amount), (2.0, 10.0))
        self.assertEqual((at_cutover.price, at_cutover.amount), (2.0, 10.0))
        self.assertEqual((newest.price, newest.amount), (2.5, 4.0))

    def test_other_ticker_untouched(self):
        before = list(self.trades)
        self.assertEqual(apply_split("vet", self.trades, self.split), 0)
        self.assertEqual(self.trades, before)

    def test_non_positive_ratio_is_noop(self):
        before = list(self.trades)
        split = SplitConfig(ticker="HALO", amount=0.0, cutover=at(100))
        self.assertEqual(apply_split("HALO", self.trades, split), 0)
        self.assertEqual(self.trades, before)

    def test_post_cutover_trades_never_rescaled(self):
        # Each sync cycle rebuilds from the raw history; repeat on fresh copies.
        for _ in range(3):
            trades = trades_desc((50, 20.0, 1.0), (100, 2.0, 10.0), (150, 2.5, 4.0))
            apply_split("HALO", trades, self.split)
            self.assertEqual((trades[0].price, trades[0].amount), (2.5, 4.0))
            self.assertEqual((trades[1].price, trades[1].amount), (2.0, 10.0))


if __name__ == "__main__":
    unittest.main()
