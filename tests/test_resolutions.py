import unittest

from chartfeed.candles.resolutions import parse_resolutions, resolution_minutes
from chartfeed.models.market import Resolution


class TestResolutionMinutes(unittest.TestCase):
    def test_units(self):
        self.assertEqual(resolution_minutes("30"), 30)
        self.assertEqual(resolution_minutes("1D"), 1440)
        self.assertEqual(resolution_minutes("2W"), 20160)
        self.assertEqual(resolution_minutes("1M"), 43200)
        self.assertEqual(resolution_minutes("3M"), 129600)

    def test_unparseable(self):
        for label in ("abc", "D", "xW", "0", "-5", ""):
            self.assertIsNone(resolution_minutes(label), label)


class TestParseResolutions(unittest.TestCase):
    def test_keeps_order_and_drops_bad_labels(self):
        with self.assertLogs("resolutions", level="WARNING") as logs:
            result = parse_resolutions(["1D", "abc", "30", "2W"])

        self.assertEqual(
            result,
            [
                Resolution(label="1D", minutes=1440),
                Resolution(label="30", minutes=30),
                Resolution(label="2W", minutes=20160),
            ],
        )
        self.assertTrue(any("abc" in line for line in logs.output))

    def test_defaults_when_empty(self):
        result = parse_resolutions([])
        self.assertEqual([r.label for r in result], ["30", "60", "360", "1D"])
        self.assertEqual([r.minutes for r in result], [30, 60, 360, 1440])

    def test_same_label_same_minutes(self):
        a = parse_resolutions(["360", "1W"])
        b = parse_resolutions(["360", "1W"])
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
