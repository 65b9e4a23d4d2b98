import unittest
from datetime import datetime, timedelta, timezone

import pytz

from _test_support import reset_database  # noqa: F401
from saanify_automation.time_utils import coerce_utc, isoformat_utc, now_utc, parse_timestamp


class TimeUtilsTests(unittest.TestCase):
    def test_now_utc_is_timezone_aware(self):
        value = now_utc()
        self.assertEqual(value.tzinfo, pytz.UTC)

    def test_coerce_utc_localizes_naive(self):
        coerced = coerce_utc(datetime(2026, 1, 2, 3, 4, 5))
        self.assertEqual(coerced.tzinfo, pytz.UTC)

    def test_coerce_utc_none_passthrough(self):
        self.assertIsNone(coerce_utc(None))

    def test_parse_timestamp_accepts_zulu_suffix(self):
        parsed = parse_timestamp("2026-10-19T12:00:00.123Z")
        self.assertEqual(parsed, datetime(2026, 10, 19, 12, 0, 0, 123000, tzinfo=pytz.UTC))

    def test_parse_timestamp_converts_offsets(self):
        parsed = parse_timestamp("2026-10-19T17:30:00+05:30")
        self.assertEqual(parsed.tzinfo, pytz.UTC)
        self.assertEqual(parsed.hour, 12)

    def test_parse_timestamp_passthrough_values(self):
        aware = datetime(2026, 1, 1, tzinfo=timezone(timedelta(hours=1)))
        self.assertEqual(parse_timestamp(aware).hour, 23)
        self.assertIsNone(parse_timestamp(None))
        self.assertIsNone(parse_timestamp(""))

    def test_isoformat_utc_normalizes_offsets(self):
        self.assertEqual(isoformat_utc(datetime(2026, 10, 19, 12, 0)), "2026-10-19T12:00:00+00:00")
        shifted = datetime(2026, 10, 19, 17, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        self.assertEqual(isoformat_utc(shifted), "2026-10-19T12:00:00+00:00")


if __name__ == "__main__":
    unittest.main()
