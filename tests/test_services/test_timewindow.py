# tests/test_services/test_timewindow.py
import unittest
from datetime import date, datetime, timezone

from shift import timewindow
from shift.timewindow import (
    add_months,
    is_within_allowed_window,
    time_options,
    today_local,
    valid_duration,
    valid_time_slot,
    validate_date_range,
    validate_time_slot,
)


class TodayLocalTests(unittest.TestCase):
    def test_uses_reference_timezone_not_utc(self):
        # 17:00 UTC on the 9th is already the 10th in Singapore
        now = datetime(2025, 6, 9, 17, 0, tzinfo=timezone.utc)
        self.assertEqual(today_local(now), date(2025, 6, 10))

    def test_same_day_before_midnight(self):
        now = datetime(2025, 6, 9, 15, 59, tzinfo=timezone.utc)
        self.assertEqual(today_local(now), date(2025, 6, 9))


class AddMonthsTests(unittest.TestCase):
    def test_plain(self):
        self.assertEqual(add_months(date(2025, 6, 10), 1), date(2025, 7, 10))

    def test_clamps_to_month_end(self):
        self.assertEqual(add_months(date(2025, 1, 31), 1), date(2025, 2, 28))
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 2, 29))

    def test_year_rollover(self):
        self.assertEqual(add_months(date(2025, 12, 15), 1), date(2026, 1, 15))


class DateWindowTests(unittest.TestCase):
    today = date(2025, 6, 10)

    def test_today_allowed(self):
        self.assertTrue(is_within_allowed_window("2025-06-10", today=self.today))

    def test_exactly_one_month_allowed(self):
        self.assertTrue(is_within_allowed_window("2025-07-10", today=self.today))

    def test_past_rejected(self):
        self.assertEqual(validate_date_range("2025-06-09", today=self.today), "Date cannot be in the past")

    def test_too_far_rejected(self):
        err = validate_date_range("2025-07-11", today=self.today)
        self.assertIn("future", err)

    def test_bad_format(self):
        self.assertFalse(is_within_allowed_window("10/06/2025", today=self.today))
        self.assertFalse(is_within_allowed_window("2025-02-30", today=self.today))


class TimeSlotTests(unittest.TestCase):
    def test_valid_slot(self):
        self.assertTrue(valid_time_slot("08:00", "12:00"))
        self.assertTrue(valid_time_slot("14:00", "23:00"))

    def test_before_day_start(self):
        self.assertFalse(valid_time_slot("07:45", "12:00"))

    def test_after_day_end(self):
        self.assertFalse(valid_time_slot("22:00", "23:15"))

    def test_off_grid(self):
        self.assertFalse(valid_time_slot("09:10", "13:10"))

    def test_start_not_before_end(self):
        self.assertFalse(valid_time_slot("12:00", "12:00"))
        self.assertEqual(validate_time_slot("13:00", "12:00"), "End time must be after start time")

    def test_malformed(self):
        self.assertFalse(valid_time_slot("9:00", "13:00"))
        self.assertFalse(valid_time_slot("09:00", "24:00"))


class DurationTests(unittest.TestCase):
    def test_permitted(self):
        self.assertTrue(valid_duration(4))
        self.assertTrue(valid_duration(9))

    def test_not_permitted(self):
        self.assertFalse(valid_duration(8))
        self.assertFalse(valid_duration(0))


class TimeOptionsTests(unittest.TestCase):
    def test_grid(self):
        opts = time_options()
        self.assertEqual(opts[0], "08:00")
        self.assertEqual(opts[-1], "22:45")
        self.assertEqual(len(opts), 60)
        self.assertIn("09:15", opts)

    def test_to_minutes_round_trip(self):
        self.assertEqual(timewindow.from_minutes(timewindow.to_minutes("22:45")), "22:45")


if __name__ == "__main__":
    unittest.main()
