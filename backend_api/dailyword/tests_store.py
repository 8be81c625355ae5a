from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase

from dailyword.puzzles import MemoryStore, ProgressRecord, is_same_day

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class SameDayTests(SimpleTestCase):
    def test_same_calendar_day_ignores_time_of_day(self):
        self.assertTrue(is_same_day(NOW.replace(hour=0), NOW.replace(hour=23, minute=59)))

    def test_different_days(self):
        self.assertFalse(is_same_day(NOW, NOW + timedelta(days=1)))
        self.assertFalse(is_same_day(NOW, NOW.replace(year=2025)))
        self.assertFalse(is_same_day(NOW, NOW.replace(month=9)))

    def test_compared_in_given_timezone(self):
        late = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)
        next_morning = datetime(2026, 10, 20, 0, 30, tzinfo=timezone.utc)
        self.assertFalse(is_same_day(late, next_morning))
        # Both instants fall on 2026-10-19 in New York
        self.assertTrue(is_same_day(late, next_morning, ZoneInfo("America/New_York")))

    def test_naive_datetimes_taken_in_zone(self):
        self.assertTrue(is_same_day(datetime(2026, 10, 19, 1), NOW))


class MemoryStoreTests(SimpleTestCase):
    def test_empty_store(self):
        self.assertIsNone(MemoryStore(clock=lambda: NOW).get())

    def test_put_stamps_current_date(self):
        store = MemoryStore(clock=lambda: NOW)
        store.put("anger")
        self.assertEqual(store.get(), ProgressRecord(date=NOW.isoformat(), state="anger"))

    def test_put_replaces_slot(self):
        store = MemoryStore(clock=lambda: NOW)
        store.put("anger")
        store.put("angertiger")
        self.assertEqual(store.get().state, "angertiger")

    def test_record_from_previous_day_is_absent(self):
        clock = [NOW - timedelta(days=1)]
        store = MemoryStore(clock=lambda: clock[0])
        store.put("anger")
        clock[0] = NOW
        self.assertIsNone(store.get())

    def test_slots_are_separate(self):
        store = MemoryStore(slot="a", clock=lambda: NOW)
        store.put("anger")
        store.slot = "b"
        self.assertIsNone(store.get())

    def test_malformed_record_is_absent(self):
        store = MemoryStore(clock=lambda: NOW)
        store.write({"date": "yesterday", "state": "anger"})
        with self.assertLogs("dailyword.puzzles.store", level="WARNING"):
            self.assertIsNone(store.get())
        store.write({"state": "anger"})
        with self.assertLogs("dailyword.puzzles.store", level="WARNING"):
            self.assertIsNone(store.get())
