import json
from datetime import datetime, timedelta, timezone

from django.core.cache import caches
from django.test import TestCase, override_settings

from dailyword.models import DailyProgress, Word
from dailyword.puzzles import MemoryStore, PuzzleEngine, TileState
from dailyword.seed_utils import ensure_seed_words, load_dictionary, pick_daily_word
from dailyword.stores import CacheStore, ModelStore, StoreRegistry, get_store

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class ModelStoreTests(TestCase):
    def test_put_and_get(self):
        store = ModelStore(clock=lambda: NOW)
        self.assertIsNone(store.get())
        store.put("anger")
        store.put("angertiger")
        self.assertEqual(DailyProgress.objects.count(), 1)
        record = store.get()
        self.assertEqual(record.state, "angertiger")
        self.assertEqual(record.date, NOW.isoformat())

    def test_previous_day_is_ignored(self):
        DailyProgress.objects.create(slot="state", date=(NOW - timedelta(days=1)).isoformat(), state="anger")
        self.assertIsNone(ModelStore(clock=lambda: NOW).get())

    def test_invalid_state_length_is_ignored(self):
        DailyProgress.objects.create(slot="state", date=NOW.isoformat(), state="ange")
        with self.assertLogs("dailyword.stores", level="WARNING"):
            self.assertIsNone(ModelStore(clock=lambda: NOW).get())

    @override_settings(TIME_ZONE="America/New_York")
    def test_same_day_uses_configured_timezone(self):
        saved = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)
        DailyProgress.objects.create(slot="state", date=saved.isoformat(), state="anger")
        later = saved + timedelta(hours=1)
        self.assertEqual(ModelStore(clock=lambda: later).get().state, "anger")

    def test_engine_round_trip(self):
        words = ["apple", "anger", "tiger"]
        engine = PuzzleEngine("apple", words, lambda *args: None, store=ModelStore(clock=lambda: NOW))
        for letter in "anger":
            engine.input(letter)
        engine.enter()

        restored = PuzzleEngine("apple", words, lambda *args: None, store=ModelStore(clock=lambda: NOW))
        self.assertEqual(restored.cursor, 5)
        self.assertEqual(restored.tiles, engine.tiles)
        self.assertEqual(restored.tiles[3].state, TileState.CORRECT_WRONG_POSITION)


class CacheStoreTests(TestCase):
    def setUp(self):
        caches["default"].clear()

    def test_record_is_json(self):
        store = CacheStore(clock=lambda: NOW)
        store.put("anger")
        raw = json.loads(caches["default"].get("state"))
        self.assertEqual(raw, {"date": NOW.isoformat(), "state": "anger"})
        self.assertEqual(store.get().state, "anger")

    def test_unreadable_json_is_absent(self):
        caches["default"].set("state", "{not json")
        with self.assertLogs("dailyword.stores", level="WARNING"):
            self.assertIsNone(CacheStore(clock=lambda: NOW).get())

    def test_previous_day_is_absent(self):
        CacheStore(clock=lambda: NOW - timedelta(days=2)).put("anger")
        self.assertIsNone(CacheStore(clock=lambda: NOW).get())

    @override_settings(DAILYWORD={"SLOT": "puzzle"})
    def test_slot_from_settings(self):
        CacheStore(clock=lambda: NOW).put("anger")
        self.assertIsNotNone(caches["default"].get("puzzle"))
        self.assertIsNone(caches["default"].get("state"))


class RegistryTests(TestCase):
    def test_get_known_backends(self):
        self.assertIs(StoreRegistry.get("database"), ModelStore)
        self.assertIs(StoreRegistry.get(" Cache "), CacheStore)
        self.assertIs(StoreRegistry.get("memory"), MemoryStore)

    def test_unknown_backend(self):
        with self.assertRaises(KeyError):
            get_store("redis")

    @override_settings(DAILYWORD={"STORE": "cache"})
    def test_default_from_settings(self):
        self.assertIsInstance(get_store(), CacheStore)

    def test_memory_store_uses_settings_slot(self):
        store = get_store("memory")
        self.assertIsInstance(store, MemoryStore)
        self.assertEqual(store.slot, "state")


class SeedUtilsTests(TestCase):
    def test_ensure_seed_words_once(self):
        inserted = ensure_seed_words(["apple", "anger", "kiwis"])
        self.assertEqual(inserted, 3)
        self.assertEqual(ensure_seed_words(), 0)
        self.assertEqual(sorted(load_dictionary()), ["anger", "apple", "kiwis"])

    def test_dictionary_includes_inactive_words(self):
        Word.objects.create(text="apple", length=5, is_active=True)
        Word.objects.create(text="anger", length=5, is_active=False)
        Word.objects.create(text="pear", length=4, is_active=True)
        self.assertEqual(sorted(load_dictionary()), ["anger", "apple"])

    def test_pick_daily_word_is_stable(self):
        ensure_seed_words(["apple", "anger", "tiger"])
        day = NOW.date()
        self.assertEqual(pick_daily_word(day), pick_daily_word(day))
        picks = {pick_daily_word(day + timedelta(days=i)) for i in range(3)}
        self.assertEqual(picks, {"apple", "anger", "tiger"})

    def test_pick_daily_word_without_words(self):
        self.assertIsNone(pick_daily_word(NOW.date()))
