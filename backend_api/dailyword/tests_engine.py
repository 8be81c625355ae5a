from datetime import datetime, timedelta, timezone

from django.test import SimpleTestCase

from dailyword.puzzles import (
    TILE_COUNT,
    WORD_LENGTH,
    InvalidWordLength,
    MemoryStore,
    PuzzleEngine,
    Tile,
    TileState,
    grade,
    to_compact,
)

SECRET = "apple"
WORDS = ["apple", "anger", "brave", "crane", "delta", "eager", "flame", "tiger"]
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, index, value, state):
        self.calls.append((index, value, state))


def type_word(engine, word):
    for letter in word:
        engine.input(letter)


class GradingTests(SimpleTestCase):
    def test_grade_example(self):
        self.assertEqual(
            grade("apple", "anger"),
            [
                TileState.CORRECT,
                TileState.WRONG,
                TileState.WRONG,
                TileState.CORRECT_WRONG_POSITION,
                TileState.WRONG,
            ],
        )

    def test_grade_does_not_ration_repeated_letters(self):
        # "apple" has one "a"; every "a" elsewhere still counts as present
        self.assertEqual(
            grade("apple", "aaaaa"),
            [TileState.CORRECT] + [TileState.CORRECT_WRONG_POSITION] * 4,
        )
        self.assertEqual(to_compact(grade("tiger", "eager")), "ybggg")

    def test_grade_length_mismatch(self):
        with self.assertRaises(ValueError):
            grade("apple", "app")

    def test_to_compact(self):
        self.assertEqual(to_compact([TileState.EMPTY, TileState.INPUT]), "_.")


class ConstructionTests(SimpleTestCase):
    def test_secret_word_length(self):
        with self.assertRaises(InvalidWordLength) as ctx:
            PuzzleEngine("apples", WORDS, Recorder())
        self.assertEqual(ctx.exception.expected, WORD_LENGTH)
        self.assertEqual(ctx.exception.actual, 6)
        self.assertEqual(ctx.exception.word, "apples")

    def test_dictionary_entry_length(self):
        with self.assertRaises(InvalidWordLength) as ctx:
            PuzzleEngine(SECRET, ["apple", "pear", "kiwi"], Recorder())
        self.assertEqual(ctx.exception.word, "pear")
        self.assertEqual(ctx.exception.actual, 4)

    def test_invalid_word_length_is_value_error(self):
        with self.assertRaises(ValueError):
            PuzzleEngine("", WORDS, Recorder())

    def test_initial_state(self):
        recorder = Recorder()
        engine = PuzzleEngine(SECRET, WORDS, recorder)
        self.assertEqual(engine.tiles, tuple(Tile() for _ in range(TILE_COUNT)))
        self.assertEqual(engine.cursor, 0)
        self.assertEqual(engine.stack, ())
        self.assertFalse(engine.is_done)
        self.assertFalse(engine.is_won)
        self.assertEqual(recorder.calls, [])


class InputTests(SimpleTestCase):
    def setUp(self):
        self.recorder = Recorder()
        self.engine = PuzzleEngine(SECRET, WORDS, self.recorder)

    def test_input_fills_active_row(self):
        type_word(self.engine, "ang")
        self.assertEqual(self.engine.stack, (0, 1, 2))
        self.assertEqual(self.engine.tiles[2], Tile("g", TileState.INPUT))
        self.assertEqual(
            self.recorder.calls,
            [(0, "a", TileState.INPUT), (1, "n", TileState.INPUT), (2, "g", TileState.INPUT)],
        )

    def test_input_ignored_when_row_full(self):
        type_word(self.engine, "anger")
        self.recorder.calls.clear()
        self.engine.input("x")
        self.assertEqual(self.engine.stack, (0, 1, 2, 3, 4))
        self.assertEqual(self.engine.tiles[5], Tile())
        self.assertEqual(self.recorder.calls, [])

    def test_input_then_remove_restores(self):
        type_word(self.engine, "an")
        before_tiles, before_stack = self.engine.tiles, self.engine.stack
        self.engine.input("g")
        self.engine.remove()
        self.assertEqual(self.engine.tiles, before_tiles)
        self.assertEqual(self.engine.stack, before_stack)
        self.assertEqual(self.engine.cursor, 0)
        self.assertEqual(self.recorder.calls[-1], (2, "", TileState.EMPTY))

    def test_remove_on_empty_row_is_noop(self):
        self.engine.remove()
        self.assertEqual(self.recorder.calls, [])
        self.assertEqual(self.engine.stack, ())


class EnterTests(SimpleTestCase):
    def setUp(self):
        self.recorder = Recorder()
        self.store = MemoryStore(clock=lambda: NOW)
        self.rejected = []
        self.engine = PuzzleEngine(SECRET, WORDS, self.recorder, store=self.store, on_reject=self.rejected.append)

    def test_enter_requires_full_row(self):
        type_word(self.engine, "ange")
        self.recorder.calls.clear()
        self.engine.enter()
        self.assertEqual(self.engine.cursor, 0)
        self.assertEqual(self.engine.stack, (0, 1, 2, 3))
        self.assertEqual(self.recorder.calls, [])

    def test_word_not_in_dictionary_is_rejected_silently(self):
        type_word(self.engine, "zzzzz")
        tiles, stack = self.engine.tiles, self.engine.stack
        self.recorder.calls.clear()
        self.engine.enter()
        self.assertEqual(self.engine.tiles, tiles)
        self.assertEqual(self.engine.stack, stack)
        self.assertEqual(self.engine.cursor, 0)
        self.assertEqual(self.recorder.calls, [])
        self.assertIsNone(self.store.get())
        self.assertEqual(self.rejected, ["zzzzz"])

    def test_dictionary_is_case_sensitive(self):
        type_word(self.engine, "ANGER")
        self.engine.enter()
        self.assertEqual(self.engine.cursor, 0)
        self.assertEqual(self.rejected, ["ANGER"])

    def test_accepted_guess_grades_and_notifies_in_order(self):
        type_word(self.engine, "anger")
        self.recorder.calls.clear()
        self.engine.enter()
        self.assertEqual(
            self.recorder.calls,
            [
                (0, "a", TileState.CORRECT),
                (1, "n", TileState.WRONG),
                (2, "g", TileState.WRONG),
                (3, "e", TileState.CORRECT_WRONG_POSITION),
                (4, "r", TileState.WRONG),
            ],
        )
        self.assertEqual(self.engine.cursor, WORD_LENGTH)
        self.assertEqual(self.engine.stack, ())
        self.assertFalse(self.engine.is_done)
        self.assertEqual(self.store.get().state, "anger")

    def test_next_row_starts_after_cursor(self):
        type_word(self.engine, "anger")
        self.engine.enter()
        self.engine.input("b")
        self.assertEqual(self.engine.stack, (5,))
        self.engine.remove()
        self.engine.remove()
        self.assertEqual(self.engine.tiles[4], Tile("r", TileState.WRONG))

    def test_guessing_secret_wins(self):
        type_word(self.engine, "apple")
        self.engine.enter()
        self.assertTrue(all(t.state == TileState.CORRECT for t in self.engine.tiles[:WORD_LENGTH]))
        self.assertTrue(self.engine.is_done)
        self.assertTrue(self.engine.is_won)

    def test_six_wrong_guesses_exhaust_grid(self):
        for word in ["anger", "brave", "crane", "delta", "eager"]:
            type_word(self.engine, word)
            self.engine.enter()
        self.assertEqual(self.engine.cursor, 25)
        self.assertFalse(self.engine.is_done)
        type_word(self.engine, "flame")
        self.engine.enter()
        self.assertEqual(self.engine.cursor, 30)
        self.assertTrue(self.engine.is_done)
        self.assertFalse(self.engine.is_won)

    def test_win_on_last_row(self):
        for word in ["anger", "brave", "crane", "delta", "eager", "apple"]:
            type_word(self.engine, word)
            self.engine.enter()
        self.assertTrue(self.engine.is_done)
        self.assertTrue(self.engine.is_won)

    def test_done_puzzle_ignores_everything(self):
        type_word(self.engine, "apple")
        self.engine.enter()
        tiles = self.engine.tiles
        saved = self.store.get()
        self.recorder.calls.clear()
        self.engine.input("a")
        self.engine.remove()
        self.engine.enter()
        self.assertEqual(self.recorder.calls, [])
        self.assertEqual(self.engine.tiles, tiles)
        self.assertEqual(self.engine.cursor, WORD_LENGTH)
        self.assertEqual(self.engine.stack, ())
        self.assertEqual(self.store.get(), saved)

    def test_progress_and_guesses(self):
        for word in ["anger", "tiger"]:
            type_word(self.engine, word)
            self.engine.enter()
        type_word(self.engine, "cra")
        self.assertEqual(self.engine.progress, "angertiger")
        self.assertEqual(self.engine.guesses, ["anger", "tiger"])


class RestoreTests(SimpleTestCase):
    def play(self, store, words):
        engine = PuzzleEngine(SECRET, WORDS, Recorder(), store=store)
        for word in words:
            type_word(engine, word)
            engine.enter()
            while engine.stack:
                engine.remove()
        return engine

    def test_round_trip_same_day(self):
        store = MemoryStore(clock=lambda: NOW)
        played = self.play(store, ["anger", "zzzzz", "tiger"])
        self.assertEqual(store.get().state, "angertiger")

        recorder = Recorder()
        restored = PuzzleEngine(SECRET, WORDS, recorder, store=store)
        self.assertEqual(restored.tiles, played.tiles)
        self.assertEqual(restored.cursor, played.cursor)
        self.assertEqual(restored.is_done, played.is_done)
        self.assertEqual(restored.stack, ())
        self.assertEqual(len(recorder.calls), 2 * WORD_LENGTH)

    def test_round_trip_completed_puzzle(self):
        store = MemoryStore(clock=lambda: NOW)
        played = self.play(store, ["anger", "apple"])
        restored = PuzzleEngine(SECRET, WORDS, Recorder(), store=store)
        self.assertTrue(restored.is_done)
        self.assertTrue(restored.is_won)
        self.assertEqual(restored.tiles, played.tiles)

    def test_prior_day_is_ignored(self):
        clock = [NOW - timedelta(days=1)]
        store = MemoryStore(clock=lambda: clock[0])
        self.play(store, ["anger"])
        clock[0] = NOW
        restored = PuzzleEngine(SECRET, WORDS, Recorder(), store=store)
        self.assertEqual(restored.cursor, 0)
        self.assertEqual(restored.tiles, tuple(Tile() for _ in range(TILE_COUNT)))

    def test_replay_applies_dictionary(self):
        store = MemoryStore(clock=lambda: NOW)
        store.put("angerqqqqqtiger")
        restored = PuzzleEngine(SECRET, WORDS, Recorder(), store=store)
        self.assertEqual(restored.guesses, ["anger", "tiger"])
        self.assertEqual(restored.cursor, 2 * WORD_LENGTH)

    def test_replay_stops_after_completion(self):
        store = MemoryStore(clock=lambda: NOW)
        store.put("appleanger")
        restored = PuzzleEngine(SECRET, WORDS, Recorder(), store=store)
        self.assertEqual(restored.cursor, WORD_LENGTH)
        self.assertTrue(restored.is_won)
