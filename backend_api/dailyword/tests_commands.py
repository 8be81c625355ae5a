import json
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings

from dailyword.models import DailyProgress, Word


@override_settings(DAILYWORD={"STORE": "database"})
class PlayDailyCommandTests(TestCase):
    def setUp(self):
        for text in ["apple", "anger", "tiger", "crane"]:
            Word.objects.create(text=text, length=5, is_active=True)

    def play(self, keys, *args):
        out, err = StringIO(), StringIO()
        call_command("play_daily", "--word", "apple", "--keys", keys, *args, stdout=out, stderr=err)
        return out.getvalue(), err.getvalue()

    def test_renders_graded_rows(self):
        out, _ = self.play("anger _enter tig")
        lines = out.splitlines()
        self.assertEqual(lines[0], "anger gbbyb")
        self.assertEqual(lines[1], "tig   ...__")
        self.assertEqual(DailyProgress.objects.get(slot="state").state, "anger")

    def test_remove_key(self):
        out, _ = self.play("angex _remove r _enter")
        self.assertEqual(out.splitlines()[0], "anger gbbyb")

    def test_rejected_word_reported(self):
        out, err = self.play("zzzzz _enter")
        self.assertIn("Not in word list: zzzzz", err)
        self.assertFalse(DailyProgress.objects.exists())

    def test_progress_survives_between_runs(self):
        self.play("anger _enter")
        out, _ = self.play("apple _enter")
        lines = out.splitlines()
        self.assertEqual(lines[0], "anger gbbyb")
        self.assertEqual(lines[1], "apple ggggg")
        self.assertIn("Solved in 2.", out)

    def test_json_output(self):
        out, _ = self.play("apple _enter", "--json")
        board = json.loads(out)
        self.assertTrue(board["is_done"])
        self.assertTrue(board["is_won"])
        self.assertEqual(board["guesses"], ["apple"])
        self.assertEqual(board["tiles"][0], {"index": 0, "value": "a", "state": "correct"})
        self.assertEqual(board["tiles"][5]["state"], "empty")

    def test_bad_secret_word(self):
        with self.assertRaises(CommandError):
            call_command("play_daily", "--word", "apples", "--keys", "", stdout=StringIO())

    def test_unknown_store(self):
        with self.assertRaises(CommandError):
            call_command("play_daily", "--word", "apple", "--store", "redis", "--keys", "", stdout=StringIO())


class NoWordsCommandTests(TestCase):
    def test_requires_words(self):
        with self.assertRaises(CommandError):
            call_command("play_daily", "--keys", "", stdout=StringIO())

    def test_seed_then_play(self):
        out = StringIO()
        call_command("play_daily", "--seed", "--store", "memory", "--keys", "", stdout=out)
        self.assertTrue(Word.objects.exists())
        self.assertEqual(len(out.getvalue().splitlines()), 6)


class SeedWordsCommandTests(TestCase):
    def test_seed_words(self):
        out = StringIO()
        call_command("seed_words", "Apple", "anger", stdout=out)
        self.assertEqual(sorted(Word.objects.values_list("text", flat=True)), ["anger", "apple"])
        self.assertIn("Seeded 2 words.", out.getvalue())

    def test_seed_words_idempotent(self):
        call_command("seed_words", stdout=StringIO())
        out = StringIO()
        call_command("seed_words", stdout=out)
        self.assertIn("No action taken.", out.getvalue())
