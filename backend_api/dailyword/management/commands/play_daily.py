import json
import sys

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from dailyword.puzzles import WORD_LENGTH, WORD_ROWS, InvalidWordLength, PuzzleEngine, to_compact
from dailyword.seed_utils import ensure_seed_words, load_dictionary, pick_daily_word
from dailyword.serializers import BoardSerializer
from dailyword.stores import get_store

ENTER_KEY = "_enter"
REMOVE_KEY = "_remove"


class Command(BaseCommand):
    help = (
        "Play today's puzzle from the terminal. Keys are letters, "
        f"{ENTER_KEY} and {REMOVE_KEY}; progress is kept in the configured store."
    )

    def add_arguments(self, parser):
        parser.add_argument("--keys", help="Whitespace separated keys; read from stdin when omitted.")
        parser.add_argument("--word", help="Secret word to use instead of today's pick.")
        parser.add_argument("--store", help="Store backend (memory, cache, database).")
        parser.add_argument("--seed", action="store_true", help="Seed the built-in word list when empty.")
        parser.add_argument("--json", action="store_true", help="Print the board as JSON.")

    def handle(self, *args, **options):
        if options["seed"]:
            ensure_seed_words()

        secret = options["word"] or pick_daily_word(timezone.localdate())
        if not secret:
            raise CommandError(f"No active {WORD_LENGTH}-letter words. Run seed_words first.")
        dictionary = load_dictionary()
        if secret not in dictionary:
            dictionary.append(secret)

        try:
            store = get_store(options["store"])
        except KeyError as e:
            raise CommandError(str(e))

        rejected = []
        try:
            engine = PuzzleEngine(
                secret,
                dictionary,
                lambda index, value, state: None,
                store=store,
                on_reject=rejected.append,
            )
        except InvalidWordLength as e:
            raise CommandError(str(e))

        keys = options["keys"].split() if options["keys"] is not None else sys.stdin.read().split()
        for key in keys:
            if key == ENTER_KEY:
                engine.enter()
            elif key == REMOVE_KEY:
                engine.remove()
            else:
                for letter in key:
                    engine.input(letter)

        for word in rejected:
            self.stderr.write(self.style.WARNING(f"Not in word list: {word}"))

        if options["json"]:
            self.stdout.write(json.dumps(self._board(engine)))
            return
        self._render(engine)

    def _board(self, engine):
        data = {
            "tiles": [
                {"index": i, "value": t.value, "state": t.state}
                for i, t in enumerate(engine.tiles)
            ],
            "cursor": engine.cursor,
            "is_done": engine.is_done,
            "is_won": engine.is_won,
            "guesses": engine.guesses,
        }
        return BoardSerializer(data).data

    def _render(self, engine):
        tiles = engine.tiles
        for row in range(WORD_ROWS):
            cells = tiles[row * WORD_LENGTH:(row + 1) * WORD_LENGTH]
            letters = "".join(t.value or " " for t in cells)
            self.stdout.write(f"{letters} {to_compact(t.state for t in cells)}")
        if engine.is_won:
            self.stdout.write(self.style.SUCCESS(f"Solved in {engine.cursor // WORD_LENGTH}."))
        elif engine.is_done:
            self.stdout.write(self.style.ERROR("Out of guesses."))
