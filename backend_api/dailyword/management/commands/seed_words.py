from django.core.management.base import BaseCommand
from dailyword.models import Word
from dailyword.seed_utils import DEFAULT_SEED


class Command(BaseCommand):
    help = "Seed a minimal playable word list if the Words table is empty."

    def add_arguments(self, parser):
        parser.add_argument(
            "words",
            nargs="*",
            help="Words to seed instead of the built-in list.",
        )

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        # This command is idempotent and safe to run multiple times.
        count_before = Word.objects.count()
        if count_before > 0:
            self.stdout.write(self.style.WARNING(f"Words already present: {count_before}. No action taken."))
            return

        words = [w.strip().lower() for w in options["words"] if w.strip()] or DEFAULT_SEED
        objs = [Word(text=w, length=len(w), is_active=True) for w in words]
        Word.objects.bulk_create(objs, ignore_conflicts=True)
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(words)} words."))
