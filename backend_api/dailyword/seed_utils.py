from datetime import date
from typing import List, Optional

from django.db import transaction

from .conf import get_setting
from .models import Word
from .puzzles import WORD_LENGTH

DEFAULT_SEED: List[str] = [
    "apple", "brave", "crane", "delta", "eager", "flame",
    "grape", "hover", "ivory", "jolly", "karma", "lemon",
    "mango", "noble", "ocean", "pride", "quake", "raven",
    "solar", "tiger", "ultra", "vivid", "whale", "xenon",
    "young", "zebra", "anger", "fuska", "crate", "slate",
]


# PUBLIC_INTERFACE
def ensure_seed_words(seed_words: Optional[List[str]] = None) -> int:
    """Ensure the Word table has at least a minimal playable list.

    Returns number of words inserted (0 if already present).
    """
    if Word.objects.exists():
        return 0
    words = seed_words or DEFAULT_SEED
    with transaction.atomic():
        Word.objects.bulk_create([Word(text=w, length=len(w), is_active=True) for w in words], ignore_conflicts=True)
    return len(words)


# PUBLIC_INTERFACE
def load_dictionary(length: int = WORD_LENGTH) -> List[str]:
    """All words of ``length``, active or not; every one is an accepted guess."""
    return list(Word.objects.filter(length=length).values_list("text", flat=True))


# PUBLIC_INTERFACE
def pick_daily_word(day: date, length: int = WORD_LENGTH) -> Optional[str]:
    """Deterministically pick the secret word for ``day`` among active words.

    The same day always yields the same word as long as the active word list
    does not change. Returns None when no active word of ``length`` exists.
    """
    words = list(
        Word.objects.filter(length=length, is_active=True).order_by("text").values_list("text", flat=True)
    )
    if not words:
        return None
    return words[(day.toordinal() + get_setting("WORD_SEED")) % len(words)]
