from __future__ import annotations

from django.db import models


# PUBLIC_INTERFACE
class TimeStampedModel(models.Model):
    """Abstract base model providing created/updated timestamps.

    Notes:
        Keep this abstract model free of any logic that would access the Django
        app registry or execute queries at module import time.
    """
    created_at = models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")
    updated_at = models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")

    class Meta:
        abstract = True


# PUBLIC_INTERFACE
class Word(TimeStampedModel):
    """A dictionary word: an accepted guess, and a daily answer when active.

    Fields:
    - text: unique lowercased word text
    - length: derived length for quick filtering
    - is_active: whether this word can be picked as a daily secret word
    """
    text = models.CharField(max_length=32, unique=True, db_index=True, help_text="Lowercase word text.")
    length = models.PositiveSmallIntegerField(db_index=True, help_text="Length of the word.")
    is_active = models.BooleanField(default=True, help_text="If true, can be picked as the daily word.")

    class Meta:
        ordering = ["length", "text"]
        verbose_name = "Word"
        verbose_name_plural = "Words"

    def save(self, *args, **kwargs):
        # Normalize text, derive length on save
        if self.text:
            self.text = self.text.strip().lower()
            self.length = len(self.text)
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.text


# PUBLIC_INTERFACE
class DailyProgress(TimeStampedModel):
    """The persistence slot of the daily puzzle.

    Fields:
    - slot: slot key; one row per key
    - date: ISO timestamp written when the progress was saved
    - state: committed letters of every submitted row, concatenated
    """
    slot = models.CharField(max_length=64, unique=True, help_text="Persistence slot key.")
    date = models.CharField(max_length=64, help_text="ISO timestamp of the last save.")
    state = models.CharField(max_length=64, blank=True, default="", help_text="Committed guess letters.")

    class Meta:
        ordering = ["slot"]
        verbose_name = "Daily Progress"
        verbose_name_plural = "Daily Progress"

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.slot}: {self.state!r} ({self.date})"
