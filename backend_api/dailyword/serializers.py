from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .puzzles import WORD_LENGTH, TileState


# PUBLIC_INTERFACE
class ProgressRecordSerializer(serializers.Serializer):
    """A persisted progress record as read back from a store.

    Fields:
    - date: ISO timestamp of the save
    - state: committed letters, a multiple of WORD_LENGTH long
    """

    date = serializers.DateTimeField()
    state = serializers.CharField(allow_blank=True, trim_whitespace=False)

    def validate_state(self, value: str) -> str:
        if len(value) % WORD_LENGTH:
            raise serializers.ValidationError(
                f"State length must be a multiple of {WORD_LENGTH}, got {len(value)}."
            )
        return value


# PUBLIC_INTERFACE
class TileSerializer(serializers.Serializer):
    """One grid tile for board output."""

    index = serializers.IntegerField(min_value=0)
    value = serializers.CharField(allow_blank=True, max_length=1, trim_whitespace=False)
    state = serializers.SerializerMethodField()

    def get_state(self, obj: Dict[str, Any]) -> str:
        return TileState(obj["state"]).name.lower()


# PUBLIC_INTERFACE
class BoardSerializer(serializers.Serializer):
    """Board snapshot: tiles plus cursor and completion flags."""

    tiles = TileSerializer(many=True)
    cursor = serializers.IntegerField()
    is_done = serializers.BooleanField()
    is_won = serializers.BooleanField()
    guesses = serializers.ListField(child=serializers.CharField())
