"""
Puzzle engine and day-scoped progress stores.

Exports:
- PuzzleEngine, the guess grid state machine, with Tile and TileState
- grade and to_compact helpers for per-letter feedback
- InvalidWordLength raised for badly sized words
- MemoryStore, SlotStore and is_same_day for progress persistence

These modules are framework-agnostic and can be reused by management
commands or services without importing Django.
"""

from .engines import (
    WORD_LENGTH,
    WORD_ROWS,
    TILE_COUNT,
    InvalidWordLength,
    PuzzleEngine,
    Tile,
    TileState,
    grade,
    to_compact,
)
from .store import DayScopedStore, MemoryStore, ProgressRecord, SlotStore, is_same_day

__all__ = [
    "WORD_LENGTH",
    "WORD_ROWS",
    "TILE_COUNT",
    "InvalidWordLength",
    "PuzzleEngine",
    "Tile",
    "TileState",
    "grade",
    "to_compact",
    "DayScopedStore",
    "MemoryStore",
    "ProgressRecord",
    "SlotStore",
    "is_same_day",
]
