"""
Daily word puzzle app.

Re-exports the puzzle engine and store helpers so callers can import from
dailyword directly, e.g.:

    from dailyword import PuzzleEngine, MemoryStore
"""

# PUBLIC_INTERFACE
from .puzzles import (
    WORD_LENGTH,
    WORD_ROWS,
    InvalidWordLength,
    MemoryStore,
    PuzzleEngine,
    Tile,
    TileState,
    grade,
    is_same_day,
    to_compact,
)

__all__ = [
    "WORD_LENGTH",
    "WORD_ROWS",
    "InvalidWordLength",
    "MemoryStore",
    "PuzzleEngine",
    "Tile",
    "TileState",
    "grade",
    "is_same_day",
    "to_compact",
]
