from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Protocol, Tuple

from .store import DayScopedStore, MemoryStore

logger = logging.getLogger(__name__)

WORD_LENGTH = 5
WORD_ROWS = 6
TILE_COUNT = WORD_LENGTH * WORD_ROWS


class TileState(enum.IntEnum):
    """State of a single grid tile."""

    EMPTY = 0
    INPUT = 1
    WRONG = 2
    CORRECT = 3
    CORRECT_WRONG_POSITION = 4


_COMPACT = {
    TileState.EMPTY: "_",
    TileState.INPUT: ".",
    TileState.WRONG: "b",
    TileState.CORRECT: "g",
    TileState.CORRECT_WRONG_POSITION: "y",
}


@dataclass
class Tile:
    value: str = ""
    state: TileState = TileState.EMPTY


class ChangeObserver(Protocol):
    """Receives one call per tile mutation, in mutation order."""

    def __call__(self, index: int, value: str, state: TileState) -> None: ...


class InvalidWordLength(ValueError):
    """Raised when the secret word or a dictionary entry has the wrong length."""

    def __init__(self, word: str, expected: int, kind: str = "word") -> None:
        self.word = word
        self.expected = expected
        self.actual = len(word)
        super().__init__(f"{kind}: {word!r}; got size {self.actual} want {expected}")


def _grade_letter(secret: str, letter: str, position: int) -> TileState:
    if secret[position] == letter:
        return TileState.CORRECT
    if letter in secret:
        return TileState.CORRECT_WRONG_POSITION
    return TileState.WRONG


# PUBLIC_INTERFACE
def grade(secret: str, guess: str) -> List[TileState]:
    """Grade every letter of ``guess`` against ``secret``.

    - CORRECT: same letter in the same position
    - CORRECT_WRONG_POSITION: letter occurs anywhere else in the secret
    - WRONG: letter does not occur in the secret

    Each letter is tested on its own; repeated letters are not rationed
    against how often they occur in the secret.
    """
    if len(secret) != len(guess):
        raise ValueError("Secret and guess length must match.")
    return [_grade_letter(secret, letter, i) for i, letter in enumerate(guess)]


# PUBLIC_INTERFACE
def to_compact(states: Iterable[TileState]) -> str:
    """Compact representation (g=correct, y=present, b=wrong, .=input, _=empty)."""
    return "".join(_COMPACT[s] for s in states)


# PUBLIC_INTERFACE
class PuzzleEngine:
    """Guess grid for one daily puzzle.

    The engine owns the secret word, the dictionary, the tile grid, the
    uncommitted input of the active row and the completion flag. Every tile
    mutation is reported synchronously to ``on_change``. Progress is written
    to ``store`` after each accepted guess and replayed from it on
    construction when it was saved on the same calendar day.

    Parameters:
        secret_word: the word to guess, exactly WORD_LENGTH letters.
        dictionary: accepted guesses, each exactly WORD_LENGTH letters.
        on_change: observer called as ``on_change(index, value, state)``.
        store: day-scoped store; an in-memory one is used when omitted.
        on_reject: optional hook called with a guess that is not in the
                   dictionary.

    Raises:
        InvalidWordLength: if the secret word or any dictionary entry has
                           the wrong length.
    """

    def __init__(
        self,
        secret_word: str,
        dictionary: Iterable[str],
        on_change: ChangeObserver,
        store: Optional[DayScopedStore] = None,
        on_reject: Optional[Callable[[str], None]] = None,
    ) -> None:
        if len(secret_word) != WORD_LENGTH:
            raise InvalidWordLength(secret_word, WORD_LENGTH)
        words = set()
        for w in dictionary:
            if len(w) != WORD_LENGTH:
                raise InvalidWordLength(w, WORD_LENGTH, kind="wordlist")
            words.add(w)

        self._secret = secret_word
        self._words = frozenset(words)
        self._on_change = on_change
        self._on_reject = on_reject
        self._store = store if store is not None else MemoryStore()
        self._tiles = [Tile() for _ in range(TILE_COUNT)]
        self._cursor = 0
        self._stack: List[int] = []
        self._done = False

        self._load()

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        return tuple(Tile(t.value, t.state) for t in self._tiles)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def stack(self) -> Tuple[int, ...]:
        return tuple(self._stack)

    @property
    def is_done(self) -> bool:
        return self._done

    @property
    def is_won(self) -> bool:
        """True when the last committed row is fully correct."""
        if self._cursor == 0:
            return False
        row = self._tiles[self._cursor - WORD_LENGTH:self._cursor]
        return all(t.state == TileState.CORRECT for t in row)

    @property
    def progress(self) -> str:
        """Committed letters of every submitted row, as persisted."""
        return "".join(t.value for t in self._tiles[:self._cursor])

    @property
    def guesses(self) -> List[str]:
        p = self.progress
        return [p[i:i + WORD_LENGTH] for i in range(0, len(p), WORD_LENGTH)]

    # PUBLIC_INTERFACE
    def input(self, letter: str) -> None:
        """Append one letter to the active row; ignored when full or done."""
        if self._done or len(self._stack) >= WORD_LENGTH:
            return
        pos = self._cursor + len(self._stack)
        self._stack.append(pos)
        self._set(pos, letter, TileState.INPUT)

    # PUBLIC_INTERFACE
    def remove(self) -> None:
        """Delete the last letter of the active row; ignored when empty or done."""
        if self._done or not self._stack:
            return
        pos = self._stack.pop()
        self._set(pos, "", TileState.EMPTY)

    # PUBLIC_INTERFACE
    def enter(self) -> None:
        """Submit the active row as a guess.

        Does nothing unless the row is full. A word missing from the
        dictionary leaves the grid untouched and only reaches ``on_reject``.
        """
        if self._done or len(self._stack) != WORD_LENGTH:
            return
        word = "".join(self._tiles[pos].value for pos in self._stack)
        if not self._process(word):
            logger.info("Rejected guess %r: not in dictionary", word)
            if self._on_reject is not None:
                self._on_reject(word)

    def _set(self, pos: int, value: str, state: TileState) -> None:
        tile = self._tiles[pos]
        tile.value = value
        tile.state = state
        self._on_change(pos, value, state)

    def _process(self, word: str) -> bool:
        if word not in self._words:
            return False
        for i, state in enumerate(grade(self._secret, word)):
            self._set(self._cursor + i, word[i], state)
        self._cursor += WORD_LENGTH
        self._stack = []
        logger.debug("Accepted guess %r, cursor at %d", word, self._cursor)
        self._save()
        self._sync()
        return True

    def _sync(self) -> None:
        if self._done:
            return
        if self._cursor == TILE_COUNT:
            self._done = True
        elif self.is_won:
            self._done = True
        if self._done:
            logger.info(
                "Puzzle completed (%s) after %d guesses",
                "won" if self.is_won else "exhausted",
                self._cursor // WORD_LENGTH,
            )

    def _save(self) -> None:
        self._store.put(self.progress)

    def _load(self) -> None:
        record = self._store.get()
        if record is None:
            return
        state = record.state
        replayed = 0
        for i in range(0, len(state), WORD_LENGTH):
            if self._done:
                break
            if self._process(state[i:i + WORD_LENGTH]):
                replayed += 1
        logger.debug("Restored %d guesses from progress saved %s", replayed, record.date)
