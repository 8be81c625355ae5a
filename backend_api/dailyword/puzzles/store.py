from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class ProgressRecord:
    """Contents of the single persistence slot."""

    date: str
    state: str


class DayScopedStore(Protocol):
    """Protocol for progress stores."""

    # PUBLIC_INTERFACE
    def get(self) -> Optional[ProgressRecord]:
        """Return today's record, or None when absent or saved on another day."""

    # PUBLIC_INTERFACE
    def put(self, state: str) -> None:
        """Save ``state`` stamped with the current date."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
def is_same_day(first: datetime, second: datetime, tz: Optional[tzinfo] = None) -> bool:
    """Compare two instants by calendar day (year, month, day) in ``tz``.

    Naive datetimes are taken to be in ``tz``; ``tz`` defaults to UTC.
    """
    tz = tz or timezone.utc
    if first.tzinfo is None:
        first = first.replace(tzinfo=tz)
    if second.tzinfo is None:
        second = second.replace(tzinfo=tz)
    a = first.astimezone(tz)
    b = second.astimezone(tz)
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


# PUBLIC_INTERFACE
class SlotStore(abc.ABC):
    """Base for single-slot stores sharing the same-day policy.

    Subclasses only move raw ``{"date", "state"}`` dicts in and out of their
    medium; stamping and the calendar-day check live here.
    """

    def __init__(self, slot: str = "state", clock: Optional[Clock] = None, tz: Optional[tzinfo] = None) -> None:
        self.slot = slot
        self.clock = clock or _utc_now
        self.tz = tz

    @abc.abstractmethod
    def read(self) -> Optional[Dict[str, Any]]:
        ...

    @abc.abstractmethod
    def write(self, record: Dict[str, Any]) -> None:
        ...

    def parse(self, raw: Dict[str, Any]) -> Optional[ProgressRecord]:
        """Turn a raw record into a ProgressRecord, or None when unusable."""
        try:
            datetime.fromisoformat(raw["date"])
            state = raw["state"]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed progress record in slot %r: %s", self.slot, e)
            return None
        if not isinstance(state, str):
            logger.warning("Ignoring progress record in slot %r: state is not a string", self.slot)
            return None
        return ProgressRecord(date=raw["date"], state=state)

    def get(self) -> Optional[ProgressRecord]:
        raw = self.read()
        if raw is None:
            return None
        record = self.parse(raw)
        if record is None:
            return None
        if not is_same_day(datetime.fromisoformat(record.date), self.clock(), self.tz):
            logger.debug("Progress in slot %r is from %s, not today", self.slot, record.date)
            return None
        return record

    def put(self, state: str) -> None:
        record = {"date": self.clock().isoformat(), "state": state}
        logger.debug("Saving %d letters to slot %r", len(state), self.slot)
        self.write(record)


# PUBLIC_INTERFACE
class MemoryStore(SlotStore):
    """In-process store; progress lives as long as the object."""

    def __init__(self, slot: str = "state", clock: Optional[Clock] = None, tz: Optional[tzinfo] = None) -> None:
        super().__init__(slot=slot, clock=clock, tz=tz)
        self._data: Dict[str, Dict[str, Any]] = {}

    def read(self) -> Optional[Dict[str, Any]]:
        raw = self._data.get(self.slot)
        return dict(raw) if raw is not None else None

    def write(self, record: Dict[str, Any]) -> None:
        self._data[self.slot] = dict(record)
