from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Type

from django.core.cache import caches
from django.utils import timezone

from .conf import get_setting
from .models import DailyProgress
from .puzzles import MemoryStore, ProgressRecord, SlotStore
from .puzzles.store import Clock
from .serializers import ProgressRecordSerializer

logger = logging.getLogger(__name__)


class DjangoSlotStore(SlotStore):
    """Slot store using Django's clock and TIME_ZONE for the same-day check.

    Records are validated with ProgressRecordSerializer before use; an
    invalid record is logged and treated as absent.
    """

    def __init__(self, slot: Optional[str] = None, clock: Optional[Clock] = None) -> None:
        super().__init__(
            slot=slot or get_setting("SLOT"),
            clock=clock or timezone.now,
            tz=timezone.get_current_timezone(),
        )

    def parse(self, raw: Dict[str, Any]) -> Optional[ProgressRecord]:
        serializer = ProgressRecordSerializer(data=raw)
        if not serializer.is_valid():
            logger.warning("Ignoring invalid progress record in slot %r: %s", self.slot, serializer.errors)
            return None
        return super().parse(raw)


# PUBLIC_INTERFACE
class CacheStore(DjangoSlotStore):
    """Keeps the record as a JSON string under the slot key of a Django cache."""

    def __init__(self, slot: Optional[str] = None, clock: Optional[Clock] = None, alias: Optional[str] = None) -> None:
        super().__init__(slot=slot, clock=clock)
        self.cache = caches[alias or get_setting("CACHE_ALIAS")]
        self.timeout = get_setting("CACHE_TIMEOUT")

    def read(self) -> Optional[Dict[str, Any]]:
        item = self.cache.get(self.slot)
        if not item:
            return None
        try:
            raw = json.loads(item)
        except (TypeError, ValueError) as e:
            logger.warning("Unreadable progress in cache slot %r: %s", self.slot, e)
            return None
        if not isinstance(raw, dict):
            logger.warning("Unreadable progress in cache slot %r: not an object", self.slot)
            return None
        return raw

    def write(self, record: Dict[str, Any]) -> None:
        self.cache.set(self.slot, json.dumps(record), timeout=self.timeout)


# PUBLIC_INTERFACE
class ModelStore(DjangoSlotStore):
    """Keeps the record in the DailyProgress row for the slot."""

    def read(self) -> Optional[Dict[str, Any]]:
        row = DailyProgress.objects.filter(slot=self.slot).values("date", "state").first()
        return dict(row) if row else None

    def write(self, record: Dict[str, Any]) -> None:
        DailyProgress.objects.update_or_create(slot=self.slot, defaults=record)


# PUBLIC_INTERFACE
class StoreRegistry:
    """Registry mapping store backend names to store classes."""

    _registry: Dict[str, Type[SlotStore]] = {
        "memory": MemoryStore,
        "cache": CacheStore,
        "database": ModelStore,
    }

    @classmethod
    def get(cls, name: str) -> Type[SlotStore]:
        """Return the store class for a backend name, or raise KeyError."""
        key = (name or "").strip().lower()
        if key not in cls._registry:
            raise KeyError(f"Unknown store backend: {name!r}")
        return cls._registry[key]

    @classmethod
    def register(cls, name: str, store_cls: Type[SlotStore]) -> None:
        """Register or override a store class for a backend name."""
        key = (name or "").strip().lower()
        if not key:
            raise ValueError("name must be a non-empty string")
        cls._registry[key] = store_cls


# PUBLIC_INTERFACE
def get_store(name: Optional[str] = None, **kwargs) -> SlotStore:
    """Instantiate the store backend ``name`` (default: the STORE setting).

    Example:
        store = get_store("cache", slot="state")
        engine = PuzzleEngine(secret, words, on_change, store=store)
    """
    store_cls = StoreRegistry.get(name or get_setting("STORE"))
    if store_cls is MemoryStore:
        kwargs.setdefault("slot", get_setting("SLOT"))
        kwargs.setdefault("clock", timezone.now)
        kwargs.setdefault("tz", timezone.get_current_timezone())
    return store_cls(**kwargs)
