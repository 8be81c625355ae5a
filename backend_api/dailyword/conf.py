from __future__ import annotations

from typing import Any, Dict

from django.conf import settings

DEFAULTS: Dict[str, Any] = {
    "STORE": "database",
    "SLOT": "state",
    "CACHE_ALIAS": "default",
    "CACHE_TIMEOUT": 2 * 24 * 60 * 60,
    "WORD_SEED": 0,
}


# PUBLIC_INTERFACE
def get_setting(name: str) -> Any:
    """Read a key of the DAILYWORD settings dict, falling back to DEFAULTS."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown dailyword setting: {name!r}")
    overrides = getattr(settings, "DAILYWORD", None) or {}
    return overrides.get(name, DEFAULTS[name])
