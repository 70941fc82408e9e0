"""In-memory TTL cache for resolved country contexts.

Entries are keyed by normalized ISO code and replaced once older than the
TTL. There is no size bound: keys are limited to the ISO code space.

The cache holds no lock. Two callers racing on the same missing key both
resolve and store; resolution is pure, so either write is correct.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from countrykb import registry
from countrykb.models import CacheEntry, CountryFinancialContext

logger = logging.getLogger("countrykb.cache")

DEFAULT_TTL_HOURS = 24.0


def _ttl_from_env() -> timedelta:
    """Read COUNTRYKB_CACHE_TTL_HOURS; unparsable or non-positive values fall back to 24."""
    raw = os.getenv("COUNTRYKB_CACHE_TTL_HOURS")
    if raw is None:
        return timedelta(hours=DEFAULT_TTL_HOURS)
    try:
        hours = float(raw)
    except ValueError:
        hours = math.nan
    if not math.isfinite(hours) or hours <= 0:
        logger.warning(
            "Ignoring COUNTRYKB_CACHE_TTL_HOURS=%r, using %s hours", raw, DEFAULT_TTL_HOURS
        )
        return timedelta(hours=DEFAULT_TTL_HOURS)
    return timedelta(hours=hours)


CACHE_TTL = _ttl_from_env()

Resolver = Callable[[str], CountryFinancialContext]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ContextCache:
    """Memoizes ``registry.resolve`` per country code for ``ttl``.

    Usage::

        cache = ContextCache()
        ctx = cache.get("th")   # resolved and stored under "TH"
        ctx = cache.get("TH")   # served from the cache
    """

    def __init__(
        self,
        ttl: timedelta | None = None,
        resolver: Resolver | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.ttl = ttl if ttl is not None else CACHE_TTL
        self._resolve = resolver if resolver is not None else registry.resolve
        self._now = clock if clock is not None else _utcnow
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, country_code: object) -> bool:
        return registry.normalize_code(country_code) in self._entries

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._now() - entry.stored_at < self.ttl

    def get(self, country_code: object) -> CountryFinancialContext:
        code = registry.normalize_code(country_code)

        entry = self._entries.get(code)
        if entry is not None and self.is_fresh(entry):
            return entry.context

        if entry is None:
            logger.debug("Cache miss for %s", code)
        else:
            logger.debug("Cache entry for %s expired (stored %s)", code, entry.stored_at)

        context = self._resolve(code)
        self._entries[code] = CacheEntry(context=context, stored_at=self._now())
        return context

    # --- Cache management ---

    def status(self) -> list[dict[str, Any]]:
        """Return one row per cached code for display."""
        rows = []
        for code, entry in sorted(list(self._entries.items())):
            rows.append({
                "code": code,
                "country_name": entry.context.country_name,
                "stored_at": entry.stored_at.isoformat(),
                "fresh": self.is_fresh(entry),
            })
        return rows

    def clear(self) -> int:
        """Drop all entries. Returns count of entries removed."""
        count = len(self._entries)
        self._entries.clear()
        return count
