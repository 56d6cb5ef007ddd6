"""Location-clustered species cache.

Entries are keyed by coordinates rounded to two decimals (~1 km) plus the
taxonomic class name, so nearby requests share one resolved candidate list:

    "34.05_-117.27_birds" → CacheEntry(species=[...], seeded_from_upstream=True)

Each class holds at most ``max_per_class`` entries. Inserting a new cluster
past the bound evicts the oldest entry *for that class only* (insertion
order, a FIFO stand-in for LRU; reads never reorder). There is no TTL:
range data changes slowly, and ``clear()`` is the only invalidation.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from species_resolver.clock import Clock, utc_now
from species_resolver.models import CacheEntry, Coordinates, SpeciesCandidate

logger = logging.getLogger(__name__)

DEFAULT_MAX_PER_CLASS = 200
CLUSTER_PRECISION = 2  # decimal places, roughly 1 km


def _round(value: float) -> float:
    # + 0.0 turns -0.0 into 0.0 so both sides of the equator share a key
    return round(value, CLUSTER_PRECISION) + 0.0


def cluster_key(lat: float, lon: float, class_name: str) -> str:
    """Cache key shared by every point in the same ~1 km cell."""
    return f"{_round(lat):.{CLUSTER_PRECISION}f}_{_round(lon):.{CLUSTER_PRECISION}f}_{class_name}"


@dataclass
class CacheSnapshot:
    """Counters plus a per-entry summary for diagnostics."""

    entries: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    per_class: dict[str, int] = field(default_factory=dict)
    details: list[dict[str, object]] = field(default_factory=list)


class SpeciesCache:
    """Bounded per-class store of resolved candidate lists."""

    def __init__(self, max_per_class: int = DEFAULT_MAX_PER_CLASS, clock: Clock = utc_now) -> None:
        if max_per_class < 1:
            msg = "max_per_class must be at least 1"
            raise ValueError(msg)
        self.max_per_class = max_per_class
        self._clock = clock
        self._classes: dict[str, OrderedDict[str, CacheEntry]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, lat: float, lon: float, class_name: str) -> CacheEntry | None:
        """Entry for the cluster, or None. Does not affect eviction order."""
        key = cluster_key(lat, lon, class_name)
        with self._lock:
            entry = self._classes.get(class_name, {}).get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            entry.hits += 1
            logger.debug("Cache hit for %s at %s, %s", class_name, lat, lon)
            return entry

    def put(
        self,
        lat: float,
        lon: float,
        class_name: str,
        species: list[SpeciesCandidate],
    ) -> CacheEntry:
        """Store (or overwrite) the cluster's candidate list.

        An overwritten cluster moves to the newest position. A new cluster
        arriving when the class is full evicts that class's oldest entry.

        Raises:
            ValueError: If ``species`` is empty.
        """
        if not species:
            msg = "refusing to cache an empty species list"
            raise ValueError(msg)
        key = cluster_key(lat, lon, class_name)
        entry = CacheEntry(
            cluster_key=key,
            species=list(species),
            created_at=self._clock(),
            location=Coordinates(lat=lat, lon=lon),
            seeded_from_upstream=any(s.from_upstream for s in species),
        )
        with self._lock:
            bucket = self._classes.setdefault(class_name, OrderedDict())
            if key in bucket:
                del bucket[key]
            elif len(bucket) >= self.max_per_class:
                oldest, _ = bucket.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted cache entry: %s", oldest)
            bucket[key] = entry
        logger.debug("Cached %d species for %s at %s, %s", len(species), class_name, lat, lon)
        return entry

    def mark_used(
        self,
        lat: float,
        lon: float,
        class_name: str,
        species_name: str,
        at: datetime | None = None,
    ) -> bool:
        """Stamp ``last_used_at`` on the named candidate in place.

        Returns False when the cluster or species is not cached.
        """
        key = cluster_key(lat, lon, class_name)
        wanted = species_name.casefold()
        with self._lock:
            entry = self._classes.get(class_name, {}).get(key)
            if entry is None:
                return False
            for candidate in entry.species:
                if candidate.name.casefold() == wanted:
                    candidate.last_used_at = at or self._clock()
                    return True
        return False

    def choose(
        self,
        lat: float,
        lon: float,
        class_name: str,
        pick: Callable[[list[SpeciesCandidate]], SpeciesCandidate],
        fallback: list[SpeciesCandidate] | None = None,
    ) -> SpeciesCandidate:
        """Run ``pick`` on the cached candidates while holding the cache lock.

        ``pick`` stamps ``last_used_at`` on the stored candidate, so the
        choice and the write are one step for concurrent callers. When the
        cluster has been evicted in the meantime, ``fallback`` is used.
        """
        key = cluster_key(lat, lon, class_name)
        with self._lock:
            entry = self._classes.get(class_name, {}).get(key)
            species = entry.species if entry is not None else list(fallback or [])
            return pick(species)

    def clear(self) -> int:
        """Drop every entry. Returns how many were removed."""
        with self._lock:
            removed = len(self)
            self._classes.clear()
        logger.info("Cleared %d cached species entries", removed)
        return removed

    def keys(self, class_name: str) -> list[str]:
        """Cluster keys for a class, oldest first."""
        with self._lock:
            return list(self._classes.get(class_name, {}))

    def stats(self, max_details: int = 200) -> CacheSnapshot:
        with self._lock:
            details: list[dict[str, object]] = [
                {
                    "key": entry.cluster_key,
                    "count": len(entry.species),
                    "seeded_from_upstream": entry.seeded_from_upstream,
                    "created_at": entry.created_at,
                    "hits": entry.hits,
                }
                for bucket in self._classes.values()
                for entry in bucket.values()
            ]
            return CacheSnapshot(
                entries=len(self),
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                per_class={name: len(bucket) for name, bucket in self._classes.items()},
                details=details[:max_details],
            )

    def __len__(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._classes.values())
