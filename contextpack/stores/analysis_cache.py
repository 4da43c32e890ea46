"""In-memory memoization of file analyses."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from ..models import FileAnalysis, FileRecord

CacheKey = Tuple[str, int, int, Tuple[str, ...]]


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache usage."""

    entries: int
    hits: int
    misses: int


class AnalysisCache:
    """Stores analyses keyed by ``(path, size, lines, rewrites)`` for the owning engine's lifetime.

    ``rewrites`` names the content transforms applied before analysis, so the same
    file analyzed with and without comment stripping occupies separate entries.
    The key ignores content; a record that changes without changing
    its size or line count reuses the previous analysis.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, FileAnalysis] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def key_for(record: FileRecord, rewrites: Sequence[str] = ()) -> CacheKey:
        return (record.path, record.size, record.lines, tuple(rewrites))

    def get(self, record: FileRecord, rewrites: Sequence[str] = ()) -> Optional[FileAnalysis]:
        key = self.key_for(record, rewrites)
        with self._lock:
            analysis = self._entries.get(key)
            if analysis is None:
                self._misses += 1
            else:
                self._hits += 1
            return analysis

    def store(
        self, record: FileRecord, analysis: FileAnalysis, rewrites: Sequence[str] = ()
    ) -> None:
        with self._lock:
            self._entries[self.key_for(record, rewrites)] = analysis

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(entries=len(self._entries), hits=self._hits, misses=self._misses)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["AnalysisCache", "CacheStats"]
