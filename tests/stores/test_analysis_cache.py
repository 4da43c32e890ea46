"""Tests for the analysis cache store."""

from __future__ import annotations

from contextpack.analyzers import analyze_file
from contextpack.models import FileRecord
from contextpack.stores import AnalysisCache


def test_analysis_cache_round_trip() -> None:
    cache = AnalysisCache()
    record = FileRecord.from_text("src/app.ts", "export const a = 1;")
    analysis = analyze_file(record)

    assert cache.get(record) is None
    cache.store(record, analysis)

    assert cache.get(record) == analysis
    stats = cache.stats()
    assert (stats.entries, stats.hits, stats.misses) == (1, 1, 1)


def test_analysis_cache_key_ignores_content() -> None:
    cache = AnalysisCache()
    original = FileRecord.from_text("src/app.ts", "const a = 1;")
    edited = FileRecord.from_text("src/app.ts", "const b = 2;")
    cache.store(original, analyze_file(original))

    assert cache.get(edited) is not None
    assert cache.get(FileRecord.from_text("src/app.ts", "const abc = 1;")) is None


def test_analysis_cache_clear_resets_entries_and_counters() -> None:
    cache = AnalysisCache()
    record = FileRecord.from_text("README.md", "# Hello")
    cache.store(record, analyze_file(record))
    cache.get(record)

    cache.clear()

    assert len(cache) == 0
    assert cache.get(record) is None
    stats = cache.stats()
    assert (stats.entries, stats.hits, stats.misses) == (0, 0, 1)


def test_analysis_cache_separates_rewrite_variants() -> None:
    cache = AnalysisCache()
    record = FileRecord.from_text("src/app.ts", "// old\nexport const a = 1;")
    cache.store(record, analyze_file(record))

    assert cache.get(record, ("remove_comments",)) is None
    assert cache.get(record) is not None
    assert AnalysisCache.key_for(record, ["minify"]) == ("src/app.ts", record.size, 2, ("minify",))
