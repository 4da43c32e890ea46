from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from contextpack.analyzers import analyze_file
from contextpack.models import FileAnalysis, FileMetadata, FileRecord
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def analyze() -> Callable[[str, str], FileAnalysis]:
    """Analyze an in-memory file, deriving size and line count from its text."""

    def _analyze(path: str, content: str) -> FileAnalysis:
        return analyze_file(FileRecord.from_text(path, content))

    return _analyze


@pytest.fixture
def make_analysis() -> Callable[..., FileAnalysis]:
    """Build a synthetic analysis without running the classifiers."""

    def _make(
        path: str = "src/module.ts",
        *,
        type: str = "source",
        role: str = "other",
        priority: int = 100,
        estimated_tokens: int = 100,
        relevance_score: int = 100,
        size: int = 100,
        lines: int = 10,
        exports: tuple[str, ...] = (),
    ) -> FileAnalysis:
        return FileAnalysis(
            path=path,
            type=type,  # type: ignore[arg-type]
            role=role,  # type: ignore[arg-type]
            relevance_score=relevance_score,
            priority=priority,
            estimated_tokens=estimated_tokens,
            metadata=FileMetadata(size=size, lines=lines, exports=exports),
        )

    return _make
