"""Tests for relevance scoring and priority derivation."""

from __future__ import annotations

import pytest

from contextpack.analyzers import analyze_file
from contextpack.analyzers.scoring import (
    MAX_SCORE,
    calculate_priority,
    calculate_relevance_score,
)
from contextpack.models import FileRecord


def test_readme_score_and_priority() -> None:
    score = calculate_relevance_score("README.md", "# Hello", "documentation", "documentation")

    # base 50 + type 100 + role 90 + "readme" keyword 25
    assert score == 265
    assert calculate_priority("documentation", "documentation", score) == 371


def test_entry_source_score_and_priority() -> None:
    score = calculate_relevance_score(
        "src/index.ts", "export default function App() {}", "source", "entry"
    )

    # base 50 + type 70 + role 100 + "index" 20 + export default 15
    assert score == 255
    assert calculate_priority("source", "entry", score) == 383


def test_score_is_capped() -> None:
    content = "export default class A {}\nexport interface B {}"
    score = calculate_relevance_score(
        "src/core/api/server/client/main/index.ts", content, "source", "entry"
    )
    assert score == MAX_SCORE


def test_priority_multipliers() -> None:
    assert calculate_priority("source", "core", 200) == 260
    assert calculate_priority("documentation", "documentation", 100) == 140
    assert calculate_priority("source", "other", 101) == 101


def test_priority_rounds_half_up() -> None:
    # 101 * 1.5 = 151.5
    assert calculate_priority("source", "entry", 101) == 152
    # 3 * 1.5 = 4.5; round() would give 4
    assert calculate_priority("source", "entry", 3) == 5


def test_test_files_score_low() -> None:
    score = calculate_relevance_score("foo.test.ts", "it('works')", "test", "other")
    assert score == 110


@pytest.mark.parametrize(
    ("path", "content", "file_type", "role"),
    [
        ("README.md", "# Hello", "documentation", "documentation"),
        ("src/index.ts", "export default function App() {}", "source", "entry"),
        ("src/core/engine.py", "class Engine:\n    pass\n", "source", "core"),
        ("package.json", '{"name": "demo"}', "config", "config"),
        ("foo.test.ts", "it('works')", "test", "other"),
        ("styles/site.css", "body { margin: 0; }", "style", "other"),
    ],
)
def test_scoring_is_repeatable(path: str, content: str, file_type: str, role: str) -> None:
    first = calculate_relevance_score(path, content, file_type, role)
    second = calculate_relevance_score(path, content, file_type, role)

    assert first == second
    assert calculate_priority(file_type, role, first) == calculate_priority(file_type, role, second)

    record = FileRecord.from_text(path, content)
    assert analyze_file(record) == analyze_file(record)
