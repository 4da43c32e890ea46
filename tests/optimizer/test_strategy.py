"""Tests for per-file strategy selection."""

from __future__ import annotations

import pytest

from contextpack.optimizer.strategy import determine_strategy


def test_documentation_is_always_full(make_analysis) -> None:
    strategy = determine_strategy(make_analysis("README.md", type="documentation", role="documentation", estimated_tokens=90_000))

    assert strategy.include_full_content is True
    assert strategy.summarize is False
    assert strategy.format_template == "full"
    assert strategy.max_tokens is None


@pytest.mark.parametrize(("tokens", "full"), [(499, True), (500, False)])
def test_config_threshold(make_analysis, tokens: int, full: bool) -> None:
    strategy = determine_strategy(make_analysis("package.json", type="config", role="config", estimated_tokens=tokens))

    assert strategy.include_full_content is full
    assert strategy.extract_key_elements is True
    assert strategy.max_tokens == 500
    assert strategy.format_template == "structured"


@pytest.mark.parametrize("role", ["entry", "core"])
def test_entry_and_core_switch_to_summary_at_2000(make_analysis, role: str) -> None:
    small = determine_strategy(make_analysis(role=role, estimated_tokens=1999))
    large = determine_strategy(make_analysis(role=role, estimated_tokens=2000))

    assert (small.include_full_content, small.summarize) == (True, False)
    assert (large.include_full_content, large.summarize) == (False, True)
    assert small.max_tokens == large.max_tokens == 3000


def test_role_rule_precedes_test_rule(make_analysis) -> None:
    strategy = determine_strategy(make_analysis("src/index.test.ts", type="test", role="entry", estimated_tokens=10))

    assert strategy.include_full_content is True
    assert strategy.format_template == "structured"


@pytest.mark.parametrize("tokens", [1, 100_000])
def test_tests_are_never_full(make_analysis, tokens: int) -> None:
    strategy = determine_strategy(make_analysis("foo.test.ts", type="test", estimated_tokens=tokens))

    assert strategy.include_full_content is False
    assert strategy.summarize is True
    assert strategy.extract_key_elements is True
    assert strategy.max_tokens == 800
    assert strategy.format_template == "summary"


@pytest.mark.parametrize(
    ("tokens", "full", "summarize", "template", "max_tokens"),
    [
        (999, True, False, "full", None),
        (1000, True, False, "structured", None),
        (2499, True, False, "structured", None),
        (2500, False, True, "summary", 2000),
    ],
)
def test_source_tiers(make_analysis, tokens, full, summarize, template, max_tokens) -> None:
    strategy = determine_strategy(make_analysis(estimated_tokens=tokens))

    assert strategy.include_full_content is full
    assert strategy.summarize is summarize
    assert strategy.format_template == template
    assert strategy.max_tokens == max_tokens


@pytest.mark.parametrize(("tokens", "full"), [(799, True), (800, False)])
def test_fallback_is_compact(make_analysis, tokens: int, full: bool) -> None:
    strategy = determine_strategy(make_analysis("styles/site.css", type="style", estimated_tokens=tokens))

    assert strategy.include_full_content is full
    assert strategy.summarize is not full
    assert strategy.max_tokens == 1000
    assert strategy.format_template == "compact"


TYPES = ["source", "config", "documentation", "test", "style", "asset", "build", "other"]
ROLES = ["entry", "core", "utility", "component", "service", "model", "config", "documentation", "other"]
TOKEN_TIERS = [0, 1, 499, 500, 799, 800, 999, 1000, 1999, 2000, 2499, 2500, 50_000]


@pytest.mark.parametrize("file_type", TYPES)
@pytest.mark.parametrize("role", ROLES)
def test_full_content_and_summary_are_exclusive(make_analysis, file_type: str, role: str) -> None:
    for tokens in TOKEN_TIERS:
        analysis = make_analysis(type=file_type, role=role, estimated_tokens=tokens)
        strategy = determine_strategy(analysis)

        assert not (strategy.include_full_content and strategy.summarize), (file_type, role, tokens)
        assert strategy == determine_strategy(analysis)
