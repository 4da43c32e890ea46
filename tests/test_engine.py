"""Tests for contextpack.engine."""

from __future__ import annotations

import threading
from typing import Iterator

import pytest

from contextpack.config import ConfigError, GenerationOptions
from contextpack.engine import (
    GenerationCancelled,
    PromptEngine,
    PromptGenerationError,
    generate_prompt,
)
from contextpack.models import FileRecord, PromptContext
from contextpack.prompting.constants import OMISSION_NOTE


def _section(result, section_id: str):
    return next(section for section in result.sections if section.id == section_id)


def test_single_readme_is_rendered_in_full() -> None:
    result = PromptEngine().generate_prompt([FileRecord.from_text("README.md", "# Hello")])

    assert "# Hello" in _section(result, "file-contents").content
    assert "## Documentation (1)" in _section(result, "structure-map").content
    assert result.metrics.total_files == 1
    assert result.metrics.files_processed == 1
    assert result.metrics.files_included == 1
    assert result.metrics.total_tokens > 0
    assert result.warnings == []


def test_entry_file_is_rendered_with_high_priority() -> None:
    content = "export default function App() {}"

    result = generate_prompt([FileRecord.from_text("src/index.ts", content)])
    block = _section(result, "file-contents").content

    assert "Type: source | Role: entry | Priority: !!!" in block
    assert content in block


def test_test_files_are_summarized() -> None:
    content = "export function testFoo() {\n  run();\n}\n"

    result = generate_prompt([FileRecord.from_text("foo.test.ts", content)])
    block = _section(result, "file-contents").content

    assert block != content
    assert "Role: other" in block
    assert "- testFoo" in block
    assert OMISSION_NOTE in block


def test_sections_are_ordered_and_prompt_uses_project_name() -> None:
    result = generate_prompt(
        [FileRecord.from_text("README.md", "# Hello")],
        GenerationOptions(include_chain_of_thought=True),
        PromptContext(project_name="demo", goal="Explain the project"),
    )

    priorities = [section.priority for section in result.sections]
    assert priorities == sorted(priorities, reverse=True)
    assert result.sections[0].id == "system-instructions"
    assert "**Project:** demo" in result.content
    assert "# Task Objective\n\nExplain the project" in result.content


def test_default_project_name() -> None:
    result = generate_prompt([FileRecord.from_text("README.md", "# Hello")])

    assert "**Project:** Project" in result.content


def test_budget_exclusions_produce_warning() -> None:
    records = [
        FileRecord.from_text("src/a.py", "x = 1\n" * 200),
        FileRecord.from_text("src/b.py", "y = 2\n" * 200),
    ]

    result = generate_prompt(records, GenerationOptions(max_total_tokens=10))

    assert result.metrics.files_processed == 2
    assert result.metrics.files_included == 0
    assert "2 file(s) excluded due to token budget constraints" in result.warnings
    assert "FILE:" not in _section(result, "file-contents").content


def test_forced_documentation_over_budget_warns() -> None:
    result = generate_prompt(
        [FileRecord.from_text("README.md", "# Hello")],
        GenerationOptions(max_total_tokens=1),
    )

    assert result.metrics.files_included == 1
    assert result.warnings == ["Selected content (~2 tokens) exceeds the token budget of 1"]


def test_cache_hits_across_runs() -> None:
    engine = PromptEngine()
    records = [FileRecord.from_text("README.md", "# Hello")]

    first = engine.generate_prompt(records)
    second = engine.generate_prompt(records)

    assert (first.metrics.cache_hits, first.metrics.cache_misses) == (0, 1)
    assert (second.metrics.cache_hits, second.metrics.cache_misses) == (1, 0)

    engine.clear_cache()
    third = engine.generate_prompt(records)
    assert third.metrics.cache_misses == 1


def test_parallel_and_sequential_runs_match() -> None:
    records = [
        FileRecord.from_text(f"src/module{i}.ts", f"export const value{i} = {i};\n")
        for i in range(25)
    ]
    records.append(FileRecord.from_text("README.md", "# Hello"))

    parallel = PromptEngine(batch_size=4).generate_prompt(records)
    sequential = PromptEngine().generate_prompt(
        records, GenerationOptions(enable_parallel_processing=False)
    )

    assert parallel.content == sequential.content
    assert parallel.metrics.files_included == sequential.metrics.files_included == 26


def test_read_failures_are_wrapped_once() -> None:
    def _records() -> Iterator[FileRecord]:
        yield FileRecord.from_text("README.md", "# Hello")
        raise OSError("disk unavailable")

    with pytest.raises(PromptGenerationError) as excinfo:
        PromptEngine().generate_prompt(_records())

    assert str(excinfo.value) == "Prompt generation failed: disk unavailable"
    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.parametrize("parallel", [True, False])
def test_cancelled_runs_raise(parallel: bool) -> None:
    cancel = threading.Event()
    cancel.set()
    records = [FileRecord.from_text(f"src/f{i}.ts", "const a = 1;") for i in range(3)]

    with pytest.raises(GenerationCancelled):
        PromptEngine().generate_prompt(
            records,
            GenerationOptions(enable_parallel_processing=parallel),
            cancel_event=cancel,
        )


def test_invalid_options_are_rejected_before_running() -> None:
    with pytest.raises(ConfigError):
        generate_prompt([], GenerationOptions(output_format="yaml"))


def test_empty_input_still_produces_prompt() -> None:
    result = generate_prompt([])

    assert [section.id for section in result.sections] == [
        "project-overview",
        "structure-map",
        "file-contents",
    ]
    assert result.metrics.total_files == 0
    assert result.warnings == []


def test_xml_output() -> None:
    result = generate_prompt(
        [FileRecord.from_text("README.md", "# Hello")],
        GenerationOptions(output_format="xml"),
    )

    assert result.content.startswith("<?xml")
    assert "<file_contents>" in result.content


def test_comment_removal_applies_before_rendering() -> None:
    content = "const a = 1; // internal note\n/* block */\nconst b = 2;\n"

    result = generate_prompt(
        [FileRecord.from_text("src/values.ts", content)],
        GenerationOptions(remove_comments=True),
    )

    block = _section(result, "file-contents").content
    assert "internal note" not in block
    assert "block */" not in block
    assert "const b = 2;" in block


@pytest.mark.parametrize(
    "options",
    [
        GenerationOptions(remove_comments=True),
        GenerationOptions(minify_output=True),
        GenerationOptions(remove_comments=True, minify_output=True),
    ],
)
def test_warm_cache_matches_fresh_engine_when_rewrites_change(options) -> None:
    records = [
        FileRecord.from_text(
            "src/widget.ts", "// export const legacyThing = 1;\nexport const current = 2;\n"
        )
    ]
    warm_engine = PromptEngine()
    warm_engine.generate_prompt(records)

    warm = warm_engine.generate_prompt(records, options)
    cold = PromptEngine().generate_prompt(records, options)

    assert warm.content == cold.content
    assert warm.metrics.cache_misses == 1
    if options.remove_comments:
        assert "legacyThing" not in _section(warm, "file-contents").content


def test_batch_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        PromptEngine(batch_size=0)
