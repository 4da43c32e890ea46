"""Builds the canonical prompt sections from analyses and caller context."""

from __future__ import annotations

from collections import Counter
from typing import Callable, List, Mapping, Sequence

from ..config import GenerationOptions
from ..models import (
    FileAnalysis,
    FileRecord,
    OptimizationStrategy,
    PromptContext,
    PromptSection,
)
from ..optimizer.strategy import determine_strategy
from ..tokens import estimate_text_tokens
from .constants import FEW_SHOT_EXAMPLES, SECTION_TITLES, SYSTEM_INSTRUCTIONS
from .formatter import format_content
from .structure_map import generate_structure_map

_TOP_SECTION_PRIORITY = 1000


class SectionBuilder:
    """Creates prompt sections with priorities reflecting the canonical order.

    Sections are appended in canonical order and each receives the next lower
    priority, so the assembler can re-sort them without relying on list order.
    """

    def __init__(
        self,
        strategy_selector: Callable[
            [FileAnalysis, GenerationOptions], OptimizationStrategy
        ] = determine_strategy,
    ) -> None:
        self._strategy_selector = strategy_selector

    def build(
        self,
        selected: Sequence[FileAnalysis],
        records: Mapping[str, FileRecord],
        options: GenerationOptions,
        context: PromptContext,
        *,
        all_analyses: Sequence[FileAnalysis] | None = None,
    ) -> List[PromptSection]:
        sections: List[PromptSection] = []
        next_priority = _TOP_SECTION_PRIORITY

        def add(section_id: str, content: str) -> None:
            nonlocal next_priority
            sections.append(
                PromptSection(
                    id=section_id,
                    title=SECTION_TITLES[section_id],
                    content=content,
                    priority=next_priority,
                    tokens=estimate_text_tokens(content),
                )
            )
            next_priority -= 1

        if options.include_chain_of_thought:
            add("system-instructions", SYSTEM_INSTRUCTIONS)

        if context.preamble:
            add("preamble", context.preamble)

        if context.referenced_docs:
            add("reference-docs", self._build_reference_docs(context))

        add("project-overview", self._build_overview(context.project_name, selected, options))

        if options.include_structure_map:
            mapped = all_analyses if all_analyses is not None else selected
            add("structure-map", generate_structure_map(mapped))

        if context.goal:
            add("task-goal", context.goal)

        if options.include_constraints:
            add("constraints", self._build_constraints(options))

        if options.include_few_shot_examples:
            add("examples", FEW_SHOT_EXAMPLES)

        add("file-contents", self._build_file_contents(selected, records, options))
        return sections

    @staticmethod
    def _build_reference_docs(context: PromptContext) -> str:
        blocks: List[str] = []
        for doc in context.referenced_docs:
            block = f"## {doc.title}\n"
            if doc.url:
                block += f"Source: {doc.url}\n"
            block += doc.content
            blocks.append(block)
        return "\n\n".join(blocks)

    @staticmethod
    def _build_overview(
        project_name: str, analyses: Sequence[FileAnalysis], options: GenerationOptions
    ) -> str:
        total_size = sum(analysis.metadata.size for analysis in analyses)
        total_lines = sum(analysis.metadata.lines for analysis in analyses)

        overview = f"**Project:** {project_name}\n"
        overview += f"**Files:** {len(analyses)}\n"
        overview += f"**Total Size:** {total_size / 1024:.2f} KB\n"
        overview += f"**Total Lines:** {total_lines:,}\n"
        if options.adaptive_compression:
            overview += "**Optimization:** Smart context optimizer enabled\n"

        overview += "\n**File Distribution:**\n"
        for file_type, count in Counter(analysis.type for analysis in analyses).most_common():
            overview += f"- {file_type}: {count}\n"
        return overview

    @staticmethod
    def _build_constraints(options: GenerationOptions) -> str:
        constraints = "Please ensure your response:\n"
        constraints += "- Is specific and actionable\n"
        constraints += "- References specific files and line numbers where applicable\n"
        constraints += "- Provides code examples when suggesting changes\n"
        constraints += "- Prioritizes high-impact improvements\n"
        if options.max_total_tokens:
            constraints += (
                f"- Stays within reasonable length for {options.max_total_tokens} token context\n"
            )
        return constraints

    def _build_file_contents(
        self,
        analyses: Sequence[FileAnalysis],
        records: Mapping[str, FileRecord],
        options: GenerationOptions,
    ) -> str:
        blocks: List[str] = []
        for analysis in analyses:
            record = records.get(analysis.path)
            if record is None or not record.content:
                continue
            strategy = self._strategy_selector(analysis, options)
            rendered = format_content(
                analysis.path,
                record.content,
                analysis,
                strategy,
                extract_signatures=options.extract_code_signatures,
            )
            blocks.append(rendered + "\n")
        return "".join(blocks)


__all__ = ["SectionBuilder"]
