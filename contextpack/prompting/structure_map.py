"""Grouped, priority-annotated overview of analyzed files."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from ..models import FileAnalysis
from .constants import STRUCTURE_MAP_ORDER, TYPE_DISPLAY_NAMES
from .formatter import priority_indicator

FILES_PER_GROUP = 10
EXPORTS_PER_FILE = 3


def generate_structure_map(analyses: Sequence[FileAnalysis]) -> str:
    """Render the structure overview; types without files are skipped."""
    grouped: Dict[str, List[FileAnalysis]] = defaultdict(list)
    for analysis in analyses:
        grouped[analysis.type].append(analysis)

    output = "# Project Structure Overview\n\n"
    for file_type in STRUCTURE_MAP_ORDER:
        files = grouped.get(file_type)
        if not files:
            continue

        output += f"## {TYPE_DISPLAY_NAMES.get(file_type, file_type)} ({len(files)})\n"
        ranked = sorted(files, key=lambda item: item.priority, reverse=True)
        for analysis in ranked[:FILES_PER_GROUP]:
            output += _format_entry(analysis) + "\n"

        if len(ranked) > FILES_PER_GROUP:
            output += f"   ... and {len(ranked) - FILES_PER_GROUP} more files\n"
        output += "\n"

    return output


def _format_entry(analysis: FileAnalysis) -> str:
    line = f"{priority_indicator(analysis.priority)} `{analysis.path}`"
    if analysis.role != "other":
        line += f" - {analysis.role}"
    exports = analysis.metadata.exports
    if exports:
        line += f" (exports: {', '.join(exports[:EXPORTS_PER_FILE])})"
    return line


__all__ = ["generate_structure_map"]
