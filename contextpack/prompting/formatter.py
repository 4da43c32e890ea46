"""Renders one file into its prompt block according to a strategy."""

from __future__ import annotations

import re
from typing import List

from ..models import FileAnalysis, OptimizationStrategy
from .constants import HEADER_DIVIDER, OMISSION_NOTE

SUMMARY_ITEM_LIMIT = 8
HEADER_EXPORT_LIMIT = 5
EXCERPT_LINES = 50
MIN_EXTRACTED_CHARS = 100

_SCRIPT_PATH = re.compile(r"\.(ts|tsx|js|jsx)$")
_INTERFACE_BLOCK = re.compile(r"export\s+interface\s+\w+\s*{[^}]+}")
_TYPE_ALIAS = re.compile(r"export\s+type\s+\w+\s*=\s*[^;]+;")
_CLASS_BLOCK = re.compile(r"export\s+class\s+\w+[\s\S]*?{[\s\S]*?^}", re.MULTILINE)
_DOC_BLOCK = re.compile(r"/\*\*[\s\S]*?\*/|\"\"\"[\s\S]*?\"\"\"")


def priority_indicator(priority: int) -> str:
    """Map a priority to its compact marker."""
    if priority >= 250:
        return "!!!"
    if priority >= 200:
        return "!!"
    if priority >= 150:
        return "!"
    if priority >= 100:
        return "~"
    return "."


def format_content(
    path: str,
    content: str,
    analysis: FileAnalysis,
    strategy: OptimizationStrategy,
    *,
    extract_signatures: bool = True,
) -> str:
    """Return the header plus the strategy-specific body for one file."""
    output = format_header(path, analysis, strategy)
    if strategy.include_full_content:
        output += content
    elif strategy.summarize:
        output += generate_summary(content, analysis)
    elif strategy.extract_key_elements:
        if extract_signatures:
            output += extract_key_elements(content, analysis)
        else:
            output += _head_excerpt(content)
    return output


def format_header(path: str, analysis: FileAnalysis, strategy: OptimizationStrategy) -> str:
    metadata = analysis.metadata
    lines: List[str] = [
        "",
        HEADER_DIVIDER,
        f"FILE: {path}",
        f"Type: {analysis.type} | Role: {analysis.role} | "
        f"Priority: {priority_indicator(analysis.priority)}",
    ]

    if metadata.size and metadata.lines:
        size_line = f"Size: {metadata.size / 1024:.2f} KB | Lines: {metadata.lines}"
        if metadata.complexity:
            size_line += f" | Complexity: {metadata.complexity}"
        lines.append(size_line)

    if metadata.exports:
        exports_line = "Exports: " + ", ".join(metadata.exports[:HEADER_EXPORT_LIMIT])
        remaining = len(metadata.exports) - HEADER_EXPORT_LIMIT
        if remaining > 0:
            exports_line += f" +{remaining} more"
        lines.append(exports_line)

    if strategy.format_template == "summary":
        lines.append("Summary (optimized for token efficiency)")
    elif strategy.format_template == "structured":
        lines.append("Structured view (key elements extracted)")

    lines.append(HEADER_DIVIDER)
    return "\n".join(lines) + "\n\n"


def generate_summary(content: str, analysis: FileAnalysis) -> str:
    """Describe a file through its imports, exports, functions and leading doc block."""
    metadata = analysis.metadata
    summary = "## Summary\n\n"

    if metadata.imports:
        summary += "**Dependencies:**\n"
        summary += _bullets(metadata.imports[:SUMMARY_ITEM_LIMIT]) + "\n\n"

    if metadata.exports:
        summary += "**Exports:**\n"
        summary += _bullets(metadata.exports[:SUMMARY_ITEM_LIMIT]) + "\n\n"

    if metadata.main_functions:
        summary += "**Key Functions:**\n"
        summary += _bullets(f"{name}()" for name in metadata.main_functions[:SUMMARY_ITEM_LIMIT])
        summary += "\n\n"

    doc_match = _DOC_BLOCK.search(content)
    if doc_match:
        summary += f"**Documentation:**\n```\n{doc_match.group(0)}\n```\n\n"

    summary += OMISSION_NOTE + "\n"
    return summary


def extract_key_elements(content: str, analysis: FileAnalysis) -> str:
    """Pull exported interfaces, type aliases and classes; fall back to a head excerpt."""
    output = ""

    if _SCRIPT_PATH.search(analysis.path):
        interfaces = [match.group(0) for match in _INTERFACE_BLOCK.finditer(content)]
        if interfaces:
            output += "## Type Definitions\n```typescript\n"
            output += "\n\n".join(interfaces)
            output += "\n```\n\n"

        aliases = [match.group(0) for match in _TYPE_ALIAS.finditer(content)]
        if aliases:
            output += "## Type Aliases\n```typescript\n"
            output += "\n".join(aliases)
            output += "\n```\n\n"

    classes = [match.group(0) for match in _CLASS_BLOCK.finditer(content)]
    if classes:
        output += "## Classes\n```\n"
        output += "\n\n".join(classes)
        output += "\n```\n\n"

    if len(output) < MIN_EXTRACTED_CHARS:
        output += _head_excerpt(content)
    return output


def _head_excerpt(content: str) -> str:
    lines = content.split("\n")
    excerpt = "\n".join(lines[:EXCERPT_LINES])
    if len(lines) > EXCERPT_LINES:
        excerpt += "\n\n... (truncated)"
    return excerpt


def _bullets(items) -> str:
    return "\n".join(f"- {item}" for item in items)


__all__ = [
    "extract_key_elements",
    "format_content",
    "format_header",
    "generate_summary",
    "priority_indicator",
]
