"""Regex-based structural scan of file contents.

These extractors are heuristic text scans rather than parsers. They over-match on
exports inside comments and under-match on multi-line or decorated declarations;
callers rely on the predictable boundaries, so keep them simple.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

MAX_EXPORTS = 10
MAX_IMPORTS = 15
MAX_MAIN_FUNCTIONS = 10

_EXPORT_DECLARATION = re.compile(r"export\s+(?:default\s+)?(?:class|function|const|let|var)\s+(\w+)")
_EXPORT_LIST = re.compile(r"export\s+{\s*([^}]+)\s*}")
_EXPORT_STAR = re.compile(r"export\s+\*\s+from\s+['\"]([^'\"]+)['\"]")

_IMPORT_FROM = re.compile(r"import\s+.*?\s+from\s+['\"](.+?)['\"]")

_FUNCTION_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:export\s+)?(?:async\s+)?function\s+(\w+)"),
    re.compile(r"(?:export\s+)?const\s+(\w+)\s*=\s*(?:async\s*)?\("),
    re.compile(r"(\w+)\s*\([^)]*\)\s*{"),
)

_CONTROL_FLOW_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\bif\s*\("),
    re.compile(r"\bfor\s*\("),
    re.compile(r"\bwhile\s*\("),
    re.compile(r"\bswitch\s*\("),
    re.compile(r"\bcatch\s*\("),
    re.compile(r"\?"),
)


def extract_exports(content: str) -> Tuple[str, ...]:
    """Return exported names in scan order, deduplicated and capped."""
    names: List[str] = []
    names.extend(match.group(1) for match in _EXPORT_DECLARATION.finditer(content))
    for match in _EXPORT_LIST.finditer(content):
        names.extend(part.strip() for part in match.group(1).split(","))
    names.extend(f"* from {match.group(1)}" for match in _EXPORT_STAR.finditer(content))
    return _dedupe(names, MAX_EXPORTS)


def extract_imports(content: str) -> Tuple[str, ...]:
    """Return imported module specifiers."""
    return _dedupe((match.group(1) for match in _IMPORT_FROM.finditer(content)), MAX_IMPORTS)


def extract_main_functions(content: str) -> Tuple[str, ...]:
    """Return declared function-like names longer than two characters."""
    names: List[str] = []
    for pattern in _FUNCTION_PATTERNS:
        names.extend(
            match.group(1) for match in pattern.finditer(content) if len(match.group(1)) > 2
        )
    return _dedupe(names, MAX_MAIN_FUNCTIONS)


def estimate_complexity(content: str) -> int:
    """Cyclomatic-complexity proxy: one plus every control-flow token found."""
    complexity = 1
    for pattern in _CONTROL_FLOW_PATTERNS:
        complexity += len(pattern.findall(content))
    return complexity


def _dedupe(values: Iterable[str], limit: int) -> Tuple[str, ...]:
    seen = dict.fromkeys(value for value in values if value)
    return tuple(seen)[:limit]


__all__ = [
    "MAX_EXPORTS",
    "MAX_IMPORTS",
    "MAX_MAIN_FUNCTIONS",
    "estimate_complexity",
    "extract_exports",
    "extract_imports",
    "extract_main_functions",
]
