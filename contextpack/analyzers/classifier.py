"""Path and content heuristics that assign a file type and role."""

from __future__ import annotations

import re
from typing import Pattern, Sequence, Tuple

from ..models import FileRole, FileType

_CODE_SUFFIX = r"\.(ts|tsx|js|jsx|mjs|cjs|py)$"

# Evaluated top-down; the first type with a matching pattern wins.
FILE_TYPE_PATTERNS: Tuple[Tuple[FileType, Tuple[Pattern[str], ...]], ...] = (
    (
        "test",
        (
            re.compile(r"\.(test|spec)" + _CODE_SUFFIX, re.IGNORECASE),
            re.compile(r"(^|/)__tests__/.+" + _CODE_SUFFIX, re.IGNORECASE),
            re.compile(r"(^|/)test_[^/]+\.py$", re.IGNORECASE),
            re.compile(r"_test\.(py|go)$", re.IGNORECASE),
        ),
    ),
    (
        "documentation",
        (
            re.compile(r"\.(md|markdown|txt|rst|adoc)$", re.IGNORECASE),
            re.compile(
                r"(^|/)(readme|changelog|contributing|license|licence|authors|notice|copying)(\.[^/]*)?$",
                re.IGNORECASE,
            ),
        ),
    ),
    (
        "config",
        (
            re.compile(r"\.(json|yaml|yml|toml|ini|env|config|cfg)$", re.IGNORECASE),
            re.compile(
                r"(package\.json|tsconfig\.json|\.eslintrc|\.prettierrc|vite\.config|rspack\.config|webpack\.config)",
                re.IGNORECASE,
            ),
            re.compile(r"(^|/)\.env(\.[^/]*)?$", re.IGNORECASE),
        ),
    ),
    (
        "source",
        (
            re.compile(
                r"\.(ts|tsx|js|jsx|mjs|cjs|py|java|cpp|c|h|go|rs|rb|php|cs|swift|kt)$",
                re.IGNORECASE,
            ),
        ),
    ),
    ("style", (re.compile(r"\.(css|scss|sass|less|styl)$", re.IGNORECASE),)),
    (
        "asset",
        (re.compile(r"\.(png|jpg|jpeg|gif|svg|ico|webp|woff|woff2|ttf|eot)$", re.IGNORECASE),),
    ),
    (
        "build",
        (
            re.compile(r"\.(lock|log|cache)$", re.IGNORECASE),
            re.compile(r"(^|/)(dist|build|node_modules)/"),
        ),
    ),
    ("other", (re.compile(r".*"),)),
)

_ENTRY_HINTS: Sequence[str] = ("index", "main", "app.")
_SERVICE_HINTS: Sequence[str] = ("service", "api")
_MODEL_HINTS: Sequence[str] = ("model", "type", "interface")
_UTILITY_HINTS: Sequence[str] = ("util", "helper")
_CORE_CONTENT_MARKERS: Sequence[str] = ("export class", "export default", "export const")


def detect_file_type(path: str) -> FileType:
    """Return the first file type whose patterns match ``path``."""
    for file_type, patterns in FILE_TYPE_PATTERNS:
        if any(pattern.search(path) for pattern in patterns):
            return file_type
    return "other"


def detect_file_role(path: str, content: str, file_type: FileType) -> FileRole:
    """Infer the architectural role of a file; path hints beat content hints."""
    if file_type == "documentation":
        return "documentation"
    if file_type == "config":
        return "config"

    lower_path = path.lower()
    if _contains_any(lower_path, _ENTRY_HINTS):
        return "entry"
    if "component" in lower_path or lower_path.endswith(".tsx"):
        return "component"
    if _contains_any(lower_path, _SERVICE_HINTS):
        return "service"
    if _contains_any(lower_path, _MODEL_HINTS):
        return "model"
    if _contains_any(lower_path, _UTILITY_HINTS):
        return "utility"

    if _contains_any(content, _CORE_CONTENT_MARKERS):
        return "core"
    return "other"


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    return any(needle in text for needle in needles)


__all__ = ["FILE_TYPE_PATTERNS", "detect_file_role", "detect_file_type"]
