"""Heuristic token estimation helpers."""

from __future__ import annotations

import math
import re

CHARS_PER_TOKEN = 3.6
TOKENS_PER_LINE = 1.6

_LINE_SPLIT = re.compile(r"\r?\n")


def estimate_text_tokens(text: str) -> int:
    """Estimate tokens for raw text, floored by a per-line heuristic."""
    if not text:
        return 0
    by_chars = math.ceil(len(text) / CHARS_PER_TOKEN)
    by_lines = math.ceil(len(_LINE_SPLIT.split(text)) * TOKENS_PER_LINE)
    return max(by_chars, by_lines)


def estimate_tokens_from_bytes_lines(size: float, lines: float) -> int:
    """Estimate tokens when only the byte size and line count are known."""
    if not math.isfinite(size) or not math.isfinite(lines):
        return 0
    by_bytes = math.ceil(size / CHARS_PER_TOKEN)
    by_lines = math.ceil(lines * TOKENS_PER_LINE)
    return max(by_bytes, by_lines, 0)


__all__ = [
    "CHARS_PER_TOKEN",
    "TOKENS_PER_LINE",
    "estimate_text_tokens",
    "estimate_tokens_from_bytes_lines",
]
