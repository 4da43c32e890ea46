"""Optional content rewrites applied before analysis."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Tuple

from .config import GenerationOptions
from .models import FileRecord

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_WHITESPACE = re.compile(r"\s+")


def remove_comments(content: str) -> str:
    """Strip ``//`` line comments and ``/* */`` blocks.

    This is a plain text rewrite; ``//`` inside string literals (URLs, for
    example) is removed as well.
    """
    content = _LINE_COMMENT.sub("", content)
    return _BLOCK_COMMENT.sub("", content)


def minify(content: str) -> str:
    """Collapse whitespace runs to single spaces."""
    return _WHITESPACE.sub(" ", content).strip()


def active_rewrites(options: GenerationOptions) -> Tuple[str, ...]:
    """Name the rewrites ``preprocess_record`` applies under ``options``, in order."""
    rewrites = []
    if options.remove_comments:
        rewrites.append("remove_comments")
    if options.minify_output:
        rewrites.append("minify")
    return tuple(rewrites)


def preprocess_record(record: FileRecord, options: GenerationOptions) -> FileRecord:
    """Apply the configured rewrites; size and line metadata are left as reported."""
    if not record.content or not (options.remove_comments or options.minify_output):
        return record
    content = record.content
    if options.remove_comments:
        content = remove_comments(content)
    if options.minify_output:
        content = minify(content)
    return replace(record, content=content)


__all__ = ["active_rewrites", "minify", "preprocess_record", "remove_comments"]
