"""Core data models shared across contextpack components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

FileType = Literal[
    "source",
    "config",
    "documentation",
    "test",
    "style",
    "asset",
    "build",
    "other",
]

FileRole = Literal[
    "entry",
    "core",
    "utility",
    "component",
    "service",
    "model",
    "config",
    "documentation",
    "other",
]

FormatTemplate = Literal["full", "compact", "summary", "structured"]

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True)
class FileRecord:
    """Candidate file supplied by a file-listing collaborator."""

    path: str
    content: str
    size: int
    lines: int

    @classmethod
    def from_text(cls, path: str, content: str) -> "FileRecord":
        """Build a record whose size and line count are derived from ``content``."""
        return cls(
            path=path,
            content=content,
            size=len(content.encode("utf-8")),
            lines=count_lines(content),
        )


@dataclass(frozen=True)
class FileMetadata:
    """Lightweight structural facts extracted from a file."""

    size: int
    lines: int
    exports: Tuple[str, ...] = ()
    imports: Tuple[str, ...] = ()
    main_functions: Tuple[str, ...] = ()
    complexity: int = 1


@dataclass(frozen=True)
class FileAnalysis:
    """Classification, scoring and metadata for one file."""

    path: str
    type: FileType
    role: FileRole
    relevance_score: int
    priority: int
    estimated_tokens: int
    metadata: FileMetadata


@dataclass(frozen=True)
class OptimizationStrategy:
    """Render-mode decision for a single file."""

    include_full_content: bool
    summarize: bool
    extract_key_elements: bool
    format_template: FormatTemplate
    max_tokens: Optional[int] = None


@dataclass(frozen=True)
class PromptSection:
    """One titled block of the assembled prompt."""

    id: str
    title: str
    content: str
    priority: int
    tokens: int


@dataclass
class GenerationMetrics:
    """Accounting counters for a prompt generation run."""

    total_files: int = 0
    files_processed: int = 0
    files_included: int = 0
    total_tokens: int = 0
    processing_time_ms: float = 0.0
    cache_hits: int = 0
    cache_misses: int = 0


@dataclass(frozen=True)
class ReferencedDoc:
    """External documentation snippet attached to a prompt."""

    title: str
    content: str
    url: str = ""


@dataclass(frozen=True)
class PromptContext:
    """Caller supplied framing for the prompt."""

    project_name: str
    preamble: Optional[str] = None
    goal: Optional[str] = None
    referenced_docs: Tuple[ReferencedDoc, ...] = ()


@dataclass
class PromptResult:
    """Final output of a generation run."""

    content: str
    sections: List[PromptSection]
    metrics: GenerationMetrics
    warnings: List[str] = field(default_factory=list)


def count_lines(content: str) -> int:
    """Return the number of newline-delimited segments in ``content``."""
    return len(_LINE_SPLIT.split(content))


__all__ = [
    "FileAnalysis",
    "FileMetadata",
    "FileRecord",
    "FileRole",
    "FileType",
    "FormatTemplate",
    "GenerationMetrics",
    "OptimizationStrategy",
    "PromptContext",
    "PromptResult",
    "PromptSection",
    "ReferencedDoc",
    "count_lines",
]
