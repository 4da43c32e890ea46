"""File analysis: classification, structural scan and relevance scoring."""

from __future__ import annotations

from ..models import FileAnalysis, FileMetadata, FileRecord
from ..tokens import estimate_text_tokens, estimate_tokens_from_bytes_lines
from .classifier import detect_file_role, detect_file_type
from .content import (
    estimate_complexity,
    extract_exports,
    extract_imports,
    extract_main_functions,
)
from .scoring import calculate_priority, calculate_relevance_score


def analyze_file(record: FileRecord) -> FileAnalysis:
    """Return the immutable analysis for a single candidate file."""
    path, content = record.path, record.content
    file_type = detect_file_type(path)
    role = detect_file_role(path, content, file_type)
    relevance = calculate_relevance_score(path, content, file_type, role)

    if content:
        estimated_tokens = estimate_text_tokens(content)
    else:
        estimated_tokens = estimate_tokens_from_bytes_lines(record.size, record.lines)

    return FileAnalysis(
        path=path,
        type=file_type,
        role=role,
        relevance_score=relevance,
        priority=calculate_priority(file_type, role, relevance),
        estimated_tokens=estimated_tokens,
        metadata=FileMetadata(
            size=record.size,
            lines=record.lines,
            exports=extract_exports(content),
            imports=extract_imports(content),
            main_functions=extract_main_functions(content),
            complexity=estimate_complexity(content),
        ),
    )


__all__ = [
    "analyze_file",
    "calculate_priority",
    "calculate_relevance_score",
    "detect_file_role",
    "detect_file_type",
]
