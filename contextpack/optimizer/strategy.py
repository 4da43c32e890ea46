"""Per-file rendering strategy selection."""

from __future__ import annotations

from ..config import GenerationOptions
from ..models import FileAnalysis, OptimizationStrategy


def determine_strategy(
    analysis: FileAnalysis, _options: GenerationOptions | None = None
) -> OptimizationStrategy:
    """Return how a file should be rendered; the first matching rule wins.

    The decision depends only on the analysis; the unused second argument keeps
    the ``StrategySelector`` call shape.
    """
    file_type, role, tokens = analysis.type, analysis.role, analysis.estimated_tokens

    if file_type == "documentation":
        return OptimizationStrategy(
            include_full_content=True,
            summarize=False,
            extract_key_elements=False,
            format_template="full",
        )

    if file_type == "config":
        return OptimizationStrategy(
            include_full_content=tokens < 500,
            summarize=False,
            extract_key_elements=True,
            max_tokens=500,
            format_template="structured",
        )

    if role in ("entry", "core"):
        return OptimizationStrategy(
            include_full_content=tokens < 2000,
            summarize=tokens >= 2000,
            extract_key_elements=True,
            max_tokens=3000,
            format_template="structured",
        )

    if file_type == "test":
        return OptimizationStrategy(
            include_full_content=False,
            summarize=True,
            extract_key_elements=True,
            max_tokens=800,
            format_template="summary",
        )

    if file_type == "source":
        if tokens < 1000:
            return OptimizationStrategy(
                include_full_content=True,
                summarize=False,
                extract_key_elements=False,
                format_template="full",
            )
        if tokens < 2500:
            return OptimizationStrategy(
                include_full_content=True,
                summarize=False,
                extract_key_elements=True,
                format_template="structured",
            )
        return OptimizationStrategy(
            include_full_content=False,
            summarize=True,
            extract_key_elements=True,
            max_tokens=2000,
            format_template="summary",
        )

    return OptimizationStrategy(
        include_full_content=tokens < 800,
        summarize=tokens >= 800,
        extract_key_elements=True,
        max_tokens=1000,
        format_template="compact",
    )


__all__ = ["determine_strategy"]
