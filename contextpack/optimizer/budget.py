"""Greedy, priority-ordered selection under a token budget."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from ..config import GenerationOptions
from ..logging import get_logger
from ..models import FileAnalysis, OptimizationStrategy
from .strategy import determine_strategy

StrategySelector = Callable[[FileAnalysis, GenerationOptions], OptimizationStrategy]

_LOGGER = get_logger("optimizer.budget")


@dataclass
class BudgetSelection:
    """Outcome of a budget pass over all analyses."""

    selected: List[FileAnalysis] = field(default_factory=list)
    excluded: List[FileAnalysis] = field(default_factory=list)
    charged_tokens: float = 0.0
    forced_tokens: float = 0.0

    @property
    def total_tokens(self) -> float:
        """Estimated size of everything admitted, including forced documentation."""
        return self.charged_tokens + self.forced_tokens


def rank_by_priority(analyses: Sequence[FileAnalysis]) -> List[FileAnalysis]:
    """Sort analyses by priority, descending; ties keep their input order."""
    return sorted(analyses, key=lambda analysis: analysis.priority, reverse=True)


def estimate_rendered_tokens(
    analysis: FileAnalysis, strategy: OptimizationStrategy
) -> float:
    if strategy.max_tokens is not None:
        return float(strategy.max_tokens)
    return analysis.estimated_tokens * 0.8


def optimize_context_budget(
    analyses: Sequence[FileAnalysis],
    max_tokens: int,
    options: GenerationOptions,
    *,
    strategy_selector: StrategySelector = determine_strategy,
) -> BudgetSelection:
    """Admit files in priority order while the running estimate fits ``max_tokens``.

    Documentation rejected on budget grounds is still admitted when
    ``prioritize_documentation`` is set, but its estimate is not added to the
    running total that later files are compared against.
    """
    selection = BudgetSelection()
    for analysis in rank_by_priority(analyses):
        estimate = estimate_rendered_tokens(analysis, strategy_selector(analysis, options))

        if not options.adaptive_compression:
            selection.selected.append(analysis)
            selection.charged_tokens += estimate
            continue

        if selection.charged_tokens + estimate <= max_tokens:
            selection.selected.append(analysis)
            selection.charged_tokens += estimate
        elif analysis.type == "documentation" and options.prioritize_documentation:
            _LOGGER.debug("Force-including documentation %s over budget", analysis.path)
            selection.selected.append(analysis)
            selection.forced_tokens += estimate
        else:
            selection.excluded.append(analysis)

    return selection


__all__ = [
    "BudgetSelection",
    "estimate_rendered_tokens",
    "optimize_context_budget",
    "rank_by_priority",
]
