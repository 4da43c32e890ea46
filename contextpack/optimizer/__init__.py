"""Strategy selection and token budget optimization."""

from .budget import BudgetSelection, optimize_context_budget, rank_by_priority
from .strategy import determine_strategy

__all__ = [
    "BudgetSelection",
    "determine_strategy",
    "optimize_context_budget",
    "rank_by_priority",
]
