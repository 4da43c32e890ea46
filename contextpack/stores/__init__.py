"""Session-scoped stores used by the prompt engine."""

from .analysis_cache import AnalysisCache, CacheStats

__all__ = ["AnalysisCache", "CacheStats"]
