"""contextpack packs repository files into token-budgeted LLM prompts."""

from .config import ConfigError, GenerationOptions, load_config
from .engine import GenerationCancelled, PromptEngine, PromptGenerationError, generate_prompt
from .models import (
    FileAnalysis,
    FileMetadata,
    FileRecord,
    GenerationMetrics,
    OptimizationStrategy,
    PromptContext,
    PromptResult,
    PromptSection,
    ReferencedDoc,
)

__all__ = [
    "ConfigError",
    "FileAnalysis",
    "FileMetadata",
    "FileRecord",
    "GenerationCancelled",
    "GenerationMetrics",
    "GenerationOptions",
    "OptimizationStrategy",
    "PromptContext",
    "PromptEngine",
    "PromptGenerationError",
    "PromptResult",
    "PromptSection",
    "ReferencedDoc",
    "generate_prompt",
    "load_config",
]
