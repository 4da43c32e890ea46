"""Pipeline orchestration for prompt generation runs."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .analyzers import analyze_file
from .config import GenerationOptions
from .logging import get_logger
from .models import (
    FileAnalysis,
    FileRecord,
    GenerationMetrics,
    PromptContext,
    PromptResult,
)
from .optimizer.budget import BudgetSelection, optimize_context_budget
from .preprocess import active_rewrites, preprocess_record
from .prompting.assembler import assemble_prompt, order_sections
from .prompting.builder import SectionBuilder
from .stores import AnalysisCache, CacheStats
from .tokens import estimate_text_tokens

DEFAULT_BATCH_SIZE = 10


class PromptGenerationError(RuntimeError):
    """Raised when a generation run aborts; no partial prompt is produced."""


class GenerationCancelled(PromptGenerationError):
    """Raised when a run is cancelled between analysis batches."""


class PromptEngine:
    """Coordinates analysis, budget selection and prompt assembly."""

    def __init__(
        self,
        cache: AnalysisCache | None = None,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        section_builder: SectionBuilder | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.cache = cache if cache is not None else AnalysisCache()
        self.batch_size = batch_size
        self.section_builder = section_builder or SectionBuilder()
        self.logger = get_logger("engine")

    def generate_prompt(
        self,
        files: Iterable[FileRecord],
        options: GenerationOptions | None = None,
        context: PromptContext | None = None,
        *,
        cancel_event: threading.Event | None = None,
    ) -> PromptResult:
        """Analyze, select and render ``files`` into a single prompt."""
        options = options or GenerationOptions()
        options.validate()
        context = context or PromptContext(project_name="Project")
        started = time.perf_counter()

        try:
            return self._run(files, options, context, cancel_event, started)
        except PromptGenerationError:
            raise
        except Exception as exc:
            detail = str(exc) or exc.__class__.__name__
            self.logger.debug("Generation failed", exc_info=True)
            raise PromptGenerationError(f"Prompt generation failed: {detail}") from exc

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    # ------------------------------------------------------------------
    # Pipeline phases

    def _run(
        self,
        files: Iterable[FileRecord],
        options: GenerationOptions,
        context: PromptContext,
        cancel_event: Optional[threading.Event],
        started: float,
    ) -> PromptResult:
        # Materializing may pull content from a lazy loader; read errors surface here.
        records = [preprocess_record(record, options) for record in files]
        metrics = GenerationMetrics(total_files=len(records))
        warnings: List[str] = []
        self.logger.debug("Generating prompt for %d files", len(records))

        analyses = self._analyze_all(records, options, metrics, cancel_event)
        metrics.files_processed = len(analyses)

        selection = self._select(analyses, options, warnings)
        metrics.files_included = len(selection.selected)

        records_by_path: Dict[str, FileRecord] = {record.path: record for record in records}
        sections = self.section_builder.build(
            selection.selected,
            records_by_path,
            options,
            context,
            all_analyses=analyses,
        )
        content = assemble_prompt(sections, options.output_format)

        metrics.total_tokens = estimate_text_tokens(content)
        metrics.processing_time_ms = (time.perf_counter() - started) * 1000
        self.logger.debug(
            "Prompt assembled: %d sections, ~%d tokens in %.1f ms",
            len(sections),
            metrics.total_tokens,
            metrics.processing_time_ms,
        )
        return PromptResult(
            content=content,
            sections=order_sections(sections),
            metrics=metrics,
            warnings=warnings,
        )

    def _analyze_all(
        self,
        records: Sequence[FileRecord],
        options: GenerationOptions,
        metrics: GenerationMetrics,
        cancel_event: Optional[threading.Event],
    ) -> List[FileAnalysis]:
        results: List[Tuple[FileAnalysis, bool]] = []
        rewrites = active_rewrites(options)
        if not options.enable_parallel_processing or len(records) <= 1:
            for record in records:
                self._check_cancelled(cancel_event)
                results.append(self._analyze_with_cache(record, rewrites))
        else:
            max_workers = min(self.batch_size, len(records))
            with ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix="contextpack-analyze"
            ) as executor:
                for start in range(0, len(records), self.batch_size):
                    self._check_cancelled(cancel_event)
                    batch = records[start : start + self.batch_size]
                    results.extend(
                        executor.map(lambda record: self._analyze_with_cache(record, rewrites), batch)
                    )

        for _, hit in results:
            if hit:
                metrics.cache_hits += 1
            else:
                metrics.cache_misses += 1
        return [analysis for analysis, _ in results]

    def _analyze_with_cache(
        self, record: FileRecord, rewrites: Tuple[str, ...] = ()
    ) -> Tuple[FileAnalysis, bool]:
        cached = self.cache.get(record, rewrites)
        if cached is not None:
            return cached, True
        analysis = analyze_file(record)
        self.cache.store(record, analysis, rewrites)
        return analysis, False

    def _select(
        self,
        analyses: Sequence[FileAnalysis],
        options: GenerationOptions,
        warnings: List[str],
    ) -> BudgetSelection:
        budget = options.max_total_tokens
        selection = optimize_context_budget(analyses, budget, options)

        excluded = len(analyses) - len(selection.selected)
        if excluded > 0:
            self.logger.info("Excluded %d of %d files to fit the token budget", excluded, len(analyses))
            warnings.append(f"{excluded} file(s) excluded due to token budget constraints")

        if selection.total_tokens > budget:
            warnings.append(
                f"Selected content (~{round(selection.total_tokens)} tokens) exceeds "
                f"the token budget of {budget}"
            )
        return selection

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelled("Prompt generation cancelled")


def generate_prompt(
    files: Iterable[FileRecord],
    options: GenerationOptions | None = None,
    context: PromptContext | None = None,
) -> PromptResult:
    """Run a single generation with a throwaway engine and cache."""
    return PromptEngine().generate_prompt(files, options, context)


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "GenerationCancelled",
    "PromptEngine",
    "PromptGenerationError",
    "generate_prompt",
]
