"""FastAPI application entrypoint for contextpack service mode."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import DEFAULT_MAX_TOTAL_TOKENS, ConfigError, GenerationOptions
from ..engine import PromptEngine, PromptGenerationError
from ..logging import get_logger
from ..models import FileRecord, PromptContext, PromptResult, ReferencedDoc, count_lines
from ..templates import TEMPLATES


class FilePayload(BaseModel):
    path: str
    content: str = ""
    size: Optional[int] = None
    lines: Optional[int] = None

    def to_record(self) -> FileRecord:
        size = self.size if self.size is not None else len(self.content.encode("utf-8"))
        lines = self.lines if self.lines is not None else count_lines(self.content)
        return FileRecord(path=self.path, content=self.content, size=size, lines=lines)


class OptionsPayload(BaseModel):
    max_total_tokens: int = DEFAULT_MAX_TOTAL_TOKENS
    prioritize_documentation: bool = True
    include_structure_map: bool = True
    extract_code_signatures: bool = True
    adaptive_compression: bool = True
    include_chain_of_thought: bool = False
    include_few_shot_examples: bool = False
    include_constraints: bool = False
    output_format: str = "markdown"
    enable_parallel_processing: bool = True
    remove_comments: bool = False
    minify_output: bool = False


class ReferencedDocPayload(BaseModel):
    title: str
    content: str
    url: str = ""


class ContextPayload(BaseModel):
    project_name: str = "Project"
    preamble: Optional[str] = None
    goal: Optional[str] = None
    referenced_docs: List[ReferencedDocPayload] = Field(default_factory=list)

    def to_context(self) -> PromptContext:
        return PromptContext(
            project_name=self.project_name,
            preamble=self.preamble,
            goal=self.goal,
            referenced_docs=tuple(
                ReferencedDoc(title=doc.title, content=doc.content, url=doc.url)
                for doc in self.referenced_docs
            ),
        )


class GenerateRequest(BaseModel):
    files: List[FilePayload]
    options: OptionsPayload = Field(default_factory=OptionsPayload)
    context: ContextPayload = Field(default_factory=ContextPayload)


class SectionResponse(BaseModel):
    id: str
    title: str
    content: str
    priority: int
    tokens: int


class MetricsResponse(BaseModel):
    total_files: int
    files_processed: int
    files_included: int
    total_tokens: int
    processing_time_ms: float
    cache_hits: int
    cache_misses: int


class GenerateResponse(BaseModel):
    content: str
    sections: List[SectionResponse]
    metrics: MetricsResponse
    warnings: List[str]


class TemplateResponse(BaseModel):
    id: str
    name: str
    description: str


class CacheResponse(BaseModel):
    entries: int
    hits: int
    misses: int


class HealthResponse(BaseModel):
    status: str


def _to_response(result: PromptResult) -> GenerateResponse:
    metrics = result.metrics
    return GenerateResponse(
        content=result.content,
        sections=[
            SectionResponse(
                id=section.id,
                title=section.title,
                content=section.content,
                priority=section.priority,
                tokens=section.tokens,
            )
            for section in result.sections
        ],
        metrics=MetricsResponse(
            total_files=metrics.total_files,
            files_processed=metrics.files_processed,
            files_included=metrics.files_included,
            total_tokens=metrics.total_tokens,
            processing_time_ms=metrics.processing_time_ms,
            cache_hits=metrics.cache_hits,
            cache_misses=metrics.cache_misses,
        ),
        warnings=list(result.warnings),
    )


def create_app(
    engine_factory: Callable[[], PromptEngine] = PromptEngine,
) -> FastAPI:
    """Create the FastAPI application exposing prompt generation.

    The engine (and therefore its analysis cache) lives as long as the app.
    """
    app = FastAPI(title="ContextPack Service", version="1.0.0")
    app.state.engine = engine_factory()
    logger = get_logger("service")

    async def get_engine() -> PromptEngine:
        return app.state.engine

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/templates", response_model=List[TemplateResponse])
    async def list_templates() -> List[TemplateResponse]:
        return [
            TemplateResponse(id=template.id, name=template.name, description=template.description)
            for template in TEMPLATES
        ]

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        engine: PromptEngine = Depends(get_engine),
    ) -> GenerateResponse:
        options = GenerationOptions(**payload.options.model_dump())
        records = [item.to_record() for item in payload.files]
        context = payload.context.to_context()

        def _run_generate() -> PromptResult:
            return engine.generate_prompt(records, options, context)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_generate)
        logger.debug(
            "Generated prompt for %d files (%d warnings)", len(records), len(result.warnings)
        )
        return _to_response(result)

    @app.get("/cache", response_model=CacheResponse)
    async def cache_stats(engine: PromptEngine = Depends(get_engine)) -> CacheResponse:
        stats = engine.cache_stats()
        return CacheResponse(entries=stats.entries, hits=stats.hits, misses=stats.misses)

    @app.delete("/cache", response_model=CacheResponse)
    async def clear_cache(engine: PromptEngine = Depends(get_engine)) -> CacheResponse:
        engine.clear_cache()
        stats = engine.cache_stats()
        return CacheResponse(entries=stats.entries, hits=stats.hits, misses=stats.misses)

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(PromptGenerationError)
    async def generation_error_handler(_: Request, exc: PromptGenerationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    return app


def run_service(  # pragma: no cover - integration path
    host: str = "127.0.0.1", port: int = 8000, log_level: str = "info"
) -> None:
    app = create_app()
    uvicorn.run(app, host=host, port=port, log_level=log_level)


__all__ = ["create_app", "run_service"]
