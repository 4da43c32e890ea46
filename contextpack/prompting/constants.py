"""Shared constants for prompt rendering and assembly."""

from __future__ import annotations

HEADER_DIVIDER = "-" * 60

OMISSION_NOTE = (
    "_Full content omitted for token efficiency. Key signatures and structure preserved._"
)

TYPE_DISPLAY_NAMES: dict[str, str] = {
    "source": "Source Code",
    "config": "Configuration",
    "documentation": "Documentation",
    "test": "Tests",
    "style": "Styles",
    "asset": "Assets",
    "build": "Build",
    "other": "Other",
}

STRUCTURE_MAP_ORDER: tuple[str, ...] = (
    "documentation",
    "config",
    "source",
    "test",
    "style",
    "other",
)

SECTION_TITLES: dict[str, str] = {
    "system-instructions": "System Instructions",
    "preamble": "Context",
    "reference-docs": "Referenced Documentation",
    "project-overview": "Project Overview",
    "structure-map": "Project Structure",
    "task-goal": "Task Objective",
    "constraints": "Constraints",
    "examples": "Examples",
    "file-contents": "Code Files",
}

SYSTEM_INSTRUCTIONS = """You are an expert software engineer and code analyst. When analyzing the provided codebase:

1. Think step-by-step through your analysis
2. Consider the broader context and architecture
3. Identify patterns and relationships between files
4. Provide specific, actionable recommendations
5. Explain your reasoning clearly

Please analyze thoroughly and systematically."""

FEW_SHOT_EXAMPLES = """Example request: "Why does the login form submit twice?"
Example answer:
- Cause: `src/components/LoginForm.tsx` attaches `onSubmit` to both the form and the button.
- Fix: keep the handler on the form only and give the button `type="submit"`.
- Reference: lines 42-57 of `LoginForm.tsx`.

Example request: "Where is the retry policy configured?"
Example answer:
- `src/services/httpClient.ts` reads `RETRY_LIMIT` from `config/default.json`.
- The default of 3 retries is applied in `createClient()`."""


__all__ = [
    "FEW_SHOT_EXAMPLES",
    "HEADER_DIVIDER",
    "OMISSION_NOTE",
    "SECTION_TITLES",
    "STRUCTURE_MAP_ORDER",
    "SYSTEM_INSTRUCTIONS",
    "TYPE_DISPLAY_NAMES",
]
