"""Built-in prompt templates and path filtering helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from .models import FileRecord

T = TypeVar("T")


@dataclass(frozen=True)
class PromptTemplate:
    """Preset framing (preamble and goal) plus path selection hints."""

    id: str
    name: str
    description: str
    preamble: str
    goal: str
    file_priority: Tuple[str, ...] = ()
    include_patterns: Tuple[str, ...] = ()
    exclude_patterns: Tuple[str, ...] = ()


TEMPLATES: Tuple[PromptTemplate, ...] = (
    PromptTemplate(
        id="code-review",
        name="Code Review",
        description="Comprehensive code review and suggestions",
        preamble=(
            "Below is the complete codebase for a thorough code review. Please analyze for "
            "code quality, best practices, potential bugs, and security vulnerabilities."
        ),
        goal=(
            "Perform a comprehensive code review focusing on:\n"
            "- Code quality and maintainability\n"
            "- Performance optimizations\n"
            "- Security vulnerabilities\n"
            "- Best practices and design patterns\n"
            "- Potential bugs or edge cases"
        ),
        file_priority=("README.md", "CONTRIBUTING.md", "src/", "lib/", "app/"),
        exclude_patterns=("*.test.*", "*.spec.*", "dist/", "build/", "node_modules/"),
    ),
    PromptTemplate(
        id="api-documentation",
        name="API Documentation",
        description="Generate comprehensive API documentation",
        preamble=(
            "The following codebase contains API endpoints, routes, and services that need "
            "documentation. Please analyze the code structure and API patterns."
        ),
        goal=(
            "Generate comprehensive API documentation including:\n"
            "- All available endpoints and routes\n"
            "- Request/response formats\n"
            "- Authentication requirements\n"
            "- Error handling\n"
            "- Usage examples"
        ),
        file_priority=("README.md", "API.md", "routes/", "controllers/", "api/", "services/"),
        include_patterns=("**/routes/**", "**/api/**", "**/controllers/**", "**/services/**", "*.md"),
    ),
    PromptTemplate(
        id="architecture-analysis",
        name="Architecture Analysis",
        description="Analyze project architecture and structure",
        preamble=(
            "Below is the complete project structure and codebase for architecture analysis. "
            "Focus on understanding the overall design, patterns, and organization."
        ),
        goal=(
            "Analyze the project architecture and provide:\n"
            "- High-level architecture overview\n"
            "- Key design patterns used\n"
            "- Data flow and component relationships\n"
            "- Recommendations for improvements\n"
            "- Scalability considerations"
        ),
        file_priority=("README.md", "ARCHITECTURE.md", "package.json", "tsconfig.json", "src/", "config/"),
        exclude_patterns=("*.test.*", "*.spec.*", "dist/", "build/"),
    ),
    PromptTemplate(
        id="debugging-help",
        name="Debugging Assistant",
        description="Help identify and fix bugs",
        preamble=(
            "The following codebase has issues that need debugging. Please analyze the code "
            "to identify potential bugs and provide fixes."
        ),
        goal=(
            "Debug the codebase by:\n"
            "- Identifying potential bugs and errors\n"
            "- Analyzing error-prone patterns\n"
            "- Suggesting fixes and improvements\n"
            "- Explaining root causes\n"
            "- Providing preventive measures"
        ),
        file_priority=("README.md", "src/", "lib/", "utils/"),
        include_patterns=("**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx", "**/*.py", "**/*.java"),
    ),
    PromptTemplate(
        id="refactoring",
        name="Refactoring Guide",
        description="Suggest refactoring improvements",
        preamble=(
            "This codebase needs refactoring to improve code quality, maintainability, and "
            "performance. Please analyze and suggest improvements."
        ),
        goal=(
            "Provide refactoring recommendations:\n"
            "- Identify code smells and anti-patterns\n"
            "- Suggest better design patterns\n"
            "- Improve code organization\n"
            "- Enhance readability and maintainability\n"
            "- Optimize performance where applicable"
        ),
        file_priority=("README.md", "src/", "lib/", "components/"),
        exclude_patterns=("*.test.*", "*.spec.*", "dist/", "build/", "node_modules/"),
    ),
    PromptTemplate(
        id="testing-strategy",
        name="Testing Strategy",
        description="Develop comprehensive testing approach",
        preamble=(
            "Below is the codebase that requires a comprehensive testing strategy. Analyze "
            "the code to suggest appropriate test coverage."
        ),
        goal=(
            "Create a testing strategy that includes:\n"
            "- Unit test recommendations\n"
            "- Integration test scenarios\n"
            "- Test coverage priorities\n"
            "- Edge cases to consider\n"
            "- Testing framework suggestions"
        ),
        file_priority=("README.md", "package.json", "src/", "lib/", "tests/", "__tests__/"),
        include_patterns=("**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx", "**/*.test.*", "**/*.spec.*"),
    ),
    PromptTemplate(
        id="security-audit",
        name="Security Audit",
        description="Comprehensive security analysis",
        preamble=(
            "The following codebase requires a thorough security audit. Please analyze for "
            "security vulnerabilities and best practices."
        ),
        goal=(
            "Perform a security audit focusing on:\n"
            "- Authentication and authorization flaws\n"
            "- Input validation and sanitization\n"
            "- SQL injection and XSS vulnerabilities\n"
            "- Secure data storage and transmission\n"
            "- Dependency vulnerabilities\n"
            "- Security best practices"
        ),
        file_priority=("README.md", "SECURITY.md", "auth/", "middleware/", "api/", "routes/"),
        include_patterns=("**/auth/**", "**/middleware/**", "**/api/**", "**/routes/**", "*.env.example"),
    ),
    PromptTemplate(
        id="onboarding-guide",
        name="Onboarding Guide",
        description="Create developer onboarding documentation",
        preamble=(
            "This codebase needs comprehensive onboarding documentation for new developers. "
            "Analyze the structure and create a guide."
        ),
        goal=(
            "Create an onboarding guide that includes:\n"
            "- Project overview and purpose\n"
            "- Technology stack explanation\n"
            "- Setup and installation steps\n"
            "- Codebase structure walkthrough\n"
            "- Development workflow\n"
            "- Common tasks and how to perform them"
        ),
        file_priority=("README.md", "CONTRIBUTING.md", "package.json", "docs/", "src/"),
        exclude_patterns=("dist/", "build/", "node_modules/", ".git/"),
    ),
    PromptTemplate(
        id="performance-optimization",
        name="Performance Optimization",
        description="Identify and fix performance bottlenecks",
        preamble=(
            "The following codebase needs performance optimization. Please analyze for "
            "bottlenecks and suggest improvements."
        ),
        goal=(
            "Optimize performance by:\n"
            "- Identifying performance bottlenecks\n"
            "- Analyzing algorithmic complexity\n"
            "- Suggesting caching strategies\n"
            "- Optimizing database queries\n"
            "- Reducing bundle size\n"
            "- Improving render performance"
        ),
        file_priority=("README.md", "package.json", "src/", "api/", "services/"),
        include_patterns=("**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx", "**/api/**", "**/services/**"),
    ),
)


def get_template(template_id: str) -> Optional[PromptTemplate]:
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None


def _pattern_to_regex(pattern: str) -> re.Pattern[str]:
    # Only '*' is a wildcard; it matches across directory separators.
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


def _matches_any(path: str, patterns: Sequence[str]) -> bool:
    return any(_pattern_to_regex(pattern).search(path) for pattern in patterns)


def filter_paths(
    paths: Iterable[str],
    include_patterns: Sequence[str] = (),
    exclude_patterns: Sequence[str] = (),
) -> List[str]:
    """Drop excluded paths first, then keep only included ones when includes exist."""
    filtered = [path for path in paths if not (exclude_patterns and _matches_any(path, exclude_patterns))]
    if include_patterns:
        filtered = [path for path in filtered if _matches_any(path, include_patterns)]
    return filtered


def apply_template(records: Sequence[FileRecord], template: PromptTemplate) -> List[FileRecord]:
    """Filter records by the template's patterns and float priority paths to the front."""
    kept = set(
        filter_paths(
            (record.path for record in records),
            template.include_patterns,
            template.exclude_patterns,
        )
    )
    selected = [record for record in records if record.path in kept]
    return _order_by_hints(selected, template.file_priority, key=lambda record: record.path)


def _order_by_hints(items: Sequence[T], hints: Sequence[str], *, key) -> List[T]:
    def boost(item: T) -> int:
        path = key(item)
        return sum(20 for hint in hints if hint in path)

    return sorted(items, key=boost, reverse=True)


__all__ = [
    "PromptTemplate",
    "TEMPLATES",
    "apply_template",
    "filter_paths",
    "get_template",
]
