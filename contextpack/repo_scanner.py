"""Local folder walk that produces candidate file records."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import CONFIG_FILENAME, ConfigError, load_config
from .logging import get_logger
from .models import FileRecord, count_lines

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    ".next",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    "coverage",
    "build",
    "dist",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}

# .env, .env.local, .env.production, ...
_EXCLUDED_FILE_PREFIXES = (".env",)

_TEXT_SUFFIXES = {
    ".txt", ".md", ".csv", ".js", ".css", ".html", ".json", ".xml", ".yaml", ".yml",
    ".ini", ".log", ".sh", ".bash", ".py", ".java", ".cpp", ".c", ".h", ".config",
    ".gitignore", ".sql", ".ts", ".tsx", ".schema", ".mjs", ".cjs", ".jsx",
    ".rs", ".go", ".php", ".rb", ".toml", ".prisma", ".bat", ".ps1", ".svelte",
    ".lock", ".vue", ".dart", ".kt", ".swift", ".m", ".rst", ".adoc", ".scss",
    ".less", ".cfg",
}

_TEXT_FILENAMES = {"makefile", "dockerfile", "procfile", "rakefile", "license", "readme"}

_LOGGER = get_logger("repo_scanner")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .contextpack.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        target = rel_path
        if self.anchored or self.has_slash:
            if fnmatchcase(target, self.pattern):
                return True
            if self.directory_only and target.startswith(f"{self.pattern}/"):
                return True
            return False

        for part in target.split("/"):
            if fnmatchcase(part, self.pattern):
                return True
        return False


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    has_slash = "/" in pattern
    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash=has_slash,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _parse_config_excludes(path: Path) -> List[IgnoreRule]:
    try:
        config = load_config(path)
    except ConfigError as exc:
        _LOGGER.warning("Ignoring exclude_paths from %s: %s", path.name, exc)
        return []

    rules: List[IgnoreRule] = []
    for pattern in config.exclude_paths:
        rule = _build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def _load_ignore_rules(root: Path, extra_excludes: Sequence[str] = ()) -> List[IgnoreRule]:
    rules = _parse_gitignore(root / ".gitignore")
    rules.extend(_parse_config_excludes(root / CONFIG_FILENAME))
    for pattern in extra_excludes:
        rule = _build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def is_text_file(name: str) -> bool:
    lower = name.lower()
    if lower in _TEXT_FILENAMES:
        return True
    return any(lower.endswith(suffix) for suffix in _TEXT_SUFFIXES)


def _is_excluded_file(name: str) -> bool:
    return name in _EXCLUDED_FILES or name.startswith(_EXCLUDED_FILE_PREFIXES)


def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)

        filtered_dirs = []
        for name in dirnames:
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            filtered_dirs.append(name)
        dirnames[:] = filtered_dirs

        for filename in sorted(filenames):
            if _is_excluded_file(filename) or not is_text_file(filename):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


class RepoScanner:
    """Walks a local folder to produce ``FileRecord`` candidates."""

    def __init__(self, exclude_paths: Sequence[str] = ()) -> None:
        self.exclude_paths = list(exclude_paths)

    def iter_records(self, root: str) -> Iterator[FileRecord]:
        """Validate ``root`` now and return a lazy record iterator.

        Files are read as the iterator is consumed, so read errors surface in the consumer.
        """
        root_path = self._resolve_root(root)
        rules = _load_ignore_rules(root_path, self.exclude_paths)
        return self._read_records(root_path, rules)

    @staticmethod
    def _read_records(root_path: Path, rules: Sequence[IgnoreRule]) -> Iterator[FileRecord]:
        for path in _iter_files(root_path, rules):
            rel_path = path.relative_to(root_path).as_posix()
            content = path.read_text(encoding="utf-8", errors="replace")
            yield FileRecord(
                path=rel_path,
                content=content,
                size=path.stat().st_size,
                lines=count_lines(content),
            )

    def scan(self, root: str) -> List[FileRecord]:
        """Return every candidate record under ``root``."""
        records = list(self.iter_records(root))
        _LOGGER.debug("Scanner discovered %d files under %s", len(records), root)
        return records

    @staticmethod
    def _resolve_root(root: str) -> Path:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Repository path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Repository path is not a directory: {root}")
        return root_path


__all__ = ["IgnoreRule", "RepoScanner", "is_text_file"]
