"""Configuration loading for contextpack (.contextpack.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".contextpack.yml"
DEFAULT_MAX_TOTAL_TOKENS = 100_000
OUTPUT_FORMATS: tuple[str, ...] = ("markdown", "xml", "json", "plain")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class GenerationOptions:
    """Knobs controlling analysis, budget selection and prompt assembly."""

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

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "GenerationOptions":
        """Build options from a loosely typed mapping, ignoring unknown keys."""
        options = cls()
        if not data:
            return options

        updates: Dict[str, Any] = {}
        for option_field in fields(cls):
            if option_field.name not in data:
                continue
            raw = data[option_field.name]
            default = getattr(options, option_field.name)
            if isinstance(default, bool):
                value = _as_bool(raw)
            elif isinstance(default, int):
                value = _as_int(raw)
            else:
                value = _as_str(raw)
            if value is None:
                raise ConfigError(f"Invalid value for option '{option_field.name}': {raw!r}")
            updates[option_field.name] = value

        merged = replace(options, **updates)
        merged.validate()
        return merged

    def validate(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            choices = ", ".join(OUTPUT_FORMATS)
            raise ConfigError(
                f"Unsupported output format '{self.output_format}' (expected one of: {choices})"
            )
        if self.max_total_tokens <= 0:
            raise ConfigError("max_total_tokens must be a positive integer")


@dataclass
class ContextPackConfig:
    """Represents the high-level settings defined in .contextpack.yml."""

    root: Path
    options: GenerationOptions = field(default_factory=GenerationOptions)
    project_name: Optional[str] = None
    template: Optional[str] = None
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> ContextPackConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ContextPackConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    options_data = data.get("options")
    if options_data is not None and not isinstance(options_data, dict):
        raise ConfigError("'options' must be a mapping")

    return ContextPackConfig(
        root=root,
        options=GenerationOptions.from_mapping(options_data),
        project_name=_as_str(data.get("project_name")),
        template=_as_str(data.get("template")),
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.replace("_", "").replace(",", ""))
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ContextPackConfig",
    "DEFAULT_MAX_TOTAL_TOKENS",
    "GenerationOptions",
    "OUTPUT_FORMATS",
    "load_config",
]
