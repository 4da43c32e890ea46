"""CLI entrypoints for contextpack commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator

from .config import OUTPUT_FORMATS, ConfigError, GenerationOptions, load_config
from .engine import PromptEngine, PromptGenerationError
from .logging import LOG_LEVELS, configure_logging, get_logger
from .models import FileRecord, PromptContext, PromptResult
from .repo_scanner import RepoScanner
from .templates import TEMPLATES, PromptTemplate, apply_template, get_template


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=default,
        help="Explicit log level; overrides --verbose.",
    )
    parser.add_argument(
        "--log-file",
        default=default,
        help="Also write log records to this file.",
    )


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=None,
        help="Token budget for the assembled prompt (default: 100000).",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output serialization for the prompt.",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Apply a built-in template (see `contextpack templates`).",
    )
    parser.add_argument("--preamble", default=None, help="Context text placed at the top.")
    parser.add_argument("--goal", default=None, help="Task objective for the model.")
    parser.add_argument(
        "--no-structure-map",
        dest="include_structure_map",
        action="store_false",
        default=None,
        help="Skip the project structure overview.",
    )
    parser.add_argument(
        "--chain-of-thought",
        dest="include_chain_of_thought",
        action="store_true",
        default=None,
        help="Append step-by-step reasoning instructions.",
    )
    parser.add_argument(
        "--constraints",
        dest="include_constraints",
        action="store_true",
        default=None,
        help="Add a constraints section to the prompt.",
    )
    parser.add_argument(
        "--few-shot",
        dest="include_few_shot_examples",
        action="store_true",
        default=None,
        help="Add illustrative examples to the prompt.",
    )
    parser.add_argument(
        "--remove-comments",
        dest="remove_comments",
        action="store_true",
        default=None,
        help="Strip // and /* */ comments before analysis.",
    )
    parser.add_argument(
        "--minify",
        dest="minify_output",
        action="store_true",
        default=None,
        help="Collapse whitespace in file contents.",
    )
    parser.add_argument(
        "--no-adaptive",
        dest="adaptive_compression",
        action="store_false",
        default=None,
        help="Disable budget-driven file selection.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the prompt to this file instead of stdout.",
    )


_OPTION_FLAGS = (
    "include_structure_map",
    "include_chain_of_thought",
    "include_constraints",
    "include_few_shot_examples",
    "remove_comments",
    "minify_output",
    "adaptive_compression",
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contextpack",
        description="Pack repository files into a token-budgeted LLM prompt.",
    )
    _add_verbose_option(parser)
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a prompt from a local folder.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_logging_options(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the folder to pack (defaults to current directory).",
    )
    _add_generation_options(generate_parser)

    templates_parser = subparsers.add_parser(
        "templates",
        help="List the built-in prompt templates.",
    )
    _add_verbose_option(templates_parser, suppress_default=True)
    _add_logging_options(templates_parser, suppress_default=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _resolve_options(base: GenerationOptions, args: argparse.Namespace) -> GenerationOptions:
    updates: Dict[str, Any] = {}
    if args.max_tokens is not None:
        updates["max_total_tokens"] = args.max_tokens
    if args.format is not None:
        updates["output_format"] = args.format
    for name in _OPTION_FLAGS:
        value = getattr(args, name, None)
        if value is not None:
            updates[name] = value
    options = replace(base, **updates)
    options.validate()
    return options


def _templated(records: Iterable[FileRecord], template: PromptTemplate) -> Iterator[FileRecord]:
    yield from apply_template(list(records), template)


def _run_generate(args: argparse.Namespace) -> PromptResult:
    root = Path(args.path)
    config = load_config(root)
    options = _resolve_options(config.options, args)

    template_id = args.template or config.template
    template = None
    if template_id:
        template = get_template(template_id)
        if template is None:
            raise ConfigError(f"Unknown template '{template_id}'")

    # Files are read while generate_prompt consumes the iterator.
    records: Iterable[FileRecord] = RepoScanner().iter_records(str(root))
    if template is not None:
        records = _templated(records, template)

    context = PromptContext(
        project_name=config.project_name or config.root.name or "Project",
        preamble=args.preamble or (template.preamble if template else None),
        goal=args.goal or (template.goal if template else None),
    )
    return PromptEngine().generate_prompt(records, options, context)


def _print_templates() -> None:
    width = max(len(template.id) for template in TEMPLATES)
    for template in TEMPLATES:
        print(f"{template.id.ljust(width)}  {template.name} - {template.description}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for contextpack commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), level=args.log_level, log_file=log_file)
    logger = get_logger("cli")

    if args.command == "generate":
        try:
            result = _run_generate(args)
        except (FileNotFoundError, NotADirectoryError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        except PromptGenerationError as exc:
            parser.exit(1, f"contextpack generate failed: {exc}\nRun with --verbose for more details.\n")

        for warning in result.warnings:
            logger.warning(warning)

        metrics = result.metrics
        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.content, encoding="utf-8")
            print(
                f"Prompt written to {_relativize(output_path)} "
                f"({metrics.files_included}/{metrics.total_files} files, ~{metrics.total_tokens} tokens)"
            )
        else:
            print(result.content)
    elif args.command == "templates":
        _print_templates()
    elif args.command == "serve":
        from .service import run_service

        log_level = args.log_level or ("debug" if args.verbose else "info")
        run_service(host=args.host, port=args.port, log_level=log_level)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
