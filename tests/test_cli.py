"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from contextpack import cli
from contextpack.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "--verbose"])
    assert args.verbose is True
    assert args.command == "generate"


def test_cli_generation_flags_default_to_unset() -> None:
    args = _build_parser().parse_args(["generate", "repo"])

    assert args.path == "repo"
    assert args.max_tokens is None
    assert args.format is None
    assert args.include_structure_map is None
    assert args.adaptive_compression is None


def test_cli_parses_generation_flags() -> None:
    args = _build_parser().parse_args(
        [
            "generate",
            "--max-tokens",
            "5000",
            "--format",
            "json",
            "--no-structure-map",
            "--chain-of-thought",
            "--no-adaptive",
            "--template",
            "refactoring",
        ]
    )

    assert args.max_tokens == 5000
    assert args.format == "json"
    assert args.include_structure_map is False
    assert args.include_chain_of_thought is True
    assert args.adaptive_compression is False
    assert args.template == "refactoring"


def test_cli_rejects_unknown_format() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["generate", "--format", "html"])


def test_generate_prints_prompt(repo_builder, capsys) -> None:
    repo_builder.write({"README.md": "# Hello\n", "src/index.ts": "export default function App() {}\n"})

    main(["generate", str(repo_builder.path()), "--goal", "Explain the app"])

    out = capsys.readouterr().out
    assert "# Project Overview" in out
    assert "**Project:** repo" in out
    assert "# Task Objective\n\nExplain the app" in out
    assert "FILE: src/index.ts" in out


def test_generate_uses_config_and_template(repo_builder, capsys) -> None:
    repo_builder.write(
        {
            ".contextpack.yml": """
            project_name: configured
            template: code-review
            options:
              include_structure_map: false
            """,
            "src/app.ts": "export const a = 1;\n",
            "src/app.test.ts": "it('works', () => {});\n",
        }
    )

    main(["generate", str(repo_builder.path())])

    out = capsys.readouterr().out
    assert "**Project:** configured" in out
    assert "# Context\n\nBelow is the complete codebase for a thorough code review." in out
    assert "# Project Structure" not in out
    assert "FILE: src/app.test.ts" not in out


def test_generate_writes_output_file(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.write({"README.md": "# Hello\n"})
    target = tmp_path / "out" / "prompt.json"

    main(["generate", str(repo_builder.path()), "--format", "json", "-o", str(target)])

    assert target.read_text(encoding="utf-8").startswith('{\n  "sections"')
    assert "Prompt written to" in capsys.readouterr().out


def test_generate_fails_for_missing_path(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Repository path not found" in capsys.readouterr().err


def test_generate_reports_unreadable_files(repo_builder, monkeypatch, capsys) -> None:
    repo_builder.write({"README.md": "# Hello\n", "src/locked.ts": "export const a = 1;\n"})
    read_text = Path.read_text

    def _read_text(self: Path, *args, **kwargs) -> str:
        if self.name == "locked.ts":
            raise PermissionError(13, "Permission denied", str(self))
        return read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", _read_text)

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(repo_builder.path())])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "contextpack generate failed: Prompt generation failed: [Errno 13] Permission denied" in err


def test_generate_fails_for_unknown_template(repo_builder, capsys) -> None:
    repo_builder.write({"README.md": "# Hello\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(repo_builder.path()), "--template", "nope"])

    assert excinfo.value.code == 1
    assert "Unknown template 'nope'" in capsys.readouterr().err


def test_templates_command_lists_builtins(capsys) -> None:
    main(["templates"])

    out = capsys.readouterr().out
    assert "code-review" in out
    assert "Performance Optimization" in out


def test_serve_command_runs_service(monkeypatch) -> None:
    calls: list[dict[str, object]] = []

    import contextpack.service as service

    monkeypatch.setattr(service, "run_service", lambda **kwargs: calls.append(kwargs))

    cli.main(["serve", "--port", "9001"])

    assert calls == [{"host": "127.0.0.1", "port": 9001, "log_level": "info"}]


def test_serve_forwards_log_level(monkeypatch) -> None:
    calls: list[dict[str, object]] = []

    import contextpack.service as service

    monkeypatch.setattr(service, "run_service", lambda **kwargs: calls.append(kwargs))

    cli.main(["serve", "--log-level", "warning"])
    cli.main(["serve", "--verbose"])

    assert [call["log_level"] for call in calls] == ["warning", "debug"]


def test_cli_rejects_unknown_log_level() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["serve", "--log-level", "loud"])
