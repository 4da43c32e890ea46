"""Concatenates prompt sections into the requested output format."""

from __future__ import annotations

import json
from typing import Iterable, List

from ..models import PromptSection

SYSTEM_SECTION_ID = "system-instructions"


def order_sections(sections: Iterable[PromptSection]) -> List[PromptSection]:
    """Return sections sorted by priority, highest first."""
    return sorted(sections, key=lambda section: section.priority, reverse=True)


def assemble_prompt(sections: Iterable[PromptSection], output_format: str = "markdown") -> str:
    """Render sections as markdown, xml, json or plain text."""
    ordered = order_sections(sections)
    if output_format == "xml":
        return assemble_xml(ordered)
    if output_format == "json":
        return assemble_json(ordered)
    if output_format == "plain":
        return "\n\n".join(section.content for section in ordered)
    return assemble_markdown(ordered)


def assemble_markdown(sections: List[PromptSection]) -> str:
    blocks: List[str] = []
    for section in sections:
        if section.id == SYSTEM_SECTION_ID:
            blocks.append(section.content)
        else:
            blocks.append(f"# {section.title}\n\n{section.content}")
    return "\n\n".join(blocks)


def assemble_xml(sections: List[PromptSection]) -> str:
    # Section content is embedded verbatim; prompts are read by models, not XML parsers.
    xml = '<?xml version="1.0" encoding="UTF-8"?>\n<prompt>\n'
    for section in sections:
        tag = section.id.replace("-", "_")
        body = "\n".join(f"    {line}" for line in section.content.split("\n"))
        xml += f"  <{tag}>\n{body}\n  </{tag}>\n"
    xml += "</prompt>"
    return xml


def assemble_json(sections: List[PromptSection]) -> str:
    payload = {
        "sections": [
            {
                "id": section.id,
                "title": section.title,
                "content": section.content,
                "tokens": section.tokens,
            }
            for section in sections
        ]
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


__all__ = [
    "assemble_json",
    "assemble_markdown",
    "assemble_prompt",
    "assemble_xml",
    "order_sections",
]
