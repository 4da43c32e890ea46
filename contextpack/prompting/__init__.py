"""Prompt rendering: per-file formatting, structure map and assembly."""

from .assembler import assemble_prompt, order_sections
from .builder import SectionBuilder
from .formatter import format_content, priority_indicator
from .structure_map import generate_structure_map

__all__ = [
    "SectionBuilder",
    "assemble_prompt",
    "format_content",
    "generate_structure_map",
    "order_sections",
    "priority_indicator",
]
