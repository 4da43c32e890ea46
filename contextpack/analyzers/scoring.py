"""Deterministic relevance scoring and priority derivation."""

from __future__ import annotations

import math
from typing import Dict, Sequence

from ..models import FileRole, FileType

BASE_SCORE = 50
MAX_SCORE = 300

TYPE_SCORES: Dict[str, int] = {
    "documentation": 100,
    "config": 80,
    "source": 70,
    "test": 40,
    "style": 30,
    "asset": 10,
    "build": 5,
    "other": 20,
}

ROLE_SCORES: Dict[str, int] = {
    "entry": 100,
    "core": 80,
    "service": 70,
    "component": 60,
    "model": 60,
    "utility": 40,
    "config": 50,
    "documentation": 90,
    "other": 20,
}

PRIORITY_KEYWORDS: Sequence[str] = ("index", "main", "app", "core", "api", "server", "client")
DOCUMENTATION_KEYWORDS: Sequence[str] = ("readme", "doc", "guide", "tutorial", "api")

_CONTENT_BONUSES: Sequence[tuple[str, int]] = (
    ("export default", 15),
    ("export class", 10),
    ("export interface", 8),
)

_ROLE_MULTIPLIERS: Dict[str, float] = {"entry": 1.5, "core": 1.3}
_TYPE_MULTIPLIERS: Dict[str, float] = {"documentation": 1.4}


def calculate_relevance_score(
    path: str, content: str, file_type: FileType, role: FileRole
) -> int:
    """Return the additive relevance score for a file, capped at ``MAX_SCORE``."""
    score = BASE_SCORE
    score += TYPE_SCORES.get(file_type, 0)
    score += ROLE_SCORES.get(role, 0)

    lower_path = path.lower()
    score += 20 * sum(1 for keyword in PRIORITY_KEYWORDS if keyword in lower_path)

    for marker, bonus in _CONTENT_BONUSES:
        if marker in content:
            score += bonus

    score += 25 * sum(1 for keyword in DOCUMENTATION_KEYWORDS if keyword in lower_path)

    return min(score, MAX_SCORE)


def calculate_priority(file_type: FileType, role: FileRole, relevance_score: int) -> int:
    """Scale the relevance score by role and type multipliers."""
    priority = float(relevance_score)
    priority *= _ROLE_MULTIPLIERS.get(role, 1.0)
    priority *= _TYPE_MULTIPLIERS.get(file_type, 1.0)
    return _round_half_up(priority)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; priorities round .5 upwards.
    return int(math.floor(value + 0.5))


__all__ = [
    "BASE_SCORE",
    "DOCUMENTATION_KEYWORDS",
    "MAX_SCORE",
    "PRIORITY_KEYWORDS",
    "ROLE_SCORES",
    "TYPE_SCORES",
    "calculate_priority",
    "calculate_relevance_score",
]
