# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Post-generation difficulty scoring.
Computes a numeric score (1.0-10.0) for a filled puzzle.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from models import Difficulty, Word
from slot_extractor import build_cell_index

# Letters that make a grid noticeably harder to complete.
RARE_LETTERS = frozenset("ĞŞÇÜÖİÂJQXZ")

DIFFICULTY_BANDS: Dict[Difficulty, Tuple[float, float]] = {
    Difficulty.EASY: (1.0, 4.0),
    Difficulty.MEDIUM: (3.0, 6.5),
    Difficulty.HARD: (5.0, 9.0),
}


@dataclass(frozen=True)
class PuzzleMetrics:
    avg_word_length: float = 0.0
    intersection_density: float = 0.0
    rare_letter_ratio: float = 0.0
    word_count: int = 0


def compute_metrics(words: Sequence[Word]) -> PuzzleMetrics:
    """Compute difficulty metrics for a numbered puzzle."""
    if not words:
        return PuzzleMetrics()

    letters = "".join(w.answer for w in words)
    rare = sum(1 for ch in letters if ch in RARE_LETTERS)
    crossings = sum(
        1 for entries in build_cell_index(words).values() if len(entries) > 1
    )

    return PuzzleMetrics(
        avg_word_length=len(letters) / len(words),
        intersection_density=crossings / len(words),
        rare_letter_ratio=rare / len(letters),
        word_count=len(words),
    )


def _normalize(value: float, low: float, high: float) -> float:
    """Map value into [0, 10] given known bounds."""
    if high <= low:
        return 5.0
    return max(0.0, min(10.0, (value - low) / (high - low) * 10))


def score_puzzle(metrics: PuzzleMetrics) -> float:
    """Composite difficulty score, clamped to [1.0, 10.0], one decimal."""
    score = (
        0.35 * _normalize(metrics.avg_word_length, 2, 10)
        + 0.25 * _normalize(metrics.intersection_density, 0.5, 3.0)
        + 0.20 * _normalize(metrics.rare_letter_ratio, 0, 0.5)
        + 0.20 * _normalize(metrics.word_count, 5, 35)
    )
    return round(max(1.0, min(10.0, score)), 1)


def is_in_difficulty_band(score: float, difficulty: Difficulty) -> bool:
    low, high = DIFFICULTY_BANDS[difficulty]
    return low <= score <= high
