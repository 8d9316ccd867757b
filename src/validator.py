# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Crossword Puzzle Validator

Checks that a generated puzzle is structurally sound for its pattern:
1. Crossing words agree on every shared cell
2. No answer repeats
3. Every open cell is covered, no blocked cell is
4. Clue numbers increase by one in reading order
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

from models import Pattern, Puzzle
from slot_extractor import build_cell_index


@dataclass
class ValidationResult:
    """Result of puzzle validation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    stats: Dict = field(default_factory=dict)

    def __str__(self):
        lines = [f"Structure: {'VALID' if self.valid else 'INVALID'}"]

        if self.errors:
            lines.append("\nErrors:")
            for e in self.errors:
                lines.append(f"  - {e}")

        if self.stats:
            lines.append("\nStats:")
            for k, v in self.stats.items():
                lines.append(f"  {k}: {v}")

        return "\n".join(lines)


class PuzzleValidator:
    """
    Validates a numbered puzzle against the pattern it was filled from.

    Works on engine puzzles and game payloads alike; only 'words' is read.
    """

    def __init__(self, puzzle: Union[Puzzle, Any], pattern: Pattern):
        self.puzzle = puzzle
        self.pattern = pattern

    def validate(self) -> ValidationResult:
        result = ValidationResult(valid=True)
        words = self.puzzle.words

        result.stats["size"] = f"{self.pattern.size}x{self.pattern.size}"
        result.stats["total_words"] = len(words)

        self._check_crossings(result)
        self._check_uniqueness(result)
        self._check_coverage(result)
        self._check_numbering(result)

        result.valid = len(result.errors) == 0
        return result

    def _check_crossings(self, result: ValidationResult):
        words = self.puzzle.words
        crossings = 0
        for cell, entries in build_cell_index(words).items():
            letters = {words[i].answer[offset] for i, offset in entries}
            if len(entries) > 1:
                crossings += 1
            if len(letters) > 1:
                result.errors.append(
                    f"Conflicting letters {sorted(letters)} at {cell}"
                )
        result.stats["crossings"] = crossings

    def _check_uniqueness(self, result: ValidationResult):
        seen = set()
        for word in self.puzzle.words:
            if word.answer in seen:
                result.errors.append(f"Answer {word.answer} appears more than once")
            seen.add(word.answer)

    def _check_coverage(self, result: ValidationResult):
        size = self.pattern.size
        covered = set(build_cell_index(self.puzzle.words))

        outside = [
            (r, c) for r, c in covered
            if not (0 <= r < size and 0 <= c < size)
        ]
        if outside:
            result.errors.append(f"{len(outside)} word cells lie outside the grid")

        blocked = [
            cell for cell in covered
            if cell not in outside and not self.pattern.is_open(*cell)
        ]
        if blocked:
            result.errors.append(f"{len(blocked)} blocked cells are covered by words")

        uncovered = [cell for cell in self.pattern.open_cells() if cell not in covered]
        if uncovered:
            result.errors.append(
                f"{len(uncovered)} open cells are not covered by any word"
            )

    def _check_numbering(self, result: ValidationResult):
        numbers: Dict[Tuple[int, int], int] = {}
        expected = 1
        ordered = sorted(self.puzzle.words, key=lambda w: (w.start_row, w.start_col))
        for word in ordered:
            start = (word.start_row, word.start_col)
            if start in numbers:
                if word.num != numbers[start]:
                    result.errors.append(
                        f"Word {word.id} at {start} should reuse number {numbers[start]}"
                    )
                continue
            if word.num != expected:
                result.errors.append(
                    f"Word {word.id} at {start} is numbered {word.num}, expected {expected}"
                )
            numbers[start] = word.num
            expected += 1


def validate_puzzle(puzzle: Union[Puzzle, Any], pattern: Pattern) -> ValidationResult:
    """
    Convenience function to validate a puzzle.

    Args:
        puzzle: Generated puzzle or GamePuzzle payload
        pattern: The pattern it was filled from

    Returns:
        ValidationResult
    """
    return PuzzleValidator(puzzle, pattern).validate()
