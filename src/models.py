# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Data models for the crossword generation engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Direction(Enum):
    ACROSS = "across"
    DOWN = "down"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Any) -> 'Difficulty':
        """Accept a Difficulty, its value, or its name (case-insensitive)."""
        if isinstance(value, Difficulty):
            return value
        if value is None:
            return cls.MEDIUM
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid difficulty '{value}'. "
                f"Must be one of: {[d.value for d in cls]}"
            )


@dataclass(frozen=True)
class Pattern:
    """Template grid of open (True) and blocked (False) cells."""
    id: str
    cells: Tuple[Tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        return len(self.cells)

    def is_open(self, row: int, col: int) -> bool:
        return self.cells[row][col]

    def open_cells(self) -> List[Tuple[int, int]]:
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, is_open in enumerate(row)
            if is_open
        ]

    def to_string(self) -> str:
        """Render the pattern with '.' for open and '#' for blocked cells."""
        return "\n".join(
            " ".join("." if is_open else "#" for is_open in row)
            for row in self.cells
        )


@dataclass(frozen=True)
class WordBankEntry:
    """A normalized answer with its clue."""
    answer: str
    clue: str

    @property
    def length(self) -> int:
        return len(self.answer)


@dataclass(frozen=True)
class Slot:
    """A maximal run of open cells that takes exactly one word."""
    row: int
    col: int
    direction: Direction
    length: int

    def __post_init__(self):
        if self.length < 2:
            raise ValueError(f"Slot length must be at least 2, got {self.length}")

    @property
    def cells(self) -> List[Tuple[int, int]]:
        """All (row, col) positions covered by this slot, in word order."""
        if self.direction == Direction.ACROSS:
            return [(self.row, self.col + i) for i in range(self.length)]
        return [(self.row + i, self.col) for i in range(self.length)]


@dataclass(frozen=True)
class FilledSlot(Slot):
    """A slot with its assigned answer and clue."""
    word: str = ""
    clue: str = ""

    @classmethod
    def place(cls, slot: Slot, entry: WordBankEntry) -> 'FilledSlot':
        return cls(
            row=slot.row,
            col=slot.col,
            direction=slot.direction,
            length=slot.length,
            word=entry.answer,
            clue=entry.clue,
        )


@dataclass(frozen=True)
class Word:
    """A numbered answer as consumed by the game layer."""
    id: str
    direction: Direction
    start_row: int
    start_col: int
    answer: str
    clue: str
    num: int

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self.direction == Direction.ACROSS:
            return [(self.start_row, self.start_col + i) for i in range(len(self.answer))]
        return [(self.start_row + i, self.start_col) for i in range(len(self.answer))]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "direction": self.direction.value,
            "startRow": self.start_row,
            "startCol": self.start_col,
            "answer": self.answer,
            "clue": self.clue,
            "num": self.num,
        }


@dataclass(frozen=True)
class Puzzle:
    """Complete, numbered puzzle produced by one successful generation."""
    id: str
    size: int
    words: Tuple[Word, ...]
    difficulty: Difficulty
    difficulty_score: float
    title: str
    pattern_id: str = ""
    seed: int = 0

    def get_across_clues(self) -> List[Tuple[int, str]]:
        """Get all across clues in order."""
        return sorted(
            (w.num, w.clue) for w in self.words if w.direction == Direction.ACROSS
        )

    def get_down_clues(self) -> List[Tuple[int, str]]:
        """Get all down clues in order."""
        return sorted(
            (w.num, w.clue) for w in self.words if w.direction == Direction.DOWN
        )

    def letter_grid(self) -> List[List[Optional[str]]]:
        """Solution letters by cell; None marks a cell no word covers."""
        grid: List[List[Optional[str]]] = [
            [None] * self.size for _ in range(self.size)
        ]
        for word in self.words:
            for (row, col), letter in zip(word.cells, word.answer):
                grid[row][col] = letter
        return grid

    def to_string(self) -> str:
        """Convert the solution to a string representation."""
        return "\n".join(
            " ".join(letter if letter else "■" for letter in row)
            for row in self.letter_grid()
        )


@dataclass
class GenerationResult:
    """Outcome of one facade generate() call."""
    success: bool
    gen_time_ms: float = 0.0
    puzzle: Optional[Puzzle] = None
    puzzle_id: Optional[str] = None
    error: Optional[str] = None
    stats: Dict[str, Any] = field(default_factory=dict)
