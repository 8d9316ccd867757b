# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Generator adapter: bridges the crossword engine to the game payload format.

This is the only surface the game layer calls. It never raises: every
failure, expected or not, comes back as a failed AdapterResult.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from crossword_generator import CrosswordGenerator
from csp_solver import DEFAULT_MAX_ATTEMPTS
from models import Difficulty, Puzzle, Word
from pattern_library import PatternLibrary
from word_bank import WordBank

logger = logging.getLogger(__name__)

PuzzleId = Union[int, str]


@dataclass
class GamePuzzle:
    """Game-ready puzzle payload."""
    id: PuzzleId
    grid_size: int
    words: List[Word]
    difficulty: Difficulty
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "gridSize": self.grid_size,
            "words": [w.to_dict() for w in self.words],
            "difficulty": self.difficulty.value,
            "title": self.title,
        }


@dataclass
class AdapterResult:
    """Structured outcome handed to the game layer."""
    success: bool
    gen_time_ms: float
    puzzle: Optional[GamePuzzle] = None
    grid_size: Optional[int] = None
    difficulty_score: Optional[float] = None
    error: Optional[str] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "puzzle": self.puzzle.to_dict(),
                "gridSize": self.grid_size,
                "difficultyScore": self.difficulty_score,
                "genTimeMs": self.gen_time_ms,
            }
        return {
            "success": False,
            "genTimeMs": self.gen_time_ms,
            "error": self.error,
        }


def to_game_puzzle(puzzle: Puzzle, puzzle_id: Optional[PuzzleId] = None) -> GamePuzzle:
    """Convert an engine puzzle, optionally overriding its id."""
    return GamePuzzle(
        id=puzzle.id if puzzle_id is None else puzzle_id,
        grid_size=puzzle.size,
        words=list(puzzle.words),
        difficulty=puzzle.difficulty,
        title=puzzle.title,
    )


class PuzzleAdapter:
    """
    Wraps a CrosswordGenerator for the game layer.

    Usage:
        adapter = PuzzleAdapter.from_corpus(questions)
        result = adapter.generate_one(seed=42, puzzle_id=101)
        payload = result.to_dict()
    """

    def __init__(self, generator: CrosswordGenerator):
        self.generator = generator

    @classmethod
    def from_corpus(
        cls,
        raw_corpus: Iterable[Mapping[str, Any]],
        patterns: Optional[PatternLibrary] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        min_length: int = 2,
    ) -> 'PuzzleAdapter':
        """
        Build the engine once from in-memory corpus data.

        Args:
            raw_corpus: {answer, clue, answerLength} records
            patterns: Pattern library (built-in library when None)
            max_attempts: Solver budget per pattern trial
            min_length: Shortest answer kept in the word bank
        """
        word_bank = WordBank.load(raw_corpus, min_length=min_length)
        if patterns is None:
            patterns = PatternLibrary.builtin()
        return cls(CrosswordGenerator(word_bank, patterns, max_attempts))

    def generate_one(
        self,
        seed: int,
        puzzle_id: Optional[PuzzleId] = None,
        difficulty: Union[Difficulty, str, None] = Difficulty.MEDIUM,
    ) -> AdapterResult:
        """
        Generate a single puzzle as a game payload.

        Args:
            seed: PRNG seed for deterministic generation
            puzzle_id: Identifier to assign to the payload (engine id if None)
            difficulty: easy, medium or hard

        Returns:
            AdapterResult; never raises
        """
        start = time.perf_counter()
        try:
            result = self.generator.generate(seed, difficulty)

            if not result.success:
                return AdapterResult(
                    success=False,
                    gen_time_ms=result.gen_time_ms,
                    error=result.error,
                    stats=result.stats,
                )

            puzzle = result.puzzle
            return AdapterResult(
                success=True,
                gen_time_ms=result.gen_time_ms,
                puzzle=to_game_puzzle(puzzle, puzzle_id),
                grid_size=puzzle.size,
                difficulty_score=puzzle.difficulty_score,
                stats=result.stats,
            )
        except Exception as e:
            logger.exception(f"Unexpected error generating puzzle for seed {seed}")
            return AdapterResult(
                success=False,
                gen_time_ms=(time.perf_counter() - start) * 1000,
                error=str(e) or type(e).__name__,
            )


def iter_puzzles(
    adapter: PuzzleAdapter,
    start_seed: int,
    count: int,
    id_start: Optional[int] = None,
    difficulty: Union[Difficulty, str, None] = Difficulty.MEDIUM,
) -> Iterator[AdapterResult]:
    """
    Yield one result per consecutive seed.

    Each step is a single synchronous generation, so callers running a
    cooperative scheduler can hand control back between items.
    """
    for offset in range(count):
        puzzle_id = None if id_start is None else id_start + offset
        yield adapter.generate_one(start_seed + offset, puzzle_id, difficulty)
