# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Crossword Generator

Seeded, pattern-based crossword generation:
1. Shuffle the pattern trial order with the seed
2. Extract slots from each pattern in turn
3. Shuffle a fresh copy of the candidate index
4. Fill the pattern with the backtracking solver
5. Number the first successful fill and score its difficulty

Same word bank, same pattern library and same seed always give the same
puzzle.
"""

import logging
import time
from typing import Union

from csp_solver import DEFAULT_MAX_ATTEMPTS, BacktrackingFiller
from difficulty_scorer import compute_metrics, is_in_difficulty_band, score_puzzle
from models import Difficulty, GenerationResult, Puzzle
from numberer import number_slots
from pattern_library import PatternLibrary
from seeded_random import SeededRandom
from slot_extractor import extract_slots
from word_bank import WordBank

logger = logging.getLogger(__name__)


def make_puzzle_id(seed: int, pattern_index: int) -> str:
    return f"{seed}_{pattern_index}"


def make_title(seed: int) -> str:
    return f"Puzzle #{seed}"


class CrosswordGenerator:
    """
    Orchestrates pattern trials over a shared word bank and pattern library.

    Both collaborators are read-only, so one generator can serve concurrent
    generate() calls; every call keeps its own search state.
    """

    def __init__(
        self,
        word_bank: WordBank,
        patterns: PatternLibrary,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize the crossword generator.

        Args:
            word_bank: Loaded word bank
            patterns: Pattern library to try
            max_attempts: Solver node expansions allowed per pattern trial
        """
        if max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self.word_bank = word_bank
        self.patterns = patterns
        self.max_attempts = max_attempts

    def generate(
        self,
        seed: int,
        difficulty: Union[Difficulty, str, None] = Difficulty.MEDIUM,
    ) -> GenerationResult:
        """
        Generate one crossword.

        Args:
            seed: PRNG seed; drives pattern order and candidate order
            difficulty: Label attached to the puzzle

        Returns:
            GenerationResult; success=False when no pattern could be filled

        Raises:
            ValueError: If difficulty is not a known label
        """
        difficulty = Difficulty.parse(difficulty)
        start = time.perf_counter()
        rng = SeededRandom(seed)

        trial_order = rng.shuffled(range(len(self.patterns)))
        stats = {"patterns_tried": 0, "attempts": 0, "backtracks": 0}

        for pattern_index in trial_order:
            pattern = self.patterns[pattern_index]
            slots = extract_slots(pattern)
            candidates = self.word_bank.candidates_for_attempt(rng)

            solver = BacktrackingFiller(slots, candidates, self.max_attempts)
            filled = solver.fill()

            stats["patterns_tried"] += 1
            stats["attempts"] += solver.stats["attempts"]
            stats["backtracks"] += solver.stats["backtracks"]

            if filled is None:
                logger.debug(
                    f"Pattern {pattern.id} failed for seed {seed} "
                    f"({len(slots)} slots, {solver.stats['attempts']} attempts)"
                )
                continue

            words = number_slots(filled)
            score = score_puzzle(compute_metrics(words))
            puzzle_id = make_puzzle_id(seed, pattern_index)
            puzzle = Puzzle(
                id=puzzle_id,
                size=pattern.size,
                words=tuple(words),
                difficulty=difficulty,
                difficulty_score=score,
                title=make_title(seed),
                pattern_id=pattern.id,
                seed=seed,
            )
            stats["pattern_id"] = pattern.id
            stats["in_difficulty_band"] = is_in_difficulty_band(score, difficulty)

            elapsed = _elapsed_ms(start)
            logger.info(
                f"Generated puzzle {puzzle_id} from pattern {pattern.id}: "
                f"{len(words)} words, score {score}, {elapsed:.1f} ms"
            )
            return GenerationResult(
                success=True,
                gen_time_ms=elapsed,
                puzzle=puzzle,
                puzzle_id=puzzle_id,
                stats=stats,
            )

        elapsed = _elapsed_ms(start)
        logger.warning(
            f"No pattern could be filled for seed {seed} "
            f"({len(self.patterns)} patterns tried)"
        )
        return GenerationResult(
            success=False,
            gen_time_ms=elapsed,
            error=(
                f"Could not generate a puzzle: none of the "
                f"{len(self.patterns)} patterns could be filled from the "
                f"word bank ({len(self.word_bank)} entries)"
            ),
            stats=stats,
        )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
