# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Constraint Satisfaction Problem solver for crossword patterns.
Uses backtracking with a most-constrained-variable ordering and an
explicit undo log for the shared letter grid.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from models import FilledSlot, Slot, WordBankEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 50000

Cell = Tuple[int, int]


class BacktrackingFiller:
    """
    Fills every slot of one pattern with a distinct word.

    Variables: Slots
    Domains: Entries of exactly the slot's length, in the pre-shuffled order
    Constraints:
        - Crossing slots must agree on the shared cell's letter
        - No answer may appear twice in the puzzle

    A solver instance holds the search state for one fill() call.
    """

    def __init__(
        self,
        slots: Sequence[Slot],
        candidates: Mapping[int, Sequence[WordBankEntry]],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize the solver.

        Args:
            slots: Slots in extraction order
            candidates: Length -> entries, already shuffled for this attempt
            max_attempts: Node expansions allowed before giving up
        """
        if max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")

        self.slots = list(slots)
        self.candidates = candidates
        self.max_attempts = max_attempts

        # MRV: fewest candidates first; the sort is stable
        self.order: List[int] = sorted(
            range(len(self.slots)),
            key=lambda i: len(self.candidates.get(self.slots[i].length, ())),
        )

        self.grid: Dict[Cell, str] = {}
        self.used_words: Set[str] = set()
        self.filled: List[Optional[FilledSlot]] = [None] * len(self.slots)
        self._undo_log: List[Cell] = []

        self.stats = {
            "attempts": 0,
            "backtracks": 0,
            "budget_exhausted": False,
        }

    def fits(self, word: str, slot: Slot) -> bool:
        """Check the word against letters already in the grid."""
        for letter, cell in zip(word, slot.cells):
            existing = self.grid.get(cell)
            if existing is not None and existing != letter:
                return False
        return True

    def _place(self, entry: WordBankEntry, slot_index: int) -> int:
        """
        Commit a word and log the cells it newly set.

        Returns:
            Undo log height before the placement
        """
        slot = self.slots[slot_index]
        mark = len(self._undo_log)
        for letter, cell in zip(entry.answer, slot.cells):
            if cell not in self.grid:
                self.grid[cell] = letter
                self._undo_log.append(cell)
        self.used_words.add(entry.answer)
        self.filled[slot_index] = FilledSlot.place(slot, entry)
        return mark

    def _remove(self, entry: WordBankEntry, slot_index: int, mark: int):
        """Undo a placement; cells shared with still-placed words are kept."""
        while len(self._undo_log) > mark:
            del self.grid[self._undo_log.pop()]
        self.used_words.discard(entry.answer)
        self.filled[slot_index] = None

    def _unfillable_lengths(self) -> List[int]:
        return sorted({
            slot.length for slot in self.slots
            if not self.candidates.get(slot.length)
        })

    def backtrack(self, depth: int = 0) -> bool:
        """
        Assign slots from position `depth` of the MRV order onward.

        Returns True once every slot holds a word.
        """
        if depth == len(self.order):
            return True

        self.stats["attempts"] += 1
        if self.stats["attempts"] > self.max_attempts:
            self.stats["budget_exhausted"] = True
            return False

        slot_index = self.order[depth]
        slot = self.slots[slot_index]

        for entry in self.candidates.get(slot.length, ()):
            if entry.answer in self.used_words:
                continue
            if not self.fits(entry.answer, slot):
                continue

            mark = self._place(entry, slot_index)
            if self.backtrack(depth + 1):
                return True

            # Backtrack
            self.stats["backtracks"] += 1
            self._remove(entry, slot_index, mark)

            if self.stats["budget_exhausted"]:
                return False

        return False

    def fill(self) -> Optional[List[FilledSlot]]:
        """
        Solve the pattern.

        Returns:
            FilledSlot per input slot (same order), or None if no fill was
            found within the attempt budget
        """
        missing = self._unfillable_lengths()
        if missing:
            logger.debug(f"No candidates for slot lengths {missing}")
            return None

        if not self.backtrack():
            if self.stats["budget_exhausted"]:
                logger.debug(
                    f"Attempt budget of {self.max_attempts} exhausted "
                    f"after {self.stats['backtracks']} backtracks"
                )
            return None

        return list(self.filled)


def fill_slots(
    slots: Sequence[Slot],
    candidates: Mapping[int, Sequence[WordBankEntry]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Optional[List[FilledSlot]]:
    """Convenience wrapper: build a BacktrackingFiller and run it once."""
    return BacktrackingFiller(slots, candidates, max_attempts).fill()
