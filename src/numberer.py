# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Clue numbering for solved slots.
"""

from typing import Dict, List, Sequence, Tuple

from models import FilledSlot, Word


def number_slots(filled_slots: Sequence[FilledSlot]) -> List[Word]:
    """
    Assign clue numbers and emit Word records.

    Slots are walked top-to-bottom, left-to-right. Each new start cell gets
    the next number from 1; an across and a down slot sharing a start cell
    share the number. The sort is stable, so across precedes down there.

    Args:
        filled_slots: Solved slots in extraction order

    Returns:
        Words sorted by (row, col), ids of the form '<direction>_<num>'
    """
    numbers: Dict[Tuple[int, int], int] = {}
    words: List[Word] = []

    for slot in sorted(filled_slots, key=lambda s: (s.row, s.col)):
        start = (slot.row, slot.col)
        if start not in numbers:
            numbers[start] = len(numbers) + 1
        num = numbers[start]
        words.append(Word(
            id=f"{slot.direction.value}_{num}",
            direction=slot.direction,
            start_row=slot.row,
            start_col=slot.col,
            answer=slot.word,
            clue=slot.clue,
            num=num,
        ))

    return words
