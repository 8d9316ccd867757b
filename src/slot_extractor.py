# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Slot extraction: derive across/down word slots from a pattern.
"""

from typing import Dict, List, Sequence, Tuple

from models import Direction, Pattern, Slot

MIN_SLOT_LENGTH = 2


def extract_slots(pattern: Pattern) -> List[Slot]:
    """
    Identify all word slots in a pattern.

    Across slots come first in row-major order, then down slots in
    column-major order. The solver's MRV sort is stable, so this order
    decides ties and must not change.

    Args:
        pattern: Pattern to scan

    Returns:
        List of Slot, each with length >= 2
    """
    size = pattern.size
    slots: List[Slot] = []

    for row in range(size):
        slots.extend(_runs(
            [pattern.is_open(row, col) for col in range(size)],
            lambda start, length: Slot(row, start, Direction.ACROSS, length),
        ))

    for col in range(size):
        slots.extend(_runs(
            [pattern.is_open(row, col) for row in range(size)],
            lambda start, length: Slot(start, col, Direction.DOWN, length),
        ))

    return slots


def _runs(line: List[bool], make_slot) -> List[Slot]:
    """Turn each run of >= 2 open cells in one line into a slot."""
    found = []
    start = None
    for index, is_open in enumerate(line + [False]):
        if is_open and start is None:
            start = index
        elif not is_open and start is not None:
            if index - start >= MIN_SLOT_LENGTH:
                found.append(make_slot(start, index - start))
            start = None
    return found


def build_cell_index(slots: Sequence) -> Dict[Tuple[int, int], List[Tuple[int, int]]]:
    """
    Map each cell to the (slot index, offset) pairs covering it.

    Accepts anything exposing 'cells' (Slot, FilledSlot or Word).

    Cells covered by two entries are the crossings.
    """
    index: Dict[Tuple[int, int], List[Tuple[int, int]]] = {}
    for slot_index, slot in enumerate(slots):
        for offset, cell in enumerate(slot.cells):
            index.setdefault(cell, []).append((slot_index, offset))
    return index
