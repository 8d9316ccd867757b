# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Pattern Library

Read-only collections of same-size blocked/open grid templates.

Templates are written visually:
    . = open (letter) cell
    # = blocked cell
Cells may be separated by whitespace or written contiguously.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

import yaml

from models import Pattern
from slot_extractor import build_cell_index, extract_slots

logger = logging.getLogger(__name__)

OPEN_CELL = "."
BLOCKED_CELL = "#"


class PatternFormatError(ValueError):
    """Raised when a pattern template cannot be parsed."""
    pass


# Built-in templates, one list per grid size.

TEMPLATES_7x7 = [
    """
    . . . # . . .
    . # . # . # .
    . . . . . . .
    # # . # . # #
    . . . . . . .
    . # . # . # .
    . . . # . . .
    """,
    """
    . . . # . . .
    . # . . . # .
    . . . # . . .
    # . # # # . #
    . . . # . . .
    . # . . . # .
    . . . # . . .
    """,
    """
    . . . # . . .
    . . # . # . .
    . . . . . . .
    # . . . . . #
    . . . . . . .
    . . # . # . .
    . . . # . . .
    """,
    """
    . . # # . . .
    . . . # . # .
    # . . . . . .
    # # . . . # #
    . . . . . . #
    . # . # . . .
    . . . # # . .
    """,
    """
    . . . # . . .
    . # . . . # .
    . . . . . . .
    # . . # . . #
    . . . . . . .
    . # . . . # .
    . . . # . . .
    """,
]

TEMPLATES_9x9 = [
    """
    . . . . # . . . .
    . # . # . . # . #
    . . . . . . . . .
    . # . # . # . # .
    # . . . # . . . #
    . # . # . # . # .
    . . . . . . . . .
    # . # . . # . # .
    . . . . # . . . .
    """,
    """
    . . . # . . . . .
    . # . . . # . # .
    . . . # . . . . .
    # . # . . . # . #
    . . . . # . . . .
    # . # . . . # . #
    . . . . . # . . .
    . # . # . . . # .
    . . . . . # . . .
    """,
    """
    . . . . # . . . .
    . . # . . . # . .
    . # . . . # . . .
    # . . . # . . . #
    . . . # # # . . .
    # . . . # . . . #
    . . . # . . . # .
    . . # . . . # . .
    . . . . # . . . .
    """,
]

TEMPLATES_11x11 = [
    """
    . . . . # . . . . # .
    . # . # . . # . # . .
    . . . . . # . . . . .
    . # . # . . . # . # .
    # . . . # . # . . . #
    . . # . . . . . # . .
    # . . . # . # . . . #
    . # . # . . . # . # .
    . . . . . # . . . . .
    . . # . # . . # . # .
    . # . . . . # . . . .
    """,
    """
    . . . . . # . . . . .
    . # . # . . . # . # .
    . . . . # . # . . . .
    . # . # . . . # . # .
    . . . . . # . . . . .
    # . # . # # # . # . #
    . . . . . # . . . . .
    . # . # . . . # . # .
    . . . . # . # . . . .
    . # . # . . . # . # .
    . . . . . # . . . . .
    """,
]

TEMPLATES_13x13 = [
    """
    . . . . . # . . . # . . .
    . # . # . . . # . . . # .
    . . . . # . # . . . # . .
    . # . # . . . . # . . # .
    . . . . . # . # . . . . .
    # . # . # . # . . # . # .
    . . . . . . . # . . . . .
    . # . # . . # # # . # . #
    . . . . . # . # . . . . .
    . # . . # . . . . # . # .
    . . # . . . # . # . . . .
    . # . . . # . . . # . # .
    . . . # . . . # . . . . .
    """,
]

BUILTIN_TEMPLATES: Dict[int, List[str]] = {
    7: TEMPLATES_7x7,
    9: TEMPLATES_9x9,
    11: TEMPLATES_11x11,
    13: TEMPLATES_13x13,
}

DEFAULT_PATTERN_SIZE = 7


def parse_pattern(visual: str, pattern_id: str) -> Pattern:
    """
    Parse a visual template into a square Pattern.

    Args:
        visual: Multi-line template using '.' and '#'
        pattern_id: Identifier for the resulting pattern

    Returns:
        Pattern

    Raises:
        PatternFormatError: If the template is empty, ragged, not square,
            contains unknown characters, or has an open cell outside every slot
    """
    rows = []
    for line in visual.strip().splitlines():
        symbols = "".join(line.split())
        if not symbols:
            continue
        unknown = set(symbols) - {OPEN_CELL, BLOCKED_CELL}
        if unknown:
            raise PatternFormatError(
                f"Pattern {pattern_id}: unknown cell symbols {sorted(unknown)}"
            )
        rows.append(tuple(symbol == OPEN_CELL for symbol in symbols))

    if not rows:
        raise PatternFormatError(f"Pattern {pattern_id} is empty")

    size = len(rows)
    for index, row in enumerate(rows):
        if len(row) != size:
            raise PatternFormatError(
                f"Pattern {pattern_id}: row {index} has {len(row)} cells, "
                f"expected {size}"
            )

    pattern = Pattern(id=pattern_id, cells=tuple(rows))

    covered = build_cell_index(extract_slots(pattern))
    orphans = [cell for cell in pattern.open_cells() if cell not in covered]
    if orphans:
        raise PatternFormatError(
            f"Pattern {pattern_id}: open cells {orphans} belong to no word slot"
        )

    return pattern


def pattern_id_for(size: int, index: int) -> str:
    return f"{size}x{size}_{index + 1:02d}"


class PatternLibrary:
    """Immutable, ordered collection of same-size patterns."""

    def __init__(self, patterns: Iterable[Pattern]):
        self._patterns = tuple(patterns)
        if not self._patterns:
            raise PatternFormatError("Pattern library is empty")
        sizes = {p.size for p in self._patterns}
        if len(sizes) > 1:
            raise PatternFormatError(
                f"Pattern library mixes grid sizes: {sorted(sizes)}"
            )

    @property
    def size(self) -> int:
        return self._patterns[0].size

    @property
    def patterns(self) -> Sequence[Pattern]:
        return self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __getitem__(self, index: int) -> Pattern:
        return self._patterns[index]

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns)

    @classmethod
    def from_visual(
        cls, templates: Sequence[str], ids: Optional[Sequence[str]] = None
    ) -> 'PatternLibrary':
        """Parse visual templates; ids default to '<size>x<size>_NN'."""
        patterns = []
        for index, visual in enumerate(templates):
            pattern = parse_pattern(visual, ids[index] if ids else f"#{index + 1}")
            if not ids:
                pattern = Pattern(id=pattern_id_for(pattern.size, index), cells=pattern.cells)
            patterns.append(pattern)
        return cls(patterns)

    @classmethod
    def builtin(cls, size: int = DEFAULT_PATTERN_SIZE) -> 'PatternLibrary':
        """
        Load the built-in templates of one size.

        Raises:
            PatternFormatError: If no built-in templates exist for size
        """
        if size not in BUILTIN_TEMPLATES:
            raise PatternFormatError(
                f"No built-in patterns for size {size}. "
                f"Available: {sorted(BUILTIN_TEMPLATES)}"
            )
        return cls.from_visual(BUILTIN_TEMPLATES[size])

    @classmethod
    def from_yaml(
        cls, path: Union[str, Path], size: Optional[int] = None
    ) -> 'PatternLibrary':
        """
        Load patterns from a YAML file.

        Expected layout:
            patterns:
              - id: mini_01
                grid: |
                  . . . . #
                  ...

        Args:
            path: YAML file path
            size: Keep only patterns of this size (all must match otherwise)

        Raises:
            PatternFormatError: If the file is missing, invalid, or yields
                no usable pattern
        """
        path = Path(path)
        if not path.exists():
            raise PatternFormatError(f"Pattern file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PatternFormatError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict) or not isinstance(data.get('patterns'), list):
            raise PatternFormatError(
                f"{path} must contain a 'patterns' list"
            )

        patterns = []
        for index, item in enumerate(data['patterns']):
            if isinstance(item, str):
                item = {'grid': item}
            if not isinstance(item, dict) or not isinstance(item.get('grid'), str):
                raise PatternFormatError(
                    f"{path}: pattern #{index + 1} needs a 'grid' string"
                )
            pattern = parse_pattern(item['grid'], str(item.get('id', index + 1)))
            if 'id' not in item:
                pattern = Pattern(id=pattern_id_for(pattern.size, index), cells=pattern.cells)
            patterns.append(pattern)

        if size is not None:
            patterns = [p for p in patterns if p.size == size]

        logger.info(f"Loaded {len(patterns)} patterns from {path}")
        return cls(patterns)
