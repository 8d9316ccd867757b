# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for pattern_library module."""

import os
import shutil
import sys
import tempfile
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pattern_library import (
    BUILTIN_TEMPLATES, PatternFormatError, PatternLibrary, parse_pattern,
    pattern_id_for,
)
from slot_extractor import build_cell_index, extract_slots


class TestParsePattern(unittest.TestCase):
    """Tests for parse_pattern."""

    def test_spaced_template(self):
        """Test a whitespace-separated template."""
        pattern = parse_pattern("""
            . . #
            . # .
            # . .
        """, "p1")

        self.assertEqual(pattern.id, "p1")
        self.assertEqual(pattern.size, 3)
        self.assertTrue(pattern.is_open(0, 0))
        self.assertFalse(pattern.is_open(0, 2))
        self.assertEqual(len(pattern.open_cells()), 6)

    def test_contiguous_template(self):
        """Test a template written without separators."""
        pattern = parse_pattern("..#\n.#.\n#..", "p2")
        self.assertEqual(pattern.to_string(), ". . #\n. # .\n# . .")

    def test_ragged_template(self):
        """Test rows of unequal length are rejected."""
        with self.assertRaises(PatternFormatError):
            parse_pattern("...\n..\n...", "bad")

    def test_non_square_template(self):
        """Test a rectangular template is rejected."""
        with self.assertRaises(PatternFormatError):
            parse_pattern("...\n...", "bad")

    def test_unknown_symbols(self):
        """Test characters other than '.' and '#' are rejected."""
        with self.assertRaises(PatternFormatError):
            parse_pattern("..X\n...\n...", "bad")

    def test_empty_template(self):
        """Test an empty template is rejected."""
        with self.assertRaises(PatternFormatError):
            parse_pattern("   \n ", "bad")

    def test_isolated_open_cell(self):
        """Test an open cell outside every slot is rejected."""
        with self.assertRaises(PatternFormatError) as ctx:
            parse_pattern("""
                . . #
                # # #
                # # .
            """, "lonely")
        self.assertIn("(2, 2)", str(ctx.exception))

    def test_format_error_is_value_error(self):
        """Test PatternFormatError can be caught as ValueError."""
        self.assertTrue(issubclass(PatternFormatError, ValueError))


class TestPatternLibrary(unittest.TestCase):
    """Tests for PatternLibrary."""

    def test_builtin_sizes(self):
        """Test every built-in template set parses and is square."""
        for size, templates in BUILTIN_TEMPLATES.items():
            library = PatternLibrary.builtin(size)
            self.assertEqual(library.size, size)
            self.assertEqual(len(library), len(templates))
            for pattern in library:
                self.assertEqual(pattern.size, size)

    def test_builtin_open_cells_covered(self):
        """Test every open cell of every built-in pattern lies in a slot."""
        for size in BUILTIN_TEMPLATES:
            for pattern in PatternLibrary.builtin(size):
                covered = build_cell_index(extract_slots(pattern))
                uncovered = [c for c in pattern.open_cells() if c not in covered]
                self.assertEqual(uncovered, [], pattern.id)

    def test_builtin_ids(self):
        """Test built-in ids follow '<size>x<size>_NN'."""
        library = PatternLibrary.builtin(7)
        self.assertEqual(library[0].id, "7x7_01")
        self.assertEqual(pattern_id_for(9, 11), "9x9_12")

    def test_unknown_builtin_size(self):
        """Test an unsupported size raises."""
        with self.assertRaises(PatternFormatError):
            PatternLibrary.builtin(8)

    def test_empty_library(self):
        """Test a library needs at least one pattern."""
        with self.assertRaises(PatternFormatError):
            PatternLibrary([])

    def test_mixed_sizes(self):
        """Test a library rejects patterns of different sizes."""
        with self.assertRaises(PatternFormatError):
            PatternLibrary.from_visual(["..\n..", "...\n...\n..."])

    def test_from_visual_custom_ids(self):
        """Test explicit ids are kept."""
        library = PatternLibrary.from_visual([".#\n..", "..\n#."], ids=["a", "b"])
        self.assertEqual([p.id for p in library], ["a", "b"])


class TestPatternYaml(unittest.TestCase):
    """Tests for PatternLibrary.from_yaml."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _write(self, content):
        path = os.path.join(self.test_dir, "patterns.yaml")
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_load_patterns(self):
        """Test loading mapping and plain-string entries."""
        path = self._write("""
patterns:
  - id: mini_a
    grid: |
      . . .
      . # .
      . . .
  - |
    . . #
    . # .
    # . .
""")
        library = PatternLibrary.from_yaml(path)

        self.assertEqual(len(library), 2)
        self.assertEqual(library[0].id, "mini_a")
        self.assertEqual(library[1].id, "3x3_02")

    def test_size_filter(self):
        """Test patterns of other sizes are dropped when size is given."""
        path = self._write("""
patterns:
  - "..\\n.."
  - "...\\n...\\n..."
""")
        library = PatternLibrary.from_yaml(path, size=3)

        self.assertEqual(len(library), 1)
        self.assertEqual(library.size, 3)

    def test_isolated_cell_in_file(self):
        """Test a YAML pattern with an uncovered open cell is rejected."""
        path = self._write("""
patterns:
  - id: gap
    grid: |
      . . .
      # # #
      . # .
""")
        with self.assertRaises(PatternFormatError):
            PatternLibrary.from_yaml(path)

    def test_missing_file(self):
        """Test a missing file raises PatternFormatError."""
        with self.assertRaises(PatternFormatError):
            PatternLibrary.from_yaml(os.path.join(self.test_dir, "nope.yaml"))

    def test_invalid_yaml(self):
        """Test malformed YAML raises PatternFormatError."""
        path = self._write("patterns: [unclosed\n")
        with self.assertRaises(PatternFormatError):
            PatternLibrary.from_yaml(path)

    def test_missing_patterns_key(self):
        """Test a document without a patterns list raises."""
        path = self._write("grids: []\n")
        with self.assertRaises(PatternFormatError):
            PatternLibrary.from_yaml(path)


if __name__ == '__main__':
    unittest.main()
