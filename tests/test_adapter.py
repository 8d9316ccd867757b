# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for adapter module."""

import os
import sys
import unittest
from unittest.mock import MagicMock

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from adapter import AdapterResult, PuzzleAdapter, iter_puzzles
from pattern_library import PatternLibrary

WORKED = "....#\n#####\n.....\n#####\n#####"

CORPUS = [
    {"answer": "oyun", "clue": "Eğlence", "answerLength": 4},
    {"answer": "kalem", "clue": "Yazı aracı", "answerLength": 5},
]


class TestPuzzleAdapter(unittest.TestCase):
    """Tests for PuzzleAdapter."""

    def setUp(self):
        self.patterns = PatternLibrary.from_visual([WORKED], ids=["worked"])
        self.adapter = PuzzleAdapter.from_corpus(CORPUS, patterns=self.patterns)

    def test_success_payload(self):
        """Test a successful result and its camelCase payload."""
        result = self.adapter.generate_one(42, puzzle_id=101)

        self.assertTrue(result.success)
        self.assertEqual(result.puzzle.id, 101)
        self.assertEqual(result.grid_size, 5)
        self.assertIsInstance(result.difficulty_score, float)

        payload = result.to_dict()
        self.assertEqual(
            set(payload), {"success", "puzzle", "gridSize", "difficultyScore", "genTimeMs"}
        )
        puzzle = payload["puzzle"]
        self.assertEqual(puzzle["id"], 101)
        self.assertEqual(puzzle["gridSize"], 5)
        self.assertEqual(puzzle["difficulty"], "medium")
        self.assertEqual(puzzle["title"], "Puzzle #42")
        self.assertEqual(puzzle["words"][1], {
            "id": "across_2",
            "direction": "across",
            "startRow": 2,
            "startCol": 0,
            "answer": "KALEM",
            "clue": "Yazı aracı",
            "num": 2,
        })

    def test_engine_id_by_default(self):
        """Test the engine id is kept when no id is given."""
        result = self.adapter.generate_one(42)
        self.assertEqual(result.puzzle.id, "42_0")

    def test_failure_payload(self):
        """Test an unfillable request yields a failure payload."""
        adapter = PuzzleAdapter.from_corpus(CORPUS[:1], patterns=self.patterns)
        result = adapter.generate_one(42)

        self.assertFalse(result.success)
        self.assertIsNone(result.puzzle)
        self.assertEqual(set(result.to_dict()), {"success", "genTimeMs", "error"})
        self.assertFalse(result.to_dict()["success"])

    def test_unexpected_error_is_wrapped(self):
        """Test exceptions from the engine never escape."""
        generator = MagicMock()
        generator.generate.side_effect = RuntimeError("boom")
        adapter = PuzzleAdapter(generator)

        with self.assertLogs('adapter', level='ERROR'):
            result = adapter.generate_one(1)

        self.assertFalse(result.success)
        self.assertEqual(result.error, "boom")
        self.assertGreaterEqual(result.gen_time_ms, 0.0)

    def test_invalid_difficulty_is_wrapped(self):
        """Test an unknown difficulty becomes a failed result."""
        with self.assertLogs('adapter', level='ERROR'):
            result = self.adapter.generate_one(1, difficulty="extreme")

        self.assertFalse(result.success)
        self.assertIn("Invalid difficulty", result.error)

    def test_builtin_patterns_by_default(self):
        """Test from_corpus falls back to the built-in library."""
        adapter = PuzzleAdapter.from_corpus(CORPUS)
        self.assertEqual(adapter.generator.patterns.size, 7)

    def test_failed_result_dict(self):
        """Test a hand-built failure serializes without a puzzle."""
        result = AdapterResult(success=False, gen_time_ms=1.5, error="nope")
        self.assertEqual(
            result.to_dict(), {"success": False, "genTimeMs": 1.5, "error": "nope"}
        )


class TestIterPuzzles(unittest.TestCase):
    """Tests for iter_puzzles."""

    def setUp(self):
        patterns = PatternLibrary.from_visual([WORKED], ids=["worked"])
        self.adapter = PuzzleAdapter.from_corpus(CORPUS, patterns=patterns)

    def test_consecutive_ids(self):
        """Test ids count up from id_start."""
        results = list(iter_puzzles(self.adapter, start_seed=5, count=3, id_start=10))
        self.assertEqual([r.puzzle.id for r in results], [10, 11, 12])

    def test_consecutive_seeds(self):
        """Test seeds count up from start_seed."""
        results = list(iter_puzzles(self.adapter, start_seed=5, count=3))
        self.assertEqual([r.puzzle.title for r in results],
                         ["Puzzle #5", "Puzzle #6", "Puzzle #7"])

    def test_lazy(self):
        """Test nothing is generated until iteration."""
        generator = MagicMock()
        results = iter_puzzles(PuzzleAdapter(generator), start_seed=0, count=2)

        generator.generate.assert_not_called()
        next(results)
        generator.generate.assert_called_once()


if __name__ == '__main__':
    unittest.main()
