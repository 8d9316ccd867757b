# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Tests for the crossword-engine command line."""

import io
import json
import logging
import os
import shutil
import sys
import tempfile
import unittest
from contextlib import redirect_stdout

import yaml

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config import EngineConfig
from main import CorpusLoadError, load_corpus, load_patterns, main

PATTERNS_YAML = """
patterns:
  - id: worked
    grid: |
      . . . . #
      # # # # #
      . . . . .
      # # # # #
      # # # # #
"""


class TestMain(unittest.TestCase):
    """End-to-end tests for main()."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.out_dir = os.path.join(self.test_dir, "out")
        self.corpus = os.path.join(self.test_dir, "questions.json")
        self.patterns = os.path.join(self.test_dir, "patterns.yaml")
        self._write_corpus([
            {"answer": "oyun", "clue": "Eğlence", "answerLength": 4},
            {"answer": "kalem", "clue": "Yazı aracı", "answerLength": 5},
        ])
        with open(self.patterns, 'w', encoding='utf-8') as f:
            f.write(PATTERNS_YAML)
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)

    def tearDown(self):
        self.root.handlers[:] = self.saved_handlers
        shutil.rmtree(self.test_dir)

    def _write_corpus(self, records):
        with open(self.corpus, 'w', encoding='utf-8') as f:
            json.dump(records, f, ensure_ascii=False)

    def _args(self, *extra):
        return [
            "--corpus", self.corpus, "--patterns", self.patterns, "--size", "5",
            *extra,
        ]

    def test_writes_puzzle_files(self):
        """Test puzzles are written one file per seed."""
        code = main(self._args(
            "--seed", "42", "--count", "2", "--id-start", "100",
            "--output", self.out_dir, "--validate",
        ))

        self.assertEqual(code, 0)
        for seed, puzzle_id in ((42, 100), (43, 101)):
            path = os.path.join(self.out_dir, f"puzzle_{seed}.yaml")
            with open(path, encoding='utf-8') as f:
                document = yaml.safe_load(f)
            self.assertTrue(document["success"])
            self.assertEqual(document["puzzle"]["id"], puzzle_id)
            self.assertEqual(document["metadata"]["seed"], seed)

    def test_pattern_file_without_size(self):
        """Test a 5x5 pattern file loads when no size is given."""
        code = main([
            "--corpus", self.corpus, "--patterns", self.patterns,
            "--seed", "42", "--output", self.out_dir, "--validate",
        ])

        self.assertEqual(code, 0)
        with open(os.path.join(self.out_dir, "puzzle_42.yaml"), encoding='utf-8') as f:
            self.assertEqual(yaml.safe_load(f)["gridSize"], 5)

    def test_builtin_patterns_default_size(self):
        """Test the built-in library defaults to 7x7 without a size."""
        self.assertEqual(load_patterns(EngineConfig()).size, 7)

    def test_prints_json_to_stdout(self):
        """Test output goes to stdout without an output directory."""
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(self._args("--seed", "3", "--format", "json"))

        self.assertEqual(code, 0)
        document = json.loads(buffer.getvalue())
        self.assertEqual(document["puzzle"]["id"], "3_0")

    def test_failure_exit_code(self):
        """Test an unfillable corpus exits with 1 and still reports."""
        self._write_corpus([{"answer": "oyun", "clue": "Eğlence"}])
        code = main(self._args("--output", self.out_dir))

        self.assertEqual(code, 1)
        with open(os.path.join(self.out_dir, "puzzle_0.yaml"), encoding='utf-8') as f:
            self.assertFalse(yaml.safe_load(f)["success"])

    def test_missing_corpus(self):
        """Test a missing corpus file exits with 2."""
        os.unlink(self.corpus)
        self.assertEqual(main(self._args()), 2)

    def test_no_corpus_given(self):
        """Test running without a corpus exits with 2."""
        self.assertEqual(main(["--seed", "1"]), 2)

    def test_bad_pattern_file(self):
        """Test an unusable pattern file exits with 2."""
        with open(self.patterns, 'w', encoding='utf-8') as f:
            f.write("patterns:\n  - '..X\\n...\\n...'\n")
        self.assertEqual(main(self._args()), 2)

    def test_invalid_config(self):
        """Test invalid configuration is a usage error."""
        with self.assertRaises(SystemExit):
            with redirect_stdout(io.StringIO()):
                main(self._args("--count", "0"))


class TestLoadCorpus(unittest.TestCase):
    """Tests for load_corpus."""

    def test_not_a_list(self):
        """Test a JSON object is rejected."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write('{"answer": "OYUN"}')
        try:
            with self.assertRaises(CorpusLoadError):
                load_corpus(f.name)
        finally:
            os.unlink(f.name)

    def test_invalid_json(self):
        """Test malformed JSON is rejected."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write('[{"answer": ')
        try:
            with self.assertRaises(CorpusLoadError):
                load_corpus(f.name)
        finally:
            os.unlink(f.name)


if __name__ == '__main__':
    unittest.main()
