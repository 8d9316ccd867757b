#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Crossword Engine CLI

Generates seeded crossword puzzles from a clue/answer corpus and writes
game-ready payloads.

Usage:
    python main.py --corpus questions.json --seed 42
    python main.py --corpus questions.json --size 9 --count 20 --output ./puzzles
    python main.py --config engine.yaml --daily
"""

import json
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from adapter import PuzzleAdapter, iter_puzzles
from config import (
    ConfigValidationError, EngineConfig, create_argument_parser, load_config
)
from logging_config import get_logger, setup_logging
from pattern_library import DEFAULT_PATTERN_SIZE, PatternFormatError, PatternLibrary
from seeded_random import daily_seed
from validator import validate_puzzle
from yaml_exporter import ExportError, PuzzleExporter

logger = get_logger(__name__)


class CorpusLoadError(Exception):
    """Raised when the corpus file cannot be read."""
    pass


def load_corpus(path: str) -> List[Dict[str, Any]]:
    """
    Read a JSON corpus: a list of {answer, clue, answerLength} records.

    Raises:
        CorpusLoadError: If the file is missing, invalid, or not a list
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise CorpusLoadError(f"Corpus file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusLoadError(f"Could not read corpus {path}: {e}")

    if not isinstance(data, list):
        raise CorpusLoadError(
            f"Corpus {path} must contain a JSON list, got {type(data).__name__}"
        )
    return data


def load_patterns(config: EngineConfig) -> PatternLibrary:
    if config.patterns.file:
        return PatternLibrary.from_yaml(config.patterns.file, size=config.patterns.size)
    return PatternLibrary.builtin(config.patterns.size or DEFAULT_PATTERN_SIZE)


def build_adapter(config: EngineConfig) -> PuzzleAdapter:
    """Load corpus and patterns once and wire up the engine."""
    if not config.corpus.file:
        raise CorpusLoadError("No corpus file given (use --corpus or corpus.file)")

    corpus = load_corpus(config.corpus.file)
    patterns = load_patterns(config)
    logger.info(
        f"Using {len(patterns)} patterns of size {patterns.size}x{patterns.size}"
    )
    return PuzzleAdapter.from_corpus(
        corpus,
        patterns=patterns,
        max_attempts=config.solver.max_attempts,
        min_length=config.corpus.min_length,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigValidationError as e:
        parser.error(str(e))

    setup_logging(
        output_dir=config.output.directory,
        log_level=config.output.log_level,
        log_file_prefix=config.output.log_file_prefix,
        enable_console=config.output.enable_console_logging,
        enable_file=config.output.enable_file_logging,
    )

    seed = daily_seed(datetime.now(timezone.utc)) if args.daily else config.generation.seed

    try:
        adapter = build_adapter(config)
    except (CorpusLoadError, PatternFormatError) as e:
        logger.error(str(e))
        return 2

    exporter = PuzzleExporter(config.output.format)
    patterns = adapter.generator.patterns
    failures = 0

    results = iter_puzzles(
        adapter,
        start_seed=seed,
        count=config.generation.count,
        id_start=config.generation.id_start,
        difficulty=config.generation.difficulty,
    )
    for offset, result in enumerate(results):
        puzzle_seed = seed + offset

        if not result.success:
            failures += 1
            logger.error(f"Seed {puzzle_seed}: {result.error}")
        elif args.validate:
            pattern = next(
                p for p in patterns if p.id == result.stats.get("pattern_id")
            )
            validation = validate_puzzle(result.puzzle, pattern)
            if not validation.valid:
                failures += 1
                logger.error(f"Seed {puzzle_seed}: invalid puzzle\n{validation}")

        try:
            if config.output.directory:
                path = os.path.join(
                    config.output.directory,
                    f"puzzle_{puzzle_seed}.{exporter.extension}",
                )
                exporter.save(result, path, seed=puzzle_seed)
                logger.info(f"Wrote {path}")
            else:
                if config.output.format == "yaml" and offset > 0:
                    print("---")
                print(exporter.export(result, seed=puzzle_seed))
        except ExportError as e:
            logger.error(str(e))
            return 2

    logger.info(
        f"Generated {config.generation.count - failures}/"
        f"{config.generation.count} puzzles"
    )
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
