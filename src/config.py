# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for the crossword engine.

Handles loading configuration from YAML files and command-line arguments,
with proper merging and validation.
"""

import argparse
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from csp_solver import DEFAULT_MAX_ATTEMPTS
from pattern_library import BUILTIN_TEMPLATES, DEFAULT_PATTERN_SIZE

# Valid configuration values
VALID_DIFFICULTIES = ["easy", "medium", "hard"]
VALID_OUTPUT_FORMATS = ["yaml", "json"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class GenerationConfig:
    """Configuration for puzzle generation."""
    seed: int = 0
    difficulty: str = "medium"
    count: int = 1
    id_start: Optional[int] = None


@dataclass
class SolverConfig:
    """Configuration for the backtracking solver."""
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


@dataclass
class PatternConfig:
    """Configuration for the pattern library."""
    file: Optional[str] = None
    size: Optional[int] = None


@dataclass
class CorpusConfig:
    """Configuration for the clue/answer corpus."""
    file: Optional[str] = None
    min_length: int = 2


@dataclass
class OutputConfig:
    """Configuration for output and logging."""
    directory: Optional[str] = None
    format: str = "yaml"
    log_level: str = "INFO"
    log_file_prefix: str = "crossword_engine"
    enable_console_logging: bool = True
    enable_file_logging: bool = False


_SECTIONS = {
    'generation': GenerationConfig,
    'solver': SolverConfig,
    'patterns': PatternConfig,
    'corpus': CorpusConfig,
    'output': OutputConfig,
}


@dataclass
class EngineConfig:
    """Complete configuration for the crossword engine."""
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    patterns: PatternConfig = field(default_factory=PatternConfig)
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        for name, section_cls in _SECTIONS.items():
            value = getattr(self, name)
            if isinstance(value, dict):
                setattr(self, name, section_cls(**value))

    @classmethod
    def from_yaml(cls, path: str) -> 'EngineConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            EngineConfig instance

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'EngineConfig':
        """Create EngineConfig from dictionary, ignoring unknown sections."""
        config = cls()
        for name, section_cls in _SECTIONS.items():
            section_data = data.get(name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ConfigValidationError(f"Section '{name}' must be a mapping")
            unknown = set(section_data) - set(section_cls.__dataclass_fields__)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown keys in section '{name}': {sorted(unknown)}"
                )
            current = asdict(getattr(config, name))
            current.update(section_data)
            setattr(config, name, section_cls(**current))
        return config

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'EngineConfig':
        """
        Create configuration from command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            EngineConfig instance
        """
        config = cls()

        if getattr(args, 'seed', None) is not None:
            config.generation.seed = args.seed
        if getattr(args, 'difficulty', None):
            config.generation.difficulty = args.difficulty
        if getattr(args, 'count', None) is not None:
            config.generation.count = args.count
        if getattr(args, 'id_start', None) is not None:
            config.generation.id_start = args.id_start
        if getattr(args, 'max_attempts', None) is not None:
            config.solver.max_attempts = args.max_attempts
        if getattr(args, 'patterns', None):
            config.patterns.file = args.patterns
        if getattr(args, 'size', None) is not None:
            config.patterns.size = args.size
        if getattr(args, 'corpus', None):
            config.corpus.file = args.corpus
        if getattr(args, 'output', None):
            config.output.directory = args.output
        if getattr(args, 'format', None):
            config.output.format = args.format
        if getattr(args, 'verbose', False):
            config.output.log_level = "DEBUG"
        if getattr(args, 'log_file', False):
            config.output.enable_file_logging = True

        return config

    @classmethod
    def merge(
        cls,
        yaml_config: 'EngineConfig',
        cli_config: 'EngineConfig'
    ) -> 'EngineConfig':
        """
        Merge configurations with CLI taking precedence over YAML.

        A CLI value wins only where it differs from the built-in default.

        Args:
            yaml_config: Configuration loaded from YAML file
            cli_config: Configuration from command-line arguments

        Returns:
            Merged EngineConfig instance
        """
        default = cls()
        merged = cls()

        for name in _SECTIONS:
            base = asdict(getattr(yaml_config, name))
            cli_values = asdict(getattr(cli_config, name))
            default_values = asdict(getattr(default, name))
            for key, value in cli_values.items():
                if value != default_values[key]:
                    base[key] = value
            setattr(merged, name, _SECTIONS[name](**base))

        return merged

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if str(self.generation.difficulty).lower() not in VALID_DIFFICULTIES:
            errors.append(
                f"Invalid difficulty '{self.generation.difficulty}'. "
                f"Must be one of: {VALID_DIFFICULTIES}"
            )

        if self.generation.count < 1:
            errors.append("count must be at least 1")

        if self.solver.max_attempts < 1:
            errors.append("max_attempts must be positive")

        builtin_size = self.patterns.size or DEFAULT_PATTERN_SIZE
        if self.patterns.file is None and builtin_size not in BUILTIN_TEMPLATES:
            errors.append(
                f"Invalid pattern size {builtin_size}. "
                f"Built-in sizes: {sorted(BUILTIN_TEMPLATES)}"
            )

        if self.corpus.min_length < 2:
            errors.append("min_length must be at least 2")

        if self.output.format not in VALID_OUTPUT_FORMATS:
            errors.append(
                f"Invalid output format '{self.output.format}'. "
                f"Must be one of: {VALID_OUTPUT_FORMATS}"
            )

        if self.output.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level '{self.output.log_level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        if self.output.enable_file_logging and not self.output.directory:
            errors.append("File logging requires an output directory")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {name: asdict(getattr(self, name)) for name in _SECTIONS}


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Generate seeded crossword puzzles from a clue corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One puzzle from a JSON corpus with the built-in 7x7 patterns
  crossword-engine --corpus questions.json --seed 42

  # Ten medium 9x9 puzzles written as YAML files
  crossword-engine --corpus questions.json --size 9 --count 10 --output ./out

  # YAML configuration, CLI arguments override it
  crossword-engine --config engine.yaml --seed 7
"""
    )

    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        help="YAML configuration file"
    )

    # Inputs
    parser.add_argument(
        "--corpus",
        metavar="PATH",
        help="JSON corpus file: list of {answer, clue, answerLength}"
    )
    parser.add_argument(
        "--patterns",
        metavar="PATH",
        help="YAML pattern file (default: built-in patterns)"
    )
    parser.add_argument(
        "--size", "-s",
        type=int,
        help=f"Pattern size (default: {DEFAULT_PATTERN_SIZE} for built-in "
             f"patterns, every size in a pattern file)"
    )

    # Generation
    parser.add_argument(
        "--seed",
        type=int,
        help="PRNG seed of the first puzzle (default: 0)"
    )
    parser.add_argument(
        "--daily",
        action="store_true",
        help="Use today's daily seed instead of --seed"
    )
    parser.add_argument(
        "--difficulty", "-d",
        choices=VALID_DIFFICULTIES,
        help="Difficulty label (default: medium)"
    )
    parser.add_argument(
        "--count", "-n",
        type=int,
        help="Number of puzzles, one per consecutive seed (default: 1)"
    )
    parser.add_argument(
        "--id-start",
        type=int,
        help="Puzzle id of the first puzzle (default: engine id)"
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        metavar="INT",
        help=f"Solver budget per pattern (default: {DEFAULT_MAX_ATTEMPTS})"
    )

    # Output
    parser.add_argument(
        "--output", "-o",
        metavar="PATH",
        help="Output directory (default: print to stdout)"
    )
    parser.add_argument(
        "--format",
        choices=VALID_OUTPUT_FORMATS,
        help="Output format (default: yaml)"
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check structural invariants of every generated puzzle"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a rotating log file into the output directory"
    )

    return parser


def load_config(args: Optional[argparse.Namespace] = None) -> EngineConfig:
    """
    Load configuration from command-line and/or YAML file.

    Args:
        args: Parsed command-line arguments (if None, parses sys.argv)

    Returns:
        Fully resolved EngineConfig

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if args is None:
        parser = create_argument_parser()
        args = parser.parse_args()

    yaml_config = None
    if getattr(args, 'config', None):
        yaml_config = EngineConfig.from_yaml(args.config)

    cli_config = EngineConfig.from_args(args)

    if yaml_config:
        config = EngineConfig.merge(yaml_config, cli_config)
    else:
        config = cli_config

    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config
