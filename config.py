#!/usr/bin/env python3
"""
Configuration Management for Superpermutation Search

This module provides structured configuration loading, validation,
and management for the best-first superpermutation search. It handles
the alphabet size, search limits, budget pruning, file paths, and
display settings.

Features:
- YAML-based configuration with comprehensive validation
- Optional iteration and wall-clock limits
- Optional ledger persistence between runs
- Clear error messages for configuration issues

"""

import yaml
import os
from typing import Optional
from dataclasses import dataclass, field
from math import factorial

# Practical limit: n! coverage sets and frontier growth
MAX_ALPHABET_SIZE = 7


@dataclass
class SearchConfig:
    """Search parameters and limits."""

    # Core search settings
    alphabet_size: int

    # Limits (None for unlimited)
    max_iterations: Optional[int] = None
    time_limit: Optional[float] = None

    # Coverage cap passed to expansion (None for n!)
    coverage_ceiling: Optional[int] = None

    # Drop children whose estimate exceeds the factorial-sum construction's waste
    prune_with_bounds: bool = False

    @property
    def permutation_count(self) -> int:
        return factorial(self.alphabet_size)

    @property
    def effective_coverage_ceiling(self) -> int:
        if self.coverage_ceiling is None:
            return self.permutation_count
        return self.coverage_ceiling


@dataclass
class PathConfig:
    """File paths for output and bound persistence."""
    results_folder: str = "output/superpermutations"
    bounds_file: Optional[str] = None


@dataclass
class DisplayConfig:
    """Progress and console output settings."""
    show_progress_bar: bool = True
    verbose_output: bool = False
    progress_interval: int = 10000


@dataclass
class Config:
    """Complete configuration container."""
    search: SearchConfig
    paths: PathConfig = field(default_factory=PathConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Internal tracking
    _config_path: str = "config.yaml"

    @classmethod
    def from_alphabet_size(cls, n: int, **search_options) -> 'Config':
        """In-memory configuration with display output kept quiet."""
        config = cls(search=SearchConfig(alphabet_size=n, **search_options),
                     display=DisplayConfig(show_progress_bar=False),
                     _config_path="<memory>")
        validate_config(config)
        return config


def load_config(config_path: str = "config.yaml") -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If configuration is invalid
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML configuration: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")

    if 'search' not in raw_config:
        raise ValueError("Missing required configuration section: 'search'")

    try:
        search = SearchConfig(**raw_config['search'])
    except TypeError as e:
        raise ValueError(f"Error parsing search configuration: {e}")

    # Optional sections with defaults
    try:
        paths = PathConfig(**(raw_config.get('paths') or {}))
    except TypeError as e:
        raise ValueError(f"Error parsing paths configuration: {e}")

    try:
        display = DisplayConfig(**(raw_config.get('display') or {}))
    except TypeError as e:
        raise ValueError(f"Error parsing display configuration: {e}")

    config = Config(search, paths, display, config_path)

    validate_config(config)

    os.makedirs(config.paths.results_folder, exist_ok=True)

    return config


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: Config) -> None:
    """
    Perform comprehensive validation of configuration.

    Args:
        config: Configuration object to validate

    Raises:
        ValueError: If any validation check fails
    """
    search = config.search
    n = search.alphabet_size

    if not _is_integer(n):
        raise ValueError(f"alphabet_size must be an integer, got {n!r}")
    if n < 2:
        raise ValueError(f"alphabet_size must be at least 2 (got {n})")
    if n > MAX_ALPHABET_SIZE:
        raise ValueError(f"alphabet_size {n} is intractable (maximum {MAX_ALPHABET_SIZE})")

    for name in ('max_iterations', 'coverage_ceiling'):
        value = getattr(search, name)
        if value is not None and not _is_integer(value):
            raise ValueError(f"{name} must be an integer, got {value!r}")

    if search.time_limit is not None and not _is_number(search.time_limit):
        raise ValueError(f"time_limit must be a number of seconds, got {search.time_limit!r}")

    if not isinstance(search.prune_with_bounds, bool):
        raise ValueError(f"prune_with_bounds must be true or false, got {search.prune_with_bounds!r}")

    if search.max_iterations is not None and search.max_iterations <= 0:
        raise ValueError("max_iterations must be positive")

    if search.time_limit is not None and search.time_limit <= 0:
        raise ValueError("time_limit must be positive")

    if search.coverage_ceiling is not None:
        if not 1 <= search.coverage_ceiling <= search.permutation_count:
            raise ValueError(
                f"coverage_ceiling must be between 1 and {search.permutation_count} "
                f"for alphabet_size {n} (got {search.coverage_ceiling})"
            )

    if not _is_integer(config.display.progress_interval):
        raise ValueError(f"progress_interval must be an integer, "
                         f"got {config.display.progress_interval!r}")
    if config.display.progress_interval <= 0:
        raise ValueError("progress_interval must be positive")

    if not config.paths.results_folder:
        raise ValueError("results_folder cannot be empty")


def print_config_summary(config: Config) -> None:
    """Print human-readable configuration summary."""
    search = config.search

    print(f"\nConfiguration Summary:")
    print(f"  Config file: {config._config_path}")
    print(f"  Alphabet size: {search.alphabet_size} ({search.permutation_count:,} permutations)")
    print(f"  Limits: max_iterations={search.max_iterations or 'unlimited'}, "
          f"time_limit={search.time_limit or 'unlimited'}")

    if search.coverage_ceiling is not None:
        print(f"  Coverage ceiling: {search.coverage_ceiling}")

    print(f"  Budget pruning: {'on' if search.prune_with_bounds else 'off'}")

    if config.paths.bounds_file:
        print(f"  Bounds file: {config.paths.bounds_file}")


def create_default_config(output_path: str = "config.yaml") -> None:
    """
    Create a default configuration file with common settings.

    Args:
        output_path: Path where to save the default config
    """
    default_config = {
        'search': {
            'alphabet_size': 4,
            'max_iterations': None,
            'time_limit': None,
            'coverage_ceiling': None,
            'prune_with_bounds': False
        },
        'paths': {
            'results_folder': 'output/superpermutations',
            'bounds_file': None
        },
        'display': {
            'show_progress_bar': True,
            'verbose_output': False,
            'progress_interval': 10000
        }
    }

    with open(output_path, 'w') as f:
        yaml.dump(default_config, f, default_flow_style=False, indent=2, sort_keys=False)

    print(f"Default configuration saved to: {output_path}")
