# find_superpermutation.py
"""
Minimal superpermutation search

Finds the shortest string over an n-symbol alphabet that contains every
permutation of the n symbols as a contiguous substring, using best-first
branch-and-bound search over abstract partial solutions. Proven waste
bounds are collected along the way and can be saved between runs.

Usage:
    # Search with the alphabet size from config.yaml
    python find_superpermutation.py --config config.yaml

    # Override the alphabet size and report every certified waste level
    python find_superpermutation.py --n 4 --verbose

    # Reuse and extend proven bounds from an earlier run
    python find_superpermutation.py --n 5 --bounds-file output/bounds_n5.csv --prune

"""

import argparse
import os
import sys
import time

from config import Config, load_config, print_config_summary, create_default_config, validate_config
from bounds import WasteBoundLedger
from search import superpermutation_search
from display import (print_search_header, print_search_space_info, print_search_results,
                     print_bound_table, save_results_to_csv, save_ledger, load_ledger)
from plots import plot_waste_bounds
from validation import run_validation_suite

#-----------------------------------------------------------------------------
# Search
#-----------------------------------------------------------------------------
def run_search(config: Config, plot_bounds: bool = False) -> bool:
    """
    Run one search and report results.

    Args:
        config: Configuration object
        plot_bounds: Whether to save a plot of the proven bounds

    Returns:
        True if a superpermutation was found
    """
    print_search_header(config)
    print_config_summary(config)
    print_search_space_info(config)

    # Load proven bounds from an earlier run
    bounds_file = config.paths.bounds_file
    if bounds_file and os.path.exists(bounds_file):
        ledger = load_ledger(bounds_file)
        print(f"\nLoaded bounds for {ledger.max_count + 1} coverage counts from {bounds_file}")
    else:
        ledger = WasteBoundLedger()

    print(f"\nSearching...")
    start_time = time.time()

    result = superpermutation_search(config, ledger)

    elapsed_time = time.time() - start_time

    print_search_results(result, verbose=config.display.verbose_output)
    if config.display.verbose_output:
        print_bound_table(result.ledger)

    csv_path = save_results_to_csv(result, config)
    print(f"\nResults saved to: {csv_path}")

    if bounds_file:
        save_ledger(result.ledger, bounds_file)
        print(f"Bounds saved to: {bounds_file}")

    if plot_bounds:
        plot_path = os.path.join(config.paths.results_folder,
                                 f"waste_bounds_n{config.search.alphabet_size}.png")
        plot_waste_bounds(result.ledger, plot_path,
                          title=f"Proven waste bounds (n={config.search.alphabet_size})")
        print(f"Bound plot saved to: {plot_path}")

    print(f"  Total time: {elapsed_time:.2f}s")

    return result.completed

#-----------------------------------------------------------------------------
# Command-line interface
#-----------------------------------------------------------------------------
def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Find a minimal superpermutation by best-first branch-and-bound search.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default configuration
  python find_superpermutation.py --config config.yaml

  # Four symbols with a one-minute budget
  python find_superpermutation.py --n 4 --time-limit 60

  # Run the validation suite first
  python find_superpermutation.py --n 4 --validate
        """
    )

    # Basic options
    parser.add_argument('--config', type=str, default='config.yaml',
                       help='Path to configuration file (default: config.yaml)')
    parser.add_argument('--create-config', action='store_true',
                       help='Write a default configuration file to --config and exit')
    parser.add_argument('--verbose', action='store_true',
                       help='Report certified waste levels and the bound table')
    parser.add_argument('--no-progress', action='store_true',
                       help='Hide the progress bar')

    # Search options
    parser.add_argument('--n', type=int, default=None,
                       help='Alphabet size (overrides config)')
    parser.add_argument('--max-iterations', type=int, default=None,
                       help='Stop after this many expansions')
    parser.add_argument('--time-limit', type=float, default=None,
                       help='Time limit in seconds')
    parser.add_argument('--prune', action='store_true',
                       help='Prune children whose waste estimate exceeds an achievable total')
    parser.add_argument('--bounds-file', type=str, default=None,
                       help='CSV file to load proven bounds from and save them to')
    parser.add_argument('--plot-bounds', action='store_true',
                       help='Save a plot of the proven waste bounds')

    # Validation options
    parser.add_argument('--validate', action='store_true',
                       help='Run validation suite before searching')
    parser.add_argument('--quick', action='store_true',
                       help='Use the quick validation suite')

    return parser.parse_args(argv)

def apply_overrides(config: Config, args) -> Config:
    """Apply command-line overrides to a loaded configuration."""
    if args.n is not None:
        config.search.alphabet_size = args.n
        config.search.coverage_ceiling = None
    if args.max_iterations is not None:
        config.search.max_iterations = args.max_iterations
    if args.time_limit is not None:
        config.search.time_limit = args.time_limit
    if args.prune:
        config.search.prune_with_bounds = True
    if args.bounds_file is not None:
        config.paths.bounds_file = args.bounds_file
    if args.verbose:
        config.display.verbose_output = True
    if args.no_progress:
        config.display.show_progress_bar = False

    validate_config(config)
    return config

def main(argv=None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    if args.create_config:
        create_default_config(args.config)
        return 0

    try:
        if os.path.exists(args.config):
            config = load_config(args.config)
        elif args.n is not None:
            config = Config.from_alphabet_size(args.n)
            config.display.show_progress_bar = True
        else:
            raise FileNotFoundError(f"Configuration file not found: {args.config}")
        config = apply_overrides(config, args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}")
        print(f"\nTo create a default configuration, run:")
        print(f"python find_superpermutation.py --create-config")
        return 1

    if args.validate:
        print(f"🧪 Running validation suite...")
        if not run_validation_suite(config, quick=args.quick):
            print("❌ Validation failed. Please fix issues before searching.")
            return 1
        print("✅ Validation passed!\n")

    found = run_search(config, plot_bounds=args.plot_bounds)
    return 0 if found else 2

if __name__ == "__main__":
    sys.exit(main())
