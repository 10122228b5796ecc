# display.py
"""
Display and output formatting for superpermutation search.
"""

import csv
import os
from datetime import datetime
from typing import Optional
import pandas as pd

from config import Config
from bounds import WasteBoundLedger, UNBOUNDED
from permutations import permutation_count, factorial_sum_length, is_superpermutation
from search import SearchResult, minimum_length

#-----------------------------------------------------------------------------
# Console output
#-----------------------------------------------------------------------------
def print_search_header(config: Config) -> None:
    """Print header for a search run."""
    print(f"\n" + "="*60)
    print(f"MINIMAL SUPERPERMUTATION SEARCH (n={config.search.alphabet_size})")
    print("="*60)

def print_search_space_info(config: Config) -> None:
    """Print information about the search space size."""
    n = config.search.alphabet_size

    print("\nSearch Space Analysis:")
    print(f"  Permutations to cover: {permutation_count(n):,}")
    print(f"  Zero-waste length: {minimum_length(n, 0):,}")
    print(f"  Factorial-sum length (1! + ... + {n}!): {factorial_sum_length(n):,}")

def print_search_results(result: SearchResult, verbose: bool = False) -> None:
    """
    Print the outcome of a search run.

    Args:
        result: Search result
        verbose: Whether to show the full string and frontier statistics
    """
    n = result.n
    stats = result.stats

    if not result.completed:
        print(f"\nNo superpermutation found ({result.stop_reason}).")
        if result.stop_reason == "frontier exhausted":
            print("  Warning: the frontier ran dry before full coverage; "
                  "check the coverage ceiling and bound pruning settings.")
    else:
        symbols = result.symbols
        valid = is_superpermutation(symbols, n)

        print(f"\nSuperpermutation found:")
        print(f"  Length: {len(symbols)}")
        print(f"  Wasted symbols: {result.wasted_symbols}")
        if result.counted_waste != result.wasted_symbols:
            print(f"  Counted waste (search ranking): {result.counted_waste}")
        print(f"  Contains all permutations: {'yes' if valid else 'NO'}")

        solution = result.solution
        if verbose or len(solution) <= 200:
            print(f"  String: {solution}")
        else:
            print(f"  String: {solution[:100]}...{solution[-20:]}")

    print(f"\nSearch Summary:")
    print(f"  Iterations: {stats.iterations:,}")
    print(f"  States generated: {stats.states_generated:,}")
    print(f"  States pruned: {stats.states_pruned:,}")
    print(f"  Peak frontier size: {stats.max_frontier_size:,}")
    print(f"  Waste levels certified: {stats.levels_certified}")
    print(f"  Total time: {stats.elapsed_time:.2f}s")

def print_bound_table(ledger: WasteBoundLedger, max_rows: Optional[int] = None) -> None:
    """Print the ledger's proven bounds, one row per coverage count."""
    df = ledger.as_dataframe()
    if max_rows is not None:
        df = df.head(max_rows)

    print(f"\nWaste Bounds ({ledger.max_count + 1} coverage counts tracked):")
    print(f"  {'Coverage':>8} {'Lower':>6} {'Upper':>6} {'Threshold':>9}")
    for row in df.itertuples(index=False):
        upper = 'inf' if row.upper_bound == UNBOUNDED else str(row.upper_bound)
        print(f"  {row.coverage:>8} {row.lower_bound:>6} {upper:>6} {row.threshold:>9}")

#-----------------------------------------------------------------------------
# Files
#-----------------------------------------------------------------------------
def save_results_to_csv(result: SearchResult, config: Config) -> str:
    """
    Save search result to a timestamped CSV file.

    Returns:
        Path to saved CSV file
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"superpermutation_n{result.n}_{timestamp}.csv"
    os.makedirs(config.paths.results_folder, exist_ok=True)
    output_path = os.path.join(config.paths.results_folder, filename)

    stats = result.stats

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL)

        writer.writerow(['Superpermutation Search Results'])
        writer.writerow(['Alphabet size', result.n])
        writer.writerow(['Stop reason', result.stop_reason])
        writer.writerow([])

        writer.writerow(['Length', 'Wasted Symbols', 'Counted Waste', 'Iterations',
                         'States Generated', 'States Pruned', 'Elapsed Seconds', 'String'])
        writer.writerow([
            len(result.symbols) if result.completed else '',
            result.wasted_symbols if result.completed else '',
            result.counted_waste if result.completed else '',
            stats.iterations,
            stats.states_generated,
            stats.states_pruned,
            f"{stats.elapsed_time:.3f}",
            result.solution or ''
        ])

    return output_path

def save_ledger(ledger: WasteBoundLedger, path: str) -> None:
    """Write ledger tables to CSV."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    ledger.as_dataframe().to_csv(path, index=False)

def load_ledger(path: str) -> WasteBoundLedger:
    """
    Read ledger tables written by save_ledger.

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: If the table is malformed
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Bounds file not found: {path}")
    return WasteBoundLedger.from_dataframe(pd.read_csv(path))
