# search.py
"""
Best-first branch-and-bound search for minimal superpermutations.

Consolidates the search loop including:
- Seeding and pop/expand/insert iteration
- Certification of drained waste levels into the bound ledger
- Optional pruning against an achievable total waste
- Iteration and wall-clock limits
"""

import time
from dataclasses import dataclass, field
from typing import Optional, Tuple
from tqdm import tqdm

from config import Config
from bounds import WasteBoundLedger
from frontier import Frontier
from permutations import permutation_count, factorial_sum_length, format_symbols
from search_state import SearchState

#-----------------------------------------------------------------------------
# Result containers
#-----------------------------------------------------------------------------
@dataclass
class SearchStats:
    """Statistics tracking for search process."""
    iterations: int = 0
    states_generated: int = 0
    states_pruned: int = 0
    max_frontier_size: int = 0
    levels_certified: int = 0
    elapsed_time: float = 0.0


@dataclass
class SearchResult:
    """Outcome of one search run."""
    n: int
    state: Optional[SearchState]
    ledger: WasteBoundLedger
    stats: SearchStats = field(default_factory=SearchStats)
    stop_reason: str = "terminal"

    @property
    def completed(self) -> bool:
        return self.state is not None

    @property
    def symbols(self) -> Optional[Tuple[int, ...]]:
        if self.state is None:
            return None
        return self.state.superpermutation(self.n)

    @property
    def solution(self) -> Optional[str]:
        if self.state is None:
            return None
        return format_symbols(self.symbols)

    @property
    def wasted_symbols(self) -> Optional[int]:
        """Waste of the reconstructed string beyond the n! + n - 1 floor."""
        if self.state is None:
            return None
        return len(self.symbols) - minimum_length(self.n, 0)

    @property
    def counted_waste(self) -> Optional[int]:
        """Penalty total the search ranked by (can exceed wasted_symbols)."""
        return None if self.state is None else self.state.wasted_symbols


def minimum_length(n: int, waste: int) -> int:
    """String length implied by covering all n! permutations with this much waste."""
    return permutation_count(n) + (n - 1) + waste

#-----------------------------------------------------------------------------
# Bound handling
#-----------------------------------------------------------------------------
def certify_waste_level(ledger: WasteBoundLedger, waste: int, best_coverage: int,
                        total: int) -> bool:
    """
    Record what a fully drained waste level proves.

    Every string with at most `waste` wasted symbols has been explored and the
    best of them covers `best_coverage` permutations, so reaching
    best_coverage + 1 needs at least waste + 1.

    Returns:
        True if the ledger tightened for best_coverage + 1
    """
    if best_coverage >= total:
        return False

    # Counts first reached at this level need exactly this much waste
    if best_coverage > ledger.max_count:
        ledger.record_lower_bound(best_coverage, waste)

    return ledger.record_lower_bound(best_coverage + 1, waste + 1)


def construction_waste(n: int) -> int:
    """Waste of the factorial-sum construction, an achievable total for every n."""
    return factorial_sum_length(n) - minimum_length(n, 0)

#-----------------------------------------------------------------------------
# Search loop
#-----------------------------------------------------------------------------
def superpermutation_search(config: Config, ledger: Optional[WasteBoundLedger] = None,
                            progress_bar: Optional[bool] = None) -> SearchResult:
    """
    Best-first search for a minimal superpermutation.

    Args:
        config: Configuration object
        ledger: Bound ledger to consult and update (new one if None)
        progress_bar: Override config.display.show_progress_bar

    Returns:
        SearchResult with the terminal state, or None state if a limit was hit
        or the frontier ran dry
    """
    search = config.search
    n = search.alphabet_size
    total = permutation_count(n)
    ceiling = search.effective_coverage_ceiling
    verbose = config.display.verbose_output
    interval = config.display.progress_interval

    if ledger is None:
        ledger = WasteBoundLedger()
    if progress_bar is None:
        progress_bar = config.display.show_progress_bar

    # Cut on counted estimates, sized by the factorial-sum construction
    budget = construction_waste(n) if search.prune_with_bounds else None

    stats = SearchStats()
    result = SearchResult(n=n, state=None, ledger=ledger, stats=stats)

    frontier = Frontier()
    seed = SearchState.seed(n)
    frontier.insert(seed, n)
    stats.states_generated = 1

    level = seed.total_waste_estimate(n)
    best_coverage = 0
    start_time = time.time()

    with tqdm(desc="Searching", unit=" states", disable=not progress_bar) as pbar:
        while True:
            if search.time_limit and (time.time() - start_time) > search.time_limit:
                result.stop_reason = "time limit"
                break
            if search.max_iterations and stats.iterations >= search.max_iterations:
                result.stop_reason = "iteration limit"
                break

            state = frontier.remove_best()
            if state is None:
                result.stop_reason = "frontier exhausted"
                break

            stats.iterations += 1

            # Everything below this estimate has been expanded
            estimate = state.total_waste_estimate(n)
            while level < estimate:
                if certify_waste_level(ledger, level, best_coverage, total):
                    stats.levels_certified += 1
                    if verbose:
                        tqdm.write(f"  Waste {level}: at most {best_coverage} permutations "
                                   f"(needs {level + 1} for {best_coverage + 1})")
                level += 1

            best_coverage = max(best_coverage, state.coverage_count())

            if state.is_terminal(n):
                result.state = state
                ledger.record_lower_bound(total, result.wasted_symbols)
                break

            # Ceiling is fixed for the run; the ledger is written, never consulted here
            for child in state.expand(n, ceiling):
                if budget is not None and child.total_waste_estimate(n) > budget:
                    stats.states_pruned += 1
                    continue
                frontier.insert(child, n)
                stats.states_generated += 1

            stats.max_frontier_size = max(stats.max_frontier_size, len(frontier))

            if stats.iterations % interval == 0:
                pbar.update(interval)
                pbar.set_description(f"Waste {level}, coverage {best_coverage}/{total}")

        pbar.update(stats.iterations % interval)

    stats.elapsed_time = time.time() - start_time

    if verbose:
        print(f"\nSearch finished in {stats.elapsed_time:.2f}s ({result.stop_reason})")
        print(f"Iterations: {stats.iterations:,}")
        print(f"States generated: {stats.states_generated:,}")
        if search.prune_with_bounds:
            print(f"States pruned: {stats.states_pruned:,}")

    return result
