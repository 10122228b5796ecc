# validation.py
"""
Self-checks for the superpermutation search engine.

This module consolidates validation logic including:
- Permutation id bijection
- Seed and expansion invariants
- Frontier ordering
- Ledger tightening
- End-to-end search on a small alphabet
"""

import random
import time
from itertools import permutations
from typing import Dict, List, Optional
from dataclasses import dataclass

from config import Config
from bounds import WasteBoundLedger
from frontier import Frontier
from permutations import (permutation_count, permutation_id, permutation_from_id,
                          is_superpermutation)
from search import superpermutation_search, minimum_length
from search_state import SearchState, CoverageSet

#-----------------------------------------------------------------------------
# Validation result classes
#-----------------------------------------------------------------------------
@dataclass
class ValidationResult:
    """Result of a single validation check."""
    test_name: str
    passed: bool
    message: str
    details: Optional[Dict] = None

    def __str__(self) -> str:
        status = "✅ PASS" if self.passed else "❌ FAIL"
        return f"{status}: {self.test_name} - {self.message}"

@dataclass
class ValidationSuite:
    """Results from a complete validation suite."""
    results: List[ValidationResult]

    @property
    def all_passed(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if not result.passed)

    def print_summary(self):
        """Print validation summary."""
        print(f"\nValidation Summary: {self.passed_count}/{len(self.results)} checks passed")

        for result in self.results:
            print(f"  {result}")
            if result.details and not result.passed:
                for key, value in result.details.items():
                    print(f"    {key}: {value}")

        if self.all_passed:
            print("\n🎉 All validation checks passed!")
        else:
            print(f"\n⚠️  {self.failed_count} check(s) failed - review results above")

#-----------------------------------------------------------------------------
# Core validation functions
#-----------------------------------------------------------------------------
def check_permutation_bijection(n: int) -> ValidationResult:
    """Every permutation of n symbols gets a distinct id that unranks back to it."""
    try:
        seen = set()
        mismatches = 0
        for perm in permutations(range(n)):
            perm_id = permutation_id(perm)
            seen.add(perm_id)
            if permutation_from_id(perm_id, n) != perm:
                mismatches += 1

        total = permutation_count(n)
        passed = len(seen) == total and mismatches == 0 and seen == set(range(total))
        message = f"{len(seen)}/{total} distinct ids, {mismatches} round-trip mismatches"
        return ValidationResult("Permutation Bijection", passed, message,
                                {"distinct_ids": len(seen), "mismatches": mismatches})

    except Exception as e:
        return ValidationResult("Permutation Bijection", False, f"Check failed with error: {e}")

def check_seed_invariants(n: int) -> ValidationResult:
    """Seed has a full tail, one covered permutation, and no waste."""
    try:
        seed = SearchState.seed(n)
        problems = []
        if len(seed.tail) != n - 1:
            problems.append(f"tail length {len(seed.tail)}")
        if seed.coverage_count() != 1:
            problems.append(f"coverage {seed.coverage_count()}")
        if seed.wasted_symbols != 0:
            problems.append(f"waste {seed.wasted_symbols}")
        if seed.future_waste(n) != 0:
            problems.append(f"future waste {seed.future_waste(n)}")

        passed = not problems
        message = "Seed invariants hold" if passed else "; ".join(problems)
        return ValidationResult("Seed Invariants", passed, message)

    except Exception as e:
        return ValidationResult("Seed Invariants", False, f"Check failed with error: {e}")

def check_expansion_invariants(n: int, n_steps: int = 200, seed: int = 42) -> ValidationResult:
    """
    Random walk through expansions checking child count and monotonicity.

    Args:
        n: Alphabet size
        n_steps: Number of expansion steps
        seed: Random seed for reproducibility
    """
    try:
        rng = random.Random(seed)
        state = SearchState.seed(n)
        violations = 0

        for _ in range(n_steps):
            if state.is_terminal(n):
                break
            children = state.expand(n)
            if len(children) != n - 1:
                violations += 1
            for child in children:
                if (child.wasted_symbols < state.wasted_symbols
                        or child.coverage_count() < state.coverage_count()
                        or len(child.tail) > n - 1
                        or child.total_waste_estimate(n) < state.total_waste_estimate(n)):
                    violations += 1
            state = rng.choice(children)

        passed = violations == 0
        message = f"{n_steps} expansion steps, {violations} violations"
        return ValidationResult("Expansion Invariants", passed, message, {"violations": violations})

    except Exception as e:
        return ValidationResult("Expansion Invariants", False, f"Check failed with error: {e}")

def check_frontier_ordering() -> ValidationResult:
    """Least waste estimate first, most coverage first within a level."""
    try:
        n = 4
        capacity = permutation_count(n)
        frontier = Frontier()
        for waste, coverage in [(3, 2), (1, 5), (2, 9), (1, 7), (0, 1)]:
            covered = CoverageSet.from_ids(capacity, range(coverage))
            frontier.insert(SearchState(covered, (1, 2, 3), waste), n)

        order = []
        while len(frontier):
            state = frontier.remove_best()
            order.append((state.wasted_symbols, state.coverage_count()))

        expected = [(0, 1), (1, 7), (1, 5), (2, 9), (3, 2)]
        passed = order == expected and frontier.remove_best() is None
        message = f"Removal order {order}"
        return ValidationResult("Frontier Ordering", passed, message, {"expected": expected})

    except Exception as e:
        return ValidationResult("Frontier Ordering", False, f"Check failed with error: {e}")

def check_ledger_tightening() -> ValidationResult:
    """Ledger extends, tightens on larger values, ignores smaller ones."""
    try:
        ledger = WasteBoundLedger()
        problems = []
        if not ledger.record_lower_bound(4, 1):
            problems.append("extension not reported")
        if ledger.record_lower_bound(4, 1):
            problems.append("equal value changed ledger")
        if ledger.record_lower_bound(4, 0):
            problems.append("smaller value changed ledger")
        if not ledger.record_lower_bound(4, 3) or ledger.lower_bound(4) != 3:
            problems.append("larger value did not tighten")

        passed = not problems
        message = "Tighten-only policy holds" if passed else "; ".join(problems)
        return ValidationResult("Ledger Tightening", passed, message)

    except Exception as e:
        return ValidationResult("Ledger Tightening", False, f"Check failed with error: {e}")

def check_small_search(n: int = 3) -> ValidationResult:
    """Full search on a small alphabet yields a valid minimal-length string."""
    try:
        start_time = time.time()
        result = superpermutation_search(Config.from_alphabet_size(n), progress_bar=False)
        elapsed = time.time() - start_time

        if not result.completed:
            return ValidationResult("Small Search", False, f"No solution ({result.stop_reason})")

        symbols = result.symbols
        expected_length = {2: 3, 3: 9, 4: 33}.get(n)
        valid = is_superpermutation(symbols, n)
        length_ok = expected_length is None or len(symbols) == expected_length

        passed = valid and length_ok
        message = f"n={n}: length {len(symbols)} in {elapsed:.2f}s"
        return ValidationResult("Small Search", passed, message,
                                {"valid": valid, "length": len(symbols),
                                 "expected_length": expected_length,
                                 "implied_by_waste": minimum_length(n, result.wasted_symbols)})

    except Exception as e:
        return ValidationResult("Small Search", False, f"Check failed with error: {e}")

#-----------------------------------------------------------------------------
# Suite
#-----------------------------------------------------------------------------
def run_validation_suite(config: Config, quick: bool = False) -> bool:
    """
    Run comprehensive validation suite.

    Args:
        config: Configuration to use for validation
        quick: If True, run faster but less comprehensive checks

    Returns:
        True if all checks passed, False otherwise
    """
    n = config.search.alphabet_size
    bijection_n = min(n, 5 if quick else 6)
    n_steps = 100 if quick else 500

    results = []
    results.append(check_permutation_bijection(bijection_n))
    results.append(check_seed_invariants(n))
    results.append(check_expansion_invariants(n, n_steps))
    results.append(check_frontier_ordering())
    results.append(check_ledger_tightening())
    results.append(check_small_search(3 if quick else 4))

    suite = ValidationSuite(results)
    suite.print_summary()

    return suite.all_passed
