#!/usr/bin/env python3
"""
Frontier Test Suite

Tests that:
1. States leave in ascending waste estimate order
2. Ties on waste estimate favor higher coverage
3. Diagnostic counts and waste extremes track insertions and removals

Usage:
    python test_frontier.py
    pytest test_frontier.py
"""

import sys

from frontier import Frontier
from permutations import permutation_count
from search_state import SearchState, CoverageSet

N = 4


def make_state(wasted, coverage=1, tail=(1, 2, 3)):
    """State with a full tail (so estimate == wasted) and the given coverage."""
    covered = CoverageSet.from_ids(permutation_count(N), range(coverage))
    return SearchState(covered, tuple(tail), wasted)


def drain(frontier):
    states = []
    while True:
        state = frontier.remove_best()
        if state is None:
            return states
        states.append(state)


def test_empty_frontier():
    frontier = Frontier()
    assert frontier.remove_best() is None
    assert frontier.min_waste() is None
    assert frontier.max_waste() is None
    assert frontier.size() == 0
    assert frontier.size_at_waste_level(0) == 0


def test_removes_least_estimate_first():
    frontier = Frontier()
    for wasted in (3, 1, 2):
        frontier.insert(make_state(wasted), N)
    assert [state.wasted_symbols for state in drain(frontier)] == [1, 2, 3]


def test_ties_prefer_higher_coverage():
    frontier = Frontier()
    frontier.insert(make_state(2, coverage=5), N)
    frontier.insert(make_state(2, coverage=7), N)
    assert frontier.remove_best().coverage_count() == 7
    assert frontier.remove_best().coverage_count() == 5


def test_estimate_includes_future_waste():
    frontier = Frontier()
    warming_up = make_state(0, coverage=9, tail=(3,))   # estimate 2
    frontier.insert(warming_up, N)
    frontier.insert(make_state(1, coverage=1), N)
    assert frontier.remove_best().wasted_symbols == 1
    assert frontier.remove_best() == warming_up


def test_identical_keys_are_fifo():
    frontier = Frontier()
    first = make_state(1, coverage=3, tail=(1, 2, 3))
    second = make_state(1, coverage=3, tail=(2, 3, 0))
    frontier.insert(first, N)
    frontier.insert(second, N)
    assert frontier.remove_best() == first
    assert frontier.remove_best() == second


def test_sizes_and_extremes():
    frontier = Frontier()
    for wasted, coverage in [(4, 1), (2, 3), (2, 6), (7, 2)]:
        frontier.insert(make_state(wasted, coverage), N)

    assert frontier.size() == 4
    assert len(frontier) == 4
    assert frontier.size_at_waste_level(2) == 2
    assert frontier.size_at_waste_level(3) == 0
    assert frontier.size_at_waste_level(99) == 0
    assert frontier.min_waste() == 2
    assert frontier.max_waste() == 7
    assert frontier.max_coverage_at_waste_level(2) == 6
    assert frontier.max_coverage_at_waste_level(3) is None

    frontier.remove_best()
    frontier.remove_best()

    # Waste level 2 is fully drained
    assert frontier.size_at_waste_level(2) == 0
    assert frontier.min_waste() == 4
    assert frontier.size() == 2


def test_reinsertion_below_current_minimum():
    frontier = Frontier()
    frontier.insert(make_state(5), N)
    assert frontier.min_waste() == 5
    frontier.insert(make_state(1), N)
    assert frontier.min_waste() == 1
    assert [state.wasted_symbols for state in drain(frontier)] == [1, 5]


def test_interleaved_inserts_keep_order():
    frontier = Frontier()
    frontier.insert(make_state(1, coverage=2), N)
    frontier.insert(make_state(1, coverage=4), N)
    assert frontier.remove_best().coverage_count() == 4

    frontier.insert(make_state(1, coverage=3), N)
    frontier.insert(make_state(0, coverage=1), N)
    order = [(s.wasted_symbols, s.coverage_count()) for s in drain(frontier)]
    assert order == [(0, 1), (1, 3), (1, 2)]


def main():
    """Run all tests."""
    tests = [obj for name, obj in sorted(globals().items())
             if name.startswith("test_") and callable(obj)]
    failures = []

    print("=" * 80)
    print("FRONTIER TEST SUITE")
    print("=" * 80)

    for test in tests:
        try:
            test()
            print(f"  ✓ PASS: {test.__name__}")
        except AssertionError as e:
            failures.append((test.__name__, str(e)))
            print(f"  ✗ FAIL: {test.__name__}")
            print(f"    Reason: {e}")

    print(f"\nPassed: {len(tests) - len(failures)}/{len(tests)}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
