#!/usr/bin/env python3
"""
Waste Bound Ledger Test Suite

Tests that:
1. Recording beyond the known range extends all three tables
2. Lower bounds only tighten
3. Upper bounds collapse onto lower bounds behind the newest index
4. Tables survive a DataFrame round trip
5. A drained waste level of a real frontier yields a sound bound

Usage:
    python test_bounds.py
    pytest test_bounds.py
"""

import sys

import pandas as pd
import pytest

from bounds import WasteBoundLedger, UNBOUNDED
from frontier import Frontier
from search_state import SearchState


def test_initial_ledger():
    ledger = WasteBoundLedger()
    assert ledger.max_count == 0
    assert len(ledger) == 1
    assert ledger.lower_bound(0) == 0
    assert ledger.upper_bound(0) == UNBOUNDED
    assert ledger.threshold(0) == 0

#-----------------------------------------------------------------------------
# Extension
#-----------------------------------------------------------------------------
def test_extension_fills_gap_and_collapses_upper_bounds():
    ledger = WasteBoundLedger()
    assert ledger.record_lower_bound(3, 2)

    assert ledger.max_count == 3
    assert [ledger.lower_bound(c) for c in range(4)] == [0, 2, 2, 2]
    assert [ledger.upper_bound(c) for c in range(3)] == [0, 2, 2]
    # Newest index: lowerBound(3) + lowerBound(0)
    assert ledger.upper_bound(3) == 2
    assert ledger.threshold(3) == 2


def test_extension_never_seeds_below_last_bound():
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(2, 5)
    assert ledger.record_lower_bound(4, 3)
    assert ledger.lower_bound(3) == 5
    assert ledger.lower_bound(4) == 5


def test_queries_beyond_range():
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(3, 2)
    assert ledger.lower_bound(10) == 2
    assert ledger.threshold(10) == 2
    assert ledger.upper_bound(10) == UNBOUNDED

#-----------------------------------------------------------------------------
# Tightening
#-----------------------------------------------------------------------------
def test_equal_or_smaller_values_are_ignored():
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(3, 2)
    before = ledger.as_dataframe()

    assert not ledger.record_lower_bound(3, 2)
    assert not ledger.record_lower_bound(2, 1)
    assert not ledger.record_lower_bound(0, 0)

    pd.testing.assert_frame_equal(ledger.as_dataframe(), before)


def test_larger_value_tightens():
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(3, 2)

    assert ledger.record_lower_bound(2, 4)
    assert ledger.lower_bound(2) == 4
    assert ledger.threshold(2) == 4
    # Interior upper bounds are left alone
    assert ledger.upper_bound(2) == 2


def test_tightening_newest_index_keeps_upper_bound():
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(3, 2)
    assert ledger.upper_bound(3) == 2

    assert ledger.record_lower_bound(3, 4)
    assert ledger.lower_bound(3) == 4
    assert ledger.threshold(3) == 4
    assert ledger.upper_bound(3) == 2


def test_cost_unit_feeds_later_updates():
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(3, 2)
    assert ledger.record_lower_bound(0, 1)
    assert ledger.threshold(0) == 0

    ledger.record_lower_bound(4, 5)
    assert ledger.threshold(4) == 4
    assert ledger.upper_bound(3) == 2
    assert ledger.upper_bound(4) == 6


def test_negative_input_raises():
    ledger = WasteBoundLedger()
    with pytest.raises(ValueError):
        ledger.record_lower_bound(-1, 0)
    with pytest.raises(ValueError):
        ledger.record_lower_bound(2, -3)

#-----------------------------------------------------------------------------
# Persistence
#-----------------------------------------------------------------------------
def test_dataframe_round_trip():
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(4, 1)
    ledger.record_lower_bound(7, 3)

    restored = WasteBoundLedger.from_dataframe(ledger.as_dataframe())
    assert restored.max_count == 7
    pd.testing.assert_frame_equal(restored.as_dataframe(), ledger.as_dataframe())
    assert restored.upper_bound(7) == ledger.upper_bound(7)


def test_malformed_dataframe_raises():
    with pytest.raises(ValueError):
        WasteBoundLedger.from_dataframe(pd.DataFrame({'coverage': [0, 1]}))

    gappy = pd.DataFrame({'coverage': [0, 2], 'lower_bound': [0, 1],
                          'upper_bound': [0, 1], 'threshold': [0, 1]})
    with pytest.raises(ValueError):
        WasteBoundLedger.from_dataframe(gappy)

#-----------------------------------------------------------------------------
# Bounds from a drained frontier level
#-----------------------------------------------------------------------------
def test_drained_zero_waste_level_bounds_n3():
    n = 3
    frontier = Frontier()
    frontier.insert(SearchState.seed(n), n)

    # Expand everything with estimate 0
    best_coverage = 0
    while frontier.min_waste() == 0:
        state = frontier.remove_best()
        best_coverage = max(best_coverage, state.coverage_count())
        for child in state.expand(n):
            frontier.insert(child, n)

    # 123 1 2 covers 123, 231, 312 and nothing longer is waste-free
    assert best_coverage == 3

    ledger = WasteBoundLedger()
    ledger.record_lower_bound(best_coverage, 0)
    assert ledger.record_lower_bound(best_coverage + 1, 1)
    assert ledger.lower_bound(4) == 1
    assert ledger.lower_bound(3) == 0


def test_drained_zero_waste_level_tightens_n4():
    n = 4
    ledger = WasteBoundLedger()
    ledger.record_lower_bound(4, 0)
    ledger.record_lower_bound(5, 0)

    frontier = Frontier()
    frontier.insert(SearchState.seed(n), n)

    best_coverage = 0
    while frontier.min_waste() == 0:
        state = frontier.remove_best()
        best_coverage = max(best_coverage, state.coverage_count())
        for child in state.expand(n):
            frontier.insert(child, n)

    # 1234 1 2 3 covers 1234, 2341, 3412, 4123
    assert best_coverage == 4
    assert frontier.min_waste() >= 1

    assert ledger.record_lower_bound(best_coverage + 1, 1)
    assert ledger.lower_bound(5) == 1
    assert ledger.lower_bound(4) == 0
    assert not ledger.record_lower_bound(best_coverage + 1, 1)


def main():
    """Run all tests."""
    tests = [obj for name, obj in sorted(globals().items())
             if name.startswith("test_") and callable(obj)]
    failures = []

    print("=" * 80)
    print("WASTE BOUND LEDGER TEST SUITE")
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
