#!/usr/bin/env python3
"""
Permutation Encoding Test Suite

Tests that:
1. Lehmer ids are a bijection onto [0, n!)
2. Unranking inverts ranking
3. Window helpers and superpermutation checks agree with known strings

Usage:
    python test_permutations.py
    pytest test_permutations.py
"""

import sys
from itertools import permutations

import numpy as np
import pytest

from permutations import (permutation_count, permutation_id, permutation_from_id,
                          is_permutation, missing_symbols, covered_permutation_ids,
                          is_superpermutation, factorial_sum_length,
                          format_symbols, parse_symbols)

# Known minimal superpermutations (1-based digits)
KNOWN_MINIMAL = {
    2: "121",
    3: "123121321",
    4: "123412314231243121342132413214321",
}


def test_identity_and_reverse_ids():
    assert permutation_id((0, 1, 2, 3)) == 0
    assert permutation_id((3, 2, 1, 0)) == permutation_count(4) - 1
    assert permutation_id((1, 2, 0)) == 3


def test_ids_are_a_bijection():
    for n in range(1, 6):
        ids = [permutation_id(perm) for perm in permutations(range(n))]
        assert sorted(ids) == list(range(permutation_count(n))), f"n={n}"


def test_identical_windows_share_an_id():
    assert permutation_id([2, 0, 1]) == permutation_id((2, 0, 1))
    assert permutation_id(np.array([2, 0, 1])) == permutation_id((2, 0, 1))


def test_unrank_inverts_rank():
    n = 5
    for perm in permutations(range(n)):
        assert permutation_from_id(permutation_id(perm), n) == perm


def test_unrank_rejects_out_of_range():
    with pytest.raises(ValueError):
        permutation_from_id(6, 3)
    with pytest.raises(ValueError):
        permutation_from_id(-1, 3)


def test_window_helpers():
    assert is_permutation((2, 0, 1), 3)
    assert not is_permutation((2, 0, 2), 3)
    assert not is_permutation((2, 0), 3)
    assert missing_symbols((1, 3), 4) == [0, 2]
    assert missing_symbols((0, 1, 2), 3) == []


def test_known_superpermutations():
    for n, text in KNOWN_MINIMAL.items():
        symbols = parse_symbols(text)
        assert is_superpermutation(symbols, n), f"n={n}"
        assert len(symbols) == factorial_sum_length(n)


def test_incomplete_string_is_rejected():
    # 321 never appears
    assert not is_superpermutation(parse_symbols("12312132"), 3)
    covered = covered_permutation_ids(parse_symbols("12312132"), 3)
    assert covered.sum() == 5
    assert not covered[permutation_id((2, 1, 0))]


def test_symbol_formatting():
    assert format_symbols((0, 1, 2, 0)) == "1231"
    assert parse_symbols("1231") == [0, 1, 2, 0]


def main():
    """Run all tests."""
    tests = [obj for name, obj in sorted(globals().items())
             if name.startswith("test_") and callable(obj)]
    failures = []

    print("=" * 80)
    print("PERMUTATION ENCODING TEST SUITE")
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
