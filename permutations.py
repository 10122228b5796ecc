# permutations.py
"""
Permutation encoding for superpermutation search.

Every ordering of the n symbols 0..n-1 is identified by its rank in the
factorial number system (Lehmer code).  The identity ordering (0, 1, ..., n-1)
has id 0 and the reversed ordering has id n! - 1.

Includes:
- JIT-compiled Lehmer rank / unrank
- Window helpers used by search state expansion
- Superpermutation verification and known length bounds
"""

import numpy as np
from math import factorial
from typing import Iterable, List, Sequence, Tuple
from numba import jit

#-----------------------------------------------------------------------------
# Lehmer code
#-----------------------------------------------------------------------------
@jit(nopython=True)
def _lehmer_rank_jit(window: np.ndarray) -> int:
    """JIT-compiled Lehmer rank of a full permutation window."""
    n = len(window)
    rank = 0
    for i in range(n):
        smaller = 0
        for j in range(i + 1, n):
            if window[j] < window[i]:
                smaller += 1
        rank = rank * (n - i) + smaller
    return rank


@jit(nopython=True)
def _lehmer_unrank_jit(rank: int, n: int) -> np.ndarray:
    """JIT-compiled inverse of _lehmer_rank_jit."""
    available = np.arange(n)
    result = np.empty(n, dtype=np.int64)
    remaining = n

    for i in range(n):
        # (n - 1 - i)!
        place = 1
        for k in range(2, n - i):
            place *= k

        digit = rank // place
        rank = rank % place
        result[i] = available[digit]

        # Drop the used symbol from the pool
        for k in range(digit, remaining - 1):
            available[k] = available[k + 1]
        remaining -= 1

    return result


def permutation_count(n: int) -> int:
    """Number of distinct permutations of n symbols (n!)."""
    return factorial(n)


def permutation_id(window: Sequence[int]) -> int:
    """
    Rank a full permutation window.

    Args:
        window: Sequence containing each of 0..n-1 exactly once

    Returns:
        PermutationId in [0, n!)
    """
    return int(_lehmer_rank_jit(np.asarray(window, dtype=np.int64)))


def permutation_from_id(perm_id: int, n: int) -> Tuple[int, ...]:
    """
    Inverse of permutation_id.

    Raises:
        ValueError: If perm_id is outside [0, n!)
    """
    if not 0 <= perm_id < factorial(n):
        raise ValueError(f"Permutation id {perm_id} out of range for n={n}")
    return tuple(int(s) for s in _lehmer_unrank_jit(perm_id, n))

#-----------------------------------------------------------------------------
# Window helpers
#-----------------------------------------------------------------------------
def is_permutation(window: Sequence[int], n: int) -> bool:
    """Check whether a window holds each symbol of 0..n-1 exactly once."""
    return len(window) == n and set(window) == set(range(n))


def missing_symbols(window: Sequence[int], n: int) -> List[int]:
    """Symbols of 0..n-1 that do not occur in window, ascending."""
    present = set(window)
    return [s for s in range(n) if s not in present]

#-----------------------------------------------------------------------------
# Superpermutation helpers
#-----------------------------------------------------------------------------
def covered_permutation_ids(symbols: Sequence[int], n: int) -> np.ndarray:
    """
    Boolean coverage array for every length-n window of a symbol string.

    Returns:
        Array of length n! with True where that permutation occurs
    """
    covered = np.zeros(factorial(n), dtype=bool)
    for start in range(len(symbols) - n + 1):
        window = symbols[start:start + n]
        if is_permutation(window, n):
            covered[permutation_id(window)] = True
    return covered


def is_superpermutation(symbols: Sequence[int], n: int) -> bool:
    """Check that every permutation of 0..n-1 occurs as a contiguous substring."""
    if n < 1:
        return False
    return bool(np.all(covered_permutation_ids(list(symbols), n)))


def factorial_sum_length(n: int) -> int:
    """
    Sum of factorials 1! + 2! + ... + n!.

    Equals the minimal superpermutation length for n <= 5. Shorter strings
    exist for n >= 6.
    """
    return sum(factorial(k) for k in range(1, n + 1))


def format_symbols(symbols: Iterable[int]) -> str:
    """Render symbols as the conventional 1-based digit string."""
    return ''.join(str(s + 1) for s in symbols)


def parse_symbols(text: str) -> List[int]:
    """Inverse of format_symbols."""
    return [int(ch) - 1 for ch in text.strip()]
