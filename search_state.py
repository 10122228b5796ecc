# search_state.py
"""
Partial solutions for superpermutation search.

A SearchState never materializes the string it describes.  It keeps only:
- which permutations the string already contains (CoverageSet)
- the trailing window of symbols that decides what the next symbol completes
- how many wasted symbols the string has accumulated so far

States are immutable.  Expansion returns new states; wasted children share
their parent's CoverageSet object unchanged.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from permutations import permutation_count, permutation_id, missing_symbols

#-----------------------------------------------------------------------------
# Coverage bitset
#-----------------------------------------------------------------------------
class CoverageSet:
    """Read-only packed bitset of PermutationIds with O(1) cardinality."""

    __slots__ = ('_bits', '_count', '_capacity')

    def __init__(self, bits: np.ndarray, count: int, capacity: int):
        bits.flags.writeable = False
        self._bits = bits
        self._count = count
        self._capacity = capacity

    @classmethod
    def empty(cls, capacity: int) -> 'CoverageSet':
        """Empty set able to hold ids in [0, capacity)."""
        return cls(np.zeros((capacity + 7) // 8, dtype=np.uint8), 0, capacity)

    @classmethod
    def from_ids(cls, capacity: int, ids: Iterable[int]) -> 'CoverageSet':
        coverage = cls.empty(capacity)
        for perm_id in ids:
            if perm_id not in coverage:
                coverage = coverage.with_id(perm_id)
        return coverage

    @property
    def capacity(self) -> int:
        return self._capacity

    def __contains__(self, perm_id: int) -> bool:
        return bool((int(self._bits[perm_id >> 3]) >> (perm_id & 7)) & 1)

    def __len__(self) -> int:
        return self._count

    def with_id(self, perm_id: int) -> 'CoverageSet':
        """Copy of this set with perm_id added."""
        if not 0 <= perm_id < self._capacity:
            raise ValueError(f"Permutation id {perm_id} outside capacity {self._capacity}")
        if perm_id in self:
            return self
        bits = self._bits.copy()
        bits[perm_id >> 3] |= np.uint8(1 << (perm_id & 7))
        return CoverageSet(bits, self._count + 1, self._capacity)

    def ids(self) -> List[int]:
        """Covered ids in ascending order."""
        flags = np.unpackbits(self._bits, bitorder='little')[:self._capacity]
        return [int(i) for i in np.flatnonzero(flags)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, CoverageSet):
            return NotImplemented
        return (self._capacity == other._capacity and self._count == other._count
                and np.array_equal(self._bits, other._bits))

    def __hash__(self) -> int:
        return hash((self._capacity, self._bits.tobytes()))

    def __repr__(self) -> str:
        return f"CoverageSet({self._count}/{self._capacity})"

#-----------------------------------------------------------------------------
# Search state
#-----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchState:
    """One partial superpermutation."""
    covered: CoverageSet
    tail: Tuple[int, ...]
    wasted_symbols: int = 0

    # (previous lineage, appended symbol) cons cell, used only for reconstruction
    lineage: Optional[tuple] = field(default=None, compare=False, repr=False)

    @classmethod
    def seed(cls, n: int) -> 'SearchState':
        """
        Initial state for alphabet size n.

        The implicit string is 0, 1, ..., n-1: its only window is the identity
        permutation (id 0) and the tail keeps its last n-1 symbols.

        Raises:
            ValueError: If n < 2
        """
        if n < 2:
            raise ValueError(f"Alphabet size must be at least 2, got {n}")

        covered = CoverageSet.empty(permutation_count(n)).with_id(permutation_id(range(n)))
        return cls(covered=covered, tail=tuple(range(1, n)), wasted_symbols=0)

    def coverage_count(self) -> int:
        return len(self.covered)

    def future_waste(self, n: int) -> int:
        """Waste still needed before the tail is full length again (heuristic)."""
        return n - len(self.tail) - 1

    def total_waste_estimate(self, n: int) -> int:
        """Incurred waste plus future_waste; the frontier priority."""
        return self.wasted_symbols + self.future_waste(n)

    def is_terminal(self, n: int) -> bool:
        return self.coverage_count() == permutation_count(n)

    #-------------------------------------------------------------------------
    # Expansion
    #-------------------------------------------------------------------------
    def expand(self, n: int, coverage_ceiling: Optional[int] = None) -> List['SearchState']:
        """
        Children for every symbol except a repeat of the last tail symbol.

        Args:
            n: Alphabet size
            coverage_ceiling: Coverage count beyond which this branch gains
                nothing (default n!)

        Returns:
            n-1 children in ascending symbol order
        """
        if coverage_ceiling is None:
            coverage_ceiling = permutation_count(n)

        last_symbol = self.tail[-1]
        return [self._expand_one(symbol, n, coverage_ceiling)
                for symbol in range(n) if symbol != last_symbol]

    def _expand_one(self, symbol: int, n: int, coverage_ceiling: int) -> 'SearchState':
        full_length = n - 1
        new_tail = self._build_tail(symbol, full_length)

        # Still warming up
        if len(self.tail) < full_length or len(new_tail) < full_length:
            return self._wasted_child(symbol, new_tail, 1)

        # Window would start and end with the same symbol
        if symbol == self.tail[0]:
            return self._wasted_child(symbol, new_tail, 1)

        if self.coverage_count() == coverage_ceiling:
            return self._wasted_child(symbol, new_tail, 1)

        perm_id = permutation_id(self.tail + (symbol,))
        if perm_id in self.covered:
            return self._wasted_child(symbol, new_tail, self._repeat_penalty(new_tail, n))

        return SearchState(covered=self.covered.with_id(perm_id),
                           tail=new_tail,
                           wasted_symbols=self.wasted_symbols,
                           lineage=(self.lineage, symbol))

    def _build_tail(self, symbol: int, full_length: int) -> Tuple[int, ...]:
        if symbol in self.tail:
            # A symbol cannot recur inside one permutation window
            start = self.tail.index(symbol) + 1
        elif len(self.tail) < full_length:
            start = 0
        else:
            start = 1
        return self.tail[start:] + (symbol,)

    def _repeat_penalty(self, new_tail: Tuple[int, ...], n: int) -> int:
        """2 when the window after the repeated one is also covered, else 1."""
        missing = missing_symbols(new_tail, n)
        if len(missing) != 1:
            return 1
        if permutation_id(new_tail + (missing[0],)) in self.covered:
            return 2
        return 1

    def _wasted_child(self, symbol: int, new_tail: Tuple[int, ...], penalty: int) -> 'SearchState':
        return SearchState(covered=self.covered,
                           tail=new_tail,
                           wasted_symbols=self.wasted_symbols + penalty,
                           lineage=(self.lineage, symbol))

    #-------------------------------------------------------------------------
    # Reconstruction
    #-------------------------------------------------------------------------
    def appended_symbols(self) -> Tuple[int, ...]:
        """Symbols appended after the seed, oldest first."""
        symbols = []
        link = self.lineage
        while link is not None:
            link, symbol = link
            symbols.append(symbol)
        return tuple(reversed(symbols))

    def superpermutation(self, n: int) -> Tuple[int, ...]:
        """Full symbol string described by this state's lineage."""
        return tuple(range(n)) + self.appended_symbols()
