# frontier.py
"""
Best-first frontier for superpermutation search.

Pending states are filed in a two-level bucket queue:
- outer buckets indexed by total waste estimate (served smallest first)
- inner buckets indexed by coverage count (served largest first)
- states with identical keys are served first-in first-out
"""

from collections import deque
from typing import List, Optional

from search_state import SearchState


class Frontier:
    """Not-yet-expanded SearchStates ordered for best-first expansion."""

    def __init__(self):
        self._buckets: List[List[deque]] = []   # [waste][coverage] -> deque of states
        self._level_sizes: List[int] = []
        self._top_coverage: List[int] = []      # highest possibly non-empty coverage per level
        self._min_hint = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def size(self) -> int:
        return self._size

    def insert(self, state: SearchState, n: int) -> None:
        """File state under (total waste estimate, coverage count)."""
        waste = state.total_waste_estimate(n)
        coverage = state.coverage_count()

        while len(self._buckets) <= waste:
            self._buckets.append([])
            self._level_sizes.append(0)
            self._top_coverage.append(0)

        level = self._buckets[waste]
        while len(level) <= coverage:
            level.append(deque())

        level[coverage].append(state)
        self._level_sizes[waste] += 1
        self._top_coverage[waste] = max(self._top_coverage[waste], coverage)
        self._min_hint = min(self._min_hint, waste)
        self._size += 1

    def remove_best(self) -> Optional[SearchState]:
        """Pop the state with least waste estimate, most coverage; None if empty."""
        waste = self.min_waste()
        if waste is None:
            return None

        level = self._buckets[waste]
        coverage = self._top_coverage[waste]
        while not level[coverage]:
            coverage -= 1
        self._top_coverage[waste] = coverage

        self._level_sizes[waste] -= 1
        self._size -= 1
        return level[coverage].popleft()

    #-------------------------------------------------------------------------
    # Diagnostics
    #-------------------------------------------------------------------------
    def size_at_waste_level(self, waste: int) -> int:
        if 0 <= waste < len(self._level_sizes):
            return self._level_sizes[waste]
        return 0

    def min_waste(self) -> Optional[int]:
        """Smallest total waste estimate present, or None."""
        if self._size == 0:
            return None
        waste = self._min_hint
        while self._level_sizes[waste] == 0:
            waste += 1
        self._min_hint = waste
        return waste

    def max_waste(self) -> Optional[int]:
        """Largest total waste estimate present, or None."""
        if self._size == 0:
            return None
        waste = len(self._level_sizes) - 1
        while self._level_sizes[waste] == 0:
            waste -= 1
        return waste

    def max_coverage_at_waste_level(self, waste: int) -> Optional[int]:
        """Largest coverage count pending at a waste level, or None."""
        if self.size_at_waste_level(waste) == 0:
            return None
        level = self._buckets[waste]
        coverage = self._top_coverage[waste]
        while not level[coverage]:
            coverage -= 1
        return coverage

    def __repr__(self) -> str:
        return f"Frontier(size={self._size}, min_waste={self.min_waste()}, max_waste={self.max_waste()})"
