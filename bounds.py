# bounds.py
"""
Waste bounds for branch-and-bound superpermutation search.

WasteBoundLedger keeps, for every coverage count 0..n!, the best proven lower
bound on the waste needed to reach that many permutations, a derived upper
bound used for pruning, and a threshold normalized against the per-permutation
cost unit lowerBound(0).

Bounds only ever tighten.  The ledger does not check that submitted values are
true bounds; that is the caller's responsibility.
"""

import numpy as np
import pandas as pd

# Upper bound of an index whose forward slack is still unknown
UNBOUNDED = int(np.iinfo(np.int64).max)


class WasteBoundLedger:
    """Proven waste bounds indexed by coverage count."""

    def __init__(self):
        self._lower = np.zeros(1, dtype=np.int64)
        self._upper = np.full(1, UNBOUNDED, dtype=np.int64)
        self._thresholds = np.zeros(1, dtype=np.int64)

    def __len__(self) -> int:
        return len(self._lower)

    @property
    def max_count(self) -> int:
        """Largest coverage count tracked so far."""
        return len(self._lower) - 1

    #-------------------------------------------------------------------------
    # Queries
    #-------------------------------------------------------------------------
    def lower_bound(self, count: int) -> int:
        """Lower bound on waste to reach count (last known value beyond range)."""
        return int(self._lower[min(count, self.max_count)])

    def upper_bound(self, count: int) -> int:
        """Derived upper bound for count (UNBOUNDED beyond range)."""
        if count > self.max_count:
            return UNBOUNDED
        return int(self._upper[count])

    def threshold(self, count: int) -> int:
        """lowerBound(count) - lowerBound(0)."""
        return int(self._thresholds[min(count, self.max_count)])

    #-------------------------------------------------------------------------
    # Updates
    #-------------------------------------------------------------------------
    def record_lower_bound(self, count: int, value: int) -> bool:
        """
        Record that reaching count permutations needs at least value waste.

        Args:
            count: Coverage count
            value: Proven lower bound on waste

        Returns:
            True if the ledger changed

        Raises:
            ValueError: If count or value is negative
        """
        if count < 0 or value < 0:
            raise ValueError(f"Bounds must be non-negative (count={count}, value={value})")

        if count > self.max_count:
            self._extend(count, value)
            return True

        if value > self._lower[count]:
            # Upper bounds stay put so nothing loosens
            self._increase_lower_bound(count, value)
            return True

        return False

    def _extend(self, count: int, value: int) -> None:
        previous_last = self.max_count
        last_bound = int(self._lower[previous_last])
        extra = count - previous_last

        self._lower = np.concatenate([self._lower, np.zeros(extra, dtype=np.int64)])
        self._upper = np.concatenate([self._upper, np.full(extra, UNBOUNDED, dtype=np.int64)])
        self._thresholds = np.concatenate([self._thresholds, np.zeros(extra, dtype=np.int64)])

        # Bounds are non-decreasing in coverage
        seeded = max(value, last_bound)
        for index in range(previous_last + 1, count + 1):
            self._increase_lower_bound(index, seeded)

        # Forward slack vanishes once a tighter successor is known
        for index in range(previous_last, count):
            self._upper[index] = self._lower[index]

        self._derive_upper_bound(count)

    def _increase_lower_bound(self, index: int, value: int) -> None:
        self._lower[index] = value
        self._thresholds[index] = value - self._lower[0]

    def _derive_upper_bound(self, index: int) -> None:
        # Self-similarity: one more cost unit beyond the proven lower bound
        self._upper[index] = self._lower[index] + self._lower[0]

    #-------------------------------------------------------------------------
    # Persistence helpers
    #-------------------------------------------------------------------------
    def as_dataframe(self) -> pd.DataFrame:
        """Tables as a DataFrame with one row per coverage count."""
        return pd.DataFrame({
            'coverage': np.arange(len(self._lower)),
            'lower_bound': self._lower.copy(),
            'upper_bound': self._upper.copy(),
            'threshold': self._thresholds.copy(),
        })

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> 'WasteBoundLedger':
        """
        Rebuild a ledger saved with as_dataframe.

        Raises:
            ValueError: If columns are missing or coverage is not 0..k
        """
        required = ['coverage', 'lower_bound', 'upper_bound', 'threshold']
        missing = [col for col in required if col not in df.columns]
        if missing:
            raise ValueError(f"Bound table missing columns: {missing}")

        df = df.sort_values('coverage')
        coverage = df['coverage'].to_numpy(dtype=np.int64)
        if len(coverage) == 0 or not np.array_equal(coverage, np.arange(len(coverage))):
            raise ValueError("Bound table coverage column must be 0, 1, ..., k")

        ledger = cls()
        ledger._lower = df['lower_bound'].to_numpy(dtype=np.int64).copy()
        ledger._upper = df['upper_bound'].to_numpy(dtype=np.int64).copy()
        ledger._thresholds = df['threshold'].to_numpy(dtype=np.int64).copy()
        return ledger

    def __repr__(self) -> str:
        return f"WasteBoundLedger(max_count={self.max_count}, lower={self._lower.tolist()})"
