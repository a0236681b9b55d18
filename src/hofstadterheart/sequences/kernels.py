# kernels.py
from __future__ import annotations

import numpy as np
import numpy.typing as npt
import numba as nb

# Status codes returned by the table kernels. numba cannot raise exceptions that
# carry runtime data, so the Python side turns these into proper errors.
STATUS_OK = 0
STATUS_REFERENCE = 1
STATUS_OVERFLOW = 2


@nb.njit(cache=True)
def _lookup(values: npt.NDArray[np.int64], i: int) -> int:
    """Table read with the base case a(n) = Q(n) = 0 for n <= 0."""
    if i <= 0:
        return 0
    return values[i]


@nb.njit(cache=True)
def extend_a(values: npt.NDArray[np.int64], start: int, stop: int) -> tuple[int, int, int, int]:
    """
    Fill a(n) = a(a(n-1)) + a(n - a(n-1)) for n in [start, stop).

    Every entry below `start` must already be filled. Entries are written strictly
    left to right; on failure nothing at or beyond the failing index is written.

    Returns:
        (status, n, referenced, nonpositive) where `n` is the failing index (or
        `stop` on success), `referenced` the offending index for
        STATUS_REFERENCE and `nonpositive` the number of references that fell
        on an index <= 0.
    """
    nonpositive = 0
    for n in range(start, stop):
        prev = values[n - 1]
        i1 = prev
        i2 = n - prev
        if i1 >= n:
            return STATUS_REFERENCE, n, i1, nonpositive
        if i2 >= n:
            return STATUS_REFERENCE, n, i2, nonpositive
        if i1 <= 0:
            nonpositive += 1
        if i2 <= 0:
            nonpositive += 1
        v1 = _lookup(values, i1)
        v2 = _lookup(values, i2)
        total = v1 + v2
        # Values are never negative, so a negative sum means the int64 wrapped
        if total < 0 or total < v1 or total < v2:
            return STATUS_OVERFLOW, n, 0, nonpositive
        values[n] = total
    return STATUS_OK, stop, 0, nonpositive


@nb.njit(cache=True)
def extend_q(values: npt.NDArray[np.int64], start: int, stop: int) -> tuple[int, int, int, int]:
    """
    Fill Q(n) = Q(n - Q(n-1)) + Q(n - Q(n-2)) for n in [start, stop).

    Same contract as `extend_a`.
    """
    nonpositive = 0
    for n in range(start, stop):
        i1 = n - values[n - 1]
        i2 = n - values[n - 2]
        if i1 >= n:
            return STATUS_REFERENCE, n, i1, nonpositive
        if i2 >= n:
            return STATUS_REFERENCE, n, i2, nonpositive
        if i1 <= 0:
            nonpositive += 1
        if i2 <= 0:
            nonpositive += 1
        v1 = _lookup(values, i1)
        v2 = _lookup(values, i2)
        total = v1 + v2
        if total < 0 or total < v1 or total < v2:
            return STATUS_OVERFLOW, n, 0, nonpositive
        values[n] = total
    return STATUS_OK, stop, 0, nonpositive
