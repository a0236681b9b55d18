"""
Sequence Engine
===============
Memoized evaluation of Hofstadter's a(n) and the Hofstadter-Conway Q(n).

    a(n) = a(a(n-1)) + a(n - a(n-1)),      a(1..3) = 1, 1, 2
    Q(n) = Q(n - Q(n-1)) + Q(n - Q(n-2)),  Q(1..3) = 2, 2, 1

Both are 0 for n <= 0.

The memo is a dense int64 array per sequence, pre-filled with a sentinel and
populated strictly left to right by the numba kernels. Asking for an index that
is not cached yet fills every missing entry up to it, so there is no recursion
and the recursion-depth limit of the interpreter never comes into play.

Classes:
    HofstadterSequences: The evaluator owning both memo tables.
    SequenceTables: Read-only snapshot of both tables over 0..n_max.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from hofstadterheart.config import DEFAULT_N_MAX
from hofstadterheart.errors import ConfigurationError, SequenceOverflowError, SequenceReferenceError
from hofstadterheart.sequences.kernels import STATUS_OK, STATUS_OVERFLOW, extend_a, extend_q

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

UNCOMPUTED: int = -1

A_SEEDS: tuple[int, int, int] = (1, 1, 2)
Q_SEEDS: tuple[int, int, int] = (2, 2, 1)

Kernel = Callable[["npt.NDArray[np.int64]", int, int], tuple[int, int, int, int]]


class _MemoTable:
    """Growable dense memo for one sequence."""

    def __init__(self, name: str, seeds: tuple[int, int, int], kernel: Kernel, capacity: int) -> None:
        if len(seeds) != 3 or any(s < 0 for s in seeds):
            raise ConfigurationError(f"{name} needs three non-negative seed values, got {seeds}.")
        self.name = name
        self.kernel = kernel
        self.values: npt.NDArray[np.int64] = np.full(max(capacity, 3) + 1, UNCOMPUTED, dtype=np.int64)
        self.values[0] = 0
        self.values[1:4] = seeds
        # Highest index whose value is known
        self.known = 3

    def grow(self, n: int) -> None:
        if n < len(self.values):
            return
        new_size = max(n + 1, 2 * len(self.values))
        grown = np.full(new_size, UNCOMPUTED, dtype=np.int64)
        grown[:self.known + 1] = self.values[:self.known + 1]
        logger.debug(f"Growing {self.name} table from {len(self.values)} to {new_size} entries.")
        self.values = grown

    def ensure(self, n: int) -> tuple[int, int]:
        """
        Fill every entry up to index `n`.

        Returns:
            (newly computed entries, references that fell on an index <= 0)

        Raises:
            SequenceReferenceError: A step referenced an index >= the one being computed.
            SequenceOverflowError: A value left the int64 range.
        """
        if n <= self.known:
            return 0, 0
        self.grow(n)
        start = self.known + 1
        status, reached, referenced, nonpositive = self.kernel(self.values, start, n + 1)
        # Entries below `reached` are valid even when the kernel stopped early
        computed = int(reached) - start
        self.known = int(reached) - 1
        if status == STATUS_OK:
            return computed, int(nonpositive)
        if status == STATUS_OVERFLOW:
            raise SequenceOverflowError(self.name, int(reached))
        raise SequenceReferenceError(self.name, int(reached), int(referenced))


class HofstadterSequences:
    """
    Evaluator for a(n) and Q(n) backed by memo tables it owns exclusively.

    Attributes:
        computed_count: Number of entries derived by the recurrences so far.
            Seeds and cache hits do not count.
        nonpositive_references: Number of recurrence steps that read an index
            <= 0 and therefore used the base value 0.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_N_MAX,
        a_seeds: tuple[int, int, int] = A_SEEDS,
        q_seeds: tuple[int, int, int] = Q_SEEDS,
    ) -> None:
        self._a = _MemoTable("a", a_seeds, extend_a, capacity)
        self._q = _MemoTable("Q", q_seeds, extend_q, capacity)
        self.computed_count = 0
        self.nonpositive_references = 0

    def _fill(self, table: _MemoTable, n: int) -> None:
        try:
            computed, nonpositive = table.ensure(n)
        except (SequenceReferenceError, SequenceOverflowError) as e:
            logger.error(f"Sequence evaluation failed: {e}")
            raise
        self.computed_count += computed
        if nonpositive:
            logger.warning(
                f"{table.name}: {nonpositive} recurrence step(s) up to n={n} referenced an index <= 0."
            )
            self.nonpositive_references += nonpositive

    def evaluate_a(self, n: int) -> int:
        """Hofstadter's a(n); 0 for n <= 0."""
        if n <= 0:
            return 0
        self._fill(self._a, n)
        return int(self._a.values[n])

    def evaluate_q(self, n: int) -> int:
        """Hofstadter-Conway Q(n); 0 for n <= 0."""
        if n <= 0:
            return 0
        self._fill(self._q, n)
        return int(self._q.values[n])

    def difference(self, n: int) -> int:
        """a(n) - Q(n)."""
        return self.evaluate_a(n) - self.evaluate_q(n)

    def build_tables(self, n_max: int) -> SequenceTables:
        """
        Populate both sequences over 1..n_max and return a read-only snapshot.

        Raises:
            ConfigurationError: If n_max < 1.
        """
        if n_max < 1:
            raise ConfigurationError(f"n_max must be >= 1, got {n_max}.")
        before = self.computed_count
        self._fill(self._a, n_max)
        self._fill(self._q, n_max)
        logger.debug(f"Sequence tables ready up to n={n_max} ({self.computed_count - before} new entries).")
        return SequenceTables(
            a=_frozen_copy(self._a.values[:n_max + 1]),
            q=_frozen_copy(self._q.values[:n_max + 1]),
        )


def _frozen_copy(values: npt.NDArray[np.int64]) -> npt.NDArray[np.int64]:
    out = values.copy()
    out.flags.writeable = False
    return out


@dataclass(frozen=True)
class SequenceTables:
    """
    Dense, read-only values of a and Q over indices 0..n_max (entry 0 is 0).
    """
    a: npt.NDArray[np.int64]
    q: npt.NDArray[np.int64]

    @property
    def n_max(self) -> int:
        return len(self.a) - 1

    def difference(self) -> npt.NDArray[np.int64]:
        """a(n) - Q(n) for every index."""
        return self.a - self.q

    def plot(self) -> None:
        """
        Plot both sequences and their difference.
        """
        n = np.arange(1, self.n_max + 1)

        plt.rcParams["figure.constrained_layout.use"] = True
        fig, (ax_seq, ax_diff) = plt.subplots(2, 1, figsize=(9, 6), sharex=True)

        ax_seq.plot(n, self.a[1:], 'r', lw=0.8, label="a(n)")
        ax_seq.plot(n, self.q[1:], 'b', lw=0.5, alpha=0.7, label="Q(n)")
        ax_seq.set_ylabel("Value")
        ax_seq.legend()

        ax_diff.plot(n, self.difference()[1:], 'm', lw=0.5)
        ax_diff.set_xlabel("n")
        ax_diff.set_ylabel("a(n) - Q(n)")

        for ax in (ax_seq, ax_diff):
            ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
            ax.minorticks_on()
            ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        ax_seq.set_title(f"Hofstadter sequences, n = 1..{self.n_max}")
        plt.show()
