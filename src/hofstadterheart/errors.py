"""
Exception Hierarchy
===================
Every failure raised by the pipeline derives from `HofstadterError`, so callers
embedding the pipeline can catch one type.

Classes:
    ConfigurationError: Bad input parameters, raised before any computation.
    EmptyPointCloudError: The outlier filter rejected every sampled index.
    SequenceReferenceError: A recurrence referenced an index that is not yet known.
    SequenceOverflowError: A sequence value left the signed 64-bit range.
"""
from __future__ import annotations

from typing import Optional


class HofstadterError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(HofstadterError, ValueError):
    """Invalid pipeline configuration (e.g. n_max < 1 or step < 1)."""


class EmptyPointCloudError(HofstadterError):
    """
    Raised when no point survives the outlier filter.

    This usually means the scaling constants do not match `n_max`.
    """

    def __init__(self, n_max: Optional[int] = None, step: Optional[int] = None) -> None:
        self.n_max = n_max
        self.step = step
        if n_max is None:
            msg = "Point set is empty."
        else:
            msg = f"Every index in 1..{n_max} (step {step}) was rejected by the outlier filter."
        super().__init__(msg)


class SequenceReferenceError(HofstadterError):
    """A recurrence step referenced an index >= the index being computed."""

    def __init__(self, sequence: str, n: int, referenced: int) -> None:
        self.sequence = sequence
        self.n = n
        self.referenced = referenced
        super().__init__(
            f"{sequence}({n}) references {sequence}({referenced}), which is not below {n}."
        )


class SequenceOverflowError(HofstadterError, OverflowError):
    """A sequence value does not fit into a signed 64-bit integer."""

    def __init__(self, sequence: str, n: int) -> None:
        self.sequence = sequence
        self.n = n
        super().__init__(f"{sequence}({n}) overflows a signed 64-bit integer.")
