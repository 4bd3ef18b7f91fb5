"""Exceptions raised by somfilter.

Invalid numeric parameters are reported with plain ``ValueError``; the classes here cover
the two domain-specific failure kinds.
"""

from __future__ import annotations


class FilteringConfigError(ValueError):
    """Raised when the per-run filtering context cannot be built from its inputs."""

    def __init__(self, message: str, *, sample: str | None = None) -> None:
        super().__init__(message)
        self.sample = sample


class ThresholdStrategyError(RuntimeError):
    """Raised when threshold dispatch meets a strategy it does not know.

    This means the strategy enumeration and the dispatch code have diverged; it is a
    programming error and should not be caught.
    """
