"""Filtering arguments.

``FilteringArguments`` collects the knobs that decide how the artifact-probability
threshold is chosen for each filtering pass:

- ``threshold_strategy``: one of ``CONSTANT``, ``FALSE_DISCOVERY_RATE``, ``OPTIMAL_F_SCORE``
- ``posterior_threshold``: the fixed threshold used by ``CONSTANT``
- ``max_false_positive_rate``: the bound used by ``FALSE_DISCOVERY_RATE``
- ``f_score_beta``: relative weight of recall to precision for ``OPTIMAL_F_SCORE``
- ``contamination_estimate``: fallback contamination for samples without a measured value
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .validation import check_fraction, check_non_negative


class ThresholdStrategy(str, Enum):
    CONSTANT = "CONSTANT"
    FALSE_DISCOVERY_RATE = "FALSE_DISCOVERY_RATE"
    OPTIMAL_F_SCORE = "OPTIMAL_F_SCORE"

    @classmethod
    def parse(cls, name: str | ThresholdStrategy) -> ThresholdStrategy:
        """Parse a strategy name; case-insensitive, ``-`` and ``_`` are interchangeable."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown threshold strategy '{name}'. Choose one of: {choices}") from None


@dataclass(frozen=True)
class FilteringArguments:
    threshold_strategy: ThresholdStrategy = ThresholdStrategy.OPTIMAL_F_SCORE
    posterior_threshold: float = 0.1
    max_false_positive_rate: float = 0.05
    f_score_beta: float = 1.0
    contamination_estimate: Optional[float] = 0.0

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "threshold_strategy", ThresholdStrategy.parse(self.threshold_strategy))
        object.__setattr__(
            self, "posterior_threshold", check_fraction(self.posterior_threshold, "posterior_threshold")
        )
        object.__setattr__(
            self,
            "max_false_positive_rate",
            check_non_negative(self.max_false_positive_rate, "max_false_positive_rate"),
        )
        object.__setattr__(self, "f_score_beta", check_non_negative(self.f_score_beta, "f_score_beta"))
        if self.contamination_estimate is not None:
            object.__setattr__(
                self,
                "contamination_estimate",
                check_fraction(self.contamination_estimate, "contamination_estimate"),
            )
