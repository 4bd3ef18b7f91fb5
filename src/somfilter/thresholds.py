from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from .config import FilteringArguments, ThresholdStrategy
from .errors import ThresholdStrategyError
from .validation import check_non_negative

logger = logging.getLogger(__name__)

FIRST_PASS_THRESHOLD = 0.5

_THRESHOLD_FILTER_NONE = 1.0
_THRESHOLD_FILTER_ALL = 0.0

# Relative slack when comparing the running expected FPR to the requested bound, so rounding in
# the cumulative sum does not turn an exact tie into an exceedance. A zero bound stays exact.
_FPR_RELATIVE_TOLERANCE = 1e-9


def _sorted_posteriors(posteriors: Iterable[float]) -> np.ndarray:
    # np.sort returns a copy; the caller's sequence is left untouched
    return np.sort(np.fromiter((float(p) for p in posteriors), dtype=np.float64))


def false_discovery_rate_threshold(posteriors: Iterable[float], requested_fpr: float) -> float:
    """Largest threshold keeping the expected false-positive rate of passing calls within bound.

    Posteriors are sorted ascending and admitted one at a time. The expected FPR after
    admitting index ``i`` is the mean of the first ``i + 1`` posteriors, which never decreases.
    At the first index where it exceeds ``requested_fpr`` the previous posterior is returned
    (or 0.0, filter everything, if even the smallest one is too large). If the bound is never
    exceeded, or there are no posteriors, 1.0 is returned and everything passes.
    """
    requested_fpr = check_non_negative(requested_fpr, "requested false positive rate")

    p = _sorted_posteriors(posteriors)
    if p.size == 0:
        return _THRESHOLD_FILTER_NONE

    expected_fpr = np.cumsum(p) / np.arange(1, p.size + 1)
    exceeded = np.flatnonzero(expected_fpr > requested_fpr * (1.0 + _FPR_RELATIVE_TOLERANCE))
    if exceeded.size == 0:
        return _THRESHOLD_FILTER_NONE

    i = int(exceeded[0])
    return float(p[i - 1]) if i > 0 else _THRESHOLD_FILTER_ALL


def optimal_f_score_threshold(posteriors: Iterable[float], beta: float) -> float:
    """Threshold maximizing the expected F-beta score of the passing calls.

    Each call contributes ``1 - p`` expected true positives and ``p`` expected false positives.
    Starting from filtering everything, calls are admitted in ascending posterior order; the
    largest prefix whose score is at least the best so far wins, so ties prefer the looser
    threshold.
    """
    beta = check_non_negative(beta, "F-score beta")
    beta2 = beta * beta

    p = _sorted_posteriors(posteriors).tolist()
    n_calls = len(p)
    expected_tp = sum(1.0 - x for x in p)

    tp = 0.0
    fp = 0.0
    best_index = -1  # -1: filter all
    best_score = 0.0  # recall is zero when everything is filtered
    for n, posterior in enumerate(p):
        tp += 1.0 - posterior
        fp += posterior
        fn = expected_tp - tp
        score = (1 + beta2) * tp / ((1 + beta2) * tp + beta2 * fn + fp)
        if score >= best_score:
            best_index = n
            best_score = score

    if best_index == -1:
        return _THRESHOLD_FILTER_ALL
    if best_index == n_calls - 1:
        return _THRESHOLD_FILTER_NONE
    return p[best_index]


class ThresholdController:
    """Owns the artifact-probability threshold used by the current filtering pass.

    The threshold starts at ``FIRST_PASS_THRESHOLD`` and is replaced once per pass by
    :meth:`recompute`, according to ``arguments.threshold_strategy``.
    """

    def __init__(self, arguments: FilteringArguments) -> None:
        self._arguments = arguments
        self._threshold = FIRST_PASS_THRESHOLD

    @property
    def arguments(self) -> FilteringArguments:
        return self._arguments

    @property
    def threshold(self) -> float:
        return self._threshold

    def recompute(self, posteriors: Iterable[float]) -> float:
        """Recompute and store the threshold from this pass's posteriors; return it."""
        args = self._arguments
        strategy = args.threshold_strategy
        posteriors = list(posteriors)

        if strategy == ThresholdStrategy.CONSTANT:
            threshold = args.posterior_threshold
        elif strategy == ThresholdStrategy.FALSE_DISCOVERY_RATE:
            threshold = false_discovery_rate_threshold(posteriors, args.max_false_positive_rate)
        elif strategy == ThresholdStrategy.OPTIMAL_F_SCORE:
            threshold = optimal_f_score_threshold(posteriors, args.f_score_beta)
        else:
            raise ThresholdStrategyError(f"Invalid threshold strategy type: {strategy!r}.")

        self._threshold = float(threshold)
        logger.info(
            "Artifact probability threshold (%s, %d posteriors): %.6g",
            getattr(strategy, "value", strategy),
            len(posteriors),
            self._threshold,
        )
        return self._threshold

    def is_filtered(self, posterior: float) -> bool:
        """True if a call with this posterior fails the current threshold."""
        return float(posterior) > self._threshold
