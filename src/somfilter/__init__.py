"""somfilter: posterior-probability thresholds and per-sample state for somatic variant filtering.

The public API is small:

    from somfilter import FilteringArguments, ThresholdController

    controller = ThresholdController(FilteringArguments(threshold_strategy="FALSE_DISCOVERY_RATE"))
    controller.recompute(posteriors)
    failed = [p for p in posteriors if controller.is_filtered(p)]

"""

from __future__ import annotations

__all__ = [
    "__version__",
    "ContaminationRecord",
    "FilteringArguments",
    "FilteringConfigError",
    "FilteringContext",
    "MinorAlleleFractionRecord",
    "PhaseRecord",
    "PhasedCallTracker",
    "SegmentIndex",
    "ThresholdController",
    "ThresholdStrategy",
    "ThresholdStrategyError",
    "false_discovery_rate_threshold",
    "optimal_f_score_threshold",
]

__version__ = "0.1.0"

from .config import FilteringArguments, ThresholdStrategy
from .context import FilteringContext
from .errors import FilteringConfigError, ThresholdStrategyError
from .models import ContaminationRecord, MinorAlleleFractionRecord, PhaseRecord
from .phasing import PhasedCallTracker
from .segments import SegmentIndex
from .thresholds import ThresholdController, false_discovery_rate_threshold, optimal_f_score_threshold
