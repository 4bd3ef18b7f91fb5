"""Per-run filtering context.

Holds the sample-level information that filters consult while scoring calls: which samples
are normals, each sample's contamination, and each sample's minor-allele-fraction segments.
The context is built once per run and is read-only afterwards.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

from .config import FilteringArguments
from .errors import FilteringConfigError
from .models import ContaminationRecord, MinorAlleleFractionRecord
from .segments import SegmentIndex
from .validation import check_fraction

logger = logging.getLogger(__name__)

_EMPTY_SEGMENTS = SegmentIndex({})


def _resolve_contamination(
    samples: Sequence[str],
    records: Iterable[ContaminationRecord],
    default: Optional[float],
) -> Dict[str, float]:
    cohort = set(samples)
    measured: Dict[str, float] = {}
    for rec in records:
        if rec.sample not in cohort:
            raise FilteringConfigError(
                f"Contamination record for sample '{rec.sample}' does not match any sample in the cohort: "
                f"{list(samples)}",
                sample=rec.sample,
            )
        if rec.sample in measured:
            raise FilteringConfigError(
                f"Duplicate contamination records for sample '{rec.sample}'", sample=rec.sample
            )
        try:
            measured[rec.sample] = check_fraction(rec.contamination, f"contamination of sample '{rec.sample}'")
        except ValueError as err:
            raise FilteringConfigError(str(err), sample=rec.sample) from err

    if default is not None:
        try:
            default = check_fraction(default, "default contamination")
        except ValueError as err:
            raise FilteringConfigError(str(err)) from err

    resolved: Dict[str, float] = {}
    for sample in samples:
        if sample in measured:
            resolved[sample] = measured[sample]
        elif default is not None:
            resolved[sample] = default
        else:
            raise FilteringConfigError(
                f"Sample '{sample}' has no contamination record and no default contamination was given.",
                sample=sample,
            )
    return resolved


class FilteringContext:
    """Normal samples, contamination and tumor segments for one filtering run.

    Parameters
    ----------
    samples:
        All sample names of the cohort, in VCF header order.
    normal_samples:
        Names of the samples declared as normals.
    contamination_records:
        Measured contamination, at most one record per cohort sample.
    default_contamination:
        Contamination used for samples without a record. ``None`` makes a missing record an error.
    segment_records:
        Minor-allele-fraction segments keyed by sample name.
    """

    def __init__(
        self,
        samples: Sequence[str],
        *,
        normal_samples: Iterable[str] = (),
        contamination_records: Iterable[ContaminationRecord] = (),
        default_contamination: Optional[float] = 0.0,
        segment_records: Optional[Mapping[str, Iterable[MinorAlleleFractionRecord]]] = None,
    ) -> None:
        self._samples: List[str] = list(samples)
        self._normal_samples: FrozenSet[str] = frozenset(normal_samples)

        self._contamination = _resolve_contamination(self._samples, contamination_records, default_contamination)

        segments: Dict[str, SegmentIndex] = {}
        for sample, records in (segment_records or {}).items():
            if sample not in self._contamination:
                logger.warning("Segments given for sample '%s', which is not in the cohort.", sample)
            segments[sample] = SegmentIndex.from_records(records)
        self._segments = segments

        logger.info(
            "Filtering context: %d samples (%d normal), %d with segments",
            len(self._samples),
            len(self._normal_samples),
            len(self._segments),
        )

    @classmethod
    def from_arguments(
        cls,
        arguments: FilteringArguments,
        samples: Sequence[str],
        *,
        normal_samples: Iterable[str] = (),
        contamination_records: Iterable[ContaminationRecord] = (),
        segment_records: Optional[Mapping[str, Iterable[MinorAlleleFractionRecord]]] = None,
    ) -> FilteringContext:
        """Build a context whose default contamination comes from ``arguments``."""
        return cls(
            samples,
            normal_samples=normal_samples,
            contamination_records=contamination_records,
            default_contamination=arguments.contamination_estimate,
            segment_records=segment_records,
        )

    @property
    def samples(self) -> List[str]:
        return list(self._samples)

    @property
    def normal_samples(self) -> FrozenSet[str]:
        return self._normal_samples

    @property
    def tumor_samples(self) -> List[str]:
        return [s for s in self._samples if s not in self._normal_samples]

    def is_normal(self, sample: str) -> bool:
        return sample in self._normal_samples

    @property
    def contamination_by_sample(self) -> Mapping[str, float]:
        return MappingProxyType(self._contamination)

    def contamination(self, sample: str) -> float:
        return self._contamination[sample]

    @property
    def tumor_segments(self) -> Mapping[str, SegmentIndex]:
        return MappingProxyType(self._segments)

    def segments(self, sample: str) -> SegmentIndex:
        return self._segments.get(sample, _EMPTY_SEGMENTS)

    def minor_allele_fraction(self, sample: str, contig: str, position: int, default: float = 0.5) -> float:
        return self.segments(sample).minor_allele_fraction(contig, position, default=default)
