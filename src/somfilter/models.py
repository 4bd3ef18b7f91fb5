from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class ContaminationRecord:
    """Contamination estimate for one sample.

    Attributes
    ----------
    sample:
        Sample name as present in the VCF header.
    contamination:
        Estimated fraction of reads originating from another individual, in [0,1].
    """

    sample: str
    contamination: float


@dataclass(frozen=True)
class MinorAlleleFractionRecord:
    """A copy-number segment annotated with its minor-allele fraction.

    Coordinates are 1-based closed intervals, as in segmentation tables.

    Attributes
    ----------
    contig:
        Contig name as present in the VCF.
    start, end:
        1-based inclusive segment bounds; ``start <= end``.
    minor_allele_fraction:
        Expected minor-allele fraction within the segment.
    """

    contig: str
    start: int
    end: int
    minor_allele_fraction: float

    def overlaps(self, contig: str, start: int, end: int) -> bool:
        return self.contig == contig and self.start <= end and start <= self.end


@dataclass(frozen=True)
class PhaseRecord:
    """Last variant seen for a phase set, with the phased genotypes of its filtered calls."""

    position: int  # 1-based start of the variant
    pgts: FrozenSet[str]
