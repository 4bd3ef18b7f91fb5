from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .models import MinorAlleleFractionRecord
from .validation import check_fraction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ContigSegments:
    """Per-contig segment lookup structure."""

    starts: List[int]  # sorted 1-based starts
    max_ends: List[int]  # running maximum of segment ends, aligned with starts
    segments: List[MinorAlleleFractionRecord]  # aligned with starts


class SegmentIndex:
    """Point and interval overlap queries over minor-allele-fraction segments of one sample.

    Segments are kept per contig, sorted by start, alongside a running maximum of their ends.
    A query bisects on the starts and walks left only while the running maximum can still
    reach the query, so overlapping segments are supported.
    """

    def __init__(self, by_contig: Dict[str, _ContigSegments]) -> None:
        self._by_contig = by_contig

    @classmethod
    def from_records(cls, records: Iterable[MinorAlleleFractionRecord]) -> SegmentIndex:
        by_contig: Dict[str, List[MinorAlleleFractionRecord]] = {}
        for rec in records:
            if rec.start > rec.end:
                raise ValueError(f"Segment {rec.contig}:{rec.start}-{rec.end} has start > end")
            check_fraction(rec.minor_allele_fraction, "minor_allele_fraction")
            by_contig.setdefault(rec.contig, []).append(rec)

        index: Dict[str, _ContigSegments] = {}
        for contig, lst in by_contig.items():
            lst_sorted = sorted(lst, key=lambda s: (s.start, s.end))
            max_ends: List[int] = []
            running = lst_sorted[0].end
            for seg in lst_sorted:
                running = max(running, seg.end)
                max_ends.append(running)
            index[contig] = _ContigSegments(
                starts=[s.start for s in lst_sorted],
                max_ends=max_ends,
                segments=lst_sorted,
            )
        logger.debug("Indexed %d segments on %d contigs", sum(len(v) for v in by_contig.values()), len(index))
        return cls(index)

    def __len__(self) -> int:
        return sum(len(c.segments) for c in self._by_contig.values())

    @property
    def contigs(self) -> List[str]:
        return list(self._by_contig)

    def overlapping(self, contig: str, start: int, end: Optional[int] = None) -> List[MinorAlleleFractionRecord]:
        """Return segments overlapping the closed interval [start, end], ordered by start.

        ``end`` defaults to ``start`` for a single-position query.
        """
        if end is None:
            end = start
        idx = self._by_contig.get(contig)
        if idx is None:
            return []

        hits: List[MinorAlleleFractionRecord] = []
        i = bisect.bisect_right(idx.starts, end) - 1
        while i >= 0 and idx.max_ends[i] >= start:
            if idx.segments[i].end >= start:
                hits.append(idx.segments[i])
            i -= 1
        hits.reverse()
        return hits

    def minor_allele_fraction(self, contig: str, position: int, default: float = 0.5) -> float:
        """Minor-allele fraction of the first segment covering ``position``, else ``default``."""
        hits = self.overlapping(contig, position)
        if not hits:
            return default
        return hits[0].minor_allele_fraction
