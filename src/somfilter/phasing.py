from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Set

from .models import PhaseRecord

logger = logging.getLogger(__name__)

PHASING_GT_KEY = "PGT"
PHASING_ID_KEY = "PID"


def _format_value(sample_call: Mapping[str, Any], key: str) -> Optional[str]:
    if key not in sample_call:
        return None
    value = sample_call[key]
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or value == "" or value == ".":
        return None
    return str(value)


def has_phase_info(sample_call: Mapping[str, Any]) -> bool:
    """True if a per-sample call carries both a phased genotype (PGT) and a phase-set id (PID)."""
    return (
        _format_value(sample_call, PHASING_GT_KEY) is not None
        and _format_value(sample_call, PHASING_ID_KEY) is not None
    )


class PhasedCallTracker:
    """For each phase-set id, the position and phased genotypes of the last filtered call.

    Records are written by :meth:`record_filtered_haplotypes` and never removed; a newer
    variant with the same phase-set id replaces the previous record.
    """

    def __init__(self, normal_samples: Iterable[str] = ()) -> None:
        self._normal_samples = frozenset(normal_samples)
        self._records: Dict[str, PhaseRecord] = {}

    def record_filtered_haplotypes(self, record: Any) -> None:
        """Register the phased genotypes of a filtered variant.

        ``record`` is a variant record with a 1-based ``pos`` and per-sample fields under
        ``samples`` (e.g. ``pysam.VariantRecord``). Normal samples and calls without phase
        information are ignored.
        """
        pgts_by_pid: Dict[str, Set[str]] = {}
        for sample, call in record.samples.items():
            if sample in self._normal_samples or not has_phase_info(call):
                continue
            pid = _format_value(call, PHASING_ID_KEY)
            pgt = _format_value(call, PHASING_GT_KEY)
            pgts_by_pid.setdefault(pid, set()).add(pgt)

        position = int(record.pos)
        for pid, pgts in pgts_by_pid.items():
            self._records[pid] = PhaseRecord(position=position, pgts=frozenset(pgts))
            logger.debug("Phase set %s: filtered call at %d with PGTs %s", pid, position, sorted(pgts))

    @property
    def filtered_phased_calls(self) -> Mapping[str, PhaseRecord]:
        return MappingProxyType(self._records)

    def get(self, pid: str) -> Optional[PhaseRecord]:
        return self._records.get(pid)

    def __contains__(self, pid: object) -> bool:
        return pid in self._records

    def __len__(self) -> int:
        return len(self._records)
