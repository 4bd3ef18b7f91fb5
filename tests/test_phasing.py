from types import SimpleNamespace

import pysam

from somfilter.models import PhaseRecord
from somfilter.phasing import PhasedCallTracker, has_phase_info


def _make_header(samples: list[str]) -> pysam.VariantHeader:
    header = pysam.VariantHeader()
    header.add_meta("fileformat", "VCFv4.2")
    header.contigs.add("1", length=10_000)
    header.formats.add("PGT", number=1, type="String", description="Physical phasing haplotype information")
    header.formats.add("PID", number=1, type="String", description="Physical phasing ID information")
    for s in samples:
        header.add_sample(s)
    return header


def _make_record(header: pysam.VariantHeader, pos: int, calls: dict) -> pysam.VariantRecord:
    rec = header.new_record(contig="1", start=pos - 1, stop=pos, alleles=("A", "G"))
    for sample, fields in calls.items():
        for key, value in fields.items():
            rec.samples[sample][key] = value
    return rec


def test_record_groups_tumor_pgts_by_pid():
    header = _make_header(["TUMOR1", "TUMOR2", "NORMAL"])
    rec = _make_record(
        header,
        100,
        {
            "TUMOR1": {"PGT": "0|1", "PID": "100_A_G"},
            "TUMOR2": {"PGT": "1|0", "PID": "100_A_G"},
            "NORMAL": {"PGT": "1|1", "PID": "100_A_G"},
        },
    )

    tracker = PhasedCallTracker(normal_samples={"NORMAL"})
    tracker.record_filtered_haplotypes(rec)

    assert len(tracker) == 1
    assert tracker.get("100_A_G") == PhaseRecord(position=100, pgts=frozenset({"0|1", "1|0"}))


def test_last_write_wins_for_a_phase_set():
    header = _make_header(["TUMOR", "NORMAL"])
    first = _make_record(
        header, 100, {"TUMOR": {"PGT": "0|1", "PID": "100_A_G"}, "NORMAL": {"PGT": "0|0", "PID": "100_A_G"}}
    )
    second = _make_record(
        header, 140, {"TUMOR": {"PGT": "1|0", "PID": "100_A_G"}, "NORMAL": {"PGT": "0|0", "PID": "100_A_G"}}
    )

    tracker = PhasedCallTracker(normal_samples=["NORMAL"])
    tracker.record_filtered_haplotypes(first)
    tracker.record_filtered_haplotypes(second)

    assert tracker.filtered_phased_calls == {"100_A_G": PhaseRecord(position=140, pgts=frozenset({"1|0"}))}


def test_records_without_phase_formats_are_ignored():
    header = _make_header(["TUMOR"])
    rec = header.new_record(contig="1", start=49, stop=50, alleles=("C", "T"))

    tracker = PhasedCallTracker()
    tracker.record_filtered_haplotypes(rec)
    assert len(tracker) == 0


def test_distinct_phase_sets_are_kept_apart():
    record = SimpleNamespace(
        pos=2_000,
        samples={
            "T1": {"PGT": "0|1", "PID": "1990_C_T"},
            "T2": {"PGT": "0|1", "PID": "2000_A_G"},
            "T3": {"PGT": "0|1"},
            "T4": {"PGT": None, "PID": "2000_A_G"},
            "N": {"PGT": "1|0", "PID": "1990_C_T"},
        },
    )
    tracker = PhasedCallTracker(normal_samples=["N"])
    tracker.record_filtered_haplotypes(record)

    assert "1990_C_T" in tracker
    assert tracker.get("1990_C_T") == PhaseRecord(position=2_000, pgts=frozenset({"0|1"}))
    assert tracker.get("2000_A_G") == PhaseRecord(position=2_000, pgts=frozenset({"0|1"}))
    assert tracker.get("missing") is None


def test_has_phase_info():
    assert has_phase_info({"PGT": "0|1", "PID": "10_A_G"})
    assert not has_phase_info({"PGT": "0|1"})
    assert not has_phase_info({"PID": "10_A_G"})
    assert not has_phase_info({"PGT": "", "PID": "10_A_G"})
    assert not has_phase_info({"PGT": "0|1", "PID": "."})
