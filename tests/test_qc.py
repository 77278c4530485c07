from pathlib import Path

import pytest

from primerqc import PrimerQc
from primerqc import Severity
from primerqc import Thermo
from primerqc import qc_primer
from primerqc import qc_primer_pair
from primerqc.qc import has_gc_clamp
from primerqc.qc import has_homopolymer
from primerqc.qc import score_label


@pytest.mark.parametrize(
    "bases, expected",
    [
        ("ACGTG", True),
        ("ACGTC", True),
        ("ACGTA", False),
        ("acgtg ", True),
        ("ACGTS", False),
        ("", False),
    ],
)
def test_has_gc_clamp(bases: str, expected: bool) -> None:
    assert has_gc_clamp(bases) == expected


@pytest.mark.parametrize(
    "bases, max_run, expected",
    [
        ("AAAAC", 4, True),
        ("ACGGGGT", 4, True),
        ("AAACG", 4, False),
        ("AAACG", 3, True),
        ("ACGT", 4, False),
        ("ACGNNNNACG", 4, False),  # degenerate codes are not homopolymers
        ("AANAAT", 3, False),  # a degenerate code breaks a run
        ("NNGGGGN", 4, True),
        ("", 4, False),
    ],
)
def test_has_homopolymer(bases: str, max_run: int, expected: bool) -> None:
    assert has_homopolymer(bases, max_run=max_run) == expected


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, "Excellent"),
        (85, "Excellent"),
        (84, "Acceptable"),
        (65, "Acceptable"),
        (64, "Risky"),
        (0, "Risky"),
    ],
)
def test_score_label(score: int, expected: str) -> None:
    assert score_label(score) == expected


def test_qc_primer_golden(golden_primer: str, thermo: Thermo) -> None:
    report = qc_primer(golden_primer, name="egfp_fwd", thermo=thermo)
    assert report.name == "egfp_fwd"
    assert report.bases == golden_primer
    assert report.length == 21
    assert report.gc_percent == pytest.approx(100 * 13 / 21)
    assert report.tm == pytest.approx(61.365, abs=0.01)
    assert report.gc_clamp
    assert not report.homopolymer
    assert report.three_prime_dg == pytest.approx(-3.7485, abs=1e-3)
    assert not report.has_degenerate

    # T and C are each three or more bases apart, so no three consecutive pairs can form
    assert report.self_dimer_dg is None
    assert report.self_dimer_label == "None"
    assert report.self_dimer_severity == Severity.OK
    assert report.hairpin_dg is None
    assert report.hairpin_label == "None"
    assert report.hairpin_severity == Severity.OK

    # only the GC content (61.9%) is out of range
    assert report.score == 90
    assert report.rating == "Excellent"


@pytest.mark.parametrize(
    "bases, has_degenerate",
    [
        ("A" * 20, False),
        ("A" * 19 + "N", True),
    ],
)
def test_qc_primer_without_structures(bases: str, has_degenerate: bool) -> None:
    report = qc_primer(bases)
    assert report.name == "primer"
    assert report.gc_percent == 0.0
    assert not report.gc_clamp
    assert report.homopolymer
    assert report.self_dimer_dg is None
    assert report.self_dimer_label == "None"
    assert report.self_dimer_severity == Severity.OK
    assert report.hairpin_dg is None
    assert report.hairpin_label == "None"
    assert report.hairpin_severity == Severity.OK
    assert report.has_degenerate == has_degenerate
    # GC content (-10), no GC clamp (-5) and a homopolymer (-8)
    assert report.score == 77
    assert report.rating == "Acceptable"


def test_qc_primer_strong_self_dimer() -> None:
    report = qc_primer("ACGTACGTACGTACGTACGT")
    assert report.self_dimer_dg == pytest.approx(-25.3192, abs=1e-3)
    assert report.self_dimer_label == "3' Very strong"
    assert report.self_dimer_severity == Severity.BAD


def test_qc_primer_uses_reaction_conditions(golden_primer: str) -> None:
    thermo = Thermo(mv_conc_mm=100, dv_conc_mm=1.5)
    assert qc_primer(golden_primer, thermo=thermo).tm == thermo.tm(golden_primer)
    assert qc_primer(golden_primer, thermo=thermo).tm > qc_primer(golden_primer).tm


@pytest.mark.parametrize("bases", ["", "   ", "123-"])
def test_qc_primer_empty_raises(bases: str) -> None:
    with pytest.raises(ValueError, match="no bases"):
        qc_primer(bases)


def test_qc_primer_metric_round_trip(tmp_path: Path, golden_primer: str) -> None:
    reports = [qc_primer(golden_primer, name="egfp_fwd"), qc_primer("A" * 20, name="poly_a")]
    path = tmp_path / "qc.txt"

    PrimerQc.write(path, *reports)
    loaded = list(PrimerQc.read(path=path))

    assert len(loaded) == len(reports)
    for actual, expected in zip(loaded, reports, strict=True):
        assert actual.name == expected.name
        assert actual.bases == expected.bases
        assert actual.length == expected.length
        assert actual.gc_clamp == expected.gc_clamp
        assert actual.homopolymer == expected.homopolymer
        assert actual.self_dimer_label == expected.self_dimer_label
        assert actual.hairpin_severity == expected.hairpin_severity
        assert actual.score == expected.score
        assert actual.tm == pytest.approx(expected.tm, abs=1e-4)
        assert actual.three_prime_dg == pytest.approx(expected.three_prime_dg, abs=1e-4)
    assert loaded[1].self_dimer_dg is None
    assert loaded[1].hairpin_dg is None


def test_qc_primer_pair() -> None:
    pair = qc_primer_pair("GACCTAAAAAA", "CCCCCCAGGTC", fwd_name="f1", rev_name="r1")
    assert pair.fwd.name == "f1"
    assert pair.rev.name == "r1"
    assert pair.cross_dimer is not None
    assert pair.cross_dimer.segment == "GACCT"
    assert pair.cross_dimer.dg == pytest.approx(-3.914, abs=1e-3)
    assert pair.cross_dimer_class.label == "3' Moderate"
    assert pair.cross_dimer_class.severity == Severity.WARN
    assert pair.worst_severity == Severity.WARN


def test_qc_primer_pair_without_cross_dimer() -> None:
    pair = qc_primer_pair("A" * 20, "C" * 20)
    assert pair.cross_dimer is None
    assert pair.cross_dimer_class.label == "None"
    assert pair.cross_dimer_class.severity == Severity.OK


def test_qc_primer_pair_empty_raises() -> None:
    with pytest.raises(ValueError, match="no bases"):
        qc_primer_pair("ACGTACGT", "")
