import dataclasses
import math
from typing import Optional

import pytest
from fgpyo.sequence import reverse_complement

from primerqc.api.nearest_neighbor import SANTALUCIA_1998
from primerqc.api.nearest_neighbor import SANTALUCIA_2004_LOOPS
from primerqc.api.nearest_neighbor import LoopPenaltyTable
from primerqc.api.nearest_neighbor import NearestNeighborStep
from primerqc.api.nearest_neighbor import NearestNeighborTable
from primerqc.api.nearest_neighbor import accumulate
from primerqc.api.nearest_neighbor import resolve_worst_case


def test_santalucia_table_is_complete_and_strand_symmetric() -> None:
    assert len(SANTALUCIA_1998.steps) == 16
    for dinucleotide in SANTALUCIA_1998.steps:
        # a step and its reverse complement describe the same stack
        assert SANTALUCIA_1998.step(dinucleotide) == SANTALUCIA_1998.step(
            reverse_complement(dinucleotide)
        )


def test_table_missing_dinucleotides_raises() -> None:
    steps = dict(SANTALUCIA_1998.steps)
    del steps["CG"]
    with pytest.raises(ValueError, match="missing dinucleotides"):
        NearestNeighborTable(steps=steps)


def test_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        SANTALUCIA_1998.steps["AA"] = NearestNeighborStep(dh=0.0, ds=0.0)  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        SANTALUCIA_1998.init_dh = 0.0  # type: ignore[misc]


def test_table_copies_its_steps() -> None:
    steps = dict(SANTALUCIA_1998.steps)
    table = NearestNeighborTable(steps=steps)
    steps["AA"] = NearestNeighborStep(dh=0.0, ds=0.0)
    assert table.step("AA") == NearestNeighborStep(dh=-7.9, ds=-22.2)


def test_step_lookup_miss_raises() -> None:
    with pytest.raises(KeyError):
        SANTALUCIA_1998.step("NN")


def test_step_dg() -> None:
    assert SANTALUCIA_1998.step("GC").dg() == pytest.approx(-9.8 + 310.15 * 24.4 / 1000)


@pytest.mark.parametrize(
    "loop_length, expected",
    [
        (0, math.inf),
        (2, math.inf),
        (3, 5.7),
        (4, 5.6),
        (5, 4.9),
        (6, 4.4),
        (7, 4.5),
        (8, 4.6),
        (9, 4.6),
        (10, 4.7),
        (19, 5.6),
    ],
)
def test_loop_penalty(loop_length: int, expected: float) -> None:
    assert SANTALUCIA_2004_LOOPS.penalty(loop_length) == pytest.approx(expected)


def test_loop_penalty_table_invalid_min_loop() -> None:
    with pytest.raises(ValueError, match="min_loop must be >= 1, received 0"):
        LoopPenaltyTable(penalties={}, min_loop=0)


def test_loop_penalty_table_custom_extrapolation() -> None:
    table = LoopPenaltyTable(
        penalties={4: 5.0}, min_loop=4, extrapolation_anchor=4, extrapolation_base=5.0
    )
    assert table.penalty(3) == math.inf
    assert table.penalty(4) == pytest.approx(5.0)
    assert table.penalty(6) == pytest.approx(5.2)


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("A", "C", "AC"),
        ("a", "c", "AC"),
        ("N", "N", "GC"),
        ("S", "S", "GC"),
        ("W", "W", "AA"),
        ("G", "N", "GC"),
    ],
)
def test_resolve_worst_case(first: str, second: str, expected: str) -> None:
    assert resolve_worst_case(first, second) == SANTALUCIA_1998.step(expected)


@pytest.mark.parametrize("first, second", [("A", "X"), ("-", "A"), ("U", "A")])
def test_resolve_worst_case_unresolvable(first: str, second: str) -> None:
    assert resolve_worst_case(first, second) is None


@pytest.mark.parametrize(
    "bases, expected_dh, expected_ds",
    [
        ("GC", -9.6, -30.1),
        ("gc", -9.6, -30.1),
        ("ACGT", -27.2, -77.7),
        ("ATGGTGAGCAAGGGCGAGGAG", -166.8, -445.0),
    ],
)
def test_accumulate(bases: str, expected_dh: float, expected_ds: float) -> None:
    acc = accumulate(bases)
    assert acc is not None
    assert acc.dh == pytest.approx(expected_dh)
    assert acc.ds == pytest.approx(expected_ds)


def test_accumulate_degenerate_uses_most_stable_step() -> None:
    assert accumulate("NN") == accumulate("GC")
    assert accumulate("ASA") == accumulate("ACA")


@pytest.mark.parametrize("bases", ["", "G", "GXC", "G-C", "ACGU"])
def test_accumulate_unavailable(bases: str) -> None:
    assert accumulate(bases) is None


def test_accumulate_with_custom_resolver() -> None:
    def never(
        first: str, second: str, table: NearestNeighborTable
    ) -> Optional[NearestNeighborStep]:
        return None

    assert accumulate("ACGT", resolve=never) is None


def test_accumulate_with_custom_table() -> None:
    table = dataclasses.replace(SANTALUCIA_1998, init_dh=0.0, init_ds=0.0)
    acc = accumulate("GC", table=table)
    assert acc is not None
    assert acc.dh == pytest.approx(-9.8)
    assert acc.ds == pytest.approx(-24.4)
