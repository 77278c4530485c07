import dataclasses

import pytest

from primerqc.model import T37_KELVIN
from primerqc.model import DimerMatch
from primerqc.model import HairpinMatch
from primerqc.model import Severity
from primerqc.model import ThermoAccumulation


def test_thermo_accumulation_dg() -> None:
    acc = ThermoAccumulation(dh=-9.6, ds=-30.1)
    assert acc.dg() == pytest.approx(-0.264485)
    assert acc.dg(T37_KELVIN) == acc.dg()
    assert acc.dg(temp_k=273.15) < acc.dg()


@pytest.mark.parametrize(
    "severity, value, level",
    [
        (Severity.OK, "ok", 0),
        (Severity.WARN, "warn", 1),
        (Severity.BAD, "bad", 2),
    ],
)
def test_severity(severity: Severity, value: str, level: int) -> None:
    assert severity == value
    assert Severity(value) is severity
    assert severity.level == level


def _dimer(**kwargs: object) -> DimerMatch:
    fields = {
        "offset": 0,
        "start": 2,
        "end": 7,
        "segment": "GAATTC",
        "dg": -3.1,
        "bubbles": 0,
        "touches_3p_a": False,
        "touches_3p_b": False,
        "alignment": "",
    }
    fields.update(kwargs)
    return DimerMatch(**fields)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "touches_3p_a, touches_3p_b, expected",
    [
        (False, False, False),
        (True, False, True),
        (False, True, True),
        (True, True, True),
    ],
)
def test_dimer_match_touches_3p(touches_3p_a: bool, touches_3p_b: bool, expected: bool) -> None:
    dimer = _dimer(touches_3p_a=touches_3p_a, touches_3p_b=touches_3p_b)
    assert dimer.touches_3p == expected


def test_dimer_match_length() -> None:
    assert _dimer().length == 6


def test_hairpin_match() -> None:
    hairpin = HairpinMatch(
        stem="GGG",
        start=0,
        end=10,
        loop_length=9,
        stem_dg=-5.0,
        loop_dg=4.6,
        touches_3p=True,
    )
    assert hairpin.stem_length == 3
    assert hairpin.dg == pytest.approx(-0.4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        hairpin.stem = "CCC"  # type: ignore[misc]
