"""
# Nearest-Neighbor Parameters and Accumulation

This module holds the read-only thermodynamic configuration of the engine and the accumulator
that walks a sequence's dinucleotide steps:

- [`NearestNeighborTable`][primerqc.api.nearest_neighbor.NearestNeighborTable] -- stacking
    enthalpy/entropy for the 16 concrete dinucleotides plus initiation and symmetry terms.
    [`SANTALUCIA_1998`][primerqc.api.nearest_neighbor.SANTALUCIA_1998] is the default.
- [`LoopPenaltyTable`][primerqc.api.nearest_neighbor.LoopPenaltyTable] -- hairpin loop-entropy
    penalties by loop length.
    [`SANTALUCIA_2004_LOOPS`][primerqc.api.nearest_neighbor.SANTALUCIA_2004_LOOPS] is the default.
- [`resolve_worst_case()`][primerqc.api.nearest_neighbor.resolve_worst_case] -- the risk-averse
    policy for degenerate positions: always score the most stable concrete resolution.
- [`accumulate()`][primerqc.api.nearest_neighbor.accumulate] -- sums dH/dS over a sequence.

## Examples

```python
>>> acc = accumulate("GC")
>>> round(acc.dh, 2), round(acc.ds, 2)
(-9.6, -30.1)
>>> accumulate("NN") == accumulate("GC")
True
>>> accumulate("G") is None
True
>>> SANTALUCIA_2004_LOOPS.penalty(3)
5.7
>>> SANTALUCIA_2004_LOOPS.penalty(2)
inf

```
"""

import itertools
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable
from typing import Mapping
from typing import Optional

from primerqc.api.alphabet import CANONICAL_BASES
from primerqc.api.alphabet import base_set
from primerqc.model import T37_KELVIN
from primerqc.model import ThermoAccumulation


@dataclass(slots=True, frozen=True, init=True)
class NearestNeighborStep:
    """The stacking parameters of one concrete dinucleotide.

    Attributes:
        dh: the enthalpy in kcal/mol
        ds: the entropy in cal/(mol*K)
    """

    dh: float
    ds: float

    def dg(self, temp_k: float = T37_KELVIN) -> float:
        """Returns the free energy (kcal/mol) of the step at the given temperature (Kelvin)."""
        return self.dh - (temp_k * self.ds) / 1000.0


@dataclass(frozen=True, kw_only=True)
class NearestNeighborTable:
    """A complete, read-only table of nearest-neighbor parameters.

    Attributes:
        steps: the parameters of each of the 16 concrete dinucleotides, keyed by the
            dinucleotide read 5'->3' (e.g. `"AG"`)
        init_dh: the initiation enthalpy added once per duplex (kcal/mol)
        init_ds: the initiation entropy added once per duplex (cal/(mol*K))
        symmetry_ds: the entropy correction applied to self-complementary duplexes

    Raises:
        ValueError: if any of the 16 concrete dinucleotides is missing from `steps`
    """

    steps: Mapping[str, NearestNeighborStep]
    init_dh: float = 0.2
    init_ds: float = -5.7
    symmetry_ds: float = -1.4

    def __post_init__(self) -> None:
        missing = [
            a + b
            for a, b in itertools.product(CANONICAL_BASES, repeat=2)
            if a + b not in self.steps
        ]
        if len(missing) > 0:
            raise ValueError(f"Nearest-neighbor table is missing dinucleotides: {missing}")
        object.__setattr__(self, "steps", MappingProxyType(dict(self.steps)))

    def step(self, dinucleotide: str) -> NearestNeighborStep:
        """Returns the parameters of a concrete dinucleotide.

        Raises:
            KeyError: if the dinucleotide is not made of two concrete bases
        """
        return self.steps[dinucleotide]


SANTALUCIA_1998: NearestNeighborTable = NearestNeighborTable(
    steps={
        "AA": NearestNeighborStep(dh=-7.9, ds=-22.2),
        "TT": NearestNeighborStep(dh=-7.9, ds=-22.2),
        "AT": NearestNeighborStep(dh=-7.2, ds=-20.4),
        "TA": NearestNeighborStep(dh=-7.2, ds=-21.3),
        "CA": NearestNeighborStep(dh=-8.5, ds=-22.7),
        "TG": NearestNeighborStep(dh=-8.5, ds=-22.7),
        "GT": NearestNeighborStep(dh=-8.4, ds=-22.4),
        "AC": NearestNeighborStep(dh=-8.4, ds=-22.4),
        "CT": NearestNeighborStep(dh=-7.8, ds=-21.0),
        "AG": NearestNeighborStep(dh=-7.8, ds=-21.0),
        "GA": NearestNeighborStep(dh=-8.2, ds=-22.2),
        "TC": NearestNeighborStep(dh=-8.2, ds=-22.2),
        "CG": NearestNeighborStep(dh=-10.6, ds=-27.2),
        "GC": NearestNeighborStep(dh=-9.8, ds=-24.4),
        "GG": NearestNeighborStep(dh=-8.0, ds=-19.9),
        "CC": NearestNeighborStep(dh=-8.0, ds=-19.9),
    }
)
"""DNA/DNA stacking parameters in 1 M Na+ (SantaLucia 1998; Allawi & SantaLucia 1997)."""


@dataclass(frozen=True, kw_only=True)
class LoopPenaltyTable:
    """Hairpin loop-entropy penalties (kcal/mol, 37 C) by loop length.

    Lengths present in `penalties` use the tabulated value.  Longer loops are extrapolated
    linearly as `extrapolation_base + extrapolation_slope * (length - extrapolation_anchor)`.
    Loops shorter than `min_loop` cannot close and have an infinite penalty.

    The extrapolation constants are empirical approximations, not fitted biophysical values.

    Attributes:
        penalties: tabulated penalties keyed by loop length
        min_loop: the shortest loop that can close
        extrapolation_anchor: the loop length the extrapolation starts from
        extrapolation_base: the penalty at `extrapolation_anchor`
        extrapolation_slope: the additional penalty per base beyond `extrapolation_anchor`
    """

    penalties: Mapping[int, float]
    min_loop: int = 3
    extrapolation_anchor: int = 9
    extrapolation_base: float = 4.6
    extrapolation_slope: float = 0.1

    def __post_init__(self) -> None:
        if self.min_loop < 1:
            raise ValueError(f"min_loop must be >= 1, received {self.min_loop}")
        object.__setattr__(self, "penalties", MappingProxyType(dict(self.penalties)))

    def penalty(self, loop_length: int) -> float:
        """Returns the loop-entropy penalty (kcal/mol) for a loop of the given length."""
        if loop_length < self.min_loop:
            return math.inf
        if loop_length in self.penalties:
            return self.penalties[loop_length]
        return self.extrapolation_base + self.extrapolation_slope * (
            loop_length - self.extrapolation_anchor
        )


SANTALUCIA_2004_LOOPS: LoopPenaltyTable = LoopPenaltyTable(
    penalties={3: 5.7, 4: 5.6, 5: 4.9, 6: 4.4, 7: 4.5, 8: 4.6, 9: 4.6}
)
"""Hairpin loop penalties approximated from SantaLucia & Hicks (2004)."""


StepResolver = Callable[[str, str, NearestNeighborTable], Optional[NearestNeighborStep]]
"""Chooses the parameters of a (possibly degenerate) dinucleotide, or None if unresolvable."""


def resolve_worst_case(
    first: str, second: str, table: NearestNeighborTable = SANTALUCIA_1998
) -> Optional[NearestNeighborStep]:
    """Resolves a possibly-degenerate dinucleotide to its most stable concrete interpretation.

    All concrete resolutions of both codes are enumerated and the step with the most negative
    free energy at 37 C is returned.  This is deliberately risk-averse: an ambiguous primer is
    scored as if it took whichever identity is most prone to forming structure.

    Args:
        first: the 5' IUPAC code of the step
        second: the 3' IUPAC code of the step
        table: the nearest-neighbor parameters

    Returns:
        the most stable step, or None if either code has no concrete resolution
    """
    candidates = [
        table.step(a + b)
        for a, b in itertools.product(sorted(base_set(first)), sorted(base_set(second)))
    ]
    if len(candidates) == 0:
        return None
    return min(candidates, key=lambda step: step.dg())


def accumulate(
    bases: str,
    table: NearestNeighborTable = SANTALUCIA_1998,
    resolve: StepResolver = resolve_worst_case,
) -> Optional[ThermoAccumulation]:
    """Sums the nearest-neighbor enthalpy and entropy over every dinucleotide step of a sequence.

    The sequence is upper-cased but *not* filtered: a character outside the IUPAC alphabet makes
    its steps unresolvable and the whole accumulation unavailable.

    Args:
        bases: the sequence, 5'->3'
        table: the nearest-neighbor parameters
        resolve: the policy used to pick parameters for degenerate steps

    Returns:
        the summed dH/dS including the table's initiation terms, or None if the sequence is
        shorter than two bases or any step could not be resolved
    """
    seq = bases.upper()
    if len(seq) < 2:
        return None

    dh = table.init_dh
    ds = table.init_ds
    for first, second in itertools.pairwise(seq):
        step = resolve(first, second, table)
        if step is None:
            return None
        dh += step.dh
        ds += step.ds

    return ThermoAccumulation(dh=dh, ds=ds)
