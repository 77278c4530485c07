"""
# Methods for calculating melting temperatures and duplex free energies.


There are currently three public methods available:

- [`melting_temperature()`][primerqc.api.melting.melting_temperature] -- Calculates the
    nearest-neighbor melting temperature of a primer with salt and Mg2+ correction.
- [`duplex_free_energy()`][primerqc.api.melting.duplex_free_energy] -- Calculates the free
    energy at 37 C of a sequence paired with its complement.
- [`three_prime_dg()`][primerqc.api.melting.three_prime_dg] -- Calculates the free energy of the
    last few bases of a primer, a measure of 3' end stability.

All three return `NaN` rather than raising when the value cannot be computed (sequences that are
too short, unresolvable bases, negative Mg2+, non-positive salt or strand concentrations).

## Examples


```python
>>> round(melting_temperature("ATGGTGAGCAAGGGCGAGGAG", mv_conc_mm=50, dv_conc_mm=0), 1)
61.4
>>> round(duplex_free_energy("GC"), 3)
-0.264
>>> round(duplex_free_energy("GC", symmetric=True), 3)
0.17
>>> import math
>>> math.isnan(melting_temperature("A"))
True

```
"""

import math

from primerqc.api.alphabet import normalize
from primerqc.api.nearest_neighbor import SANTALUCIA_1998
from primerqc.api.nearest_neighbor import NearestNeighborTable
from primerqc.api.nearest_neighbor import accumulate
from primerqc.model import GAS_CONSTANT
from primerqc.model import T37_KELVIN

SALT_ENTROPY_COEFFICIENT: float = 0.368
"""Entropy per phosphate per natural-log unit of monovalent cation (SantaLucia 1998)."""

MG_EQUIVALENCE_FACTOR: float = 4.0
"""The multiplier of sqrt([Mg2+]) when converting Mg2+ to an equivalent Na+ concentration."""

STRAND_CONCENTRATION_DIVISOR: float = 4.0
"""The strand-concentration divisor for non-self-complementary duplexes."""


def melting_temperature(
    bases: str,
    mv_conc_mm: float = 50.0,
    dv_conc_mm: float = 0.0,
    dna_conc_nm: float = 500.0,
    table: NearestNeighborTable = SANTALUCIA_1998,
) -> float:
    """Calculate the nearest-neighbor melting temperature of a primer.

    Divalent cations are folded into an equivalent monovalent concentration (von Ahsen 2001):

    `[Na_eq] = ([Na+] + 4 x sqrt([Mg2+])) / 1000` (molar, inputs in mM)

    which enters as a log-salt correction of the entropy (SantaLucia 1998):

    `dS_salt = dS + 0.368 x (N - 1) x ln[Na_eq]`

    and the melting temperature is solved as:

    `Tm = dH x 1000 / (dS_salt + R x ln(Ct / 4)) - 273.15`

    Degenerate bases are scored with their most stable interpretation.

    Args:
        bases: the primer sequence (normalized before use)
        mv_conc_mm: the concentration of monovalent cations in mM
        dv_conc_mm: the concentration of divalent cations in mM
        dna_conc_nm: the total concentration of primer strands in nM
        table: the nearest-neighbor parameters

    Returns:
        the predicted melting temperature in Celsius, or `NaN` if it cannot be computed
    """
    seq = normalize(bases)
    acc = accumulate(seq, table=table)
    if acc is None:
        return math.nan

    strand_conc = dna_conc_nm * 1e-9
    if strand_conc <= 0:
        return math.nan

    if dv_conc_mm < 0:
        return math.nan
    divalent_eq = MG_EQUIVALENCE_FACTOR * math.sqrt(dv_conc_mm)
    monovalent_eq = (mv_conc_mm + divalent_eq) / 1000.0
    if monovalent_eq <= 0:
        return math.nan

    ds_salt = acc.ds + SALT_ENTROPY_COEFFICIENT * (len(seq) - 1) * math.log(monovalent_eq)
    tm_kelvin = (acc.dh * 1000.0) / (
        ds_salt + GAS_CONSTANT * math.log(strand_conc / STRAND_CONCENTRATION_DIVISOR)
    )
    return tm_kelvin - 273.15


def duplex_free_energy(
    bases: str, symmetric: bool = False, table: NearestNeighborTable = SANTALUCIA_1998
) -> float:
    """Calculate the free energy at 37 C of a sequence paired with its complement.

    Uses the formula:

    `dG = dH - T x dS / 1000` with `T = 310.15 K`

    Args:
        bases: the sequence of one strand of the duplex, 5'->3' (not normalized; any character
            outside the IUPAC alphabet makes the result unavailable)
        symmetric: True if the duplex forms from two copies of the same molecule, in which case
            the table's symmetry correction is added to the entropy
        table: the nearest-neighbor parameters

    Returns:
        the free energy in kcal/mol, or `NaN` if it cannot be computed
    """
    acc = accumulate(bases, table=table)
    if acc is None:
        return math.nan
    ds = acc.ds + table.symmetry_ds if symmetric else acc.ds
    return acc.dh - (T37_KELVIN * ds) / 1000.0


def three_prime_dg(
    bases: str, window: int = 5, table: NearestNeighborTable = SANTALUCIA_1998
) -> float:
    """Calculate the free energy of the 3'-most `window` bases of a primer.

    A very negative value means a "sticky" 3' end that can prime from partially matched sites.

    Args:
        bases: the primer sequence (normalized before use)
        window: the number of 3' bases to consider
        table: the nearest-neighbor parameters

    Returns:
        the free energy in kcal/mol, or `NaN` if the primer is shorter than `window`
    """
    seq = normalize(bases)
    if window < 2 or len(seq) < window:
        return math.nan
    return duplex_free_energy(seq[-window:], table=table)
