"""
# Hairpin Detection

This module contains [`scan_hairpin()`][primerqc.api.hairpin.scan_hairpin], which finds the most
stable stem/loop an oligo can fold into.

Every pair of positions `(i, j)` far enough apart to enclose the minimum stem and loop is used as
the innermost pair of a stem, which is extended outward for as long as the bases stay
complementary.  Each stem of at least the minimum length is scored as the free energy of the stem
plus a loop-entropy penalty; only structures with a negative net free energy are candidates.

## Examples

```python
>>> hairpin = scan_hairpin("GGGGGGGTTTTTCCCCCCC")
>>> hairpin.stem, hairpin.start, hairpin.end, hairpin.touches_3p
('GGGGGGG', 0, 18, True)
>>> scan_hairpin("GGGAAACC") is None
True
>>> scan_hairpin("A" * 30) is None
True

```
"""

import logging
from typing import Iterator
from typing import Optional

from primerqc.api.alphabet import is_complementary
from primerqc.api.alphabet import normalize
from primerqc.api.melting import duplex_free_energy
from primerqc.api.nearest_neighbor import SANTALUCIA_1998
from primerqc.api.nearest_neighbor import SANTALUCIA_2004_LOOPS
from primerqc.api.nearest_neighbor import LoopPenaltyTable
from primerqc.api.nearest_neighbor import NearestNeighborTable
from primerqc.api.parameters import DEFAULT_SCAN_PARAMETERS
from primerqc.api.parameters import ScanParameters
from primerqc.api.ranking import most_stable
from primerqc.model import HairpinMatch

_logger = logging.getLogger(__name__)


def scan_hairpin(
    bases: str,
    params: ScanParameters = DEFAULT_SCAN_PARAMETERS,
    table: NearestNeighborTable = SANTALUCIA_1998,
    loop_penalties: LoopPenaltyTable = SANTALUCIA_2004_LOOPS,
) -> Optional[HairpinMatch]:
    """Finds the most stable hairpin within a single oligo.

    Args:
        bases: the oligo, 5'->3' (normalized before use)
        params: the scanning thresholds
        table: the nearest-neighbor parameters used to score stems
        loop_penalties: the loop-entropy penalties charged to each stem

    Returns:
        the hairpin with the lowest net free energy, or None if no hairpin is net-stable
    """
    seq = normalize(bases)
    best = most_stable(
        _hairpins(seq, params, table, loop_penalties), tolerance=params.tie_tolerance
    )
    if best is None:
        _logger.debug(f"No stable hairpin found in {seq}")
    return best


def _hairpins(
    seq: str,
    params: ScanParameters,
    table: NearestNeighborTable,
    loop_penalties: LoopPenaltyTable,
) -> Iterator[HairpinMatch]:
    """Yields every net-stable stem/loop, in scan order."""
    n = len(seq)
    for i in range(n):
        for j in range(i + params.min_stem + params.min_loop, n):
            a, b = i, j
            while a >= 0 and b < n and is_complementary(seq[a], seq[b]):
                if i - a + 1 >= params.min_stem:
                    hairpin = _score(seq, a, i, b, params, table, loop_penalties)
                    if hairpin.dg < 0:
                        yield hairpin
                a -= 1
                b += 1


def _score(
    seq: str,
    a: int,
    i: int,
    b: int,
    params: ScanParameters,
    table: NearestNeighborTable,
    loop_penalties: LoopPenaltyTable,
) -> HairpinMatch:
    """Scores the stem whose 5' arm spans `a..i` and whose outermost 3' base is at `b`."""
    stem = seq[a : i + 1]
    loop_length = b - a - 1
    loop_dg = loop_penalties.penalty(loop_length) if params.loop_entropy else 0.0
    return HairpinMatch(
        stem=stem,
        start=a,
        end=b,
        loop_length=loop_length,
        stem_dg=duplex_free_energy(stem, table=table),
        loop_dg=loop_dg,
        touches_3p=b >= len(seq) - params.hairpin_three_prime_window,
    )
