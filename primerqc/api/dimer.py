"""
# Self- and Cross-Dimer Detection

This module contains [`scan_dimer()`][primerqc.api.dimer.scan_dimer], which finds the most
stable complementary run between two oligos (or two copies of the same oligo).

The second oligo (`B`) is reversed and slid along the first (`A`) over every relative offset
that leaves at least one base overlapping.  At each offset, maximal runs of complementary
positions ("islands") are collected.  Two islands separated by exactly one mismatched base are
bridged into a single run when the bridged run, charged a bubble penalty, is more stable than
either island on its own.  Runs that are long and stable enough become candidates, and the best
candidate is chosen by [`most_stable()`][primerqc.api.ranking.most_stable].

## Examples

```python
>>> match = scan_dimer("ACGTACGTACGTACGTACGT", "ACGTACGTACGTACGTACGT")
>>> match.offset, match.start, match.end, match.touches_3p_a, match.touches_3p_b
(0, 0, 19, True, True)
>>> print(scan_dimer("GGATCC", "GGATCC").alignment)
5' GGATCC 3'
   ||||||
3' CCTAGG 5'
>>> scan_dimer("AAAAAAAA", "CCCCCCCC") is None
True

```
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Iterator
from typing import Optional

from primerqc.api.alphabet import is_complementary
from primerqc.api.alphabet import normalize
from primerqc.api.melting import duplex_free_energy
from primerqc.api.nearest_neighbor import SANTALUCIA_1998
from primerqc.api.nearest_neighbor import NearestNeighborTable
from primerqc.api.parameters import DEFAULT_SCAN_PARAMETERS
from primerqc.api.parameters import ScanParameters
from primerqc.api.ranking import most_stable
from primerqc.model import DimerMatch

_logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True, init=True)
class _Run:
    """A complementary run at one offset, possibly bridging single-base mismatches.

    Coordinates are 0-based inclusive positions on `A`.
    """

    start: int
    end: int
    dg: float
    mismatches: tuple[int, ...] = ()

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(slots=True, frozen=True, init=True)
class _Candidate:
    """A run that passed the length/stability floor, with its 3' end contacts."""

    offset: int
    run: _Run
    touches_3p_a: bool
    touches_3p_b: bool

    @property
    def dg(self) -> float:
        return self.run.dg

    @property
    def touches_3p(self) -> bool:
        return self.touches_3p_a or self.touches_3p_b


def scan_dimer(
    seq_a: str,
    seq_b: str,
    params: ScanParameters = DEFAULT_SCAN_PARAMETERS,
    table: NearestNeighborTable = SANTALUCIA_1998,
) -> Optional[DimerMatch]:
    """Finds the most stable duplex between two oligos.

    When the two (normalized) sequences are identical the duplex is treated as a self-dimer and
    every run's free energy includes the symmetry correction.

    Args:
        seq_a: the first oligo, 5'->3'
        seq_b: the second oligo, 5'->3'
        params: the scanning thresholds
        table: the nearest-neighbor parameters

    Returns:
        the most stable run, or None if no run is at least `params.min_run_length` long with a
        free energy below `params.max_run_dg`
    """
    a = normalize(seq_a)
    b = normalize(seq_b)
    if len(a) == 0 or len(b) == 0:
        return None

    symmetric = a == b
    b_rev = b[::-1]

    candidates = (
        candidate
        for offset in range(-(len(b) - 1), len(a))
        for candidate in _candidates_at(a, b_rev, offset, symmetric, params, table)
    )
    best = most_stable(candidates, tolerance=params.tie_tolerance)
    if best is None:
        _logger.debug(f"No dimer found between {a} and {b}")
        return None

    run = best.run
    segment = "".join(
        "." if i in run.mismatches else a[i] for i in range(run.start, run.end + 1)
    )
    return DimerMatch(
        offset=best.offset,
        start=run.start,
        end=run.end,
        segment=segment,
        dg=run.dg,
        bubbles=len(run.mismatches),
        touches_3p_a=best.touches_3p_a,
        touches_3p_b=best.touches_3p_b,
        alignment=render_alignment(a, b_rev, best.offset),
    )


def _candidates_at(
    a: str,
    b_rev: str,
    offset: int,
    symmetric: bool,
    params: ScanParameters,
    table: NearestNeighborTable,
) -> Iterator[_Candidate]:
    """Yields the runs at one offset that pass the length and stability floor."""
    islands = _islands(a, b_rev, offset, symmetric, table)
    runs = _bridge_bubbles(islands, params.bubble_penalty) if params.bubble_tolerance else islands
    window = params.dimer_three_prime_window
    for run in runs:
        if run.length < params.min_run_length or not run.dg < params.max_run_dg:
            continue
        # The 3'-most base of B in the run faces the first base of the run on A
        yield _Candidate(
            offset=offset,
            run=run,
            touches_3p_a=run.end >= len(a) - window,
            touches_3p_b=run.start - offset < window,
        )


def _islands(
    a: str, b_rev: str, offset: int, symmetric: bool, table: NearestNeighborTable
) -> list[_Run]:
    """Returns the maximal runs of complementary positions of `A` against reversed `B`."""
    first = max(0, offset)
    last = min(len(a), len(b_rev) + offset)
    islands: list[_Run] = []
    for paired, group in itertools.groupby(
        range(first, last), key=lambda i: is_complementary(a[i], b_rev[i - offset])
    ):
        if not paired:
            continue
        positions = list(group)
        start, end = positions[0], positions[-1]
        dg = duplex_free_energy(a[start : end + 1], symmetric=symmetric, table=table)
        islands.append(_Run(start=start, end=end, dg=dg))
    return islands


def _bridge_bubbles(islands: list[_Run], bubble_penalty: float) -> list[_Run]:
    """Merges consecutive runs separated by a single mismatch when the merge is more stable.

    A merge is kept only if `dG(left) + dG(right) + bubble_penalty` is lower than the free
    energy of either side alone.  Merged runs may absorb further islands, left to right.
    """
    runs: list[_Run] = []
    for island in islands:
        if len(runs) > 0 and island.start - runs[-1].end == 2:
            left = runs[-1]
            merged_dg = left.dg + island.dg + bubble_penalty
            # NaN (single-base islands) never compares as more stable
            if merged_dg < min(left.dg, island.dg):
                _logger.debug(
                    f"Bridging mismatch at {left.end + 1}: {left.dg:.2f} + {island.dg:.2f} "
                    f"+ {bubble_penalty} = {merged_dg:.2f}"
                )
                runs[-1] = _Run(
                    start=left.start,
                    end=island.end,
                    dg=merged_dg,
                    mismatches=left.mismatches + (left.end + 1,),
                )
                continue
        runs.append(island)
    return runs


def render_alignment(a: str, b_rev: str, offset: int) -> str:
    """Renders both oligos antiparallel at the given offset.

    The first line is `A` 5'->3', the third is `B` 3'->5' (i.e. `B` reversed), and the middle
    line marks overlapping positions with `|` when complementary and `.` when not.

    Args:
        a: the first oligo, 5'->3'
        b_rev: the second oligo, reversed (3'->5')
        offset: the position on `A` facing the first base of `b_rev`

    Returns:
        the three-line alignment
    """
    top: list[str] = []
    middle: list[str] = []
    bottom: list[str] = []
    for pos in range(min(0, offset), max(len(a), len(b_rev) + offset)):
        j = pos - offset
        base_a = a[pos] if 0 <= pos < len(a) else " "
        base_b = b_rev[j] if 0 <= j < len(b_rev) else " "
        if base_a == " " or base_b == " ":
            middle.append(" ")
        else:
            middle.append("|" if is_complementary(base_a, base_b) else ".")
        top.append(base_a)
        bottom.append(base_b)
    return f"5' {''.join(top)} 3'\n   {''.join(middle)}\n3' {''.join(bottom)} 5'"
