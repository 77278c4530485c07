"""
# Ranking of Secondary-Structure Candidates

The dimer and hairpin scanners generate many candidate structures; this module picks the one to
report.  The policy is:

1. a candidate beats the incumbent if its free energy is lower by more than a tolerance;
2. within the tolerance, a candidate touching a 3' end beats one that does not;
3. otherwise the incumbent (the earlier candidate) is kept.

## Examples

```python
>>> from dataclasses import dataclass
>>> @dataclass
... class Candidate:
...     dg: float
...     touches_3p: bool
>>> prefer(Candidate(-5.0, False), Candidate(-5.05, True))
Candidate(dg=-5.05, touches_3p=True)
>>> prefer(Candidate(-5.0, True), Candidate(-5.05, False))
Candidate(dg=-5.0, touches_3p=True)
>>> most_stable([Candidate(-2.0, False), Candidate(-6.0, False), Candidate(-4.0, True)])
Candidate(dg=-6.0, touches_3p=False)
>>> most_stable([]) is None
True

```
"""

from functools import reduce
from typing import Iterable
from typing import Optional
from typing import Protocol
from typing import TypeVar

DEFAULT_TIE_TOLERANCE: float = 0.1
"""Free energies (kcal/mol) closer than this are considered tied."""


class Ranked(Protocol):
    """A structure that can be ranked: it has a free energy and may touch a 3' end."""

    @property
    def dg(self) -> float: ...

    @property
    def touches_3p(self) -> bool: ...


RankedType = TypeVar("RankedType", bound=Ranked)


def prefer(
    incumbent: RankedType, candidate: RankedType, tolerance: float = DEFAULT_TIE_TOLERANCE
) -> RankedType:
    """Returns whichever of the two structures should be reported.

    Args:
        incumbent: the best structure seen so far
        candidate: the structure being considered
        tolerance: free energies closer than this are considered tied

    Returns:
        `candidate` if it is clearly more stable, or tied and the only one touching a 3' end;
        `incumbent` otherwise
    """
    if candidate.dg < incumbent.dg - tolerance:
        return candidate
    if (
        abs(candidate.dg - incumbent.dg) <= tolerance
        and candidate.touches_3p
        and not incumbent.touches_3p
    ):
        return candidate
    return incumbent


def most_stable(
    candidates: Iterable[RankedType], tolerance: float = DEFAULT_TIE_TOLERANCE
) -> Optional[RankedType]:
    """Folds [`prefer()`][primerqc.api.ranking.prefer] over the candidates in order.

    Args:
        candidates: the structures to choose from, in scan order
        tolerance: free energies closer than this are considered tied

    Returns:
        the structure to report, or None if there are no candidates
    """

    def _step(best: Optional[RankedType], candidate: RankedType) -> RankedType:
        return candidate if best is None else prefer(best, candidate, tolerance)

    return reduce(_step, candidates, None)
