"""
# ScanParameters: Configuration of the Dimer and Hairpin Scanners

The [`ScanParameters`][primerqc.api.parameters.ScanParameters] class holds the geometric and
energetic thresholds used by [`scan_dimer()`][primerqc.api.dimer.scan_dimer] and
[`scan_hairpin()`][primerqc.api.hairpin.scan_hairpin].

The defaults select the more accurate scanners: single-mismatch bubbles are bridged in dimers and
hairpin stems are charged a loop-entropy penalty.  Callers that need the simpler behaviour can
turn either feature off.

## Examples

```python
>>> params = ScanParameters()
>>> params.min_stem, params.min_loop, params.bubble_penalty
(3, 3, 3.5)
>>> ScanParameters(bubble_tolerance=False).bubble_tolerance
False
>>> ScanParameters(min_stem=0)
Traceback (most recent call last):
    ...
ValueError: min_stem must be >= 1, received 0

```
"""

from dataclasses import dataclass


@dataclass(frozen=True, init=True, kw_only=True, slots=True)
class ScanParameters:
    """Thresholds for secondary-structure scanning.

    The bubble penalty is an empirical approximation for a single internal mismatch rather than a
    validated biophysical parameter.

    Attributes:
        min_run_length: the minimum number of positions (bridged mismatches included) in a
            reportable dimer run
        max_run_dg: a dimer run must have a free energy strictly below this value (kcal/mol)
        bubble_tolerance: whether two runs separated by a single mismatch may be merged
        bubble_penalty: the free-energy cost (kcal/mol) of bridging a single mismatch
        dimer_three_prime_window: a dimer touches a 3' end if it reaches one of this many
            terminal bases
        min_stem: the minimum number of base pairs in a hairpin stem
        min_loop: the minimum number of unpaired bases enclosed by a hairpin stem
        loop_entropy: whether hairpin stems are charged a loop-entropy penalty
        hairpin_three_prime_window: a hairpin touches the 3' end if its stem reaches one of this
            many terminal bases
        tie_tolerance: free energies within this distance (kcal/mol) are considered tied, in
            which case a structure touching a 3' end is preferred
    """

    min_run_length: int = 3
    max_run_dg: float = -1.0
    bubble_tolerance: bool = True
    bubble_penalty: float = 3.5
    dimer_three_prime_window: int = 3
    min_stem: int = 3
    min_loop: int = 3
    loop_entropy: bool = True
    hairpin_three_prime_window: int = 5
    tie_tolerance: float = 0.1

    def __post_init__(self) -> None:
        if self.min_run_length < 1:
            raise ValueError(f"min_run_length must be >= 1, received {self.min_run_length}")
        if self.min_stem < 1:
            raise ValueError(f"min_stem must be >= 1, received {self.min_stem}")
        if self.min_loop < 0:
            raise ValueError(f"min_loop must be >= 0, received {self.min_loop}")
        if self.dimer_three_prime_window < 1:
            raise ValueError(
                f"dimer_three_prime_window must be >= 1, received {self.dimer_three_prime_window}"
            )
        if self.hairpin_three_prime_window < 1:
            raise ValueError(
                "hairpin_three_prime_window must be >= 1, "
                f"received {self.hairpin_three_prime_window}"
            )
        if self.tie_tolerance < 0:
            raise ValueError(f"tie_tolerance must be >= 0, received {self.tie_tolerance}")


DEFAULT_SCAN_PARAMETERS: ScanParameters = ScanParameters()
"""The default scanner configuration."""
