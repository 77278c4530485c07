"""
# Primer QC Reports

This module bundles the individual calculations of [`Thermo`][primerqc.thermo.Thermo] into a
quality report for a single primer, [`PrimerQc`][primerqc.qc.PrimerQc], and for a primer pair,
[`PrimerPairQc`][primerqc.qc.PrimerPairQc].

Each primer receives a score from 0 to 100.  Starting from 100, points are deducted for:

| condition                                  | deduction |
|--------------------------------------------|-----------|
| GC content outside 40-60%                  | 10        |
| length outside 18-30 nt                    | 8         |
| no G or C at the 3' end                    | 5         |
| a homopolymer run of 4 or more             | 8         |
| 3'-end (last 5 bases) dG <= -9 kcal/mol    | 10        |
| self-dimer classified bad / warn           | 25 / 10   |
| hairpin classified bad / warn              | 12 / 6    |

and the score is floored at zero.  [`score_label()`][primerqc.qc.score_label] turns the score into
a rating.

`PrimerQc` extends `fgpyo.util.metric.Metric`, so reports can be written to and read from
delimited files with `PrimerQc.write()` and `PrimerQc.read()`.

## Examples

```python
>>> report = qc_primer("ATGGTGAGCAAGGGCGAGGAG", name="egfp_fwd")
>>> report.length, report.gc_percent > 60, report.gc_clamp
(21, True, True)
>>> round(report.tm, 1)
61.4
>>> score_label(90), score_label(70), score_label(10)
('Excellent', 'Acceptable', 'Risky')

```
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from fgpyo.sequence import longest_homopolymer_length
from fgpyo.util.metric import Metric

from primerqc.api.alphabet import CANONICAL_BASES
from primerqc.api.alphabet import gc_percent
from primerqc.api.alphabet import is_degenerate
from primerqc.api.alphabet import normalize
from primerqc.model import Classification
from primerqc.model import DimerMatch
from primerqc.model import Severity
from primerqc.thermo import Thermo

_logger = logging.getLogger(__name__)

MIN_GC_PERCENT: float = 40.0
MAX_GC_PERCENT: float = 60.0
MIN_LENGTH: int = 18
MAX_LENGTH: int = 30
MAX_HOMOPOLYMER: int = 4
"""Runs of a single base at least this long are penalized."""
THREE_PRIME_WINDOW: int = 5
"""The number of 3' bases whose free energy is checked for excess stability."""
MAX_THREE_PRIME_DG: float = -9.0
"""A 3' end at or below this free energy (kcal/mol) is too sticky."""

EXCELLENT_SCORE: int = 85
ACCEPTABLE_SCORE: int = 65

_NON_CANONICAL: re.Pattern[str] = re.compile(f"[^{CANONICAL_BASES}]+")


def has_gc_clamp(bases: str) -> bool:
    """True if the (normalized) oligo ends in a G or a C."""
    seq = normalize(bases)
    return len(seq) > 0 and seq[-1] in "GC"


def has_homopolymer(bases: str, max_run: int = MAX_HOMOPOLYMER) -> bool:
    """True if the (normalized) oligo contains a run of one concrete base at least `max_run` long.

    Degenerate codes break runs and never form a homopolymer themselves.
    """
    segments = _NON_CANONICAL.split(normalize(bases))
    return any(longest_homopolymer_length(segment) >= max_run for segment in segments if segment)


def score_label(score: int) -> str:
    """Returns a rating for a QC score: `Excellent`, `Acceptable` or `Risky`."""
    if score >= EXCELLENT_SCORE:
        return "Excellent"
    elif score >= ACCEPTABLE_SCORE:
        return "Acceptable"
    else:
        return "Risky"


@dataclass(slots=True, frozen=True, init=True, kw_only=True)
class PrimerQc(Metric["PrimerQc"]):
    """The quality report for a single primer.

    Extends the `fgpyo.util.metric.Metric` class, which facilitates writing reports to (and
    reading them from) delimited text files.

    Attributes:
        name: the name of the primer
        bases: the normalized bases of the primer
        length: the number of bases in the primer
        gc_percent: the GC content of the primer, as a percentage
        tm: the melting temperature of the primer, or `NaN`
        gc_clamp: True if the primer ends in a G or a C
        homopolymer: True if the primer contains a homopolymer of 4 or more bases
        three_prime_dg: the free energy of the last five bases, or `NaN`
        self_dimer_dg: the free energy of the most stable self-dimer, if any
        self_dimer_label: the classification label of the self-dimer
        self_dimer_severity: the severity of the self-dimer
        hairpin_dg: the net free energy of the most stable hairpin, if any
        hairpin_label: the classification label of the hairpin
        hairpin_severity: the severity of the hairpin
        has_degenerate: True if the primer contains any degenerate IUPAC code
        score: the QC score, from 0 to 100
    """

    name: str
    bases: str
    length: int
    gc_percent: float
    tm: float
    gc_clamp: bool
    homopolymer: bool
    three_prime_dg: float
    self_dimer_dg: Optional[float]
    self_dimer_label: str
    self_dimer_severity: str
    hairpin_dg: Optional[float]
    hairpin_label: str
    hairpin_severity: str
    has_degenerate: bool
    score: int

    @property
    def rating(self) -> str:
        """The rating of the QC score. See [`score_label()`][primerqc.qc.score_label]."""
        return score_label(self.score)


@dataclass(slots=True, frozen=True, init=True, kw_only=True)
class PrimerPairQc:
    """The quality report for a primer pair.

    Attributes:
        fwd: the report for the forward primer
        rev: the report for the reverse primer
        cross_dimer: the most stable duplex between the two primers, if any
        cross_dimer_class: the classification of the cross-dimer
    """

    fwd: PrimerQc
    rev: PrimerQc
    cross_dimer: Optional[DimerMatch]
    cross_dimer_class: Classification

    @property
    def worst_severity(self) -> Severity:
        """The most severe of the cross-dimer and each primer's self-dimer and hairpin."""
        severities = [
            self.cross_dimer_class.severity,
            Severity(self.fwd.self_dimer_severity),
            Severity(self.fwd.hairpin_severity),
            Severity(self.rev.self_dimer_severity),
            Severity(self.rev.hairpin_severity),
        ]
        return max(severities, key=lambda s: s.level)


def qc_primer(bases: str, name: str = "primer", thermo: Optional[Thermo] = None) -> PrimerQc:
    """Builds the quality report for a single primer.

    Args:
        bases: the primer, 5'->3'; non-IUPAC characters are discarded
        name: the name to give the primer in the report
        thermo: a [`Thermo`][primerqc.thermo.Thermo] instance for performing the thermodynamic
            calculations; if not provided, a default Thermo instance will be created

    Returns:
        the quality report

    Raises:
        ValueError: if no bases remain after normalization
    """
    thermo = thermo if thermo is not None else Thermo()
    seq = normalize(bases)
    if len(seq) == 0:
        raise ValueError(f"Primer {name} has no bases after normalization, received: {bases!r}")

    gc = gc_percent(seq)
    clamp = has_gc_clamp(seq)
    homopolymer = has_homopolymer(seq)
    dg3 = thermo.three_prime_dg(seq, window=THREE_PRIME_WINDOW)

    self_dimer = thermo.homodimer(seq)
    self_dimer_dg = self_dimer.dg if self_dimer is not None else None
    self_dimer_class = thermo.classify(
        self_dimer_dg, touches_3p=self_dimer is not None and self_dimer.touches_3p
    )

    hairpin = thermo.hairpin(seq)
    hairpin_dg = hairpin.dg if hairpin is not None else None
    hairpin_class = thermo.classify(
        hairpin_dg, touches_3p=hairpin is not None and hairpin.touches_3p
    )

    score = 100
    if gc < MIN_GC_PERCENT or gc > MAX_GC_PERCENT:
        score -= 10
    if len(seq) < MIN_LENGTH or len(seq) > MAX_LENGTH:
        score -= 8
    if not clamp:
        score -= 5
    if homopolymer:
        score -= 8
    if dg3 <= MAX_THREE_PRIME_DG:
        score -= 10
    if self_dimer_class.severity == Severity.BAD:
        score -= 25
    elif self_dimer_class.severity == Severity.WARN:
        score -= 10
    if hairpin_class.severity == Severity.BAD:
        score -= 12
    elif hairpin_class.severity == Severity.WARN:
        score -= 6
    score = max(score, 0)

    _logger.debug(
        f"QC for {name} ({seq}): score={score}, self-dimer={self_dimer_class.label}, "
        f"hairpin={hairpin_class.label}"
    )

    return PrimerQc(
        name=name,
        bases=seq,
        length=len(seq),
        gc_percent=gc,
        tm=thermo.tm(seq),
        gc_clamp=clamp,
        homopolymer=homopolymer,
        three_prime_dg=dg3,
        self_dimer_dg=self_dimer_dg,
        self_dimer_label=self_dimer_class.label,
        self_dimer_severity=self_dimer_class.severity.value,
        hairpin_dg=hairpin_dg,
        hairpin_label=hairpin_class.label,
        hairpin_severity=hairpin_class.severity.value,
        has_degenerate=is_degenerate(seq),
        score=score,
    )


def qc_primer_pair(
    fwd: str,
    rev: str,
    fwd_name: str = "fwd",
    rev_name: str = "rev",
    thermo: Optional[Thermo] = None,
) -> PrimerPairQc:
    """Builds the quality report for a primer pair.

    Args:
        fwd: the forward primer, 5'->3'
        rev: the reverse primer, 5'->3'
        fwd_name: the name to give the forward primer in the report
        rev_name: the name to give the reverse primer in the report
        thermo: a [`Thermo`][primerqc.thermo.Thermo] instance for performing the thermodynamic
            calculations; if not provided, a default Thermo instance will be created

    Returns:
        the reports for both primers and their cross-dimer

    Raises:
        ValueError: if either primer has no bases after normalization
    """
    thermo = thermo if thermo is not None else Thermo()
    fwd_qc = qc_primer(fwd, name=fwd_name, thermo=thermo)
    rev_qc = qc_primer(rev, name=rev_name, thermo=thermo)
    cross_dimer = thermo.heterodimer(fwd_qc.bases, rev_qc.bases)
    cross_dimer_class = (
        thermo.classify(cross_dimer.dg, touches_3p=cross_dimer.touches_3p)
        if cross_dimer is not None
        else thermo.classify(None)
    )
    return PrimerPairQc(
        fwd=fwd_qc, rev=rev_qc, cross_dimer=cross_dimer, cross_dimer_class=cross_dimer_class
    )
