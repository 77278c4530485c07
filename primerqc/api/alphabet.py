"""
# IUPAC Alphabet and Sequence Normalization

This module contains the nucleotide alphabet used throughout the thermodynamic engine:

- [`normalize()`][primerqc.api.alphabet.normalize] -- upper-cases a raw sequence and silently
    drops every character that is not one of the 15 IUPAC nucleotide codes.
- [`base_set()`][primerqc.api.alphabet.base_set] -- the concrete bases an IUPAC code stands for.
- [`is_complementary()`][primerqc.api.alphabet.is_complementary] -- whether two codes *can*
    form a Watson-Crick pair under some resolution of their ambiguity.
- [`reverse_complement()`][primerqc.api.alphabet.reverse_complement] and
    [`gc_percent()`][primerqc.api.alphabet.gc_percent] -- IUPAC-aware sequence helpers.

## Examples

```python
>>> normalize("acg tnx-5'")
'ACGTN'
>>> sorted(base_set("R"))
['A', 'G']
>>> is_complementary("R", "Y")
True
>>> is_complementary("A", "C")
False
>>> reverse_complement("AACGR")
'YCGTT'
>>> gc_percent("GGCA")
75.0

```
"""

from typing import Optional

from fgpyo.sequence import complement
from fgpyo.sequence import gc_content
from fgpyo.sequence import reverse_complement as _reverse_complement

CANONICAL_BASES: str = "ACGT"
"""The four concrete DNA bases."""

IUPAC_BASES: dict[str, frozenset[str]] = {
    "A": frozenset("A"),
    "C": frozenset("C"),
    "G": frozenset("G"),
    "T": frozenset("T"),
    "R": frozenset("AG"),
    "Y": frozenset("CT"),
    "S": frozenset("CG"),
    "W": frozenset("AT"),
    "K": frozenset("GT"),
    "M": frozenset("AC"),
    "B": frozenset("CGT"),
    "D": frozenset("AGT"),
    "H": frozenset("ACT"),
    "V": frozenset("ACG"),
    "N": frozenset("ACGT"),
}
"""The concrete bases represented by each of the 15 IUPAC nucleotide codes."""

DEGENERATE_BASES: frozenset[str] = frozenset(IUPAC_BASES) - frozenset(CANONICAL_BASES)
"""The IUPAC codes that represent more than one concrete base."""

_EMPTY: frozenset[str] = frozenset()


def normalize(raw: Optional[str]) -> str:
    """Normalizes a raw sequence to upper-case IUPAC codes.

    Every character outside of the IUPAC nucleotide alphabet (whitespace, digits, gaps, `U`,
    punctuation, ...) is dropped without error.  Callers that need to tell the user about the
    removed characters should compare the result to their input.

    Args:
        raw: the raw sequence text, may be `None`

    Returns:
        the cleaned, upper-case sequence (possibly empty)
    """
    if not raw:
        return ""
    return "".join(base for base in raw.upper() if base in IUPAC_BASES)


def base_set(code: str) -> frozenset[str]:
    """Returns the concrete bases an IUPAC code represents, or an empty set if unrecognized.

    Args:
        code: a single IUPAC nucleotide code (case-insensitive)
    """
    return IUPAC_BASES.get(code.upper(), _EMPTY)


def is_complementary(b1: str, b2: str) -> bool:
    """True if some concrete resolution of `b1` is the Watson-Crick complement of some
    concrete resolution of `b2`.

    Degenerate codes are treated as able to pair if *any* of their resolutions pairs, so that
    the structure scanners never miss a potential interaction.  The relation is symmetric.

    Args:
        b1: the first IUPAC code
        b2: the second IUPAC code
    """
    second = base_set(b2)
    return any(complement(base) in second for base in base_set(b1))


def reverse_complement(bases: str) -> str:
    """Returns the IUPAC-aware reverse complement of the normalized sequence."""
    return _reverse_complement(normalize(bases))


def gc_percent(bases: str) -> float:
    """Returns the percentage (0-100) of G and C bases in the normalized sequence.

    Ambiguity codes (including `S`) are not counted as G/C.  An empty sequence has a GC
    percentage of zero.
    """
    return 100.0 * gc_content(normalize(bases))


def is_degenerate(bases: str) -> bool:
    """True if the normalized sequence contains any IUPAC ambiguity code."""
    return any(base in DEGENERATE_BASES for base in normalize(bases))
