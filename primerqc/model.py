from dataclasses import dataclass
from enum import StrEnum
from enum import unique

T37_KELVIN: float = 310.15
"""37 degrees Celsius, in Kelvin: the reference temperature for duplex free energies."""

GAS_CONSTANT: float = 1.987
"""The gas constant in cal/(mol*K)."""


@dataclass(slots=True, frozen=True, init=True)
class ThermoAccumulation:
    """The summed nearest-neighbor enthalpy and entropy of a sequence, including initiation.

    Attributes:
        dh: the enthalpy in kcal/mol
        ds: the entropy in cal/(mol*K)
    """

    dh: float
    ds: float

    def dg(self, temp_k: float = T37_KELVIN) -> float:
        """Returns the free energy (kcal/mol) at the given temperature (Kelvin)."""
        return self.dh - (temp_k * self.ds) / 1000.0


@unique
class Severity(StrEnum):
    """How concerning a predicted secondary structure is for a primer."""

    OK = "ok"
    WARN = "warn"
    BAD = "bad"

    @property
    def level(self) -> int:
        """An ordinal for comparing severities: ok < warn < bad."""
        return _SEVERITY_LEVELS[self]


_SEVERITY_LEVELS: dict[Severity, int] = {Severity.OK: 0, Severity.WARN: 1, Severity.BAD: 2}


@dataclass(slots=True, frozen=True, init=True)
class Classification:
    """A qualitative label for a structure's free energy.

    Attributes:
        label: a human-readable label, e.g. `Strong` or `3' Moderate`
        severity: the severity bucket the label belongs to
    """

    label: str
    severity: Severity


@dataclass(slots=True, frozen=True, init=True, kw_only=True)
class DimerMatch:
    """The most stable complementary run found between two oligos.

    Coordinates are 0-based and inclusive on the first oligo (`A`).  The second oligo (`B`) is
    aligned antiparallel: position `i` on `A` faces position `i - offset` of `B` reversed.

    Attributes:
        offset: the relative offset of reversed `B` against `A` at which the run was found
        start: the first position of the run on `A`
        end: the last position of the run on `A`
        segment: the bases of `A` covered by the run, with `.` at each bridged mismatch
        dg: the free energy of the run in kcal/mol, including any bubble penalties
        bubbles: the number of single-base mismatches bridged within the run
        touches_3p_a: True if the run reaches the 3' end of `A`
        touches_3p_b: True if the run reaches the 3' end of `B`
        alignment: a three-line text rendering of both oligos at the winning offset
    """

    offset: int
    start: int
    end: int
    segment: str
    dg: float
    bubbles: int
    touches_3p_a: bool
    touches_3p_b: bool
    alignment: str

    @property
    def length(self) -> int:
        """The number of positions spanned by the run, bridged mismatches included."""
        return self.end - self.start + 1

    @property
    def touches_3p(self) -> bool:
        """True if the run reaches the 3' end of either oligo."""
        return self.touches_3p_a or self.touches_3p_b


@dataclass(slots=True, frozen=True, init=True, kw_only=True)
class HairpinMatch:
    """The most stable stem/loop found within a single oligo.

    Attributes:
        stem: the bases of the 5' arm of the stem
        start: the 0-based position of the outermost 5' paired base
        end: the 0-based position of the outermost 3' paired base
        loop_length: the loop length used for the loop-entropy penalty
        stem_dg: the free energy of the stem in kcal/mol
        loop_dg: the loop-entropy penalty in kcal/mol
        touches_3p: True if the stem reaches the 3' end of the oligo
    """

    stem: str
    start: int
    end: int
    loop_length: int
    stem_dg: float
    loop_dg: float
    touches_3p: bool

    @property
    def stem_length(self) -> int:
        """The number of base pairs in the stem."""
        return len(self.stem)

    @property
    def dg(self) -> float:
        """The net free energy of the hairpin (stem plus loop penalty) in kcal/mol."""
        return self.stem_dg + self.loop_dg
