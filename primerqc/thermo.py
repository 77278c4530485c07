from dataclasses import dataclass
from typing import Optional

from primerqc.api.classify import classify
from primerqc.api.dimer import scan_dimer
from primerqc.api.hairpin import scan_hairpin
from primerqc.api.melting import duplex_free_energy
from primerqc.api.melting import melting_temperature
from primerqc.api.melting import three_prime_dg
from primerqc.api.nearest_neighbor import SANTALUCIA_1998
from primerqc.api.nearest_neighbor import SANTALUCIA_2004_LOOPS
from primerqc.api.nearest_neighbor import LoopPenaltyTable
from primerqc.api.nearest_neighbor import NearestNeighborTable
from primerqc.api.parameters import DEFAULT_SCAN_PARAMETERS
from primerqc.api.parameters import ScanParameters
from primerqc.model import Classification
from primerqc.model import DimerMatch
from primerqc.model import HairpinMatch


@dataclass(frozen=True, kw_only=True)
class Thermo:
    """
    Class for performing thermodynamic calculations under one set of reaction conditions.
    Available calculations include:

      1. melting temperature (Tm) of a primer ([`tm()`][primerqc.thermo.Thermo.tm])
      2. duplex free energy at 37 C ([`duplex_dg()`][primerqc.thermo.Thermo.duplex_dg])
      3. 3' end stability ([`three_prime_dg()`][primerqc.thermo.Thermo.three_prime_dg])
      4. the most stable hairpin of a single sequence
         ([`hairpin()`][primerqc.thermo.Thermo.hairpin])
      5. the most stable duplex formed from two copies of the same sequence
         ([`homodimer()`][primerqc.thermo.Thermo.homodimer])
      6. the most stable duplex formed from two different sequences
         ([`heterodimer()`][primerqc.thermo.Thermo.heterodimer])

    All calculations accept IUPAC degenerate bases, which are scored with their most stable
    interpretation.  Calculations that cannot be performed return `NaN` (numbers) or `None`
    (structures) rather than raising.

    The nearest-neighbor table, loop penalties and scanner thresholds are injected as read-only
    configuration and default to the published values.  Use `dataclasses.replace()` to derive an
    instance with different conditions.

    Attributes:
        mv_conc_mm: concentration of monovalent cations in mM
        dv_conc_mm: concentration of divalent cations in mM
        dna_conc_nm: concentration of DNA strands in nM
        nn_table: the nearest-neighbor stacking parameters
        loop_penalties: the hairpin loop-entropy penalties
        scan_parameters: the dimer and hairpin scanner thresholds

    Raises:
        ValueError: if any concentration is negative
    """

    mv_conc_mm: float = 50.0
    dv_conc_mm: float = 0.0
    dna_conc_nm: float = 500.0
    nn_table: NearestNeighborTable = SANTALUCIA_1998
    loop_penalties: LoopPenaltyTable = SANTALUCIA_2004_LOOPS
    scan_parameters: ScanParameters = DEFAULT_SCAN_PARAMETERS

    def __post_init__(self) -> None:
        if self.mv_conc_mm < 0:
            raise ValueError(f"mv_conc_mm must be >=0, received {self.mv_conc_mm}")
        if self.dv_conc_mm < 0:
            raise ValueError(f"dv_conc_mm must be >=0, received {self.dv_conc_mm}")
        if self.dna_conc_nm < 0:
            raise ValueError(f"dna_conc_nm must be >=0, received {self.dna_conc_nm}")

    def tm(self, bases: str) -> float:
        """
        Calculates the nearest-neighbor melting temperature of a primer.

        Arguments:
            bases: a sequence of IUPAC bases

        Returns:
            the melting temperature of the sequence, in degrees Celsius, or `NaN` if it cannot
            be calculated (e.g. fewer than two bases, or no cations)
        """
        return melting_temperature(
            bases,
            mv_conc_mm=self.mv_conc_mm,
            dv_conc_mm=self.dv_conc_mm,
            dna_conc_nm=self.dna_conc_nm,
            table=self.nn_table,
        )

    def duplex_dg(self, bases: str, symmetric: bool = False) -> float:
        """
        Calculates the free energy at 37 C of a sequence paired with its perfect complement.

        Arguments:
            bases: a sequence of IUPAC bases
            symmetric: True if both strands are copies of the same molecule

        Returns:
            the free energy in kcal/mol, or `NaN` if it cannot be calculated
        """
        return duplex_free_energy(bases, symmetric=symmetric, table=self.nn_table)

    def three_prime_dg(self, bases: str, window: int = 5) -> float:
        """
        Calculates the free energy of the 3'-most bases of a primer.

        Arguments:
            bases: a sequence of IUPAC bases
            window: the number of 3' bases to consider

        Returns:
            the free energy in kcal/mol, or `NaN` if the primer is shorter than `window`
        """
        return three_prime_dg(bases, window=window, table=self.nn_table)

    def hairpin(self, bases: str) -> Optional[HairpinMatch]:
        """
        Finds the most stable hairpin a single oligo can fold into.

        Arguments:
            bases: a sequence of IUPAC bases

        Returns:
            the most stable (lowest net free energy) hairpin, or None if none is stable
        """
        return scan_hairpin(
            bases,
            params=self.scan_parameters,
            table=self.nn_table,
            loop_penalties=self.loop_penalties,
        )

    def homodimer(self, bases: str) -> Optional[DimerMatch]:
        """
        Finds the most stable annealing of an oligo to a second copy of itself.

        Arguments:
            bases: a sequence of IUPAC bases

        Returns:
            the most stable (lowest energy) duplex, or None if none passes the scanner floor
        """
        return scan_dimer(bases, bases, params=self.scan_parameters, table=self.nn_table)

    def heterodimer(self, bases1: str, bases2: str) -> Optional[DimerMatch]:
        """
        Finds the most stable annealing of two oligos.  The two oligos do *not* need to be the
        same length.

        Arguments:
            bases1: a sequence of IUPAC bases for the first oligo
            bases2: a sequence of IUPAC bases for the second oligo

        Returns:
            the most stable (lowest energy) duplex, or None if none passes the scanner floor
        """
        return scan_dimer(bases1, bases2, params=self.scan_parameters, table=self.nn_table)

    @staticmethod
    def classify(dg: Optional[float], touches_3p: bool = False) -> Classification:
        """
        Classifies the free energy of a structure into a label and severity.

        Arguments:
            dg: the free energy in kcal/mol, or None if no structure was found
            touches_3p: True if the structure reaches a 3' end
        """
        return classify(dg, touches_3p=touches_3p)
