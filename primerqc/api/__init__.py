from primerqc.api.alphabet import gc_percent
from primerqc.api.alphabet import is_complementary
from primerqc.api.alphabet import normalize
from primerqc.api.alphabet import reverse_complement
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
from primerqc.api.nearest_neighbor import accumulate
from primerqc.api.nearest_neighbor import resolve_worst_case
from primerqc.api.parameters import DEFAULT_SCAN_PARAMETERS
from primerqc.api.parameters import ScanParameters
from primerqc.api.ranking import most_stable

__all__ = [
    "normalize",
    "is_complementary",
    "reverse_complement",
    "gc_percent",
    "NearestNeighborTable",
    "LoopPenaltyTable",
    "SANTALUCIA_1998",
    "SANTALUCIA_2004_LOOPS",
    "resolve_worst_case",
    "accumulate",
    "duplex_free_energy",
    "melting_temperature",
    "three_prime_dg",
    "ScanParameters",
    "DEFAULT_SCAN_PARAMETERS",
    "most_stable",
    "scan_dimer",
    "scan_hairpin",
    "classify",
]
