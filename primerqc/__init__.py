from primerqc.model import Classification
from primerqc.model import DimerMatch
from primerqc.model import HairpinMatch
from primerqc.model import Severity
from primerqc.model import ThermoAccumulation
from primerqc.qc import PrimerPairQc
from primerqc.qc import PrimerQc
from primerqc.qc import qc_primer
from primerqc.qc import qc_primer_pair
from primerqc.thermo import Thermo

__all__ = [
    "Severity",
    "Classification",
    "ThermoAccumulation",
    "DimerMatch",
    "HairpinMatch",
    "Thermo",
    "PrimerQc",
    "PrimerPairQc",
    "qc_primer",
    "qc_primer_pair",
]
