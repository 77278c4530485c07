"""
Fixtures intended to be shared across multiple files in the tests directory.
"""

import pytest

from primerqc import Thermo

GOLDEN_PRIMER: str = "ATGGTGAGCAAGGGCGAGGAG"
"""The first 21 bases of EGFP; Tm ~61.37C in 50 mM Na+, 0 mM Mg2+, 500 nM primer."""


@pytest.fixture
def thermo() -> Thermo:
    """A Thermo with the default reaction conditions."""
    return Thermo()


@pytest.fixture(scope="session")
def golden_primer() -> str:
    return GOLDEN_PRIMER
