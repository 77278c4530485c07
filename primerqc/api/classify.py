"""
# Classification of Secondary-Structure Free Energies

[`classify()`][primerqc.api.classify.classify] maps the free energy of a dimer or hairpin, and
whether it touches a 3' end, to a label and a [`Severity`][primerqc.model.Severity]:

| dG (kcal/mol) | label       | severity |
|---------------|-------------|----------|
| <= -7         | Very strong | bad      |
| <= -5         | Strong      | bad      |
| <= -3         | Moderate    | warn     |
| > -3          | Weak        | ok       |
| missing/NaN   | None        | ok       |

Labels of 3'-touching structures that are not `ok` are prefixed with `3'`.

## Examples

```python
>>> classify(-8.2, touches_3p=True)
Classification(label="3' Very strong", severity=<Severity.BAD: 'bad'>)
>>> classify(-4.0)
Classification(label='Moderate', severity=<Severity.WARN: 'warn'>)
>>> classify(-1.0, touches_3p=True)
Classification(label='Weak', severity=<Severity.OK: 'ok'>)
>>> classify(None)
Classification(label='None', severity=<Severity.OK: 'ok'>)

```
"""

import math
from typing import Optional

from primerqc.model import Classification
from primerqc.model import Severity

VERY_STRONG_DG: float = -7.0
"""Structures at or below this free energy (kcal/mol) are very strong."""

STRONG_DG: float = -5.0
"""Structures at or below this free energy (kcal/mol) are strong."""

MODERATE_DG: float = -3.0
"""Structures at or below this free energy (kcal/mol) are moderate."""

THREE_PRIME_PREFIX: str = "3' "

_NONE: Classification = Classification(label="None", severity=Severity.OK)


def classify(dg: Optional[float], touches_3p: bool = False) -> Classification:
    """Classifies a structure's free energy.

    Args:
        dg: the free energy in kcal/mol, or None if no structure was found
        touches_3p: True if the structure reaches a 3' end

    Returns:
        the label and severity of the structure
    """
    if dg is None or not math.isfinite(dg):
        return _NONE

    if dg <= VERY_STRONG_DG:
        label, severity = "Very strong", Severity.BAD
    elif dg <= STRONG_DG:
        label, severity = "Strong", Severity.BAD
    elif dg <= MODERATE_DG:
        label, severity = "Moderate", Severity.WARN
    else:
        label, severity = "Weak", Severity.OK

    if touches_3p and severity != Severity.OK:
        label = THREE_PRIME_PREFIX + label
    return Classification(label=label, severity=severity)
