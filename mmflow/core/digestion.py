"""
Protease selection shared by the enzyme table and the parameter document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import UnsupportedConfiguration
from .models import CleavageMode, DigestionParameters, Enzyme, Specificity

WHOLE_PROTEIN_NAME = "Whole Protein"
UNSPECIFIC_NAME = "Unspecific"

# MetaMorpheus has no "unlimited" value here; 24 is what the engine is given.
UNSPECIFIC_MISSED_CLEAVAGES = 24


@dataclass(frozen=True)
class ProteaseSelection:
    """The protease MetaMorpheus should use, resolved from the digestion setup."""
    mode: CleavageMode
    name: str
    missed_cleavages: int
    enzyme: Optional[Enzyme] = None
    specificity: Specificity = Specificity.full


def resolve_protease(digestion: DigestionParameters) -> ProteaseSelection:
    """Resolve protease name and missed cleavages.

    Raises:
        UnsupportedConfiguration: enzyme mode without exactly one enzyme.
    """
    mode = digestion.cleavage_mode
    if mode == CleavageMode.whole_protein:
        return ProteaseSelection(mode=mode, name=WHOLE_PROTEIN_NAME, missed_cleavages=0)
    if mode == CleavageMode.unspecific:
        return ProteaseSelection(mode=mode, name=UNSPECIFIC_NAME, missed_cleavages=UNSPECIFIC_MISSED_CLEAVAGES)

    if len(digestion.enzymes) > 1:
        raise UnsupportedConfiguration("Multiple enzymes not supported!")
    if not digestion.enzymes:
        raise UnsupportedConfiguration("Enzyme digestion selected but no enzyme given.")

    enzyme = digestion.enzymes[0]
    return ProteaseSelection(
        mode=mode,
        name=enzyme.name,
        missed_cleavages=digestion.missed_cleavages_for(enzyme.name),
        enzyme=enzyme,
        specificity=digestion.specificity_for(enzyme.name),
    )
