"""
MetaMorpheus protease table (ProteolyticDigestion/proteases.tsv).
"""

from __future__ import annotations

from typing import List, Optional

from mmflow.core.digestion import ProteaseSelection, resolve_protease
from mmflow.core.models import CleavageMode, DigestionParameters, Enzyme, Specificity

from .base import ArtifactGenerator

HEADER = "\t".join([
    "Name",
    "Sequences Inducing Cleavage",
    "Sequences Preventing Cleavage",
    "Cleavage Terminus",
    "Cleavage Specificity",
    "PSI-MS Accession Number",
    "PSI-MS Name",
    "Site Regular Expression",
    "Notes",
])

# MetaMorpheus refuses to start unless a trypsin entry is present, whatever
# protease is actually searched.
BASELINE_PROTEASE_ROW = "trypsin\tK|,R|\t\t\tfull\tMS:1001313\tTrypsin/P\t(?<=[KR])"

WHOLE_PROTEIN_ROW = "Whole Protein\t\t\t\tnone\tMS:1001955\tno cleavage"
UNSPECIFIC_ROW = "Unspecific\tX|\t\t\tfull\tMS:1001956\tunspecific cleavage"


def cleavage_site_expression(enzyme: Enzyme) -> str:
    """Cleavage sites in MetaMorpheus notation, e.g. "K|[P],R|[P]" or "|D"."""
    sites: List[str] = []
    if enzyme.aminoacid_before:
        for residue in enzyme.aminoacid_before:
            if enzyme.restriction_after:
                sites.extend(f"{residue}|[{blocker}]" for blocker in enzyme.restriction_after)
            else:
                sites.append(f"{residue}|")
    else:
        for residue in enzyme.aminoacid_after:
            if enzyme.restriction_before:
                sites.extend(f"[{blocker}]|{residue}" for blocker in enzyme.restriction_before)
            else:
                sites.append(f"|{residue}")
    return ",".join(sites)


def enzyme_row(selection: ProteaseSelection) -> str:
    if selection.mode == CleavageMode.whole_protein:
        return WHOLE_PROTEIN_ROW
    if selection.mode == CleavageMode.unspecific:
        return UNSPECIFIC_ROW

    enzyme = selection.enzyme
    cv = enzyme.cv_term
    columns = [
        enzyme.name,
        cleavage_site_expression(enzyme),
        "",  # sequences preventing cleavage
        "",  # cleavage terminus
        "full" if selection.specificity == Specificity.full else "semi",
        cv.accession if cv is not None else "",
        cv.name if cv is not None else "",
        "",  # site regular expression
        "",  # notes
    ]
    return "\t".join(columns)


class EnzymeDefinitionGenerator(ArtifactGenerator):
    artifact_name = "enzymes file"

    def __init__(self, digestion: DigestionParameters, selection: Optional[ProteaseSelection] = None):
        self.digestion = digestion
        self._selection = selection

    @property
    def selection(self) -> ProteaseSelection:
        if self._selection is None:
            self._selection = resolve_protease(self.digestion)
        return self._selection

    def render(self) -> str:
        rows = [HEADER, BASELINE_PROTEASE_ROW, enzyme_row(self.selection)]
        return "\n".join(rows) + "\n"
