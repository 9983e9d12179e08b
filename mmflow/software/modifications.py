"""
MetaMorpheus custom modification file (Mods/CustomModifications.txt).

Each modification becomes one flat record, e.g.

    ID   Phosphorylation off Y
    TG   Y
    PP   Anywhere.
    MT   SearchGUI
    CF   H1 O3 P1
    DI   C8 H10 N1 O4 P1
    DR   Unimod; 21.
    //
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from mmflow.core.catalog import ModificationCatalog
from mmflow.core.errors import UnsupportedModificationType
from mmflow.core.models import Modification, ModificationType

from .base import ArtifactGenerator

FILE_TITLE = "Custom Modifications"

# Value of the MT field; names the source, not the modification category.
MODIFICATION_SOURCE = "SearchGUI"

# Length of the "UNIMOD:" prefix on Unimod accessions.
UNIMOD_PREFIX_LENGTH = 7

POSITION_LITERALS: Dict[ModificationType, str] = {
    ModificationType.modaa: "Anywhere.",
    ModificationType.modc_protein: "C-terminal.",
    ModificationType.modcaa_protein: "C-terminal.",
    ModificationType.modc_peptide: "Peptide C-terminal.",
    ModificationType.modcaa_peptide: "Peptide C-terminal.",
    ModificationType.modn_protein: "N-terminal.",
    ModificationType.modnaa_protein: "N-terminal.",
    ModificationType.modn_peptide: "Peptide N-terminal.",
    ModificationType.modnaa_peptide: "Peptide N-terminal.",
}


def sanitize_modification_name(name: str) -> str:
    """MetaMorpheus drops modifications with " of " in the name."""
    return name.replace(" of ", " off ")


def target_residues(modification: Modification) -> List[str]:
    """Target residues of a modification, ["X"] when it targets any residue."""
    return list(modification.pattern) or ["X"]


class ModificationRecordGenerator(ArtifactGenerator):
    artifact_name = "modifications file"

    def __init__(
        self,
        fixed: Iterable[str],
        variable: Iterable[str],
        catalog: ModificationCatalog,
        position_literals: Optional[Mapping[ModificationType, str]] = None,
    ):
        self.fixed = list(fixed)
        self.variable = list(variable)
        self.catalog = catalog
        self.position_literals = dict(POSITION_LITERALS if position_literals is None else position_literals)
        missing = [t for t in ModificationType if t not in self.position_literals]
        if missing:
            raise UnsupportedModificationType(missing[0])

    def position(self, modification: Modification) -> str:
        try:
            return self.position_literals[modification.modification_type]
        except KeyError:
            raise UnsupportedModificationType(modification.modification_type, modification.name) from None

    def format_record(self, modification: Modification) -> str:
        lines = [
            f"ID   {sanitize_modification_name(modification.name)}",
            f"TG   {' or '.join(target_residues(modification))}",
            f"PP   {self.position(modification)}",
        ]
        lines.extend(f"NL   {loss}" for loss in modification.neutral_losses)
        lines.append(f"MT   {MODIFICATION_SOURCE}")
        lines.append(f"CF   {modification.composition}")
        lines.extend(f"DI   {ion}" for ion in modification.reporter_ions)
        if modification.unimod is not None:
            lines.append(f"DR   Unimod; {modification.unimod.accession[UNIMOD_PREFIX_LENGTH:]}.")
        lines.append("//")
        return "\n".join(lines) + "\n"

    def render(self) -> str:
        parts = [FILE_TITLE + "\n"]
        for name in self.fixed + self.variable:
            parts.append(self.format_record(self.catalog.get(name)))
        return "".join(parts)
