"""
Pydantic models for the canonical search configuration (modifications,
enzymes, digestion and search parameters).
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


def format_composition(value: Union[str, Mapping[str, int]]) -> str:
    """Render a chemical composition in the engine formula format.

    Strings are passed through (whitespace-normalized). Mappings are written
    element by element in insertion order, e.g. {"H": 1, "O": 3, "P": 1} ->
    "H1 O3 P1". Zero counts are dropped.
    """
    if isinstance(value, str):
        return " ".join(value.split())
    parts = [f"{element}{int(count)}" for element, count in value.items() if int(count) != 0]
    return " ".join(parts)


def _residues(values: List[str]) -> List[str]:
    out = []
    for v in values:
        v = str(v).strip().upper()
        if len(v) != 1:
            raise ValueError(f"residue must be a single character: {v!r}")
        out.append(v)
    return out


class CvTerm(BaseModel):
    ontology: str = ""
    accession: str
    name: str = ""


class ModificationType(str, Enum):
    """Where a modification can sit. The *aa_* members are residue-anchored."""
    modaa = "modaa"
    modn_protein = "modn_protein"
    modnaa_protein = "modnaa_protein"
    modc_protein = "modc_protein"
    modcaa_protein = "modcaa_protein"
    modn_peptide = "modn_peptide"
    modnaa_peptide = "modnaa_peptide"
    modc_peptide = "modc_peptide"
    modcaa_peptide = "modcaa_peptide"


class Modification(BaseModel):
    name: str
    pattern: List[str] = Field(default_factory=list)
    modification_type: ModificationType = ModificationType.modaa
    neutral_losses: List[str] = Field(default_factory=list)
    composition: str
    reporter_ions: List[str] = Field(default_factory=list)
    unimod: Optional[CvTerm] = None

    @field_validator("pattern", mode="before")
    @classmethod
    def pattern_residues(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = list(v)
        return _residues(v)

    @field_validator("neutral_losses", "reporter_ions", mode="before")
    @classmethod
    def composition_list(cls, v):
        return [format_composition(c) for c in (v or [])]

    @field_validator("composition", mode="before")
    @classmethod
    def added_composition(cls, v):
        text = format_composition(v) if v is not None else ""
        if not text:
            raise ValueError("added composition must not be empty")
        return text


class Enzyme(BaseModel):
    name: str
    aminoacid_before: List[str] = Field(default_factory=list)
    aminoacid_after: List[str] = Field(default_factory=list)
    restriction_before: List[str] = Field(default_factory=list)
    restriction_after: List[str] = Field(default_factory=list)
    cv_term: Optional[CvTerm] = None

    @field_validator(
        "aminoacid_before", "aminoacid_after", "restriction_before", "restriction_after", mode="before"
    )
    @classmethod
    def residue_lists(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = list(v)
        return _residues(v)


class CleavageMode(str, Enum):
    enzyme = "enzyme"
    whole_protein = "whole_protein"
    unspecific = "unspecific"


class Specificity(str, Enum):
    full = "full"
    semi = "semi"


class MassAccuracyType(str, Enum):
    ppm = "ppm"
    absolute = "absolute"


DEFAULT_MISSED_CLEAVAGES = 2


class DigestionParameters(BaseModel):
    cleavage_mode: CleavageMode = CleavageMode.enzyme
    enzymes: List[Enzyme] = Field(default_factory=list)
    missed_cleavages: Dict[str, int] = Field(default_factory=dict)
    specificity: Dict[str, Specificity] = Field(default_factory=dict)

    @field_validator("missed_cleavages")
    @classmethod
    def non_negative(cls, v: Dict[str, int]) -> Dict[str, int]:
        for name, n in v.items():
            if n < 0:
                raise ValueError(f"missed cleavages for {name} must be >= 0")
        return v

    def missed_cleavages_for(self, enzyme_name: str) -> int:
        return self.missed_cleavages.get(enzyme_name, DEFAULT_MISSED_CLEAVAGES)

    def specificity_for(self, enzyme_name: str) -> Specificity:
        return self.specificity.get(enzyme_name, Specificity.full)


class MetaMorpheusSettings(BaseModel):
    """Advanced MetaMorpheus settings. Unset lengths fall back to 6/30."""
    min_peptide_length: Optional[int] = None
    max_peptide_length: Optional[int] = None

    @property
    def resolved_min_peptide_length(self) -> int:
        return 6 if self.min_peptide_length is None else self.min_peptide_length

    @property
    def resolved_max_peptide_length(self) -> int:
        return 30 if self.max_peptide_length is None else self.max_peptide_length


class ModificationParameters(BaseModel):
    fixed: List[str] = Field(default_factory=list)
    variable: List[str] = Field(default_factory=list)


class SearchParameters(BaseModel):
    fragment_ion_accuracy: float = 0.02
    fragment_accuracy_type: MassAccuracyType = MassAccuracyType.absolute
    precursor_accuracy: float = 10.0
    precursor_accuracy_type: MassAccuracyType = MassAccuracyType.ppm
    modifications: ModificationParameters = Field(default_factory=ModificationParameters)
    digestion: DigestionParameters = Field(default_factory=DigestionParameters)
    metamorpheus: MetaMorpheusSettings = Field(default_factory=MetaMorpheusSettings)

    @field_validator("fragment_accuracy_type", "precursor_accuracy_type", mode="before")
    @classmethod
    def accuracy_alias(cls, v):
        # loader convenience: "Da" is the usual spelling for absolute tolerances
        if isinstance(v, str) and v.strip().lower() in ("da", "dalton", "daltons"):
            return MassAccuracyType.absolute
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def positive_tolerances(self) -> "SearchParameters":
        if self.fragment_ion_accuracy < 0 or self.precursor_accuracy < 0:
            raise ValueError("mass tolerances must be >= 0")
        return self
