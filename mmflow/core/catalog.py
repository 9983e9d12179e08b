"""
Modification catalog: the name -> Modification lookup used by the generators.

A small set of common modifications is built in; further entries can be
loaded from YAML (same fields as mmflow.core.models.Modification).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

import yaml

from .models import Modification

logger = logging.getLogger(__name__)


# Compositions follow the Unimod definitions of the added atoms.
DEFAULT_MODIFICATIONS: List[Dict[str, Any]] = [
    {
        "name": "Carbamidomethylation of C",
        "pattern": ["C"],
        "modification_type": "modaa",
        "composition": {"H": 3, "C": 2, "N": 1, "O": 1},
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:4", "name": "Carbamidomethyl"},
    },
    {
        "name": "Oxidation of M",
        "pattern": ["M"],
        "modification_type": "modaa",
        "composition": {"O": 1},
        "neutral_losses": [{"H": 4, "C": 1, "O": 1, "S": 1}],
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:35", "name": "Oxidation"},
    },
    {
        "name": "Phosphorylation of S",
        "pattern": ["S"],
        "modification_type": "modaa",
        "composition": {"H": 1, "O": 3, "P": 1},
        "neutral_losses": [{"H": 3, "O": 4, "P": 1}],
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:21", "name": "Phospho"},
    },
    {
        "name": "Phosphorylation of T",
        "pattern": ["T"],
        "modification_type": "modaa",
        "composition": {"H": 1, "O": 3, "P": 1},
        "neutral_losses": [{"H": 3, "O": 4, "P": 1}],
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:21", "name": "Phospho"},
    },
    {
        "name": "Phosphorylation of Y",
        "pattern": ["Y"],
        "modification_type": "modaa",
        "composition": {"H": 1, "O": 3, "P": 1},
        "reporter_ions": [{"C": 8, "H": 10, "N": 1, "O": 4, "P": 1}],
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:21", "name": "Phospho"},
    },
    {
        "name": "Deamidation of N",
        "pattern": ["N"],
        "modification_type": "modaa",
        "composition": {"H": -1, "N": -1, "O": 1},
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:7", "name": "Deamidated"},
    },
    {
        "name": "Acetylation of protein N-term",
        "pattern": [],
        "modification_type": "modn_protein",
        "composition": {"H": 2, "C": 2, "O": 1},
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:1", "name": "Acetyl"},
    },
    {
        "name": "Pyrolidone from Q",
        "pattern": ["Q"],
        "modification_type": "modnaa_peptide",
        "composition": {"H": -3, "N": -1},
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:28", "name": "Gln->pyro-Glu"},
    },
    {
        "name": "Amidation of the peptide C-term",
        "pattern": [],
        "modification_type": "modc_peptide",
        "composition": {"H": 1, "N": 1, "O": -1},
        "unimod": {"ontology": "UNIMOD", "accession": "UNIMOD:2", "name": "Amidated"},
    },
]


class ModificationCatalog:
    """Name-indexed collection of modifications."""

    def __init__(self, modifications: Optional[Iterable[Modification]] = None):
        self._mods: Dict[str, Modification] = {}
        for mod in modifications or []:
            self.add(mod)

    @classmethod
    def default(cls) -> "ModificationCatalog":
        return cls(Modification.model_validate(m) for m in DEFAULT_MODIFICATIONS)

    @classmethod
    def from_dicts(cls, entries: Iterable[Dict[str, Any]], base: Optional["ModificationCatalog"] = None) -> "ModificationCatalog":
        catalog = cls(base) if base is not None else cls()
        for entry in entries:
            catalog.add(Modification.model_validate(entry))
        return catalog

    @classmethod
    def from_yaml(cls, path: Path, base: Optional["ModificationCatalog"] = None) -> "ModificationCatalog":
        """Load modifications from a YAML list (or a mapping with a 'modifications' key)."""
        path = Path(path)
        logger.info(f"Loading modifications from {path}")
        with open(path, "r") as f:
            data = yaml.safe_load(f) or []
        if isinstance(data, dict):
            data = data.get("modifications") or []
        if not isinstance(data, list):
            raise ValueError(f"Modification file {path} must contain a list of modifications")
        return cls.from_dicts(data, base=base)

    def add(self, modification: Modification) -> None:
        if modification.name in self._mods:
            logger.debug(f"Replacing catalog entry {modification.name}")
        self._mods[modification.name] = modification

    def get(self, name: str) -> Modification:
        """Return the modification called name; KeyError if unknown."""
        try:
            return self._mods[name]
        except KeyError:
            raise KeyError(f"Modification not found in catalog: {name}") from None

    def names(self) -> List[str]:
        return sorted(self._mods)

    def __contains__(self, name: object) -> bool:
        return name in self._mods

    def __iter__(self) -> Iterator[Modification]:
        return iter(self._mods.values())

    def __len__(self) -> int:
        return len(self._mods)
