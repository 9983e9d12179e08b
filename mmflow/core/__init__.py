"""
Core modules: search configuration model, modification catalog, protease
selection and the per-run working directory.
"""

from .models import (
    CvTerm, Modification, ModificationType, Enzyme, CleavageMode, Specificity,
    MassAccuracyType, DigestionParameters, MetaMorpheusSettings,
    ModificationParameters, SearchParameters,
)
from .errors import (
    ErrorCategory, MetaMorpheusAdapterError, UnsupportedConfiguration,
    UnsupportedModificationType, IOFailure,
)
from .catalog import ModificationCatalog
from .configuration import ConfigurationLoader, SearchConfiguration
from .digestion import ProteaseSelection, resolve_protease
from .workdir import WorkDirectoryResolver

__all__ = [
    "CvTerm",
    "Modification",
    "ModificationType",
    "Enzyme",
    "CleavageMode",
    "Specificity",
    "MassAccuracyType",
    "DigestionParameters",
    "MetaMorpheusSettings",
    "ModificationParameters",
    "SearchParameters",
    "ErrorCategory",
    "MetaMorpheusAdapterError",
    "UnsupportedConfiguration",
    "UnsupportedModificationType",
    "IOFailure",
    "ModificationCatalog",
    "ConfigurationLoader",
    "SearchConfiguration",
    "ProteaseSelection",
    "resolve_protease",
    "WorkDirectoryResolver",
]
