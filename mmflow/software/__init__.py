"""
MetaMorpheus adapter: file generators and command construction.
"""

from .base import ArtifactGenerator
from .modifications import ModificationRecordGenerator, sanitize_modification_name
from .enzymes import EnzymeDefinitionGenerator, cleavage_site_expression
from .parameters import ParameterDocumentGenerator
from .command import CommandAssembler, Invocation, executable_file_name
from .metamorpheus import MetaMorpheusProcessBuilder

__all__ = [
    "ArtifactGenerator",
    "ModificationRecordGenerator",
    "sanitize_modification_name",
    "EnzymeDefinitionGenerator",
    "cleavage_site_expression",
    "ParameterDocumentGenerator",
    "CommandAssembler",
    "Invocation",
    "executable_file_name",
    "MetaMorpheusProcessBuilder",
]
