"""
MetaMorpheus adapter: writes the engine files for one search and builds the
command that runs it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mmflow.core.catalog import ModificationCatalog
from mmflow.core.digestion import resolve_protease
from mmflow.core.models import SearchParameters
from mmflow.core.workdir import WorkDirectoryResolver

from .command import CommandAssembler, Invocation, PathLike, executable_file_name
from .enzymes import EnzymeDefinitionGenerator
from .modifications import ModificationRecordGenerator
from .parameters import ParameterDocumentGenerator

logger = logging.getLogger(__name__)

MODIFICATIONS_FILE = Path("Mods") / "CustomModifications.txt"
ENZYMES_FILE = Path("ProteolyticDigestion") / "proteases.tsv"
PARAMETERS_FILE = "SearchTask.toml"


class MetaMorpheusProcessBuilder:
    """Prepare a MetaMorpheus search.

    Args:
        install_dir: MetaMorpheus installation folder
        search: search parameters
        spectrum_file: spectrum file to search
        fasta_file: protein sequence database
        catalog: modification lookup, defaults to the built-in catalog
        work_dirs: resolver for this run; a fresh one is created if omitted
        os_name: platform name override (defaults to platform.system())
    """

    search_engine_type = "MetaMorpheus"

    def __init__(
        self,
        install_dir: PathLike,
        search: SearchParameters,
        spectrum_file: PathLike,
        fasta_file: PathLike,
        catalog: Optional[ModificationCatalog] = None,
        work_dirs: Optional[WorkDirectoryResolver] = None,
        os_name: Optional[str] = None,
    ):
        self.install_dir = Path(install_dir).absolute()
        self.search = search
        self.spectrum_file = Path(spectrum_file)
        self.fasta_file = Path(fasta_file)
        self.catalog = catalog or ModificationCatalog.default()
        self.work_dirs = work_dirs or WorkDirectoryResolver()
        self.assembler = CommandAssembler(self.install_dir, os_name=os_name)

    @property
    def currently_processed_file_name(self) -> str:
        return self.spectrum_file.name

    @staticmethod
    def executable_file_name(os_name: Optional[str] = None) -> str:
        return executable_file_name(os_name)

    @property
    def modifications_file(self) -> Path:
        return self.install_dir / MODIFICATIONS_FILE

    @property
    def enzymes_file(self) -> Path:
        return self.install_dir / ENZYMES_FILE

    def prepare(self) -> Invocation:
        """Write modifications, proteases and search task files; return the invocation."""
        work_dir = self.work_dirs.resolve(self.install_dir)

        # fails on unsupported digestion before any file is touched
        selection = resolve_protease(self.search.digestion)

        mods = self.search.modifications
        ModificationRecordGenerator(mods.fixed, mods.variable, self.catalog).write(self.modifications_file)
        EnzymeDefinitionGenerator(self.search.digestion, selection).write(self.enzymes_file)
        parameter_file = ParameterDocumentGenerator(self.search, self.catalog, selection).write(
            work_dir / PARAMETERS_FILE
        )
        logger.info(f"MetaMorpheus input files written for {self.currently_processed_file_name}")

        return self.assembler.assemble(
            fasta_file=self.fasta_file,
            spectrum_file=self.spectrum_file,
            parameter_file=parameter_file,
            work_dir=work_dir,
        )
