"""
Command construction for the MetaMorpheus command line (CMD.exe / CMD.dll).
"""

from __future__ import annotations

import logging
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from mmflow.utils.file_management import FileManager

logger = logging.getLogger(__name__)

WINDOWS_EXECUTABLE = "CMD.exe"
DOTNET_EXECUTABLE = "CMD.dll"
DOTNET = "dotnet"

PathLike = Union[str, Path]


def is_windows(os_name: Optional[str] = None) -> bool:
    name = platform.system() if os_name is None else os_name
    return "windows" in name.lower()


def executable_file_name(os_name: Optional[str] = None) -> str:
    """Name of the MetaMorpheus entry point for the given OS."""
    return WINDOWS_EXECUTABLE if is_windows(os_name) else DOTNET_EXECUTABLE


@dataclass(frozen=True)
class Invocation:
    """Everything needed to launch MetaMorpheus once."""
    argv: Tuple[str, ...]
    cwd: Path
    entry_point: Path
    merge_stderr: bool = True

    def command_line(self) -> str:
        return " ".join(self.argv)

    def start(self, **popen_kwargs) -> subprocess.Popen:
        """Launch the engine; output and errors arrive on one pipe.

        Undecodable bytes in the engine output are replaced, not raised.
        """
        kwargs = {
            "cwd": str(self.cwd),
            "stdout": subprocess.PIPE,
            "stderr": subprocess.STDOUT if self.merge_stderr else subprocess.PIPE,
            "stdin": subprocess.DEVNULL,
            "text": True,
            "errors": "replace",
        }
        kwargs.update(popen_kwargs)
        logger.debug(f"Starting MetaMorpheus in {self.cwd}")
        return subprocess.Popen(list(self.argv), shell=False, **kwargs)


class CommandAssembler:
    """Builds the MetaMorpheus argument vector for one search."""

    def __init__(self, install_dir: PathLike, os_name: Optional[str] = None):
        self.install_dir = Path(install_dir).absolute()
        self.os_name = platform.system() if os_name is None else os_name

    @property
    def windows(self) -> bool:
        return is_windows(self.os_name)

    @property
    def entry_point(self) -> Path:
        return self.install_dir / executable_file_name(self.os_name)

    def assemble(
        self,
        fasta_file: PathLike,
        spectrum_file: PathLike,
        parameter_file: PathLike,
        work_dir: PathLike,
    ) -> Invocation:
        entry_point = self.entry_point
        FileManager.make_executable(entry_point)

        argv = []
        # the dll is run through the dotnet host everywhere but on windows
        if not self.windows:
            argv.append(DOTNET)
        argv.append(str(entry_point))
        argv += ["-d", str(Path(fasta_file).absolute())]
        argv += ["-s", str(Path(spectrum_file).absolute())]
        argv += ["-t", str(Path(parameter_file).absolute())]
        argv += ["-o", str(Path(work_dir).absolute())]

        invocation = Invocation(argv=tuple(argv), cwd=self.install_dir, entry_point=entry_point)
        logger.info(f"MetaMorpheus command: {invocation.command_line()}")
        return invocation
