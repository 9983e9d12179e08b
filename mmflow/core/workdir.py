"""
Temporary working directory under the MetaMorpheus installation folder.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .errors import IOFailure

logger = logging.getLogger(__name__)

TEMP_SUBFOLDER_NAME = "temp"


class WorkDirectoryResolver:
    """Resolve <install_dir>/temp once and hand back the same path afterwards.

    One resolver belongs to one search run. After the first call the cached
    path is returned even if a different install_dir is passed.
    """

    def __init__(self) -> None:
        self._path: Optional[Path] = None

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def resolve(self, install_dir: Union[str, Path]) -> Path:
        if self._path is None:
            self._path = Path(install_dir).absolute() / TEMP_SUBFOLDER_NAME
            logger.debug(f"MetaMorpheus temp folder: {self._path}")
        try:
            self._path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure("temp folder", e) from e
        return self._path
