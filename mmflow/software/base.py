"""
Base interface for the MetaMorpheus file generators.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from mmflow.core.errors import IOFailure

logger = logging.getLogger(__name__)


class ArtifactGenerator(ABC):
    """Renders one engine file and writes it.

    The full content is rendered before the file is opened, so configuration
    errors never leave a file behind.
    """

    #: used in IOFailure messages, e.g. "enzymes file"
    artifact_name = "file"

    @abstractmethod
    def render(self) -> str:
        """Return the file content."""
        raise NotImplementedError

    def write(self, path: Path) -> Path:
        content = self.render()
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            raise IOFailure(self.artifact_name, e) from e
        logger.debug(f"Wrote MetaMorpheus {self.artifact_name}: {path}")
        return path
