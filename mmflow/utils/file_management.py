"""
File management utilities for the adapter.
"""

import os
import stat
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


class FileManager:
    """Utilities for file and directory management."""

    @staticmethod
    def make_executable(path: Path) -> bool:
        """Set the executable bits on path. Returns False if that was not possible."""
        path = Path(path)
        try:
            mode = path.stat().st_mode
            os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            logger.warning(f"Could not make {path} executable: {e}")
            return False
        return True
