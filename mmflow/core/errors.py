"""
Error types raised while translating a search configuration into
MetaMorpheus input files.

None of these are retried. Output written before the failure is left in
place; cleanup is up to the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    """Categories of errors in the adapter."""
    CONFIGURATION_ERROR = "configuration_error"
    FILE_SYSTEM_ERROR = "file_system_error"


class MetaMorpheusAdapterError(Exception):
    category: ErrorCategory = ErrorCategory.CONFIGURATION_ERROR


class UnsupportedConfiguration(MetaMorpheusAdapterError):
    """The digestion setup cannot be expressed for MetaMorpheus."""


class UnsupportedModificationType(MetaMorpheusAdapterError):
    """A modification type has no MetaMorpheus position literal."""

    def __init__(self, modification_type: object, modification: Optional[str] = None):
        self.modification_type = modification_type
        self.modification = modification
        where = f" (modification '{modification}')" if modification else ""
        super().__init__(f"Modification type {modification_type} not supported{where}.")


class IOFailure(MetaMorpheusAdapterError, OSError):
    """Creating a directory or writing one of the engine files failed."""
    category = ErrorCategory.FILE_SYSTEM_ERROR

    def __init__(self, what: str, cause: BaseException):
        self.what = what
        self.cause = cause
        super().__init__(f"Could not create MetaMorpheus {what}. Unable to write file: '{cause}'.")

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else super().__str__()
