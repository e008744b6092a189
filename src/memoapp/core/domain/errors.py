"""Domain-specific exception types for memoapp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class MemoAppError(Exception):
    """Base exception for memoapp domain errors."""

    message: str
    code: str = "memoapp_error"
    details: Dict[str, Any] | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


class StorageInitializationError(MemoAppError):
    """Error raised when the data directory or document cannot be created."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="storage_init_error", details=details)


class StorageLoadError(MemoAppError):
    """Error raised when the memo document cannot be read or parsed."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="storage_load_error", details=details)


class StorageSaveError(MemoAppError):
    """Error raised when the memo document cannot be written."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="storage_save_error", details=details)


class ConfigError(MemoAppError):
    """Error raised for configuration failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)
