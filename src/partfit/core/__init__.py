"""Core services for partfit."""

from partfit.core.config import ConfigManager
from partfit.core.store import (
    FileSelectionStore,
    MemorySelectionStore,
    SelectionStore,
)

__all__ = [
    "ConfigManager",
    "FileSelectionStore",
    "MemorySelectionStore",
    "SelectionStore",
]
