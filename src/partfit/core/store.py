"""Best-effort persistence of the vehicle selection."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import platformdirs
import tomli
import tomli_w
from pydantic import ValidationError

from partfit.models import VehicleSelection

logger = logging.getLogger(__name__)

SELECTION_KEY = "veh-filter"


class SelectionStore(ABC):
    """Key/value surface holding one serialized selection.

    All operations are best-effort: reads degrade to an empty selection and
    write/clear failures are ignored.
    """

    def __init__(self, key: str = SELECTION_KEY) -> None:
        self.key = key

    @abstractmethod
    def read(self) -> VehicleSelection:
        """Stored selection, or an empty one."""
        ...

    @abstractmethod
    def write(self, selection: VehicleSelection) -> None:
        """Replace the stored selection."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored selection."""
        ...

    @staticmethod
    def _decode(record: Any) -> VehicleSelection:
        if not isinstance(record, dict):
            return VehicleSelection()
        try:
            return VehicleSelection.model_validate(record)
        except ValidationError:
            logger.debug("Discarding unreadable stored selection: %r", record)
            return VehicleSelection()


class MemorySelectionStore(SelectionStore):
    """In-process store, one record per key."""

    def __init__(self, key: str = SELECTION_KEY) -> None:
        super().__init__(key)
        self.records: dict[str, dict[str, str]] = {}

    def read(self) -> VehicleSelection:
        return self._decode(self.records.get(self.key))

    def write(self, selection: VehicleSelection) -> None:
        self.records[self.key] = selection.to_record()

    def clear(self) -> None:
        self.records.pop(self.key, None)


class FileSelectionStore(SelectionStore):
    """TOML file with one table per key, kept in the user data directory."""

    FILENAME = "selection.toml"

    def __init__(self, data_dir: Optional[Path] = None, key: str = SELECTION_KEY) -> None:
        """Initialize the store.

        Args:
            data_dir: Override data directory (for testing)
            key: Table name the selection lives under
        """
        super().__init__(key)
        if data_dir:
            self._data_dir = Path(data_dir)
        else:
            self._data_dir = Path(platformdirs.user_data_dir("partfit"))

    @property
    def path(self) -> Path:
        return self._data_dir / self.FILENAME

    def _read_tables(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        return tomli.loads(self.path.read_text(encoding="utf-8"))

    def _write_tables(self, tables: dict[str, Any]) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(tomli_w.dumps(tables), encoding="utf-8")

    def read(self) -> VehicleSelection:
        try:
            tables = self._read_tables()
        except (OSError, tomli.TOMLDecodeError):
            logger.debug("Selection store unreadable at %s", self.path, exc_info=True)
            return VehicleSelection()
        return self._decode(tables.get(self.key))

    def write(self, selection: VehicleSelection) -> None:
        try:
            try:
                tables = self._read_tables()
            except tomli.TOMLDecodeError:
                tables = {}
            tables[self.key] = selection.to_record()
            self._write_tables(tables)
        except OSError:
            logger.debug("Selection store write failed at %s", self.path, exc_info=True)

    def clear(self) -> None:
        try:
            tables = self._read_tables()
            if tables.pop(self.key, None) is not None:
                self._write_tables(tables)
        except (OSError, tomli.TOMLDecodeError):
            logger.debug("Selection store clear failed at %s", self.path, exc_info=True)
