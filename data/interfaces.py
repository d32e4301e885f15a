"""
Abstract chemical repository interface for pluggable property sources.

Allows swapping the built-in table for a site-specific JSON library without
changing downstream code.  Every engine function receives a repository as
an explicit argument (defaulting to ``DEFAULT_REPOSITORY``) instead of
reading a global table.
"""

import json
import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from data.chemical_database import CHEMICAL_TABLE, ChemicalRecord

logger = logging.getLogger(__name__)


class ChemicalRepository(ABC):
    """Abstract base class for chemical property sources.

    **Immutability contract:** Repositories are read-only after construction.
    Records are frozen dataclasses, so a repository can be shared between
    threads without locking.
    """

    @abstractmethod
    def _records(self) -> Mapping[str, ChemicalRecord]:
        """Return the lowercase-name -> record mapping."""
        ...

    def lookup(self, name: str) -> Optional[ChemicalRecord]:
        """Case-insensitive exact-match lookup.

        Args:
            name: Chemical name, e.g. ``"Chlorine"`` or ``"hydrogen sulfide"``.

        Returns:
            The matching ``ChemicalRecord``, or ``None`` when not found.
        """
        if not name:
            return None
        return self._records().get(name.strip().lower())

    def names(self) -> List[str]:
        """Return all lookup keys in sorted order."""
        return sorted(self._records().keys())

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._records())


class StaticChemicalRepository(ChemicalRepository):
    """Repository backed by an in-memory mapping (the built-in table by default).

    Args:
        records: Optional iterable of ``ChemicalRecord`` to serve instead of
            the built-in table.
    """

    def __init__(self, records: Optional[Iterable[ChemicalRecord]] = None):
        if records is None:
            self._table = CHEMICAL_TABLE
        else:
            self._table = MappingProxyType({rec.key: rec for rec in records})

    def _records(self) -> Mapping[str, ChemicalRecord]:
        return self._table


class FileChemicalRepository(ChemicalRepository):
    """Load chemical records from a JSON file on disk.

    The file must contain a non-empty JSON array of objects whose keys match
    the ``ChemicalRecord`` field names.

    Args:
        path: Path to the JSON file.

    Raises:
        ValueError: If required keys are missing, unknown keys are present or
            a record violates the LEL/UEL or AEGL ordering invariants.
        FileNotFoundError: If the file does not exist.
    """

    _REQUIRED_KEYS = {
        "name", "cas", "molecular_weight", "boiling_point", "vapor_pressure",
        "specific_gravity", "idlh", "lel", "uel", "aegl1", "aegl2", "aegl3",
    }
    _ALLOWED_KEYS = set(ChemicalRecord.__dataclass_fields__)

    def __init__(self, path: str):
        self.path = path
        self._table = MappingProxyType(self._load(path))
        logger.debug("Loaded %d chemical records from %s", len(self._table), path)

    @classmethod
    def _load(cls, path: str) -> dict:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, list) or len(data) == 0:
            raise ValueError(f"Chemical file must contain a non-empty JSON array: {path}")

        table = {}
        for i, entry in enumerate(data):
            missing = cls._REQUIRED_KEYS - set(entry.keys())
            if missing:
                raise ValueError(
                    f"Chemical #{i} missing required keys {missing} in {path}"
                )
            unknown = set(entry.keys()) - cls._ALLOWED_KEYS
            if unknown:
                raise ValueError(
                    f"Chemical #{i} has unknown keys {unknown} in {path}"
                )
            record = ChemicalRecord(**entry)
            if record.key in table:
                raise ValueError(f"Duplicate chemical '{record.name}' in {path}")
            table[record.key] = record
        return table

    def _records(self) -> Mapping[str, ChemicalRecord]:
        return self._table


DEFAULT_REPOSITORY = StaticChemicalRepository()
