"""
Program catalog: loads the bundled example programs from YAML at startup,
reads every program through ProgramReader, and exposes a read-only query API.

Each entry in data/programs.yaml looks like:

    - id: binary_increment
      description: Adds one to a binary number.
      expected_steps: 3        # optional
      expected_tape: "1100"    # optional
      source: |
        TAPE 1011
        ...

A program with any diagnostic is a catalog error: the whole catalog fails to
load and the error lists every problem found, rendered gcc-style.

The catalog is a module-level singleton; call get_catalog() to obtain it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional, cast

import yaml

from tms.machine.builder import MachineConfig, build_machine
from tms.machine.machine import Machine
from tms.reader.reader import ProgramReader

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"
_PROGRAMS_FILE = "programs.yaml"


class CatalogError(ValueError):
    """Raised when the catalog data cannot be loaded or a program in it is invalid."""


@dataclass(frozen=True)
class CatalogEntry:
    """
    A named, pre-validated program.

    Attributes:
        id: Unique name of the program.
        description: One-paragraph summary.
        source: Program text in the regular textual format.
        config: Configuration read from ``source``.
        expected_steps: Known number of steps to halt, if recorded.
        expected_tape: Known final tape content, if recorded.
    """

    id: str
    description: str
    source: str
    config: MachineConfig
    expected_steps: Optional[int] = None
    expected_tape: Optional[str] = None

    def build(self) -> Machine:
        """Return a fresh machine loaded with this program."""
        return build_machine(self.config)


class ProgramCatalog:
    """
    Read-only catalog of bundled programs, keyed by id.

    Instantiate directly to use a custom data directory (e.g. in tests);
    otherwise use get_catalog() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR, filename: str = _PROGRAMS_FILE) -> None:
        self._data_dir = data_dir
        self._filename = filename
        self.entries: MappingProxyType[str, CatalogEntry]
        self._load()

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self) -> dict[str, Any]:
        path = self._data_dir / self._filename
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise CatalogError(f"Catalog data file not found: {path}") from None
        except yaml.YAMLError as exc:
            raise CatalogError(f"Failed to parse catalog data file {path}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("entries"), list):
            raise CatalogError(f"Catalog data file {path} has no 'entries' list")
        return cast(dict[str, Any], data)

    def _load(self) -> None:
        data = self._load_yaml()
        errors: list[str] = []
        result: dict[str, CatalogEntry] = {}
        seen: set[str] = set()

        for index, raw in enumerate(data["entries"]):
            entry_id = raw.get("id") if isinstance(raw, dict) else None
            if not entry_id or not isinstance(raw.get("source"), str):
                errors.append(f"entry #{index}: 'id' and 'source' are required")
                continue
            if entry_id in seen:
                errors.append(f"entry {entry_id!r}: duplicate id")
                continue
            seen.add(entry_id)

            reader = ProgramReader(f"{self._filename}:{entry_id}").read_text(raw["source"])
            if not reader.success:
                errors.append(
                    f"entry {entry_id!r}:\n" + "".join(d.format() for d in reader.diagnostics)
                )
                continue

            result[entry_id] = CatalogEntry(
                id=entry_id,
                description=str(raw.get("description", "")).strip(),
                source=raw["source"],
                config=reader.config(),
                expected_steps=raw.get("expected_steps"),
                expected_tape=raw.get("expected_tape"),
            )

        if errors:
            raise CatalogError(
                "Program catalog validation failed:\n" + "\n".join(f"  • {e}" for e in errors)
            )

        self.entries = MappingProxyType(result)
        logger.debug("loaded %d catalog program(s) from %s", len(result), self._data_dir)

    # ── Query API ──────────────────────────────────────────────────────────────

    def ids(self) -> tuple[str, ...]:
        """Program ids in catalog order."""
        return tuple(self.entries)

    def get(self, entry_id: str) -> CatalogEntry:
        """Return the entry for *entry_id*. Raises KeyError if unknown."""
        try:
            return self.entries[entry_id]
        except KeyError:
            raise KeyError(f"No catalog program named {entry_id!r}") from None

    def build(self, entry_id: str) -> Machine:
        """Return a fresh machine loaded with the program *entry_id*."""
        return self.get(entry_id).build()


# ── Module-level singleton ─────────────────────────────────────────────────────

_catalog: ProgramCatalog = ProgramCatalog()


def get_catalog() -> ProgramCatalog:
    """Return the module-level catalog singleton."""
    return _catalog
