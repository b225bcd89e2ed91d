"""Table registry: loads stored table definitions from JSON/YAML files.

Follows the same pattern as the other definition registries:
- One file per table in a definitions directory
- Lazy loading with _loaded guard
- In-memory dict keyed by table id
- Global singleton via get_table_registry()

The registry is read-only. Tables are authored by the builder UI and
written by whatever persists them; this service only reads them.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from .schemas import TableConfiguration, TableSummary

logger = logging.getLogger(__name__)

DEFINITIONS_DIR = Path(
    os.environ.get(
        "SHELFGRID_TABLES_DIR", str(Path(__file__).parent / "definitions")
    )
)


class TableRegistry:
    """Registry of product table definitions loaded from disk."""

    def __init__(self, definitions_dir: Optional[Path] = None):
        self.definitions_dir = definitions_dir or DEFINITIONS_DIR
        self._tables: dict[int, TableConfiguration] = {}
        self._loaded = False

    def load(self) -> None:
        """Load all table definitions (``*.json``, ``*.yaml``, ``*.yml``)."""
        if self._loaded:
            return

        if not self.definitions_dir.exists():
            logger.warning(
                f"Table definitions directory not found: {self.definitions_dir}"
            )
            self._loaded = True
            return

        files = sorted(
            list(self.definitions_dir.glob("*.json"))
            + list(self.definitions_dir.glob("*.yaml"))
            + list(self.definitions_dir.glob("*.yml"))
        )
        for path in files:
            try:
                with open(path, "r") as f:
                    if path.suffix == ".json":
                        data = json.load(f)
                    else:
                        data = yaml.safe_load(f)
                if not isinstance(data, dict):
                    raise ValueError("definition must be an object")
                table = TableConfiguration.model_validate(data)
                if table.id <= 0:
                    raise ValueError("definition has no positive 'id'")
                if table.id in self._tables:
                    logger.warning(f"Duplicate table id {table.id} in {path}, overriding")
                self._tables[table.id] = table
                logger.debug(f"Loaded table: {table.id} ({table.title})")
            except Exception as e:
                logger.error(f"Failed to load table from {path}: {e}")

        self._loaded = True
        logger.info(f"Loaded {len(self._tables)} table definitions")

    def get(self, table_id: int) -> Optional[TableConfiguration]:
        """Get a table definition by id."""
        self.load()
        return self._tables.get(table_id)

    def list_all(self) -> list[TableConfiguration]:
        self.load()
        return [self._tables[k] for k in sorted(self._tables)]

    def list_summaries(self) -> list[TableSummary]:
        """List table summaries ordered by id."""
        return [
            TableSummary(
                id=t.id,
                title=t.title,
                status=t.status,
                source_type=t.source.type,
                column_count=len(t.columns),
            )
            for t in self.list_all()
        ]

    def list_ids(self) -> list[int]:
        self.load()
        return sorted(self._tables)

    def count(self) -> int:
        """Get total number of tables."""
        self.load()
        return len(self._tables)

    def reload(self) -> None:
        """Force reload all definitions."""
        self._loaded = False
        self._tables.clear()
        self.load()


# Global registry instance
_registry: Optional[TableRegistry] = None


def get_table_registry() -> TableRegistry:
    """Get the global table registry instance."""
    global _registry
    if _registry is None:
        _registry = TableRegistry()
        _registry.load()
    return _registry


def set_table_registry(registry: Optional[TableRegistry]) -> None:
    """Replace the global registry (``None`` resets to lazy default)."""
    global _registry
    _registry = registry
