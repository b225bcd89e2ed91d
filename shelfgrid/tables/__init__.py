"""Product table definitions.

Declarative table configuration (source, columns, settings, style) and a
read-only registry that loads stored tables from disk.
"""

from .schemas import (
    BulkSelect,
    Column,
    PageContext,
    RuntimeArgs,
    Source,
    TableConfiguration,
    TableSettings,
    TableStyle,
)
from .registry import TableRegistry, get_table_registry

__all__ = [
    "BulkSelect",
    "Column",
    "PageContext",
    "RuntimeArgs",
    "Source",
    "TableConfiguration",
    "TableSettings",
    "TableStyle",
    "TableRegistry",
    "get_table_registry",
]
