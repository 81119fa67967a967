"""Backend storing translations as rows of a separate Arrow table.

One :class:`TranslationTable` is shared by every record and attribute that use
:class:`TableBackend`. Each row is ``(record_id, attribute, locale, value)``.
The table can be written to and read from an Arrow IPC file.

Storage layout:
    translations.arrow (Arrow IPC file, schema below)
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.compute as pc
import pyarrow.ipc
from cachetools import LRUCache

from ..backend import Backend

logger = logging.getLogger(__name__)

SCHEMA = pa.schema(
    [
        ("record_id", pa.int64()),
        ("attribute", pa.string()),
        ("locale", pa.string()),
        ("value", pa.string()),
    ]
)


class TranslationTable:
    """In-memory Arrow table of translations with an LRU hot cache.

    Args:
        table: Initial rows (default: empty table with :data:`SCHEMA`)
        lru_size: Size of the lookup LRU cache (default: 1024, 0 disables it)
    """

    def __init__(self, table: pa.Table | None = None, lru_size: int = 1024):
        self.table = SCHEMA.empty_table() if table is None else table.cast(SCHEMA)
        self.lru_enabled = lru_size > 0
        self.lru: LRUCache | None = LRUCache(maxsize=lru_size) if lru_size > 0 else None

    def __len__(self) -> int:
        return self.table.num_rows

    def _mask(self, record_id: int, attribute: str | None = None, locale: str | None = None):
        mask = pc.equal(self.table["record_id"], record_id)
        if attribute is not None:
            mask = pc.and_(mask, pc.equal(self.table["attribute"], attribute))
        if locale is not None:
            mask = pc.and_(mask, pc.equal(self.table["locale"], locale))
        return mask

    def get(self, record_id: int, attribute: str, locale: str) -> str | None:
        """Value stored for the row, or ``None`` if there is no row."""
        key = (record_id, attribute, locale)
        if self.lru_enabled and key in self.lru:
            return self.lru[key]

        rows = self.table.filter(self._mask(record_id, attribute, locale))
        value = rows["value"][0].as_py() if rows.num_rows else None

        if self.lru_enabled:
            self.lru[key] = value
        return value

    def put(self, record_id: int, attribute: str, locale: str, value: str | None) -> None:
        """Insert or replace the row; ``None`` removes it."""
        kept = self.table.filter(pc.invert(self._mask(record_id, attribute, locale)))
        if value is not None:
            row = pa.table(
                {
                    "record_id": [record_id],
                    "attribute": [attribute],
                    "locale": [locale],
                    "value": [value],
                },
                schema=SCHEMA,
            )
            kept = pa.concat_tables([kept, row])
        self.table = kept

        if self.lru_enabled:
            self.lru[(record_id, attribute, locale)] = value

    def delete(self, record_id: int, attribute: str | None = None) -> int:
        """Remove the rows of a record (optionally one attribute only).

        Returns:
            Number of rows removed
        """
        before = self.table.num_rows
        self.table = self.table.filter(pc.invert(self._mask(record_id, attribute)))

        if self.lru_enabled:
            for key in list(self.lru):
                if key[0] == record_id and (attribute is None or key[1] == attribute):
                    del self.lru[key]
        return before - self.table.num_rows

    def locales_for(self, record_id: int, attribute: str) -> list[str]:
        """Locales with a row for the record attribute, in insertion order."""
        rows = self.table.filter(self._mask(record_id, attribute))
        return rows["locale"].to_pylist()

    def save(self, path: str | Path) -> Path:
        """Write all rows to an Arrow IPC file atomically."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_name(path.name + ".tmp")

        with pa.OSFile(str(temp_path), "wb") as sink:
            writer = pa.ipc.new_file(sink, SCHEMA)
            writer.write_table(self.table)
            writer.close()

        temp_path.replace(path)
        logger.info(f"Saved {self.table.num_rows} translations to {path}")
        return path

    @classmethod
    def load(cls, path: str | Path, lru_size: int = 1024) -> "TranslationTable":
        """Read a table written by :meth:`save`."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No translation table at {path}")

        with pa.OSFile(str(path), "rb") as source:
            table = pa.ipc.open_file(source).read_all()

        logger.info(f"Loaded {table.num_rows} translations from {path}")
        return cls(table, lru_size=lru_size)


class TableBackend(Backend):
    """Translations stored as rows of a shared :class:`TranslationTable`.

    Declare with the table as a backend option:
        >>> table = TranslationTable()
        >>> Article.translates("title", backend=TableBackend, table=table)
    """

    def __init__(self, model: Any, attribute: str, table: TranslationTable, **options: Any):
        super().__init__(model, attribute, **options)
        self.table = table

    def read(self, locale: str, **options: Any) -> str | None:
        return self.table.get(self.model.id, self.attribute, locale)

    def write(self, locale: str, value: Any, **options: Any) -> str | None:
        value = None if value is None else str(value)
        self.table.put(self.model.id, self.attribute, locale, value)
        return value

    def locales(self) -> list[str]:
        return self.table.locales_for(self.model.id, self.attribute)

    @classmethod
    def setup_model(cls, model_class: type, attributes: list[str], **options: Any):
        table = options.get("table")
        if not isinstance(table, TranslationTable):
            raise ValueError(
                f"TableBackend needs a TranslationTable passed as table=, got {table!r}"
            )
