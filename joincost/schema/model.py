# ==============================================
# Schema Model
# ==============================================
#
# PURPOSE:
#   Immutable in-memory representation of the tables the user may
#   join, together with the statistics the cost formulas read.
#
# CLASSES:
# --------
# - Column (frozen dataclass)
#     name: str            → unique within its table
#     indexed: bool        → True if an index exists on the column
#     total_values: int    → distinct values (drives index height)
#
# - Table (frozen dataclass)
#     name: str
#     columns: tuple[Column, ...]
#     sorted_column: Column  → the physically sorted column; not required
#                              to be one of `columns`
#     nr: int                → number of rows
#     br: int                → number of blocks (always >= 1)
#
# - Schema (frozen dataclass)
#     tables: tuple[Table, ...]   → names unique
#
#   Lookup:
#   -------
#   - Schema.get_table(name) / Table.get_column(name)  → raise when missing
#   - Schema.find_table(name) / Table.find_column(name) → None when missing
#
#   Serialization:
#   --------------
#   - to_dict() / from_dict() on each class, using the JSON field names
#     of the schema file ("sortedColumn", "total_values").
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from joincost.errors import (
    ColumnNotFoundError,
    InvalidStatisticsError,
    SchemaParseError,
    TableNotFoundError,
)


def _require(data: Dict[str, Any], key: str, expected: type, where: str) -> Any:
    if key not in data:
        raise SchemaParseError(f"{where}: missing field '{key}'")
    value = data[key]
    # bool is an int subclass; a JSON true is never a valid count
    if expected is int and isinstance(value, bool):
        raise SchemaParseError(f"{where}: field '{key}' must be an integer, got {value!r}")
    if not isinstance(value, expected):
        raise SchemaParseError(
            f"{where}: field '{key}' must be of type {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Column:
    """A column and the statistics the indexed-join formula needs."""

    name: str
    indexed: bool = False
    total_values: int = 0

    def __post_init__(self):
        if self.total_values < 0:
            raise InvalidStatisticsError(
                f"Column {self.name}: total_values must not be negative, got {self.total_values}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "indexed": self.indexed,
            "total_values": self.total_values,
        }

    @classmethod
    def from_dict(cls, data: Any, where: str = "column") -> "Column":
        """
        Build a Column from a decoded JSON object.

        `indexed` defaults to False. The distinct-value count is read from
        `total_values`, with `totalValues` accepted as an alias.
        """
        if not isinstance(data, dict):
            raise SchemaParseError(f"{where}: expected an object, got {type(data).__name__}")

        name = _require(data, "name", str, where)
        where = f"{where} '{name}'"

        indexed = data.get("indexed", False)
        if not isinstance(indexed, bool):
            raise SchemaParseError(f"{where}: field 'indexed' must be a boolean, got {indexed!r}")

        key = "totalValues" if "totalValues" in data and "total_values" not in data else "total_values"
        total_values = _require(data, key, int, where)

        return cls(name=name, indexed=indexed, total_values=total_values)


@dataclass(frozen=True)
class Table:
    """A table with its size statistics and physical sort order."""

    name: str
    columns: Tuple[Column, ...]
    sorted_column: Column
    nr: int
    br: int

    def __post_init__(self):
        # Lists handed in by callers are frozen into tuples
        if not isinstance(self.columns, tuple):
            object.__setattr__(self, "columns", tuple(self.columns))

        if self.nr < 0:
            raise InvalidStatisticsError(f"Table {self.name}: nr must not be negative, got {self.nr}")
        if self.br < 1:
            raise InvalidStatisticsError(f"Table {self.name}: br must be at least 1, got {self.br}")

        seen = set()
        for column in self.columns:
            if column.name in seen:
                raise InvalidStatisticsError(f"Table {self.name}: duplicate column '{column.name}'")
            seen.add(column.name)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def is_sorted_on(self, column: Column) -> bool:
        """True if the table is physically ordered by `column` (matched by name)."""
        return self.sorted_column.name == column.name

    def find_column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def get_column(self, name: str) -> Column:
        column = self.find_column(name)
        if column is None:
            raise ColumnNotFoundError(self.name, name)
        return column

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [column.to_dict() for column in self.columns],
            "sortedColumn": self.sorted_column.to_dict(),
            "nr": self.nr,
            "br": self.br,
        }

    @classmethod
    def from_dict(cls, data: Any, where: str = "table") -> "Table":
        if not isinstance(data, dict):
            raise SchemaParseError(f"{where}: expected an object, got {type(data).__name__}")

        name = _require(data, "name", str, where)
        where = f"table '{name}'"

        raw_columns = _require(data, "columns", list, where)
        columns = tuple(
            Column.from_dict(raw, where=f"{where} column #{i}")
            for i, raw in enumerate(raw_columns)
        )
        sorted_column = Column.from_dict(
            _require(data, "sortedColumn", dict, where),
            where=f"{where} sortedColumn",
        )

        return cls(
            name=name,
            columns=columns,
            sorted_column=sorted_column,
            nr=_require(data, "nr", int, where),
            br=_require(data, "br", int, where),
        )


@dataclass(frozen=True)
class Schema:
    """Ordered, read-only collection of tables."""

    tables: Tuple[Table, ...] = ()

    def __post_init__(self):
        if not isinstance(self.tables, tuple):
            object.__setattr__(self, "tables", tuple(self.tables))

        seen = set()
        for table in self.tables:
            if table.name in seen:
                raise InvalidStatisticsError(f"Duplicate table '{table.name}' in schema")
            seen.add(table.name)

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    @property
    def table_names(self) -> List[str]:
        return [table.name for table in self.tables]

    def find_table(self, name: str) -> Optional[Table]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def get_table(self, name: str) -> Table:
        table = self.find_table(name)
        if table is None:
            raise TableNotFoundError(name)
        return table

    def to_list(self) -> List[Dict[str, Any]]:
        return [table.to_dict() for table in self.tables]

    @classmethod
    def from_list(cls, records: Any) -> "Schema":
        if not isinstance(records, list):
            raise SchemaParseError(
                f"Schema must be a list of tables, got {type(records).__name__}"
            )
        return cls(
            tables=tuple(
                Table.from_dict(record, where=f"table #{i}")
                for i, record in enumerate(records)
            )
        )
