"""Cursor-based reader over one page of query results."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from google.cloud.bigquery import SchemaField

from bigquery_rest.converters import parse_bool, parse_f64, parse_i64, parse_str, parse_timestamp
from bigquery_rest.errors import (
    InvalidCursorError,
    OutOfRangeError,
    TypeConversionError,
    UnknownColumnError,
)
from bigquery_rest.model.cell import (
    CellValue,
    MalformedCell,
    NullCell,
    RecordCell,
    RepeatedCell,
    ScalarCell,
    decode_row,
    is_record_field,
)
from bigquery_rest.model.job import JobReference
from bigquery_rest.model.query import QueryResponse

logger = logging.getLogger(__name__)

# Parsers used when the caller asks for "whatever the schema says"
_PARSERS_BY_TYPE: Dict[str, Callable[[str], Any]] = {
    "INTEGER": parse_i64,
    "INT64": parse_i64,
    "FLOAT": parse_f64,
    "FLOAT64": parse_f64,
    "BOOLEAN": parse_bool,
    "BOOL": parse_bool,
    "TIMESTAMP": parse_timestamp,
}


def build_field_index(schema: Sequence[SchemaField]) -> Dict[str, int]:
    """Map each field name to its position; the first field wins on duplicates."""
    index: Dict[str, int] = {}
    for position, field in enumerate(schema):
        index.setdefault(field.name, position)
    return index


class RowReader(ABC):
    """Typed, column-addressable accessors over a row of decoded cells.

    Scalar accessors return ``None`` for null cells and a list with one
    converted element per item for repeated columns.
    """

    def __init__(
        self,
        schema: Sequence[SchemaField],
        field_index: Optional[Dict[str, int]] = None,
    ) -> None:
        self._schema: Tuple[SchemaField, ...] = tuple(schema)
        self._field_index = field_index if field_index is not None else build_field_index(schema)

    @property
    def schema(self) -> Tuple[SchemaField, ...]:
        """Field descriptors of this row, in column order."""
        return self._schema

    def column_names(self) -> List[str]:
        """Field names in column order, duplicates included."""
        return [field.name for field in self._schema]

    def column_index(self, name: str) -> int:
        """Resolve a column name to its position.

        Raises:
            UnknownColumnError: If no field has that name
        """
        try:
            return self._field_index[name]
        except KeyError:
            raise UnknownColumnError(name) from None

    def _lookup(self, name: str) -> int:
        # cursor state is checked before the name so every accessor fails alike off-row
        self._current_cells()
        return self.column_index(name)

    @abstractmethod
    def _current_cells(self) -> Tuple[CellValue, ...]:
        """Return the decoded cells of the row being read.

        Raises:
            InvalidCursorError: If there is no such row
        """

    def _cell(self, index: int) -> CellValue:
        cells = self._current_cells()
        if index < 0 or index >= len(self._schema):
            raise OutOfRangeError(index, len(self._schema))
        return cells[index]

    def _convert(self, cell: CellValue, parser: Callable[[str], Any]) -> Any:
        if isinstance(cell, MalformedCell):
            raise TypeConversionError(cell.message)
        if isinstance(cell, NullCell):
            return None
        if isinstance(cell, RepeatedCell):
            return [self._convert(item, parser) for item in cell.items]
        if isinstance(cell, RecordCell):
            raise TypeConversionError("Record column cannot be read as a scalar")
        return parser(cell.value)

    def _get(self, index: int, parser: Callable[[str], Any]) -> Any:
        return self._convert(self._cell(index), parser)

    def get_i64_by_index(self, index: int) -> Optional[int]:
        """Read a column as a 64-bit integer."""
        return self._get(index, parse_i64)

    def get_i64_by_name(self, name: str) -> Optional[int]:
        """Read a named column as a 64-bit integer."""
        return self.get_i64_by_index(self._lookup(name))

    def get_f64_by_index(self, index: int) -> Optional[float]:
        """Read a column as a float."""
        return self._get(index, parse_f64)

    def get_f64_by_name(self, name: str) -> Optional[float]:
        """Read a named column as a float."""
        return self.get_f64_by_index(self._lookup(name))

    def get_bool_by_index(self, index: int) -> Optional[bool]:
        """Read a column as a boolean."""
        return self._get(index, parse_bool)

    def get_bool_by_name(self, name: str) -> Optional[bool]:
        """Read a named column as a boolean."""
        return self.get_bool_by_index(self._lookup(name))

    def get_str_by_index(self, index: int) -> Optional[str]:
        """Read a column as its wire string."""
        return self._get(index, parse_str)

    def get_str_by_name(self, name: str) -> Optional[str]:
        """Read a named column as its wire string."""
        return self.get_str_by_index(self._lookup(name))

    def get_timestamp_by_index(self, index: int) -> Optional[datetime]:
        """Read a column as a UTC datetime."""
        return self._get(index, parse_timestamp)

    def get_timestamp_by_name(self, name: str) -> Optional[datetime]:
        """Read a named column as a UTC datetime."""
        return self.get_timestamp_by_index(self._lookup(name))

    def get_record_by_index(self, index: int) -> Union["Record", List[Optional["Record"]], None]:
        """Return the nested row of a record column.

        The returned ``Record`` carries the nested schema, so its sub-fields
        are read with the same accessors. Repeated record columns give a list.
        """
        return self._to_record(self._cell(index))

    def get_record_by_name(self, name: str) -> Union["Record", List[Optional["Record"]], None]:
        """Return the nested row of a named record column."""
        return self.get_record_by_index(self._lookup(name))

    def _to_record(self, cell: CellValue) -> Any:
        if isinstance(cell, MalformedCell):
            raise TypeConversionError(cell.message)
        if isinstance(cell, NullCell):
            return None
        if isinstance(cell, RepeatedCell):
            return [self._to_record(item) for item in cell.items]
        if isinstance(cell, ScalarCell):
            raise TypeConversionError("Scalar column cannot be read as a record")
        return Record(cell.cells, cell.schema)

    def get_value_by_index(self, index: int) -> Any:
        """Return the cell converted according to its declared schema type.

        Types without a dedicated parser (NUMERIC, DATE, BYTES, ...) come
        back as their wire string.
        """
        cell = self._cell(index)
        field = self._schema[index]
        if is_record_field(field):
            return self._to_record(cell)
        parser = _PARSERS_BY_TYPE.get((field.field_type or "").upper(), parse_str)
        return self._convert(cell, parser)

    def get_value_by_name(self, name: str) -> Any:
        """Read a named column according to its declared schema type."""
        return self.get_value_by_index(self._lookup(name))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the row to a plain dict, recursing into records."""
        result: Dict[str, Any] = {}
        for name, position in self._field_index.items():
            result[name] = _plain(self.get_value_by_index(position))
        return result


def _plain(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


class Record(RowReader):
    """A nested row of a record column, read with its own nested schema."""

    def __init__(
        self,
        cells: Sequence[CellValue],
        schema: Sequence[SchemaField],
        field_index: Optional[Dict[str, int]] = None,
    ) -> None:
        super().__init__(schema, field_index)
        self._cells = tuple(cells)

    def _current_cells(self) -> Tuple[CellValue, ...]:
        return self._cells

    def __repr__(self) -> str:
        return f"Record(columns={self.column_names()!r})"


class ResultSet(RowReader):
    """Forward-only cursor over the rows of one query response.

    The cursor starts before the first row. ``advance()`` is the only way to
    move it; once it returns ``False`` it keeps returning ``False`` and the
    accessors raise ``InvalidCursorError``. Paging is not handled here: build
    a new ResultSet for every page.

    Example:
        rs = job_api.query(project_id, QueryRequest(query="SELECT 1 AS c"))
        while rs.advance():
            print(rs.get_i64_by_name("c"))
    """

    def __init__(self, query_response: QueryResponse) -> None:
        """Initialize the reader.

        Args:
            query_response: Response of jobs.query, or of jobs.getQueryResults
                converted with ``to_query_response()``
        """
        super().__init__(query_response.schema_fields())
        self._query_response = query_response
        self._rows = query_response.row_values()
        self._cursor = -1
        self._current: Optional[Tuple[CellValue, ...]] = None
        logger.debug(
            "Result set over %s columns with %s rows in page", len(self._schema), len(self._rows)
        )

    def advance(self) -> bool:
        """Move to the next row.

        A cell that does not match its field does not stop the cursor; it
        raises ``TypeConversionError`` only when that column is read.

        Returns:
            True if the cursor is on a row, False once the rows are exhausted
        """
        if self._cursor + 1 < len(self._rows):
            self._cursor += 1
            self._current = decode_row(self._rows[self._cursor], self._schema)
            return True

        self._cursor = len(self._rows)
        self._current = None
        return False

    def _current_cells(self) -> Tuple[CellValue, ...]:
        if self._current is None:
            raise InvalidCursorError("No current row; call advance() first")
        return self._current

    def current_row(self) -> Record:
        """Snapshot of the current row that stays valid after the cursor moves."""
        return Record(self._current_cells(), self._schema, self._field_index)

    def __iter__(self) -> Iterator[Record]:
        while self.advance():
            yield self.current_row()

    def row_count(self) -> int:
        """Number of rows in this page, whatever the cursor position."""
        return len(self._rows)

    @property
    def total_rows(self) -> Optional[int]:
        """Total rows of the whole query, across all pages, if reported."""
        return self._query_response.total_rows

    @property
    def page_token(self) -> Optional[str]:
        return self._query_response.page_token

    @property
    def job_reference(self) -> Optional[JobReference]:
        return self._query_response.job_reference

    @property
    def job_complete(self) -> bool:
        return self._query_response.job_complete is not False

    def query_response(self) -> QueryResponse:
        return self._query_response

    def __repr__(self) -> str:
        return (
            f"ResultSet(columns={self.column_names()!r}, rows={self.row_count()}, "
            f"page_token={self.page_token!r})"
        )
