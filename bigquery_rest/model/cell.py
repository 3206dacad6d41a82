"""Tagged cell values decoded from the wire, gated by the schema.

A raw cell is a string, ``None``, a nested row ``{"f": [...]}`` or a list of
``{"v": ...}`` items. Which of these is legal depends on the field's declared
type and mode, never on the value itself.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple, Union

from google.cloud.bigquery import SchemaField

from bigquery_rest.errors import TypeConversionError

RECORD_TYPES = frozenset({"RECORD", "STRUCT"})


@dataclass(frozen=True)
class NullCell:
    """A null cell."""


@dataclass(frozen=True)
class ScalarCell:
    """A scalar cell holding its wire string."""

    value: str


@dataclass(frozen=True)
class RecordCell:
    """A nested row together with the nested schema it was decoded against."""

    cells: Tuple["CellValue", ...]
    schema: Tuple[SchemaField, ...]


@dataclass(frozen=True)
class RepeatedCell:
    """The items of a repeated column, each decoded on its own."""

    items: Tuple["CellValue", ...]


@dataclass(frozen=True)
class MalformedCell:
    """A cell whose shape does not match its field; reading it raises."""

    message: str


CellValue = Union[NullCell, ScalarCell, RecordCell, RepeatedCell, MalformedCell]

NULL = NullCell()


def is_record_field(field: SchemaField) -> bool:
    """Whether the field is a RECORD or STRUCT."""
    return (field.field_type or "").upper() in RECORD_TYPES


def is_repeated_field(field: SchemaField) -> bool:
    """Whether the field has REPEATED mode."""
    return (field.mode or "").upper() == "REPEATED"


def decode_row(raw_cells: Sequence[Any], schema: Sequence[SchemaField]) -> Tuple[CellValue, ...]:
    """Decode the raw cells of one row against the schema at the same level.

    Cells missing from the end of a short row decode as null. A cell whose
    shape does not match its field decodes as a ``MalformedCell``, so only
    that column fails when it is read.
    """
    cells: List[CellValue] = []
    for index, field in enumerate(schema):
        raw = raw_cells[index] if index < len(raw_cells) else None
        try:
            cells.append(decode_cell(raw, field))
        except TypeConversionError as e:
            cells.append(MalformedCell(str(e)))
    return tuple(cells)


def decode_cell(raw: Any, field: SchemaField) -> CellValue:
    """Decode one raw cell value according to its field descriptor."""
    if raw is None:
        return NULL

    if is_repeated_field(field):
        if not isinstance(raw, list):
            raise TypeConversionError(f"Field {field.name!r} is repeated but cell is not a list")
        return RepeatedCell(tuple(_decode_item(item, field) for item in raw))

    return _decode_single(raw, field)


def _decode_item(item: Any, field: SchemaField) -> CellValue:
    # repeated items arrive wrapped as {"v": ...}
    if isinstance(item, dict) and "v" in item:
        item = item["v"]
    if item is None:
        return NULL
    return _decode_single(item, field)


def _decode_single(raw: Any, field: SchemaField) -> CellValue:
    if is_record_field(field):
        if not isinstance(raw, dict):
            raise TypeConversionError(f"Field {field.name!r} is a record but cell is not a row")
        nested_schema = tuple(field.fields)
        nested_raw = [
            cell.get("v") if isinstance(cell, dict) else cell for cell in raw.get("f") or []
        ]
        return RecordCell(decode_row(nested_raw, nested_schema), nested_schema)

    if isinstance(raw, str):
        return ScalarCell(raw)
    if isinstance(raw, (dict, list)):
        raise TypeConversionError(
            f"Field {field.name!r} is a scalar but cell is a {type(raw).__name__}"
        )
    # emulators may send JSON scalars; json.dumps gives the wire spelling (true, 3, 1.5)
    return ScalarCell(json.dumps(raw))
