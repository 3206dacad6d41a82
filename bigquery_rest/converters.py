"""Conversions from BigQuery wire strings to Python scalars.

Every scalar cell arrives as a string. These functions parse one such string
into the requested type and raise ``TypeConversionError`` when it does not
parse. They never see nulls: callers map null cells to ``None`` first.
"""

import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from bigquery_rest.errors import TypeConversionError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_i64(value: str) -> int:
    """Parse a base-10 signed 64-bit integer."""
    if not _INTEGER_RE.fullmatch(value):
        raise TypeConversionError(f"Cannot convert {value!r} to a 64-bit integer")

    result = int(value)
    if result < INT64_MIN or result > INT64_MAX:
        raise TypeConversionError(f"Value {value!r} overflows a 64-bit integer")
    return result


def parse_f64(value: str) -> float:
    """Parse a 64-bit float literal, scientific notation included."""
    # float() tolerates surrounding whitespace and digit separators, the wire format does not
    if not value or value != value.strip() or "_" in value:
        raise TypeConversionError(f"Cannot convert {value!r} to a float")

    try:
        return float(value)
    except ValueError as e:
        raise TypeConversionError(f"Cannot convert {value!r} to a float") from e


def parse_bool(value: str) -> bool:
    """Parse the literal strings ``true`` and ``false``."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise TypeConversionError(f"Cannot convert {value!r} to a boolean")


def parse_str(value: str) -> str:
    """Return the wire string unchanged."""
    return value


def parse_timestamp(value: str) -> datetime:
    """Parse seconds since the epoch, as BigQuery encodes TIMESTAMP cells.

    Returns:
        Timezone-aware datetime in UTC, rounded to the microsecond
    """
    seconds_float = parse_f64(value)
    if seconds_float != seconds_float or seconds_float in (float("inf"), float("-inf")):
        raise TypeConversionError(f"Cannot convert {value!r} to a timestamp")

    try:
        micros = int(Decimal(value).scaleb(6).to_integral_value())
        return _EPOCH + timedelta(microseconds=micros)
    except (InvalidOperation, OverflowError) as e:
        raise TypeConversionError(f"Timestamp {value!r} is out of range") from e
