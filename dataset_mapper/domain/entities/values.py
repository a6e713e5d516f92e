"""Row cell values.

Dataset rows hold scalar values. ``ValueKind`` names the four shapes a cell
can take so that coercions to text or numbers are explicit and total: any
value that is not absent, boolean or numeric is handled through its string
form, including objects a caller passes straight to the validator.
"""

from enum import Enum
import math
import re

from ...constants import Patterns

type CellValue = str | int | float | bool | None
type Row = dict[str, CellValue]

_DECIMAL_NUMBER = re.compile(Patterns.DECIMAL_NUMBER)


class ValueKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ABSENT = "absent"


def value_kind(value: object) -> ValueKind:
    if value is None:
        return ValueKind.ABSENT
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    return ValueKind.TEXT


def is_cell_value(value: object) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def is_missing(value: object) -> bool:
    """True for ``None`` and float NaN, the marker pandas uses for an empty cell."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def normalize_cell(value: CellValue) -> CellValue:
    return None if is_missing(value) else value


def to_text(value: object) -> str:
    kind = value_kind(value)
    if kind is ValueKind.ABSENT:
        return ""
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    return str(value)


def is_empty(value: object) -> bool:
    return to_text(value).strip() == ""


def parse_number(value: object) -> float | None:
    """Parse a cell as a finite number; the whole stripped text must be numeric."""
    kind = value_kind(value)
    if kind is ValueKind.NUMBER:
        number = float(value)  # type: ignore[arg-type]
        return number if math.isfinite(number) else None
    if kind is not ValueKind.TEXT:
        return None
    text = to_text(value).strip()
    if not _DECIMAL_NUMBER.match(text):
        return None
    try:
        number = float(text)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None
