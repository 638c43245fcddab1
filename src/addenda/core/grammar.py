"""
Canonical addenda grammar and helpers.

Defines extender kinds, value types, record kinds and table names, plus zero-IO
helpers that classify and convert raw values.

Responsibilities
- Define enums whose serialized values are lower_snake.
- Detect the value type of a raw value (the write-time heuristic).
- Convert a raw value to an integer (the read-time conversion).
- Normalize kind tokens coming from callers and external records.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE
   - Enum serialized values (records, tables): lower_snake

2) Raw storage, coerced reads:
   - detect_value_type never changes the value it inspects.
   - integer_value is applied only when `value` is read back.

Examples
--------
>>> from addenda.core.grammar import detect_value_type, integer_value, extender_kind_from_value
>>> detect_value_type("42")
'integer'
>>> detect_value_type("forty-two")
'text'
>>> detect_value_type("forty-two", "integer")
'integer'
>>> integer_value("42")
42
>>> extender_kind_from_value("ANNOTATION").value
'annotation'
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from .errors import GrammarError

__all__ = [
    "ValueType",
    "ExtenderKind",
    "RecordKind",
    "TableName",
    "TableDescriptor",
    "is_lower_snake",
    "is_numeric",
    "detect_value_type",
    "integer_value",
    "extender_kind_from_value",
    "record_kind_from_value",
    "ensure_all_enum_values_lower_snake",
]


class ValueType(Enum):
    """
    Read-time interpretation tag stored alongside an extender's value.

    Serialized values appear in:
      - extender bag `value_type`
      - annotations.value_type / metadata.value_type columns
    """

    INTEGER = "integer"
    TEXT = "text"


class ExtenderKind(Enum):
    """
    The closed set of extender variants.

    Serialized values appear in:
      - extender bag `type`
      - external record `type`
      - permission checks (selects the kind-specific lookup)
    """

    ANNOTATION = "annotation"
    METADATA = "metadata"


class RecordKind(Enum):
    """
    Declared kind of an incoming external record.

    Notes:
      A record with no kind, or a kind outside this enum, is applied as a plain
      entity attribute by the reconciler.
    """

    ANNOTATION = "annotation"
    METADATA = "metadata"
    VOLATILE = "volatile"


class TableName(Enum):
    """
    Canonical table names for tabular extender batches. Enforced by addenda.io.validate.
    """

    ANNOTATIONS = "annotations"
    METADATA = "metadata"
    RECORDS = "records"


@dataclass(frozen=True)
class TableDescriptor:
    """
    Frozen descriptor for a canonical addenda table.

    Attributes:
        name (TableName): Canonical table identifier.
        columns (dict[str, str]): lower_snake column_name -> dtype, dtype in {"i64","str"}.
        required (list[str]): Columns that must exist and be populated (non-null).
        nullable (list[str]): Columns permitted to contain nulls.

    Notes:
        - required ⊆ columns; (required ∪ nullable) == columns; required ∩ nullable = ∅
          are guarded by tests.
    """

    name: TableName
    columns: dict[str, str]
    required: list[str]
    nullable: list[str]


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")

# Whole-string decimal number with optional surrounding whitespace.
_NUMERIC_RE: Final[re.Pattern[str]] = re.compile(
    r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$"
)

# Leading numeric prefix used by the read-time integer conversion.
_NUMERIC_PREFIX_RE: Final[re.Pattern[str]] = re.compile(
    r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Examples:
      >>> is_lower_snake("value_type")
      True
      >>> is_lower_snake("ValueType")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def is_numeric(value: Any) -> bool:
    """
    Check whether a value is a real number or a string that parses fully as one.

    Args:
      value (Any): Candidate value.

    Returns:
      bool: True for int/float (bool excluded) and strings like "42", " -1.5e3 ".

    Examples:
      >>> is_numeric(7), is_numeric("7.5"), is_numeric("7 apples"), is_numeric(True)
      (True, True, False, False)
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value))
    return False


def detect_value_type(value: Any, value_type: str = "") -> str:
    """
    Detect the value_type tag for a value.

    Args:
      value (Any): Raw value about to be stored.
      value_type (str): Explicit override; returned unchanged when non-empty.

    Returns:
      str: The override if given, else "integer" for numeric values and
      fully-numeric strings, else "text".

    Notes:
      This is a heuristic, not a type system. A numeric-looking string is tagged
      "integer" but stored as given; conversion happens when `value` is read.
    """
    if value_type:
        return value_type
    if is_numeric(value):
        return ValueType.INTEGER.value
    return ValueType.TEXT.value


def integer_value(value: Any) -> int:
    """
    Convert a raw stored value to an integer.

    Args:
      value (Any): Raw value as stored in an extender bag.

    Returns:
      int: Integers pass through; floats truncate toward zero; strings use their
      leading numeric prefix; anything without a numeric reading becomes 0.

    Examples:
      >>> integer_value("42"), integer_value("4.9"), integer_value("12 monkeys"), integer_value("n/a")
      (42, 4, 12, 0)
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        m = _NUMERIC_PREFIX_RE.match(value)
        if not m:
            return 0
        token = m.group(0).strip()
        try:
            return int(token)
        except ValueError:
            f = float(token)
            return int(f) if math.isfinite(f) else 0
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def extender_kind_from_value(s: str | ExtenderKind) -> ExtenderKind:
    """
    Parse a kind token into an ExtenderKind.

    Args:
      s (str | ExtenderKind): Kind token (case-insensitive) or enum member.

    Returns:
      ExtenderKind: Parsed kind.

    Raises:
      GrammarError: If s is not a known extender kind.
    """
    if isinstance(s, ExtenderKind):
        return s
    token = (s or "").strip().lower()
    allowed = {k.value for k in ExtenderKind}
    if token not in allowed:
        raise GrammarError(f"extender kind must be one of {sorted(allowed)} (got {s!r})")
    return ExtenderKind(token)


def record_kind_from_value(s: str | None) -> RecordKind | None:
    """
    Parse a record `type` attribute into a RecordKind.

    Matching is exact: "Metadata" is not a kind and imports as a plain attribute.

    Returns:
      RecordKind | None: None when the record carries no recognized kind, which
      the reconciler treats as a plain entity attribute.
    """
    if not s:
        return None
    try:
        return RecordKind(s.strip())
    except ValueError:
        return None


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.
    """
    for E in enums:
        for m in E:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )
