"""
Polars frames for batches of extenders and external records.

Overview
- extenders_to_frame / frame_to_extenders: one extender kind per frame, shaped by the
  'annotations' or 'metadata' descriptor.
- records_to_frame / frame_to_records: external records shaped by the 'records' descriptor.
- Every frame is validated against its descriptor on the way in and out.

Notes
- `value` and `body` travel as text. An extender rebuilt from a frame keeps the
  value_type column, so reads convert exactly as before.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import polars as pl

from addenda.core.extender import Extender
from addenda.core.grammar import ExtenderKind, extender_kind_from_value
from addenda.core.protocols import ExtenderStore
from addenda.core.schema import ExternalRecord
from addenda.core.tables import RECORDS_DESC, TableDescriptor, table_for_kind

from .errors import FrameSchemaError
from .validate import polars_schema, validate_frame_against_descriptor

__all__ = [
    "extenders_to_frame",
    "frame_to_extenders",
    "records_to_frame",
    "frame_to_records",
]


def _as_text(v: Any) -> str | None:
    return None if v is None else str(v)


def _build_frame(rows: list[dict[str, Any]], desc: TableDescriptor, strict: bool) -> pl.DataFrame:
    schema = polars_schema(desc)
    if rows:
        df = pl.from_dicts(rows, schema=schema)  # type: ignore[arg-type]
    else:
        df = pl.DataFrame(schema=schema)  # type: ignore[arg-type]
    return validate_frame_against_descriptor(df, desc, strict=strict)


def extenders_to_frame(
    extenders: Iterable[Extender],
    kind: ExtenderKind | str | None = None,
    *,
    strict: bool = True,
) -> pl.DataFrame:
    """
    Materialize extenders of one kind as a DataFrame.

    Args:
        extenders (Iterable[Extender]): Extenders to export.
        kind (ExtenderKind | str | None): Expected kind; inferred from the first extender
            when None. An empty batch without a kind is treated as metadata.
        strict (bool): Passed to descriptor validation.

    Returns:
        pl.DataFrame: Columns of the kind's table descriptor, in order.

    Raises:
        FrameSchemaError: If the batch mixes kinds or a required field is unset.
    """
    items = list(extenders)
    if kind is not None:
        k = extender_kind_from_value(kind)
    elif items:
        k = items[0].kind
    else:
        k = ExtenderKind.METADATA

    desc = table_for_kind(k)
    rows: list[dict[str, Any]] = []
    for ext in items:
        if ext.kind is not k:
            raise FrameSchemaError(f"expected only {k.value} extenders, got {ext.kind.value}")
        bag = ext.as_dict()
        row = {col: bag.get(col) for col in desc.columns}
        row["value"] = _as_text(row["value"])
        rows.append(row)
    return _build_frame(rows, desc, strict)


def frame_to_extenders(
    df: pl.DataFrame,
    kind: ExtenderKind | str,
    *,
    store: ExtenderStore | None = None,
    strict: bool = True,
) -> list[Extender]:
    """Rebuild extenders of one kind from a validated frame."""
    k = extender_kind_from_value(kind)
    df = validate_frame_against_descriptor(df, table_for_kind(k), strict=strict)
    return [Extender(k, store=store, **row) for row in df.iter_rows(named=True)]


def records_to_frame(records: Iterable[ExternalRecord], *, strict: bool = True) -> pl.DataFrame:
    """Materialize external records as a DataFrame shaped by the 'records' descriptor."""
    rows: list[dict[str, Any]] = []
    for rec in records:
        row = {col: getattr(rec, col) for col in RECORDS_DESC.columns}
        row["body"] = _as_text(row["body"])
        rows.append(row)
    return _build_frame(rows, RECORDS_DESC, strict)


def frame_to_records(df: pl.DataFrame, *, strict: bool = True) -> list[ExternalRecord]:
    """Parse each row of a validated records frame into an ExternalRecord."""
    df = validate_frame_against_descriptor(df, RECORDS_DESC, strict=strict)
    known = set(RECORDS_DESC.columns)
    return [
        ExternalRecord.model_validate({k: v for k, v in row.items() if k in known})
        for row in df.iter_rows(named=True)
    ]
