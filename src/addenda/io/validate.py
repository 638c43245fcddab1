"""
Schema validation utilities for addenda.io.

Purpose
- Validate Polars DataFrames against canonical table descriptors from addenda.core.tables.
- Apply pragmatic checks with safe casting for scalar dtypes.

Checks performed
- Required columns present and free of nulls.
- When strict=True: no columns outside (required ∪ nullable).
- Dtype compatibility: "i64" and "str" columns are cast when they do not match.
  Values that cannot be cast become null and then fail the required check.
"""

from __future__ import annotations

from collections.abc import Iterable

import polars as pl

from addenda.core.grammar import TableName
from addenda.core.tables import TableDescriptor, get_table

from .errors import FrameSchemaError

__all__ = [
    "validate_frame_against_descriptor",
    "validate_frame_for_table",
    "polars_schema",
]

# Polars exposes dtype singletons/classes (e.g., pl.Int64); keep this mapping loosely typed.
_DTYPE_MAP: dict[str, object] = {
    "i64": pl.Int64,
    "str": pl.Utf8,
}


def polars_schema(desc: TableDescriptor) -> dict[str, object]:
    """Polars schema (column -> dtype) for a descriptor, in column order."""
    return {col: _DTYPE_MAP[dtype] for col, dtype in desc.columns.items()}


def _safe_cast(df: pl.DataFrame, col: str, target: object) -> pl.DataFrame:
    try:
        return df.with_columns(pl.col(col).cast(target, strict=False))  # type: ignore[arg-type]
    except pl.exceptions.PolarsError as exc:
        raise FrameSchemaError(f"failed to cast column {col!r} to {target}: {exc}") from exc


def _ensure_columns_present(df: pl.DataFrame, needed: Iterable[str]) -> None:
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise FrameSchemaError(f"missing required columns: {missing!r}")


def _ensure_no_extra_columns(df: pl.DataFrame, allowed: set[str]) -> None:
    extras = [c for c in df.columns if c not in allowed]
    if extras:
        raise FrameSchemaError(f"unexpected columns present: {extras!r} (allowed={sorted(allowed)!r})")


def _ensure_no_nulls(df: pl.DataFrame, cols: Iterable[str]) -> None:
    nulls = [c for c in cols if df.get_column(c).null_count() > 0]
    if nulls:
        raise FrameSchemaError(f"required columns contain nulls: {nulls!r}")


def validate_frame_against_descriptor(
    df: pl.DataFrame,
    desc: TableDescriptor,
    *,
    strict: bool = True,
) -> pl.DataFrame:
    """
    Validate a Polars DataFrame against a TableDescriptor.

    Args:
        df (pl.DataFrame): Frame to validate.
        desc (TableDescriptor): Canonical descriptor from addenda.core.tables.
        strict (bool): Enforce exact column set (no extras) when True.

    Returns:
        pl.DataFrame: Possibly with safe casts applied for scalar types.

    Raises:
        FrameSchemaError: If required columns are missing or null, extras are present
            under strict mode, or a descriptor dtype is unknown.
    """
    required = set(desc.required)
    nullable = set(desc.nullable)
    _ensure_columns_present(df, desc.required)
    if strict:
        _ensure_no_extra_columns(df, required | nullable)

    for col, dtype_name in desc.columns.items():
        if col not in df.columns:
            continue
        if dtype_name not in _DTYPE_MAP:  # pragma: no cover - guarded by descriptor tests
            raise FrameSchemaError(f"unknown descriptor dtype {dtype_name!r} for column {col!r}")
        expected = _DTYPE_MAP[dtype_name]
        if df.schema[col] != expected:
            df = _safe_cast(df, col, expected)

    _ensure_no_nulls(df, desc.required)
    return df


def validate_frame_for_table(
    df: pl.DataFrame,
    table: TableName | str,
    *,
    strict: bool = True,
) -> pl.DataFrame:
    """
    Validate a DataFrame against the descriptor for a given table.

    Args:
        df (pl.DataFrame): DataFrame to validate.
        table (TableName | str): Canonical table name (enum or lower_snake string).
        strict (bool): Enforce exact column set when True.
    """
    tname = table.value if isinstance(table, TableName) else str(table)
    desc = get_table(TableName(tname))
    return validate_frame_against_descriptor(df, desc, strict=strict)
