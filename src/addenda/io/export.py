"""
Export of extenders under the configured site settings.

Overview
- export_records: Extender.export for each extender, minting identifiers under
  Settings.site_url and rendering `published` in Settings.published_format.
- export_frame: the same records as a validated 'records' frame, ready for
  ExtenderImporter.import_frame on the receiving side.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import polars as pl

from addenda.core.extender import Extender
from addenda.core.schema import ExternalRecord

from .config import Settings
from .frame import records_to_frame

__all__ = [
    "export_records",
    "export_frame",
]

logger = logging.getLogger(__name__)


def export_records(
    extenders: Iterable[Extender], settings: Settings | None = None
) -> list[ExternalRecord]:
    """
    Serialize extenders using the site url and timestamp style from settings.

    Args:
        extenders (Iterable[Extender]): Extenders of any kind.
        settings (Settings | None): Defaults when None.

    Returns:
        list[ExternalRecord]: One record per extender, in input order.
    """
    s = settings or Settings()
    records = [ext.export(s.site_url, s.published_format) for ext in extenders]
    logger.debug("exported %d record(s) under %s", len(records), s.site_url)
    return records


def export_frame(extenders: Iterable[Extender], settings: Settings | None = None) -> pl.DataFrame:
    """Export extenders straight into a 'records' frame."""
    s = settings or Settings()
    return records_to_frame(export_records(extenders, s), strict=s.strict_schema)
