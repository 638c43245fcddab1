"""
Canonical JSON serialization helpers for external records.

Provides a single canonical JSON policy so that two exports of the same
extender produce byte-identical text. This module is zero-IO.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - No datetime hooks; records carry timestamps as strings.
"""

from __future__ import annotations

import json
from typing import Any

__all__ = [
    "json_loads",
    "json_dumps_canonical",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def json_loads(s: str) -> Any:
    """Deserialize a JSON string using the stdlib json module."""
    return json.loads(s)
