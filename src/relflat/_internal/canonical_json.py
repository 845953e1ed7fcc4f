"""Centralized canonical JSON serialization.

Every JSON payload the CLI writes (table views, verification results) goes
through canonical_dumps so that the same input always produces the same bytes.
Cell values that database drivers hand back as Python objects are rendered the
way the console shows them in the grid.
"""

import datetime
import json
import uuid
from decimal import Decimal
from typing import Any


def _cell_default(value: Any) -> Any:
    """Render non-JSON cell values from database rows."""
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (Decimal, uuid.UUID)):
        # Decimal keeps its exact digits as text rather than going through float
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization of table views and reports.

    Rules:
    - UTF-8 encoding
    - Sorted keys
    - Stable separators (",", ":")
    - List order preserved (column order is meaningful)
    - datetime/date/time as ISO 8601, Decimal and UUID as strings
    - NaN and infinities are rejected with ValueError (not valid JSON)

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,  # UTF-8 encoding
        allow_nan=False,
        default=_cell_default,
    )
