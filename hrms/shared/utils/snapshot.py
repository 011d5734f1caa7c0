"""Serialize entity states into JSON-safe snapshots for audit records."""

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def _json_safe(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_json_safe(v) for v in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _json_safe(getattr(value, f.name)) for f in dataclasses.fields(value)}
    return str(value)


def to_snapshot(state: Any) -> dict[str, Any] | None:
    """Return an opaque, JSON-serializable copy of an entity state.

    Accepts result dataclasses and plain dicts. None stays None (no prior
    or no remaining state).
    """
    if state is None:
        return None
    snapshot = _json_safe(state)
    if not isinstance(snapshot, dict):
        return {"value": snapshot}
    return snapshot
