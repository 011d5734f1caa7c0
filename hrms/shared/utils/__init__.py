"""Shared utilities: datetime, generators, snapshots."""

from hrms.shared.utils.datetime import ensure_utc, start_of_utc_day, utc_now
from hrms.shared.utils.generators import generate_cuid
from hrms.shared.utils.snapshot import to_snapshot

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "start_of_utc_day",
    "to_snapshot",
    "utc_now",
]
