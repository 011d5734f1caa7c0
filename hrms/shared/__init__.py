"""Shared utilities: telemetry, request metadata, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from hrms.shared.utils import ensure_utc, generate_cuid, to_snapshot, utc_now

__all__ = ["ensure_utc", "generate_cuid", "to_snapshot", "utc_now"]
