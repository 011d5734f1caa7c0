"""Shared telemetry: logging setup and tracing helpers."""

from hrms.shared.telemetry.logging import setup_logging
from hrms.shared.telemetry.tracing import add_span_attributes, traced

__all__ = ["add_span_attributes", "setup_logging", "traced"]
