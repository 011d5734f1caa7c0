"""Identifier generators."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant identifier (CUID2) for primary keys."""
    value = _cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid generator, got {type(value).__name__}")
    return value
