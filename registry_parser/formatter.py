"""
Field Formatter
===============
Normalizes a raw field value before it is stored on a record.
"""

from __future__ import annotations

from typing import Callable

FieldFormatter = Callable[[str], str]


def format_field(value: str) -> str:
    """Trim surrounding whitespace."""
    return value.strip()
