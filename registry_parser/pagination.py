"""
Pagination
==========
Fixed-size page slicing for the business list.

Page numbers are not validated: an out-of-range or non-numeric page
produces an empty (or partial) page, never an error.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence, TypeVar

PAGE_SIZE = 50

T = TypeVar("T")

# Leading integer the way JavaScript's parseInt reads it: "12abc" -> 12,
# "0x1A" -> 26, " -3" -> -3, "abc" and "0x" -> no number.
_LEADING_INT = re.compile(
    r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(?!0[xX])(\d+))", re.ASCII
)


def parse_page(raw: Optional[str]) -> Optional[int]:
    """Coerce a raw page parameter, returning None when it is not a number."""
    if raw is None:
        return None

    match = _LEADING_INT.match(raw)
    if not match:
        return None

    sign, hex_digits, dec_digits = match.groups()
    number = int(hex_digits, 16) if hex_digits else int(dec_digits)
    return -number if sign == "-" else number


def paginate(
    records: Sequence[T],
    page: Optional[int],
    page_size: int = PAGE_SIZE,
) -> list[T]:
    """Return records[(page - 1) * page_size : page * page_size]."""
    if page is None:
        return []

    start_index = (page - 1) * page_size
    end_index = start_index + page_size
    return list(records[start_index:end_index])
