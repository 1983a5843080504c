"""Shared fixtures: registry PDFs generated with PyMuPDF."""

from __future__ import annotations

import fitz
import pytest

LINES_PER_PAGE = 40


def write_registry_pdf(path, lines: list[str], lines_per_page: int = LINES_PER_PAGE):
    """Write each line as its own text line, top to bottom, paging as needed."""
    doc = fitz.open()
    chunks = [
        lines[i:i + lines_per_page]
        for i in range(0, len(lines), lines_per_page)
    ] or [[]]

    for chunk in chunks:
        page = doc.new_page()
        y = 60
        for line in chunk:
            page.insert_text((72, y), line, fontsize=10)
            y += 18

    doc.save(str(path))
    doc.close()
    return str(path)


def business_lines(count: int) -> list[str]:
    """Six lines per business: ID followed by the five schema fields."""
    lines = []
    for n in range(count):
        lines.extend([
            f"{n:010d}-0001-{n % 10}",
            f"Business {n} LLC",
            "2025-05-01",
            f"{n} Main St",
            "Springfield",
            f"{90000 + n}",
        ])
    return lines


@pytest.fixture
def make_pdf(tmp_path):
    """Factory: make_pdf(lines, name=...) -> path of a generated PDF."""
    def _make(lines: list[str], name: str = "registry.pdf", **kwargs) -> str:
        return write_registry_pdf(tmp_path / name, lines, **kwargs)
    return _make
