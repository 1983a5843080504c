"""
Fragment Source
===============
Decodes a PDF with PyMuPDF (fitz) and yields its text fragments in
reading order. Iteration is lazy: pages are decoded one at a time, and
a decoding failure at any point surfaces as DecodeError.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator, Optional

import fitz  # PyMuPDF

from .errors import DecodeError

logger = logging.getLogger(__name__)

GRANULARITIES = ("span", "line", "block")


class FragmentSource:
    """
    Ordered text fragments from one PDF.

    Granularity controls what counts as one fragment:
        - span:  a run of text sharing one font (a positioned text item)
        - line:  all spans on a line, concatenated
        - block: a whole text block, lines joined by spaces
    """

    def __init__(
        self,
        pdf_path: str,
        granularity: str = "span",
        sort: bool = True,
        page_range: Optional[tuple[int, int]] = None,
    ):
        if granularity not in GRANULARITIES:
            raise ValueError(
                f"Unknown granularity {granularity!r}, "
                f"expected one of {GRANULARITIES}"
            )
        self.pdf_path = pdf_path
        self.granularity = granularity
        self.sort = sort
        self.page_range = page_range

    def page_count(self) -> int:
        """Get total number of pages in the PDF."""
        with self._open() as doc:
            return doc.page_count

    def __iter__(self) -> Iterator[str]:
        with self._open() as doc:
            start_page, end_page = self._resolve_range(doc.page_count)

            logger.info(
                f"Reading fragments from {self.pdf_path} "
                f"(pages {start_page} to {end_page})"
            )

            for page_idx in range(start_page - 1, end_page):
                try:
                    fragments = self._page_fragments(doc[page_idx])
                except Exception as e:
                    raise DecodeError(
                        f"Failed to decode page {page_idx + 1} "
                        f"of {self.pdf_path}: {e}"
                    ) from e

                yield from fragments

    def _open(self) -> fitz.Document:
        if not os.path.exists(self.pdf_path):
            raise DecodeError(f"PDF not found: {self.pdf_path}")

        try:
            doc = fitz.open(self.pdf_path)
        except Exception as e:
            raise DecodeError(f"Cannot open {self.pdf_path}: {e}") from e

        if doc.needs_pass:
            doc.close()
            raise DecodeError(f"PDF is encrypted: {self.pdf_path}")

        return doc

    def _resolve_range(self, total_pages: int) -> tuple[int, int]:
        # 1-indexed, inclusive
        if not self.page_range:
            return 1, total_pages
        return max(1, self.page_range[0]), min(total_pages, self.page_range[1])

    def _page_fragments(self, page: fitz.Page) -> list[str]:
        page_dict = page.get_text(
            "dict", flags=fitz.TEXT_PRESERVE_WHITESPACE, sort=self.sort
        )
        fragments: list[str] = []

        for block in page_dict.get("blocks", []):
            if block["type"] != 0:  # Images
                continue

            lines = [
                [span["text"] for span in line.get("spans", [])]
                for line in block.get("lines", [])
            ]

            if self.granularity == "span":
                fragments.extend(text for spans in lines for text in spans)
            elif self.granularity == "line":
                fragments.extend("".join(spans) for spans in lines)
            else:
                fragments.append(" ".join("".join(spans) for spans in lines))

        return fragments
