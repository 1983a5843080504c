"""
Record Assembler
================
Deterministic state machine that rebuilds business records from a flat
stream of text fragments. The business ID is the only reliable record
boundary; the five fields after it are assigned positionally.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Iterable, Optional

from .formatter import FieldFormatter, format_field
from .models import FIELD_ORDER, AssemblerStats, BusinessRecord

logger = logging.getLogger(__name__)

# ─── Boundary Pattern ─────────────────────────────────────────────────────────

# Matches IDs like "1234567890-1234-5" (anchored: ^\d{10}-\d{4}-\d$)
BUSINESS_ID_PATTERN = r"\d{10}-\d{4}-\d"

BoundaryPredicate = Callable[[str], bool]


def make_boundary_predicate(pattern: str) -> BoundaryPredicate:
    """Build a predicate that accepts a token matching `pattern` in full."""
    compiled = re.compile(pattern, re.ASCII)

    def predicate(token: str) -> bool:
        return compiled.fullmatch(token) is not None

    return predicate


is_business_id = make_boundary_predicate(BUSINESS_ID_PATTERN)


class AssemblerState(Enum):
    """Whether a record with a recognized ID is accepting field values."""
    IDLE = "IDLE"
    IN_RECORD = "IN_RECORD"


class RecordAssembler:
    """
    Turns an ordered sequence of text fragments into BusinessRecords.

    One instance belongs to a single extraction call. Per non-empty
    fragment the steps run in a fixed order:

        1. Split on spaces; the first word is the head.
        2. If in a record with fields left, assign the formatted text to
           the next field.
        3. Otherwise, if no fields are left, finalize the record (even
           without an ID) and reset.
        4. If the head is a business ID, enter a record and set its ID.

    Step 4 always runs, so an ID arriving mid-record is stored as a field
    value and also replaces the record's ID. At end of stream the pending
    record is kept only when it has an ID.
    """

    def __init__(
        self,
        is_boundary: BoundaryPredicate = is_business_id,
        formatter: FieldFormatter = format_field,
        fields: Iterable[str] = FIELD_ORDER,
    ):
        self.is_boundary = is_boundary
        self.formatter = formatter
        self.fields = tuple(fields)

        # Records only carry the schema fields; anything else would be lost.
        unknown = [name for name in self.fields if name not in FIELD_ORDER]
        if unknown:
            raise ValueError(
                f"Unknown fields {unknown}, expected names from {FIELD_ORDER}"
            )
        if len(set(self.fields)) != len(self.fields):
            raise ValueError(f"Duplicate fields in {self.fields}")

        self.reset()

    def reset(self):
        """Reset the state machine for a fresh run."""
        self.state = AssemblerState.IDLE
        self.current: dict[str, str] = {}
        self.pending_fields: list[str] = list(self.fields)
        self.records: list[BusinessRecord] = []
        self.stats = AssemblerStats()

    def assemble(self, fragments: Iterable[str]) -> list[BusinessRecord]:
        """
        Consume every fragment and return the finished records.

        Exceptions raised by the fragment iterable propagate unchanged and
        the partial result is discarded.
        """
        self.reset()

        for fragment in fragments:
            self.feed(fragment)

        return self.finish()

    def feed(self, fragment: Optional[str]):
        """Process a single fragment."""
        self.stats.fragments_seen += 1

        if not fragment or not fragment.strip():
            self.stats.fragments_skipped += 1
            return

        parts = fragment.split(" ")
        head = parts[0]
        value = " ".join(parts)

        record_open = (
            self.state == AssemblerState.IN_RECORD and bool(self.pending_fields)
        )

        if record_open:
            self._assign(value)
        elif not self.pending_fields:
            self._finalize_record()

        if self.is_boundary(head):
            self._start_record(head, replaces_open_record=record_open)

    def finish(self) -> list[BusinessRecord]:
        """Close the stream: keep the pending record only if it has an ID."""
        if self.current.get("id"):
            self.records.append(BusinessRecord.model_validate(self.current))

        logger.info(
            f"Assembled {len(self.records)} records from "
            f"{self.stats.fragments_seen} fragments"
        )
        return self.records

    def _assign(self, value: str):
        name = self.pending_fields.pop(0)
        self.current[name] = self.formatter(value)

    def _finalize_record(self):
        if "id" not in self.current:
            self.stats.finalized_without_id += 1
            logger.warning(f"Finalizing record without ID: {self.current}")

        self.records.append(BusinessRecord.model_validate(self.current))
        self.current = {}
        self.pending_fields = list(self.fields)
        self.state = AssemblerState.IDLE

    def _start_record(self, business_id: str, replaces_open_record: bool = False):
        previous = self.current.get("id")
        if replaces_open_record:
            self.stats.id_overwrites += 1
            logger.warning(
                f"Business ID {business_id} replaces {previous} "
                f"on a record that was still accepting fields"
            )
        else:
            logger.debug(f"Detected business {business_id}")

        self.state = AssemblerState.IN_RECORD
        self.current["id"] = business_id
