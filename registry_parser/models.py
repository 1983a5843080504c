"""
Data Models
===========
Pydantic models for extracted business records and API payloads.
Field names follow the JSON keys the API has always served (camelCase).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

# ─── Schema Constants ─────────────────────────────────────────────────────────

# Fields assigned positionally after a business ID, in this order.
FIELD_ORDER: tuple[str, ...] = (
    "businessName",
    "startDate",
    "address",
    "city",
    "zipCode",
)


# ─── Record Model ─────────────────────────────────────────────────────────────


class BusinessRecord(BaseModel):
    """
    A single business-registration entry.

    Every field is optional: records are assembled positionally and may
    end before all slots are filled. Unset fields are left out of the
    serialized output.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    business_name: Optional[str] = Field(default=None, alias="businessName")
    start_date: Optional[str] = Field(default=None, alias="startDate")
    address: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, alias="zipCode")

    @property
    def has_id(self) -> bool:
        return bool(self.id)

    @property
    def missing_fields(self) -> list[str]:
        """Schema fields never assigned, in schema order."""
        data = self.to_json()
        return [name for name in FIELD_ORDER if name not in data]

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ─── Extraction Models ────────────────────────────────────────────────────────


class AssemblerStats(BaseModel):
    """Counters collected by the record assembler during one run."""
    fragments_seen: int = 0
    fragments_skipped: int = 0
    id_overwrites: int = 0
    finalized_without_id: int = 0


class ExtractionReport(BaseModel):
    """Structural summary of one extraction run."""
    total_records: int = 0
    complete_records: int = 0
    records_missing_id: int = 0
    incomplete_record_ids: list[str] = Field(default_factory=list)
    id_overwrites: int = 0

    @computed_field
    @property
    def completion_rate(self) -> float:
        if self.total_records == 0:
            return 0.0
        return round(self.complete_records / self.total_records * 100, 2)


class ExtractionResult(BaseModel):
    """Complete output of one extraction run."""
    source_pdf: str
    extracted_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    records: list[BusinessRecord] = Field(default_factory=list)
    stats: AssemblerStats = Field(default_factory=AssemblerStats)
    report: ExtractionReport = Field(default_factory=ExtractionReport)

    @property
    def total(self) -> int:
        return len(self.records)


# ─── API Payloads ─────────────────────────────────────────────────────────────


class BusinessPage(BaseModel):
    """Response body of the /api/businesses endpoints."""
    data: list[BusinessRecord] = Field(default_factory=list)
    total: int = 0

    def to_json(self) -> dict:
        return {
            "data": [record.to_json() for record in self.data],
            "total": self.total,
        }
