"""
Extraction Report
=================
Post-extraction structural summary:
    - Total Records
    - Complete Records (ID plus all five fields)
    - Records Missing ID
    - Incomplete Record IDs
    - ID Overwrites (an ID arriving while a record was still open)

Field contents are never inspected.
"""

from __future__ import annotations

import logging

from .models import AssemblerStats, BusinessRecord, ExtractionReport

logger = logging.getLogger(__name__)


class ReportBuilder:
    """Summarizes assembled records for logs and the CLI."""

    def build(
        self,
        records: list[BusinessRecord],
        stats: AssemblerStats,
    ) -> ExtractionReport:
        report = ExtractionReport(
            total_records=len(records),
            id_overwrites=stats.id_overwrites,
        )

        for record in records:
            if not record.has_id:
                report.records_missing_id += 1
            elif record.missing_fields:
                report.incomplete_record_ids.append(record.id)
            else:
                report.complete_records += 1

        logger.info(
            f"Records: {report.total_records} | "
            f"Complete: {report.complete_records} ({report.completion_rate}%) | "
            f"Incomplete: {len(report.incomplete_record_ids)} | "
            f"Missing ID: {report.records_missing_id} | "
            f"ID overwrites: {report.id_overwrites}"
        )

        return report
