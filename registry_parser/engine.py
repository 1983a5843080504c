"""
Extraction Engine
=================
Runs one complete extraction: PDF fragments, record assembly, report.

Usage:
    engine = ExtractionEngine(ExtractorConfig(pdf_path="may-2025.pdf"))
    result = engine.extract()
    # result.records is the ordered list of BusinessRecords

Architecture:
    PDF → FragmentSource → fragments → RecordAssembler →
    BusinessRecords → ReportBuilder → ExtractionResult

Every call builds its own FragmentSource and RecordAssembler; nothing is
cached or shared between calls.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .assembler import BUSINESS_ID_PATTERN, RecordAssembler, make_boundary_predicate
from .fragment_source import FragmentSource
from .models import ExtractionResult
from .report import ReportBuilder

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExtractorConfig:
    """Configuration for the extraction engine."""

    # Source document
    pdf_path: str = "may-2025.pdf"
    page_range: Optional[tuple[int, int]] = None

    # Fragment decoding
    granularity: str = "span"
    sort: bool = True

    # Record boundary
    id_pattern: str = BUSINESS_ID_PATTERN

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, **overrides) -> "ExtractorConfig":
        """Build a config from environment variables, then apply overrides."""
        values = {
            "pdf_path": os.environ.get("BUSINESS_PDF_PATH", cls.pdf_path),
            "granularity": os.environ.get("FRAGMENT_GRANULARITY", cls.granularity),
            "id_pattern": os.environ.get("BUSINESS_ID_PATTERN", cls.id_pattern),
            "log_level": os.environ.get("LOG_LEVEL", cls.log_level),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class ExtractionEngine:
    """
    Main extraction pipeline.

    Orchestrates:
        1. Fragment decoding (PyMuPDF)
        2. Record assembly (business ID boundaries)
        3. Structural report
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()
        self.is_boundary = make_boundary_predicate(self.config.id_pattern)
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        package_logger = logging.getLogger("registry_parser")
        package_logger.setLevel(log_level)

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(console)

        # File handler (once per file)
        if self.config.log_file:
            log_path = str(Path(self.config.log_file).absolute())
            if any(
                getattr(h, "baseFilename", None) == log_path
                for h in package_logger.handlers
            ):
                return

            Path(log_path).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                log_path, encoding="utf-8"
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(file_handler)

    def extract(self, pdf_path: Optional[str] = None) -> ExtractionResult:
        """
        Extract business records from a PDF.

        Args:
            pdf_path: PDF to read; defaults to the configured document.

        Returns:
            ExtractionResult with records in finalization order.

        Raises:
            DecodeError: If the PDF cannot be decoded at any point.
        """
        pdf_path = pdf_path or self.config.pdf_path

        start_time = time.time()
        logger.info(f"Starting extraction of: {pdf_path}")

        source = FragmentSource(
            pdf_path,
            granularity=self.config.granularity,
            sort=self.config.sort,
            page_range=self.config.page_range,
        )
        assembler = RecordAssembler(is_boundary=self.is_boundary)
        records = assembler.assemble(source)

        report = ReportBuilder().build(records, assembler.stats)

        elapsed = time.time() - start_time
        logger.info(
            f"Extraction complete in {elapsed:.2f}s, "
            f"{len(records)} businesses extracted"
        )

        return ExtractionResult(
            source_pdf=os.path.basename(pdf_path),
            records=records,
            stats=assembler.stats,
            report=report,
        )
