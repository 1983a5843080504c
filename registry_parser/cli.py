"""
CLI Interface
=============
Command-line interface for the business registry parser.

Usage:
    python -m registry_parser extract <pdf_path> [options]
    python -m registry_parser serve [options]
    python -m registry_parser info <pdf_path>
"""

from __future__ import annotations

import json
import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .engine import ExtractionEngine, ExtractorConfig
from .errors import DecodeError
from .fragment_source import GRANULARITIES, FragmentSource
from .models import FIELD_ORDER, BusinessPage
from .pagination import paginate

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="registry-parser")
def cli():
    """Business Registry Parser — extract business records from registry PDFs."""
    pass


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True))
@click.option(
    "--page",
    default=None,
    type=int,
    help="Only show this 50-record page (1-indexed)",
)
@click.option(
    "--granularity", "-g",
    default="span",
    type=click.Choice(GRANULARITIES),
    help="What counts as one text fragment",
)
@click.option(
    "--no-sort",
    is_flag=True,
    default=False,
    help="Keep content-stream order instead of sorting by position",
)
@click.option(
    "--page-start",
    default=None,
    type=int,
    help="Start PDF page (1-indexed)",
)
@click.option(
    "--page-end",
    default=None,
    type=int,
    help="End PDF page (1-indexed, inclusive)",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only the {data, total} JSON to stdout",
)
def extract(
    pdf_path: str,
    page: int,
    granularity: str,
    no_sort: bool,
    page_start: int,
    page_end: int,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Extract business records from a registry PDF."""

    if json_output:
        # Keep stdout clean for JSON mode
        log_level = "ERROR"

    page_range = None
    if page_start is not None or page_end is not None:
        page_range = (page_start or 1, page_end or 99999)

    config = ExtractorConfig(
        pdf_path=pdf_path,
        granularity=granularity,
        sort=not no_sort,
        page_range=page_range,
        log_level=log_level,
        log_file=log_file,
    )

    try:
        result = ExtractionEngine(config).extract()
    except DecodeError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    records = result.records if page is None else paginate(result.records, page)

    if json_output:
        print(json.dumps(
            BusinessPage(data=records, total=result.total).to_json(),
            indent=2,
            ensure_ascii=False,
        ))
        return

    _display_records(records, title=f"Businesses in {result.source_pdf}")
    _display_report(result.report.model_dump())


@cli.command()
@click.option("--host", default="0.0.0.0", help="Server host")
@click.option(
    "--port",
    default=lambda: int(os.environ.get("PORT", 3000)),
    type=int,
    help="Server port (default: $PORT or 3000)",
)
@click.option(
    "--pdf",
    "pdf_path",
    default=None,
    help="Registry PDF to serve (default: $BUSINESS_PDF_PATH)",
)
@click.option("--debug", is_flag=True, default=False, help="Debug mode")
def serve(host: str, port: int, pdf_path: str, debug: bool):
    """Start the HTTP API server."""
    from .server import run_server

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Business Registry API[/]\n"
            f"[dim]Starting on {host}:{port}[/]",
            border_style="cyan",
        )
    )
    console.print()

    run_server(host=host, port=port, debug=debug, pdf_path=pdf_path)


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True))
def info(pdf_path: str):
    """Display PDF file and fragment information."""

    source = FragmentSource(pdf_path)
    try:
        page_count = source.page_count()
        fragments = [f for f in source if f.strip()]
    except DecodeError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    console.print()
    table = Table(title="PDF Information", border_style="cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value")

    table.add_row("File", os.path.basename(pdf_path))
    table.add_row("Pages", str(page_count))
    table.add_row(
        "File Size",
        f"{os.path.getsize(pdf_path) / 1024 / 1024:.2f} MB",
    )
    table.add_row("Text Fragments", str(len(fragments)))

    console.print(table)
    console.print()


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_records(records, title: str):
    """Display business records in a formatted table."""
    console.print()

    table = Table(title=title, border_style="cyan")
    table.add_column("ID", style="bold")
    for name in FIELD_ORDER:
        table.add_column(name)

    for record in records:
        data = record.to_json()
        table.add_row(
            escape(data["id"]) if "id" in data else "[red](none)[/]",
            *(escape(data[name]) if name in data else "[dim]-[/]"
              for name in FIELD_ORDER),
        )

    console.print(table)
    console.print()


def _display_report(report: dict):
    """Display the extraction report as a rich table."""
    table = Table(title="Extraction Report", border_style="green")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Status", justify="center")

    def status_icon(count, threshold=0):
        if count <= threshold:
            return "[green]✓[/]"
        return "[red]✗[/]"

    total = report.get("total_records", 0)
    complete = report.get("complete_records", 0)
    rate = report.get("completion_rate", 0)

    table.add_row(
        "Total Records",
        str(total),
        "[green]✓[/]" if total > 0 else "[red]✗[/]",
    )
    table.add_row(
        "Complete Records",
        f"{complete} ({rate}%)",
        "[green]✓[/]" if rate >= 90 else "[yellow]⚠[/]",
    )

    incomplete = report.get("incomplete_record_ids", [])
    table.add_row(
        "Incomplete Records",
        str(len(incomplete)),
        status_icon(len(incomplete)),
    )

    missing_id = report.get("records_missing_id", 0)
    table.add_row("Records Missing ID", str(missing_id), status_icon(missing_id))

    overwrites = report.get("id_overwrites", 0)
    table.add_row("ID Overwrites", str(overwrites), status_icon(overwrites))

    console.print(table)
    console.print()


# ─── Entry point (for python -m registry_parser.cli) ──────────────────────────


if __name__ == "__main__":
    cli()
