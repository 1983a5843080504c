"""
HTTP Microservice
=================
Flask-based HTTP API serving business records extracted from the
configured registry PDF.

Every request runs a full extraction from scratch; nothing is cached
between requests.

Endpoints:
    GET    /api/businesses/        → All businesses {data, total}
    GET    /api/businesses/<page>  → 50-business page {data, total}
    GET    /api/health             → Health check
    GET    /api/info               → Parser version info
"""

from __future__ import annotations

import logging
import os

from flask import Flask, current_app, jsonify
from flask_cors import CORS

from . import __version__
from .engine import ExtractionEngine, ExtractorConfig
from .models import FIELD_ORDER, BusinessPage
from .pagination import PAGE_SIZE, paginate, parse_page

logger = logging.getLogger(__name__)

EXTRACTION_FAILED = "Failed to extract business data."

app = Flask(__name__)
CORS(app, send_wildcard=True)


def create_app(config: dict = None) -> Flask:
    """Create and configure the Flask app."""
    if config:
        app.config.update(config)

    app.config.setdefault(
        "BUSINESS_PDF_PATH", os.environ.get("BUSINESS_PDF_PATH", "may-2025.pdf")
    )
    app.config.setdefault("PAGE_SIZE", PAGE_SIZE)

    return app


def _extract_businesses():
    """Run one extraction of the configured PDF."""
    config = ExtractorConfig.from_env(
        pdf_path=current_app.config.get("BUSINESS_PDF_PATH"),
    )
    return ExtractionEngine(config).extract().records


def _extraction_failed(error: Exception):
    logger.error(f"Extraction failed: {error}")
    return jsonify({"error": EXTRACTION_FAILED}), 500


# ─── Health Check ─────────────────────────────────────────────────────────────


@app.route("/api/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": "registry-parser",
        "version": __version__,
    })


@app.route("/api/info", methods=["GET"])
def info():
    """Parser version and schema info."""
    return jsonify({
        "version": __version__,
        "engine": "PyMuPDF",
        "source_pdf": os.path.basename(
            current_app.config.get("BUSINESS_PDF_PATH", "")
        ),
        "id_pattern": f"^{ExtractorConfig.from_env().id_pattern}$",
        "fields": list(FIELD_ORDER),
        "page_size": current_app.config.get("PAGE_SIZE", PAGE_SIZE),
    })


# ─── Business Endpoints ───────────────────────────────────────────────────────


@app.route("/api/businesses/", methods=["GET"], strict_slashes=False)
def list_businesses():
    """Return every extracted business."""
    try:
        businesses = _extract_businesses()
    except Exception as e:
        return _extraction_failed(e)

    page = BusinessPage(data=businesses, total=len(businesses))
    return jsonify(page.to_json())


@app.route("/api/businesses/<page>", methods=["GET"])
def list_businesses_page(page: str):
    """
    Return one page of businesses.

    `total` is always the full count. A page that is out of range or not
    a number yields an empty `data` list.
    """
    logger.info(f"Received request for page: {page}")

    try:
        businesses = _extract_businesses()
    except Exception as e:
        return _extraction_failed(e)

    result = paginate(
        businesses,
        parse_page(page),
        page_size=current_app.config.get("PAGE_SIZE", PAGE_SIZE),
    )
    if businesses:
        logger.debug(f"First: {businesses[0].to_json()}")
        logger.debug(f"Last: {businesses[-1].to_json()}")

    return jsonify(BusinessPage(data=result, total=len(businesses)).to_json())


# ─── Run Server ──────────────────────────────────────────────────────────────


def run_server(
    host: str = "0.0.0.0",
    port: int = 3000,
    debug: bool = False,
    pdf_path: str = None,
):
    """Start the microservice server."""
    create_app({"BUSINESS_PDF_PATH": pdf_path} if pdf_path else None)
    logger.info(f"Listening on port {port}.")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_server(port=int(os.environ.get("PORT", 3000)), debug=True)
