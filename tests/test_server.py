"""
Tests for the HTTP API and CLI
==============================
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from registry_parser import __version__
from registry_parser.cli import cli
from registry_parser.errors import DecodeError
from registry_parser.server import EXTRACTION_FAILED, create_app

from .conftest import business_lines


@pytest.fixture
def registry_pdf(make_pdf):
    return make_pdf(business_lines(120))


@pytest.fixture
def client(registry_pdf):
    app = create_app({"TESTING": True, "BUSINESS_PDF_PATH": registry_pdf})
    with app.test_client() as client:
        yield client


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP API TESTS
# ═══════════════════════════════════════════════════════════════════════════════


class TestBusinessEndpoints:

    def test_all_businesses(self, client):
        response = client.get("/api/businesses/")

        assert response.status_code == 200
        body = response.get_json()
        assert body["total"] == 120
        assert len(body["data"]) == 120
        assert body["data"][0] == {
            "id": "0000000000-0001-0",
            "businessName": "Business 0 LLC",
            "startDate": "2025-05-01",
            "address": "0 Main St",
            "city": "Springfield",
            "zipCode": "90000",
        }

    def test_without_trailing_slash(self, client):
        response = client.get("/api/businesses")
        assert response.status_code == 200
        assert response.get_json()["total"] == 120

    def test_first_page(self, client):
        body = client.get("/api/businesses/1").get_json()

        assert body["total"] == 120
        assert len(body["data"]) == 50
        assert body["data"][0]["businessName"] == "Business 0 LLC"
        assert body["data"][-1]["businessName"] == "Business 49 LLC"

    def test_partial_last_page(self, client):
        body = client.get("/api/businesses/3").get_json()

        assert body["total"] == 120
        assert len(body["data"]) == 20
        assert body["data"][0]["businessName"] == "Business 100 LLC"

    def test_page_past_end(self, client):
        body = client.get("/api/businesses/4").get_json()
        assert body == {"data": [], "total": 120}

    def test_non_numeric_page(self, client):
        response = client.get("/api/businesses/abc")

        assert response.status_code == 200
        assert response.get_json() == {"data": [], "total": 120}

    def test_numeric_prefix_page(self, client):
        body = client.get("/api/businesses/2abc").get_json()
        assert body["data"][0]["businessName"] == "Business 50 LLC"

    def test_cors_header(self, client):
        response = client.get(
            "/api/businesses/1", headers={"Origin": "http://localhost:5173"}
        )
        assert response.headers.get("Access-Control-Allow-Origin") == "*"

    def test_cors_preflight_wildcard(self, client):
        response = client.options(
            "/api/businesses/",
            headers={
                "Origin": "https://registry.example.org",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.headers.get("Access-Control-Allow-Origin") == "*"


class TestExtractionFailure:

    def test_missing_pdf(self, tmp_path):
        app = create_app({
            "TESTING": True,
            "BUSINESS_PDF_PATH": str(tmp_path / "missing.pdf"),
        })
        client = app.test_client()

        for url in ["/api/businesses/", "/api/businesses/1"]:
            response = client.get(url)
            assert response.status_code == 500
            assert response.get_json() == {"error": EXTRACTION_FAILED}

    def test_error_detail_not_exposed(self, client):
        with patch(
            "registry_parser.server.ExtractionEngine.extract",
            side_effect=DecodeError("xref table broken at offset 1234"),
        ):
            response = client.get("/api/businesses/2")

        assert response.status_code == 500
        assert response.get_json() == {
            "error": "Failed to extract business data."
        }
        assert b"xref" not in response.data


class TestServiceEndpoints:

    def test_health(self, client):
        body = client.get("/api/health").get_json()
        assert body["status"] == "healthy"
        assert body["version"] == __version__

    def test_info_reports_configured_pattern(self, client, monkeypatch):
        monkeypatch.setenv("BUSINESS_ID_PATTERN", r"BIZ-\d+")
        body = client.get("/api/info").get_json()
        assert body["id_pattern"] == r"^BIZ-\d+$"

    def test_info(self, client, monkeypatch):
        monkeypatch.delenv("BUSINESS_ID_PATTERN", raising=False)
        body = client.get("/api/info").get_json()
        assert body["id_pattern"] == r"^\d{10}-\d{4}-\d$"
        assert body["fields"] == [
            "businessName", "startDate", "address", "city", "zipCode",
        ]
        assert body["page_size"] == 50
        assert body["source_pdf"] == "registry.pdf"


# ═══════════════════════════════════════════════════════════════════════════════
# CLI TESTS
# ═══════════════════════════════════════════════════════════════════════════════


class TestCli:

    def test_extract_json(self, registry_pdf):
        result = CliRunner().invoke(
            cli, ["extract", registry_pdf, "--json-output", "--page", "3"]
        )

        assert result.exit_code == 0, result.output
        body = json.loads(result.stdout)
        assert body["total"] == 120
        assert len(body["data"]) == 20

    def test_extract_table(self, registry_pdf):
        result = CliRunner().invoke(cli, ["extract", registry_pdf])

        assert result.exit_code == 0, result.output
        assert "Extraction Report" in result.output
        assert "Total Records" in result.output

    def test_extract_corrupt_pdf(self, tmp_path):
        empty = tmp_path / "empty.pdf"
        empty.write_bytes(b"")

        result = CliRunner().invoke(cli, ["extract", str(empty)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_info(self, registry_pdf):
        result = CliRunner().invoke(cli, ["info", registry_pdf])

        assert result.exit_code == 0, result.output
        assert "720" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert __version__ in result.output
