"""Tests for the HTTP surface (POST /match, GET /health).

Collaborators are swapped through FastAPI dependency overrides.
"""

from __future__ import annotations

from typing import Any

import pytest
import structlog
from fastapi.testclient import TestClient

from src.api.match import get_document_analyzer, get_listings
from src.claims import normalize_claim
from src.errors import ServiceUnavailableError
from src.main import app, configure_logging
from src.models.enums import DocumentKind
from src.schemas.claims import DocumentClaim
from src.schemas.matching import InternshipListing

PROFILE = {
    "age": 22,
    "qualification": "Diploma in Mechanical Engineering",
    "skills": ["AutoCAD", "Quality Control"],
    "interests": ["manufacturing"],
    "locationPreference": "Pune",
    "familyIncomeAnnual": 450000,
}


class StubAnalyzer:
    def __init__(self, claims: dict[str, dict[str, Any]] | None = None) -> None:
        self._claims = claims or {}

    async def analyze(self, kind: DocumentKind, raw_document: Any) -> DocumentClaim:
        return normalize_claim(kind, self._claims.get(kind.value))


class StubListings:
    def __init__(self, error: Exception | None = None) -> None:
        self._error = error

    async def fetch_candidates(self, profile) -> list[InternshipListing]:
        if self._error is not None:
            raise self._error
        return [
            InternshipListing(
                company_name="Tata Motors",
                title="Manufacturing Quality Intern",
                location="Pune, Maharashtra",
                required_skills=["autocad", "quality control"],
            ),
            InternshipListing(company_name="Swiggy", title="Operations Intern", location="Hyderabad"),
        ]


@pytest.fixture()
def client():
    app.dependency_overrides[get_document_analyzer] = lambda: StubAnalyzer({"income": {"annual_income": "4.5 lakh"}})
    app.dependency_overrides[get_listings] = lambda: StubListings()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestMatchEndpoint:
    def test_eligible(self, client):
        resp = client.post("/match", json={"profile": PROFILE, "documents": {"income": "base64..."}})

        assert resp.status_code == 200
        body = resp.json()
        assert body["verdict"]["eligible"] is True
        assert body["verdict"]["violated_rules"] == []
        assert [r["listing"]["company_name"] for r in body["results"]] == ["Tata Motors"]
        assert body["results"][0]["score"] == 86

    def test_ineligible_is_not_an_error(self, client):
        resp = client.post("/match", json={"profile": {**PROFILE, "qualification": "MBA"}})

        assert resp.status_code == 200
        body = resp.json()
        assert body["verdict"]["eligible"] is False
        assert body["verdict"]["violated_rules"] == ["qualification-ceiling"]
        assert body["results"] == []

    def test_invalid_profile(self, client):
        resp = client.post("/match", json={"profile": {**PROFILE, "age": -3}})

        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert "Invalid profile" in detail["message"]
        assert detail["errors"][0]["loc"] == ["age"]

    def test_mandatory_document_missing(self, client):
        resp = client.post("/match", json={"profile": PROFILE, "mandatory_documents": ["id"]})

        assert resp.status_code == 422
        assert resp.json()["detail"]["document"] == "id"

    def test_unknown_document_kind_rejected(self, client):
        resp = client.post("/match", json={"profile": PROFILE, "documents": {"selfie": "..."}})
        assert resp.status_code == 422

    def test_limit_bounds(self, client):
        resp = client.post("/match", json={"profile": PROFILE, "limit": 500})
        assert resp.status_code == 422

    def test_listing_pool_down(self, client):
        app.dependency_overrides[get_listings] = lambda: StubListings(
            ServiceUnavailableError("down", service="listing_pool"),
        )

        resp = client.post("/match", json={"profile": PROFILE})

        assert resp.status_code == 503
        assert "temporarily unavailable" in resp.json()["detail"]


class TestLoggingSetup:
    def test_json_renderer_in_production(self):
        configure_logging("INFO", json_output=True)
        assert structlog.is_configured()
        configure_logging("DEBUG")
