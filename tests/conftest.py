"""Shared fixtures: a seeded resolver, a record factory and an API client
wired to the seeded store regardless of environment settings."""

import os

# Keep provider selection deterministic before homescout reads its settings
os.environ.setdefault("FACTORS_PROVIDER", "seeded")
os.environ.setdefault("TRENDS_PROVIDER", "seeded")

import pytest
from fastapi.testclient import TestClient

from homescout.data.base import MetricsRecord, DemographicShare
from homescout.data.seeded import SeededFactors
from homescout.main import app
from homescout.routers.places import service_dep
from homescout.services.report_service import PlaceReportService
from homescout.services.resolver import PlaceResolver


@pytest.fixture()
def resolver():
    return PlaceResolver(SeededFactors(), normalize_keys=False)


@pytest.fixture()
def make_record():
    """Factory for valid records; override any field by keyword."""
    def _make(**overrides):
        fields = dict(
            walkability=65,
            school_score=7.5,
            crime_index=45,
            median_income=90_000,
            price_growth_5y=6.0,
            demographics=(DemographicShare("Under 18", 20), DemographicShare("18-34", 30)),
        )
        fields.update(overrides)
        return MetricsRecord(**fields)
    return _make


@pytest.fixture()
def client(resolver):
    app.dependency_overrides[service_dep] = lambda: PlaceReportService(resolver)
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
