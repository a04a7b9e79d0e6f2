# tests/conftest.py

"""
Pytest Fixtures - Shared candidate bundles and the API test client

REFERENCE DATA:
- full_assets:  income 120,000 split over 3 itemized sources (public + private),
                2 vehicles (80,000), 1 property (250,000)
- full_profile: every profile section filled in
"""

import pytest
from fastapi.testclient import TestClient

from electoral_scoring.main import app
from electoral_scoring.models import (
    AssetsDeclaration,
    CandidateData,
    EducationRecord,
    EnhancedIntegrityData,
    ExperienceRecord,
    ProfileFields,
)
from electoral_scoring.models.enumerations import EducationLevel, RoleType


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# DISCLOSURE FIXTURES
# =============================================================================

@pytest.fixture
def full_assets():
    return AssetsDeclaration(
        total_income=120000,
        public_salary=60000,
        private_salary=50000,
        private_rent=10000,
        vehicle_count=2,
        vehicle_total=80000,
        real_estate_count=1,
        real_estate_total=250000,
    )


@pytest.fixture
def full_profile():
    return ProfileFields(
        education_count=3,
        experience_count=4,
        political_count=2,
        has_birth_date=True,
        has_dni=True,
        has_plan_url=True,
        has_djhv_url=True,
        has_penal_array=True,
        has_civil_array=True,
    )


# =============================================================================
# CANDIDATE FACTORIES
# =============================================================================

@pytest.fixture
def make_experience():
    """Factory for ExperienceRecord with a 2020-2024 public executive default."""
    def _make(**overrides):
        data = {
            "role": "Director",
            "role_type": RoleType.EJECUTIVO_PUBLICO_ALTO,
            "organization": "Gobierno",
            "start_year": 2020,
            "end_year": 2024,
        }
        data.update(overrides)
        return ExperienceRecord(**data)
    return _make


@pytest.fixture
def make_education():
    def _make(level: EducationLevel):
        return EducationRecord(level=level)
    return _make


@pytest.fixture
def make_candidate(full_assets, full_profile):
    """Factory for CandidateData with full disclosure and full verification by default."""
    def _make(**overrides):
        data = {
            "assets_declaration": full_assets,
            "profile_fields": full_profile,
            "verification_level": 100,
            "coverage_level": 100,
        }
        data.update(overrides)
        return CandidateData(**data)
    return _make


@pytest.fixture
def make_enhanced(full_assets, full_profile):
    """Factory for EnhancedIntegrityData with the same defaults as make_candidate."""
    def _make(**overrides):
        data = {
            "assets_declaration": full_assets,
            "profile_fields": full_profile,
            "verification_level": 100,
            "coverage_level": 100,
        }
        data.update(overrides)
        return EnhancedIntegrityData(**data)
    return _make


@pytest.fixture
def candidate_payload():
    """JSON-ready candidate bundle for API tests."""
    return {
        "education": [{"level": "maestria"}, {"level": "titulo_profesional"}],
        "experience": [
            {
                "role_type": "electivo_alto",
                "start_year": 2016,
                "end_year": None,
                "is_leadership": True,
                "seniority_level": "direccion",
            }
        ],
        "penal_sentences": [],
        "civil_sentences": [{"type": "laboral"}],
        "party_resignations": 1,
        "assets_declaration": {
            "total_income": 120000,
            "public_salary": 60000,
            "private_salary": 60000,
            "vehicle_count": 1,
            "vehicle_total": 30000,
        },
        "profile_fields": {
            "education_count": 2,
            "experience_count": 1,
            "political_count": 1,
            "has_birth_date": True,
            "has_dni": True,
        },
        "verification_level": 80,
        "coverage_level": 60,
    }
