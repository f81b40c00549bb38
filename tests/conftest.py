"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Start every test with fresh configuration and logging state."""
    from career_compass.config.settings import reset_settings
    from career_compass.matching.config import reset_matching_config
    from career_compass.realtime.config import reset_realtime_config
    from career_compass.utils.logging import reset_logging

    reset_settings()
    reset_matching_config()
    reset_realtime_config()
    reset_logging()
    yield
    reset_settings()
    reset_matching_config()
    reset_realtime_config()
    reset_logging()


@pytest.fixture
def catalog_path() -> Path:
    """Path to the bundled sample catalog."""
    return DATA_DIR / "careers.yaml"


@pytest.fixture
def catalog(catalog_path):
    """Validated careers from the sample catalog."""
    from career_compass.catalog.service import CatalogService
    from career_compass.config.settings import Settings

    service = CatalogService(settings=Settings(_env_file=None))  # type: ignore[call-arg]
    return service.load_catalog(catalog_path).careers


@pytest.fixture
def matching_config():
    """Default matching config that ignores any local .env file."""
    from career_compass.matching.config import MatchingConfig

    return MatchingConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def make_career():
    """Factory for minimal valid careers with overridable fields."""
    from career_compass.catalog.models import Career

    def _make(**overrides) -> Career:
        data = {
            "id": "test-career",
            "title": "Test Career",
            "category": "tech",
            "required_skills": [],
            "work_environment": {"remote": True, "hybrid": True, "onsite": True},
            "salary_ranges": [{"min": 50000, "max": 90000, "experience_level": "entry"}],
        }
        data.update(overrides)
        return Career.model_validate(data)

    return _make


@pytest.fixture
def analyst_profile():
    """Profile of someone suited to data analysis work."""
    from career_compass.profile.models import UserProfile

    return UserProfile.model_validate(
        {
            "interests": ["data", "analysis", "problem-solving"],
            "skills": ["Python", "SQL", "Excel", "data-analysis", "Statistics"],
            "experience": {"level": "entry", "years_of_experience": 1},
            "personality": {
                "work_style": "independent",
                "pace": "steady",
                "problem_solving": "analytical",
                "communication": "moderate",
            },
        }
    )


@pytest.fixture
def designer_profile():
    """Profile of someone drawn to visual design."""
    from career_compass.profile.models import UserProfile

    return UserProfile.model_validate(
        {
            "interests": ["design", "creating-content"],
            "skills": ["Photoshop", "Illustrator", "Typography"],
            "personality": {"problem_solving": "creative"},
        }
    )
