"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from compliance_engine.api.main import create_app
from compliance_engine.config import Settings
from compliance_engine.domain.models import EngineConfig, HousingConfig, PenaltyConfig, TaxConfig


@pytest.fixture
def penalty_config() -> PenaltyConfig:
    """100 per day, capped at 1000, 5% interest"""
    return PenaltyConfig(rate_per_day=100.0, cap=1000.0, interest_rate=0.05)


@pytest.fixture
def tax_config() -> TaxConfig:
    """10% up to 10000, 20% above; 2% surcharge when tax exceeds 5000"""
    return TaxConfig(thresholds=(10000.0,), rates=(0.10, 0.20), surcharge_threshold=5000.0, surcharge_rate=0.02)


@pytest.fixture
def housing_config() -> HousingConfig:
    return HousingConfig(close_margin=0.05)


@pytest.fixture
def engine_config(penalty_config, tax_config, housing_config) -> EngineConfig:
    return EngineConfig(penalty=penalty_config, tax=tax_config, housing=housing_config)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with default rule constants"""
    app = create_app(Settings(_env_file=None))
    return TestClient(app)
