"""Unit tests for settings loading and rule constant validation"""

import pytest
from compliance_engine.config import Settings, build_engine_config
from compliance_engine.domain.exceptions import ConfigurationError
from compliance_engine.domain.models import HousingConfig, PenaltyConfig


def test_defaults_match_rule_constants():
    config = build_engine_config(Settings(_env_file=None))

    assert config.penalty == PenaltyConfig(rate_per_day=100.0, cap=1000.0, interest_rate=0.05)
    assert config.tax.thresholds == (10000.0,)
    assert config.tax.rates == (0.10, 0.20)
    assert config.tax.surcharge_threshold == 5000.0
    assert config.tax.surcharge_rate == 0.02
    assert config.housing.close_margin == 0.05


def test_comma_separated_brackets_from_environment(monkeypatch):
    monkeypatch.setenv("ENGINE_DEFAULT_THRESHOLDS", "10000, 50000")
    monkeypatch.setenv("ENGINE_DEFAULT_RATES", "0.1,0.2,0.4")
    monkeypatch.setenv("ENGINE_DEFAULT_CAP", "2500")

    config = build_engine_config(Settings(_env_file=None))

    assert config.tax.thresholds == (10000.0, 50000.0)
    assert config.tax.rates == (0.1, 0.2, 0.4)
    assert config.penalty.cap == 2500.0


def test_mismatched_brackets_refuse_to_build():
    settings = Settings(_env_file=None, default_thresholds=[10000.0, 20000.0], default_rates=[0.1, 0.2])

    with pytest.raises(ConfigurationError, match="Invalid bracket configuration"):
        build_engine_config(settings)


def test_negative_penalty_constant_rejected():
    with pytest.raises(ConfigurationError, match="interest_rate"):
        PenaltyConfig(interest_rate=-0.05)


def test_close_margin_must_be_a_fraction():
    with pytest.raises(ConfigurationError):
        HousingConfig(close_margin=1.5)
