"""Configuration management using Pydantic Settings"""

from typing import Annotated, Any, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from compliance_engine.domain.models import EngineConfig, HousingConfig, PenaltyConfig, TaxConfig


class Settings(BaseSettings):
    """Application configuration loaded from ENGINE_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="ENGINE_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Penalty
    default_rate_per_day: float = 100.0
    default_cap: float = 1000.0
    default_interest_rate: float = 0.05

    # Tax brackets (comma-separated in the environment: "10000,50000")
    default_thresholds: Annotated[List[float], NoDecode] = [10000.0]
    default_rates: Annotated[List[float], NoDecode] = [0.10, 0.20]
    default_surcharge_threshold: float = 5000.0
    default_surcharge_rate: float = 0.02

    # Housing
    housing_close_margin: float = 0.05

    # Service
    service_name: str = "compliance-engine"
    log_level: str = "INFO"

    @field_validator("default_thresholds", "default_rates", mode="before")
    @classmethod
    def split_comma_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


def build_engine_config(settings: Settings) -> EngineConfig:
    """
    Freeze settings into the rule constants shared by every evaluation.

    Raises:
        ConfigurationError: bracket/rate count mismatch, unsorted thresholds,
            or a negative constant
    """
    return EngineConfig(
        penalty=PenaltyConfig(
            rate_per_day=settings.default_rate_per_day,
            cap=settings.default_cap,
            interest_rate=settings.default_interest_rate,
        ),
        tax=TaxConfig(
            thresholds=tuple(settings.default_thresholds),
            rates=tuple(settings.default_rates),
            surcharge_threshold=settings.default_surcharge_threshold,
            surcharge_rate=settings.default_surcharge_rate,
        ),
        housing=HousingConfig(close_margin=settings.housing_close_margin),
    )


settings = Settings()
