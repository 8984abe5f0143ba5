"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.models.enums import QualificationTier

_DEFAULT_PREMIER_INSTITUTES = [
    "IIT",
    "IIM",
    "NID",
    "IISER",
    "NIT",
    "NLU",
    "Indian Institute of Technology",
    "Indian Institute of Management",
    "National Institute of Design",
    "Indian Institute of Science Education and Research",
    "National Institute of Technology",
    "National Law University",
]

_DEFAULT_ALLOWED_TIERS = [
    QualificationTier.CLASS_10,
    QualificationTier.CLASS_12,
    QualificationTier.ITI,
    QualificationTier.POLYTECHNIC,
    QualificationTier.DIPLOMA,
    QualificationTier.GRADUATE,
]

_DEFAULT_DISQUALIFYING_TIERS = [
    QualificationTier.POSTGRADUATE,
    QualificationTier.PROFESSIONAL,
    QualificationTier.CS,
    QualificationTier.CA,
    QualificationTier.MBA,
    QualificationTier.MBBS,
    QualificationTier.PHD,
]


class EligibilitySettings(BaseSettings):
    """PM Internship Scheme admission thresholds."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="ELIGIBILITY_", extra="ignore")

    min_age: int = Field(default=21, description="Minimum applicant age (inclusive)")
    max_age: int = Field(default=24, description="Maximum applicant age (inclusive)")
    income_ceiling: Decimal = Field(
        default=Decimal("800000"),
        description="Maximum annual family income (INR, inclusive)",
    )
    premier_institutes: list[str] = Field(
        default_factory=lambda: list(_DEFAULT_PREMIER_INSTITUTES),
        description="Institute names/acronyms that disqualify an applicant",
    )
    allowed_tiers: list[QualificationTier] = Field(
        default_factory=lambda: list(_DEFAULT_ALLOWED_TIERS),
        description="Qualification tiers that satisfy the minimum-qualification rule",
    )
    disqualifying_tiers: list[QualificationTier] = Field(
        default_factory=lambda: list(_DEFAULT_DISQUALIFYING_TIERS),
        description="Qualification tiers above the programme's ceiling",
    )

    @model_validator(mode="after")
    def check_age_bounds(self) -> EligibilitySettings:
        """Ensure the age window is not inverted."""
        if self.min_age > self.max_age:
            msg = f"min_age ({self.min_age}) must not exceed max_age ({self.max_age})"
            raise ValueError(msg)
        return self


class MatchingSettings(BaseSettings):
    """Scoring weights and result sizing for the matching engine."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MATCHING_", extra="ignore")

    default_limit: int = Field(default=10, description="Max results returned when no limit is given")
    skill_weight: float = Field(default=0.5)
    interest_weight: float = Field(default=0.3)
    location_weight: float = Field(default=0.2)
    region_score: float = Field(default=0.3, description="Location score when only a region token is shared")

    @model_validator(mode="after")
    def check_weights(self) -> MatchingSettings:
        """Weights must sum to 1 so scores stay within 0..100."""
        total = self.skill_weight + self.interest_weight + self.location_weight
        if abs(total - 1.0) > 1e-9:
            msg = f"Matching weights must sum to 1.0, got {total}"
            raise ValueError(msg)
        return self


class IntegrationSettings(BaseSettings):
    """External collaborators: document analysis service and listing pool."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    document_analysis_url: str = Field(
        default="",
        description="Document analysis service base URL (empty = bypass mode)",
    )
    document_analysis_api_key: str = Field(default="", description="API key for the analysis service")
    document_analysis_timeout: float = Field(default=60.0, description="Analysis timeout in seconds")
    listing_pool_url: str = Field(default="", description="Listing pool HTTP endpoint")
    listing_catalog_path: str = Field(
        default="data/listings.json",
        description="Static JSON catalog used when no listing pool URL is set",
    )
    listing_pool_timeout: float = Field(default=15.0, description="Listing pool timeout in seconds")
    retry_backoff_seconds: float = Field(default=0.5, description="Delay before the single retry")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.eligibility.income_ceiling
        settings.matching.default_limit
        settings.integrations.document_analysis_url
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="DEBUG")

    # Composed settings (loaded from same .env)
    eligibility: EligibilitySettings = Field(default_factory=EligibilitySettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    integrations: IntegrationSettings = Field(default_factory=IntegrationSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton, import this wherever settings are needed.
settings = Settings()
