"""Pydantic schemas for internship listings and ranked results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.schemas.eligibility import EligibilityVerdict
from src.schemas.profile import normalize_terms


class InternshipListing(BaseModel):
    """An internship opportunity supplied by the listing pool. Read-only."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    company_name: str
    title: str
    location: str = ""
    description: str = ""
    required_skills: frozenset[str] = Field(default_factory=frozenset)
    compensation: str | None = None

    @field_validator("required_skills", mode="before")
    @classmethod
    def _normalize_skills(cls, v: Any) -> frozenset[str]:
        return normalize_terms(v)

    @field_validator("compensation", mode="before")
    @classmethod
    def _compensation_text(cls, v: Any) -> Any:
        # Catalogs sometimes carry a bare monthly stipend number
        if isinstance(v, int | float):
            return str(v)
        return v

    @field_serializer("required_skills")
    def _sorted_skills(self, v: frozenset[str]) -> list[str]:
        return sorted(v)


class MatchResult(BaseModel):
    """One ranked listing. score is the rounded 0–100 relevance."""

    model_config = ConfigDict(frozen=True)

    listing: InternshipListing
    score: int = Field(ge=0, le=100)
    skill_score: float = Field(ge=0.0, le=1.0)
    interest_score: float = Field(ge=0.0, le=1.0)
    location_score: float = Field(ge=0.0, le=1.0)


class MatchResponse(BaseModel):
    """Final request outcome: the verdict plus (only if eligible) ranked results."""

    model_config = ConfigDict(frozen=True)

    verdict: EligibilityVerdict
    results: tuple[MatchResult, ...] = ()

    @model_validator(mode="after")
    def check_results_require_eligibility(self) -> MatchResponse:
        if self.results and not self.verdict.eligible:
            msg = "An ineligible verdict cannot carry match results"
            raise ValueError(msg)
        return self
