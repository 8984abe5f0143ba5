"""Applicant profile schemas.

StudentProfile is the self-reported snapshot fed into the engine.
ReconciledProfile is the same shape after document claims have been merged in.
Both are frozen: the engine never mutates a profile.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from src.errors import InvalidProfileError
from src.models.enums import ClaimField, EmploymentStatus, GuardianEmploymentType

_TERM_SEPARATORS = re.compile(r"[,;\n]")


def normalize_terms(value: Any) -> frozenset[str]:
    """Lower-case, strip and deduplicate a skill/interest collection.

    Accepts None, a comma/semicolon separated string, or any iterable of strings.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items: Iterable[Any] = _TERM_SEPARATORS.split(value)
    else:
        items = value
    return frozenset(
        " ".join(str(item).split()).lower()
        for item in items
        if item is not None and str(item).strip()
    )


def _normalize_enum_text(value: Any) -> Any:
    """'Part time' / 'part_time' / 'PART-TIME' → 'part-time'."""
    if isinstance(value, str):
        return re.sub(r"[\s_]+", "-", value.strip().lower())
    return value


class StudentProfile(BaseModel):
    """Self-reported applicant data.

    Accepts both snake_case and camelCase keys (employmentStatus, familyIncomeAnnual...).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str | None = None
    age: int | None = Field(default=None, ge=0)
    citizenship: bool = True
    qualification: str | None = None
    institute_name: str | None = None
    employment_status: EmploymentStatus = EmploymentStatus.UNEMPLOYED
    skills: frozenset[str] = Field(default_factory=frozenset)
    interests: frozenset[str] = Field(default_factory=frozenset)
    location_preference: str | None = None
    residence: str | None = None  # city/state from address proof
    family_income_annual: Decimal | None = Field(default=None, ge=0)
    parent_guardian_employment_type: GuardianEmploymentType = GuardianEmploymentType.NONE
    enrolled_in_other_govt_scheme: bool = False
    attends_premier_institute: bool = False

    @field_validator("skills", "interests", mode="before")
    @classmethod
    def _normalize_terms(cls, v: Any) -> frozenset[str]:
        return normalize_terms(v)

    @field_validator("employment_status", "parent_guardian_employment_type", mode="before")
    @classmethod
    def _normalize_enums(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].default
        return _normalize_enum_text(v)

    @field_validator(
        "citizenship",
        "enrolled_in_other_govt_scheme",
        "attends_premier_institute",
        mode="before",
    )
    @classmethod
    def _default_when_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("name", "qualification", "institute_name", "location_preference", "residence", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = " ".join(v.split())
            return v or None
        return v

    @field_serializer("skills", "interests")
    def _sorted_terms(self, v: frozenset[str]) -> list[str]:
        return sorted(v)


class ReconciledProfile(StudentProfile):
    """StudentProfile with document-claim values merged over self-reported ones.

    Derived per request, never persisted.
    """

    verified_fields: frozenset[ClaimField] = Field(default_factory=frozenset)

    @field_serializer("verified_fields")
    def _sorted_fields(self, v: frozenset[ClaimField]) -> list[str]:
        return sorted(f.value for f in v)

    def is_verified(self, field: ClaimField) -> bool:
        return field in self.verified_fields


def parse_profile(data: StudentProfile | Mapping[str, Any]) -> StudentProfile:
    """Validate raw profile input into a StudentProfile.

    Raises:
        InvalidProfileError: If the payload fails structural validation.
    """
    if isinstance(data, StudentProfile):
        return data
    if not isinstance(data, Mapping):
        msg = f"Profile must be an object, got {type(data).__name__}"
        raise InvalidProfileError(msg)
    try:
        return StudentProfile.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidProfileError(
            f"Invalid profile: {exc.error_count()} validation error(s)",
            errors=exc.errors(include_url=False),
        ) from exc
