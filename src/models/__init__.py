"""Domain enums shared by schemas, rules and the matching engine."""

from __future__ import annotations

from src.models.enums import (
    ClaimField,
    DocumentKind,
    EmploymentStatus,
    GuardianEmploymentType,
    QualificationTier,
    RuleId,
)

__all__ = [
    "ClaimField",
    "DocumentKind",
    "EmploymentStatus",
    "GuardianEmploymentType",
    "QualificationTier",
    "RuleId",
]
