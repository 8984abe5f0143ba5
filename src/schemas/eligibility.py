"""Pydantic schemas for the eligibility evaluator.

Pure data classes — no I/O dependencies.
Used as inputs/outputs for the deterministic rule pipeline.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.enums import EmploymentStatus, GuardianEmploymentType, QualificationTier, RuleId

# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------


class EligibilityCriteria(BaseModel):
    """The programme's admission rule set. Process-wide, never mutated."""

    model_config = ConfigDict(frozen=True)

    min_age: int = 21
    max_age: int = 24
    income_ceiling: Decimal = Decimal("800000")
    allowed_tiers: frozenset[QualificationTier] = frozenset({
        QualificationTier.CLASS_10,
        QualificationTier.CLASS_12,
        QualificationTier.ITI,
        QualificationTier.POLYTECHNIC,
        QualificationTier.DIPLOMA,
        QualificationTier.GRADUATE,
    })
    disqualifying_tiers: frozenset[QualificationTier] = frozenset({
        QualificationTier.POSTGRADUATE,
        QualificationTier.PROFESSIONAL,
        QualificationTier.CS,
        QualificationTier.CA,
        QualificationTier.MBA,
        QualificationTier.MBBS,
        QualificationTier.PHD,
    })
    allowed_employment: frozenset[EmploymentStatus] = frozenset({
        EmploymentStatus.UNEMPLOYED,
        EmploymentStatus.PART_TIME,
    })
    allowed_guardian_employment: frozenset[GuardianEmploymentType] = frozenset({
        GuardianEmploymentType.NONE,
        GuardianEmploymentType.CONTRACTUAL,
    })
    premier_institutes: tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_tiers_disjoint(self) -> EligibilityCriteria:
        overlap = self.allowed_tiers & self.disqualifying_tiers
        if overlap:
            msg = f"Tiers cannot be both allowed and disqualifying: {sorted(t.value for t in overlap)}"
            raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# Verdict
# ---------------------------------------------------------------------------


class RuleCondition(BaseModel):
    """Outcome of one admission rule, kept for audit and display."""

    model_config = ConfigDict(frozen=True)

    rule: RuleId
    description: str
    met: bool
    value: str | None = None   # the reconciled input the rule looked at
    verified: bool = False     # value came from a document claim


class EligibilityVerdict(BaseModel):
    """Eligibility determination. violated_rules is empty iff eligible."""

    model_config = ConfigDict(frozen=True)

    eligible: bool
    violated_rules: tuple[RuleId, ...] = ()
    conditions: tuple[RuleCondition, ...] = Field(default=(), repr=False)

    @model_validator(mode="after")
    def check_consistency(self) -> EligibilityVerdict:
        if self.eligible == bool(self.violated_rules):
            msg = "violated_rules must be empty exactly when eligible is true"
            raise ValueError(msg)
        return self

    @property
    def reasons(self) -> list[str]:
        """Human-readable descriptions of the failed rules, in rule order."""
        failed = {c.rule: c.description for c in self.conditions if not c.met}
        return [failed.get(rule, rule.value) for rule in self.violated_rules]
