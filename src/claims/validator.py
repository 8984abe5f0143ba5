"""Deterministic post-extraction validation for document claims.

Synchronous, no I/O. Drops facts that fall outside sanity bounds or below
the confidence floor, and records a warning for each one. A dropped fact
behaves exactly like a missing one: the self-reported value stands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from src.models.enums import ClaimField
from src.schemas.claims import ClaimFact

# Facts below this confidence are not trusted over self-reported data
MIN_FACT_CONFIDENCE = 0.50

MIN_AGE = 10
MAX_AGE = 100
MAX_ANNUAL_INCOME = Decimal("1000000000")


@dataclass
class ValidationResult:
    """Facts that survived validation, plus warnings for the ones that did not."""

    facts: list[ClaimFact] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_facts(facts: list[ClaimFact]) -> ValidationResult:
    """Run all applicable sanity rules over a claim's facts."""
    vr = ValidationResult()
    seen: set[ClaimField] = set()

    for fact in facts:
        if fact.field in seen:
            vr.warnings.append(f"Duplicate fact for {fact.field.value} ignored")
            continue
        seen.add(fact.field)

        if fact.confidence < MIN_FACT_CONFIDENCE:
            vr.warnings.append(
                f"Low confidence ({fact.confidence:.2f}) for {fact.field.value}, fact ignored"
            )
            continue

        problem = _check_bounds(fact)
        if problem is not None:
            vr.warnings.append(problem)
            continue

        vr.facts.append(fact)

    return vr


def _check_bounds(fact: ClaimFact) -> str | None:
    if fact.field == ClaimField.AGE:
        if not MIN_AGE <= fact.value <= MAX_AGE:
            return f"Age {fact.value} outside plausible range {MIN_AGE}-{MAX_AGE}"
    elif fact.field == ClaimField.FAMILY_INCOME_ANNUAL:
        if fact.value < 0:
            return f"Negative income {fact.value}"
        if fact.value > MAX_ANNUAL_INCOME:
            return f"Implausible income {fact.value}"
    elif fact.field == ClaimField.SKILLS:
        if not fact.value:
            return "Empty skills list"
    return None
