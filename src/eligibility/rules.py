"""Admission rule functions for the PM Internship Scheme.

Each function takes a ReconciledProfile and the criteria and returns a
RuleCondition. Pure Python, deterministic.

Missing inputs pass (benefit of the doubt) except age and qualification,
which are mandatory facts: without them basic eligibility cannot be shown.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from src.claims.qualifications import classify_qualification, tier_rank
from src.models.enums import ClaimField, RuleId
from src.schemas.eligibility import EligibilityCriteria, RuleCondition
from src.schemas.profile import ReconciledProfile

RuleCheck = Callable[[ReconciledProfile, EligibilityCriteria], RuleCondition]


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def is_premier_institute(name: str | None, premier_institutes: tuple[str, ...]) -> bool:
    """True when ``name`` refers to one of the configured premier institutes.

    Acronyms ("IIT") must appear as a whole word (plural allowed), so
    "IIIT Delhi" does not match "IIT". Multi-word names match as substrings.
    """
    if not name:
        return False
    text = " ".join(name.lower().split())
    tokens = set(re.findall(r"[a-z]+", text))
    for entry in premier_institutes:
        needle = " ".join(entry.lower().split())
        if not needle:
            continue
        if " " in needle:
            if needle in text:
                return True
        elif needle in tokens or f"{needle}s" in tokens:
            return True
    return False


# ── Identity ─────────────────────────────────────────────────────────


def check_citizenship(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    return RuleCondition(
        rule=RuleId.CITIZENSHIP,
        description="Applicant must be an Indian citizen",
        met=profile.citizenship,
        value=_yes_no(profile.citizenship),
        verified=profile.is_verified(ClaimField.CITIZENSHIP),
    )


def check_age_range(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    # Mandatory: an unknown age fails
    age = profile.age
    met = age is not None and criteria.min_age <= age <= criteria.max_age
    return RuleCondition(
        rule=RuleId.AGE_RANGE,
        description=f"Applicant must be between {criteria.min_age} and {criteria.max_age} years old",
        met=met,
        value=str(age) if age is not None else None,
        verified=profile.is_verified(ClaimField.AGE),
    )


# ── Qualification ────────────────────────────────────────────────────


def check_qualification_floor(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    # Mandatory: unknown or unrecognised qualification fails.
    # Tiers above the floor pass here; the ceiling rule handles them.
    tier = classify_qualification(profile.qualification)
    floor = min(tier_rank(t) for t in criteria.allowed_tiers)
    met = tier is not None and tier_rank(tier) >= floor
    return RuleCondition(
        rule=RuleId.QUALIFICATION_FLOOR,
        description="Minimum qualification is Class 10, ITI, Polytechnic, Diploma or a graduate degree",
        met=met,
        value=tier.value if tier is not None else profile.qualification,
        verified=profile.is_verified(ClaimField.QUALIFICATION),
    )


def check_qualification_ceiling(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    tier = classify_qualification(profile.qualification)
    met = tier is None or tier not in criteria.disqualifying_tiers
    return RuleCondition(
        rule=RuleId.QUALIFICATION_CEILING,
        description="Holders of higher or professional qualifications (MBA, PhD, CA, CS, MBBS...) cannot apply",
        met=met,
        value=tier.value if tier is not None else None,
        verified=profile.is_verified(ClaimField.QUALIFICATION),
    )


# ── Occupation ───────────────────────────────────────────────────────


def check_employment(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    return RuleCondition(
        rule=RuleId.EMPLOYMENT,
        description="Applicant must not be employed full-time or enrolled in a full-time programme",
        met=profile.employment_status in criteria.allowed_employment,
        value=profile.employment_status.value,
        verified=profile.is_verified(ClaimField.EMPLOYMENT_STATUS),
    )


def check_institute(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    premier = profile.attends_premier_institute or is_premier_institute(
        profile.institute_name, criteria.premier_institutes,
    )
    return RuleCondition(
        rule=RuleId.INSTITUTE,
        description="Students from premier institutes (IITs, IIMs, NIDs, IISERs, NITs, NLUs) cannot apply",
        met=not premier,
        value=profile.institute_name or _yes_no(profile.attends_premier_institute),
        verified=(
            profile.is_verified(ClaimField.ATTENDS_PREMIER_INSTITUTE)
            or profile.is_verified(ClaimField.INSTITUTE_NAME)
        ),
    )


def check_other_scheme(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    return RuleCondition(
        rule=RuleId.OTHER_SCHEME,
        description="Applicant must not be enrolled in another government apprenticeship or internship scheme",
        met=not profile.enrolled_in_other_govt_scheme,
        value=_yes_no(profile.enrolled_in_other_govt_scheme),
        verified=profile.is_verified(ClaimField.OTHER_SCHEME),
    )


# ── Household ────────────────────────────────────────────────────────


def check_income_ceiling(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    income = profile.family_income_annual
    return RuleCondition(
        rule=RuleId.INCOME_CEILING,
        description=f"Annual family income must not exceed ₹{criteria.income_ceiling:,}",
        met=income is None or income <= criteria.income_ceiling,
        value=str(income) if income is not None else None,
        verified=profile.is_verified(ClaimField.FAMILY_INCOME_ANNUAL),
    )


def check_guardian_employment(profile: ReconciledProfile, criteria: EligibilityCriteria) -> RuleCondition:
    guardian = profile.parent_guardian_employment_type
    return RuleCondition(
        rule=RuleId.GUARDIAN_EMPLOYMENT,
        description="Parents, guardian or spouse must not be permanent government/PSU employees",
        met=guardian in criteria.allowed_guardian_employment,
        value=guardian.value,
        verified=profile.is_verified(ClaimField.GUARDIAN_EMPLOYMENT),
    )


# Rule-table order: violated rules are always reported in this order
RULE_CHECKS: dict[RuleId, RuleCheck] = {
    RuleId.CITIZENSHIP: check_citizenship,
    RuleId.AGE_RANGE: check_age_range,
    RuleId.QUALIFICATION_FLOOR: check_qualification_floor,
    RuleId.QUALIFICATION_CEILING: check_qualification_ceiling,
    RuleId.EMPLOYMENT: check_employment,
    RuleId.INSTITUTE: check_institute,
    RuleId.OTHER_SCHEME: check_other_scheme,
    RuleId.INCOME_CEILING: check_income_ceiling,
    RuleId.GUARDIAN_EMPLOYMENT: check_guardian_employment,
}
