"""Eligibility engine — evaluates the admission rule set against a profile.

Pure Python. No I/O, no LLM calls: the same inputs always yield the
same verdict, with violated rules in rule-table order.
"""

from __future__ import annotations

import logging

from src.eligibility.criteria import get_criteria
from src.eligibility.reconcile import Claims, reconcile
from src.eligibility.rules import RULE_CHECKS
from src.schemas.eligibility import EligibilityCriteria, EligibilityVerdict, RuleCondition
from src.schemas.profile import ReconciledProfile, StudentProfile

logger = logging.getLogger(__name__)


def evaluate_reconciled(
    profile: ReconciledProfile,
    criteria: EligibilityCriteria | None = None,
) -> EligibilityVerdict:
    """Apply every rule to an already reconciled profile.

    All rules run; every failing rule is recorded, not just the first.
    """
    criteria = criteria or get_criteria()
    conditions: list[RuleCondition] = [check(profile, criteria) for check in RULE_CHECKS.values()]
    violated = tuple(c.rule for c in conditions if not c.met)

    if violated:
        logger.debug("Ineligible: %s", ", ".join(r.value for r in violated))

    return EligibilityVerdict(
        eligible=not violated,
        violated_rules=violated,
        conditions=tuple(conditions),
    )


def evaluate(
    profile: StudentProfile,
    claims: Claims = None,
    criteria: EligibilityCriteria | None = None,
) -> EligibilityVerdict:
    """Reconcile the profile with its document claims and evaluate it.

    Args:
        profile: Self-reported applicant data.
        claims: Document claims keyed by kind; missing documents are fine.
        criteria: Rule set override (defaults to the process-wide criteria).

    Returns:
        EligibilityVerdict — ineligibility is a normal outcome, never an exception.
    """
    return evaluate_reconciled(reconcile(profile, claims), criteria)
