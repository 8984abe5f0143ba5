"""Eligibility engine — rule-based admission checks for the PM Internship Scheme."""

from src.eligibility.criteria import get_criteria
from src.eligibility.engine import evaluate, evaluate_reconciled
from src.eligibility.reconcile import reconcile
from src.eligibility.rules import RULE_CHECKS
from src.schemas.eligibility import EligibilityCriteria, EligibilityVerdict, RuleCondition

__all__ = [
    "evaluate",
    "evaluate_reconciled",
    "reconcile",
    "get_criteria",
    "RULE_CHECKS",
    "EligibilityCriteria",
    "EligibilityVerdict",
    "RuleCondition",
]
