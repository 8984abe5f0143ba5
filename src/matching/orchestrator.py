"""Match orchestrator — eligibility first, matching only for eligible applicants.

The ineligible branch never calls the matching engine, so an ineligible
verdict can never come back with results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.eligibility.engine import evaluate_reconciled
from src.eligibility.reconcile import Claims, reconcile
from src.matching.engine import match
from src.schemas.eligibility import EligibilityCriteria, EligibilityVerdict
from src.schemas.matching import InternshipListing, MatchResponse
from src.schemas.profile import ReconciledProfile, StudentProfile

logger = logging.getLogger(__name__)


def assemble(
    profile: ReconciledProfile,
    verdict: EligibilityVerdict,
    listings: Iterable[InternshipListing],
    limit: int | None = None,
) -> MatchResponse:
    """Build the final response for an evaluated profile."""
    if not verdict.eligible:
        violated = ", ".join(r.value for r in verdict.violated_rules)
        logger.info("Applicant ineligible (%s) — no listings ranked", violated)
        return MatchResponse(verdict=verdict)

    results = match(profile, listings, limit)
    logger.info("Applicant eligible — %d listings ranked", len(results))
    return MatchResponse(verdict=verdict, results=results)


def run(
    profile: StudentProfile,
    claims: Claims,
    listings: Iterable[InternshipListing],
    limit: int | None = None,
    criteria: EligibilityCriteria | None = None,
) -> MatchResponse:
    """Evaluate eligibility and, only if eligible, rank the listings.

    Returns:
        MatchResponse whose results are empty whenever the verdict is ineligible.
    """
    reconciled = reconcile(profile, claims)
    verdict = evaluate_reconciled(reconciled, criteria)
    return assemble(reconciled, verdict, listings, limit)
