"""Matching engine — scores and ranks internship listings for an eligible profile.

Pure Python, deterministic: identical inputs give identical ordered output.
Only ever called for eligible applicants (the orchestrator guarantees it).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.config import MatchingSettings, settings
from src.matching.scoring import ComponentScores, combine, interest_score, location_score, skill_score
from src.schemas.matching import InternshipListing, MatchResult
from src.schemas.profile import StudentProfile

logger = logging.getLogger(__name__)


def _ranking_key(result: MatchResult) -> tuple[int, float, str, str]:
    # score desc, raw skill desc, company asc; title as the last resort
    return (-result.score, -result.skill_score, result.listing.company_name, result.listing.title)


def score_listing(
    profile: StudentProfile,
    listing: InternshipListing,
    cfg: MatchingSettings | None = None,
) -> MatchResult | None:
    """Score one listing. Returns None when all three components are zero."""
    cfg = cfg or settings.matching
    components = ComponentScores(
        skill=skill_score(profile.skills, listing.required_skills),
        interest=interest_score(profile.interests, listing.title, listing.description),
        location=location_score(
            profile.location_preference or profile.residence,
            listing.location,
            region_score=cfg.region_score,
        ),
    )
    if components.all_zero:
        return None

    return MatchResult(
        listing=listing,
        score=combine(components, cfg),
        skill_score=components.skill,
        interest_score=components.interest,
        location_score=components.location,
    )


def match(
    profile: StudentProfile,
    listings: Iterable[InternshipListing],
    limit: int | None = None,
    cfg: MatchingSettings | None = None,
) -> tuple[MatchResult, ...]:
    """Rank listings for a profile and keep the top ``limit``.

    Args:
        profile: Reconciled profile of an eligible applicant.
        listings: Candidate listings (already deduplicated upstream).
        limit: Max results; defaults to the configured default limit.
        cfg: Matching settings override.

    Returns:
        Results ordered by score desc, raw skill score desc, company name asc.
        Listings scoring zero on every component are left out.
    """
    cfg = cfg or settings.matching
    limit = cfg.default_limit if limit is None else limit
    if limit <= 0:
        return ()

    scored: list[MatchResult] = []
    considered = 0
    for listing in listings:
        considered += 1
        result = score_listing(profile, listing, cfg)
        if result is not None:
            scored.append(result)

    scored.sort(key=_ranking_key)
    logger.debug("Scored %d listings, %d relevant, returning %d", considered, len(scored), min(limit, len(scored)))
    return tuple(scored[:limit])
