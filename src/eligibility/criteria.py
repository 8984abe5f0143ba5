"""Process-wide eligibility criteria, built once from configuration."""

from __future__ import annotations

import functools

from src.config import EligibilitySettings, settings
from src.schemas.eligibility import EligibilityCriteria


def criteria_from_settings(cfg: EligibilitySettings) -> EligibilityCriteria:
    """Build the immutable rule set from eligibility settings.

    Employment sets keep their schema defaults; thresholds, qualification
    tiers and the premier-institute list come from configuration.

    Raises:
        ValueError: If a tier is configured as both allowed and disqualifying.
    """
    return EligibilityCriteria(
        min_age=cfg.min_age,
        max_age=cfg.max_age,
        income_ceiling=cfg.income_ceiling,
        allowed_tiers=frozenset(cfg.allowed_tiers),
        disqualifying_tiers=frozenset(cfg.disqualifying_tiers),
        premier_institutes=tuple(name.strip() for name in cfg.premier_institutes if name.strip()),
    )


@functools.cache
def get_criteria() -> EligibilityCriteria:
    """Criteria for the running process. Loaded on first use, never mutated."""
    return criteria_from_settings(settings.eligibility)
