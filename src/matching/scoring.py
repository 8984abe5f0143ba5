"""Per-listing relevance components: skill, interest and location.

Each component is a float in [0, 1]. Comparisons are case-insensitive;
profile and listing term sets arrive already lower-cased.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from src.config import MatchingSettings

# Runs of anything but whitespace, digits and punctuation, so non-Latin
# place names survive
_WORD_RE = re.compile(r"[^\s\d!-/:-@\[-`{-~।॥]+")

REMOTE = "remote"

# Common alternate city names, folded to one spelling before comparison
_PLACE_ALIASES: dict[str, str] = {
    "bengaluru": "bangalore",
    "bombay": "mumbai",
    "madras": "chennai",
    "calcutta": "kolkata",
    "gurugram": "gurgaon",
    "trivandrum": "thiruvananthapuram",
    "poona": "pune",
}

# Too generic to say two places share a region
_NON_REGION_WORDS = frozenset({"india", "the", "and", "city", "district", "state", "area", "near", "hybrid"})


@dataclass(frozen=True)
class ComponentScores:
    skill: float
    interest: float
    location: float

    @property
    def all_zero(self) -> bool:
        return self.skill == 0 and self.interest == 0 and self.location == 0


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _place_words(text: str) -> list[str]:
    return [_PLACE_ALIASES.get(w, w) for w in _WORD_RE.findall(text.casefold())]


def skill_score(skills: frozenset[str], required_skills: frozenset[str]) -> float:
    """Share of the listing's required skills the applicant has."""
    return _clamp(len(skills & required_skills) / max(1, len(required_skills)))


def interest_score(interests: frozenset[str], title: str, description: str) -> float:
    """Share of interests whose every token occurs in the title or description."""
    if not interests:
        return 0.0
    haystack = f"{title}\n{description}".lower()
    hits = sum(1 for interest in interests if all(tok in haystack for tok in interest.split()))
    return _clamp(hits / len(interests))


def location_score(preference: str | None, location: str, region_score: float = 0.3) -> float:
    """1.0 on exact/remote match, ``region_score`` on a shared region word, else 0.0."""
    listing_words = _place_words(location)
    if REMOTE in listing_words:
        return 1.0
    if not preference:
        return 0.0

    preference_words = _place_words(preference)
    if REMOTE in preference_words:
        return 1.0
    if not listing_words:
        return 0.0
    if preference_words == listing_words:
        return 1.0

    shared = {
        w for w in set(preference_words) & set(listing_words)
        if len(w) >= 3 and w not in _NON_REGION_WORDS
    }
    return _clamp(region_score) if shared else 0.0


def combine(components: ComponentScores, cfg: MatchingSettings) -> int:
    """Weighted sum scaled to 0–100, rounded half-up."""
    raw = 100 * (
        cfg.skill_weight * components.skill
        + cfg.interest_weight * components.interest
        + cfg.location_weight * components.location
    )
    # Strip float noise so 42.499999999 and 42.5 round the same way
    return min(max(math.floor(round(raw, 9) + 0.5), 0), 100)
