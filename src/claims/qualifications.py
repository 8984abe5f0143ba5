"""Free-text qualification → QualificationTier classifier.

Keyword based and deterministic. When a text mentions several levels
("B.Tech, M.Tech") the highest tier wins, since the ceiling rule cares
about the highest qualification held.
"""

from __future__ import annotations

import re

from src.models.enums import QualificationTier

# Ascending order matters: later entries outrank earlier ones.
_TIER_PATTERNS: list[tuple[QualificationTier, re.Pattern[str]]] = [
    (QualificationTier.CLASS_10, re.compile(
        r"\b(?:class|std|standard|grade)\s*(?:10|x)\b|\b10th\b|\bssc\b|\bsslc\b|\bmatric\w*|\bsecondary school\b"
    )),
    (QualificationTier.CLASS_12, re.compile(
        r"\b(?:class|std|standard|grade)\s*(?:12|xii)\b|\b12th\b|\bhsc\b|\bpuc\b|\bintermediate\b|\bhigher secondary\b"
    )),
    (QualificationTier.ITI, re.compile(r"\biti\b|\bindustrial training\b")),
    (QualificationTier.POLYTECHNIC, re.compile(r"\bpolytechnic\b")),
    (QualificationTier.DIPLOMA, re.compile(r"\bdiploma\b")),
    (QualificationTier.GRADUATE, re.compile(
        r"\bgraduat\w*|\bundergraduate\b|\bbachelor\w*|\bdegree\b"
        r"|\bb\s?tech\b|\bb\s?e\b|\bb\s?sc\b|\bb\s?com\b|\bba\b|\bbca\b|\bbba\b|\bb\s?pharm\b|\bb\s?arch\b"
    )),
    (QualificationTier.POSTGRADUATE, re.compile(
        r"\bpost\s?-?\s?graduat\w*|\bmasters?\b|\bpg\b"
        r"|\bm\s?tech\b|\bm\s?sc\b|\bm\s?com\b|\bmca\b|\bma\b|\bm\s?phil\b"
    )),
    (QualificationTier.PROFESSIONAL, re.compile(
        r"\bllm\b|\bmaster of laws\b|\bmd\b|\bdoctor of medicine\b|\bbds\b|\bmds\b|\bm\s?ch\b"
    )),
    (QualificationTier.CS, re.compile(r"\bcompany secretary\b|\b[af]?cs\b")),
    (QualificationTier.CA, re.compile(r"\bchartered accountan\w*|\b[af]?ca\b")),
    (QualificationTier.MBA, re.compile(r"\bmba\b|\bpgdm\b|\bmaster of business\b")),
    (QualificationTier.MBBS, re.compile(r"\bmbbs\b|\bbachelor of medicine\b")),
    (QualificationTier.PHD, re.compile(r"\bph\s?d\b|\bdoctorate\b|\bd\s?phil\b")),
]

# "CS" and "CA" also abbreviate subjects (computer science, computer
# applications). Those uses are stripped before the tier patterns run.
_SUBJECT_ABBREVIATIONS = re.compile(
    r"\b(b\s?sc|b\s?tech|b\s?e|b\s?s|m\s?sc|m\s?tech|m\s?e|m\s?s|bca|mca|diploma"
    r"|computer science|computer applications?)"
    r"\s+(?:in\s+)?\(?(?:cs|ca)\b\)?"
)
_CS_ENGINEERING = re.compile(r"\bcs(?=\s+(?:and\s+)?(?:engineering|engg)\b)")

_TIER_RANK = {tier: rank for rank, (tier, _) in enumerate(_TIER_PATTERNS)}


def _clean(text: str) -> str:
    """Lower-case, drop dots ("B.Tech" → "btech") and subject abbreviations."""
    text = text.lower().replace(".", "")
    text = _SUBJECT_ABBREVIATIONS.sub(r"\1", text)
    text = _CS_ENGINEERING.sub("", text)
    text = re.sub(r"[()/,&+]", " ", text)
    return " ".join(text.split())


def classify_qualification(text: str | None) -> QualificationTier | None:
    """Map free-text qualification to the highest tier it mentions.

    Returns None when the text is empty or matches no known tier.
    """
    if not text:
        return None
    cleaned = _clean(text)
    if not cleaned:
        return None

    try:
        return QualificationTier(cleaned)
    except ValueError:
        pass

    best: QualificationTier | None = None
    for tier, pattern in _TIER_PATTERNS:
        if pattern.search(cleaned):
            best = tier  # patterns are ascending
    return best


def tier_rank(tier: QualificationTier) -> int:
    """Position of a tier in the ascending order (Class 10 = 0)."""
    return _TIER_RANK[tier]
