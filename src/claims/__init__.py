"""Claim normalizer — turns document analysis output into typed claims."""

from src.claims.normalizer import normalize_claim
from src.claims.parsing import parse_amount, parse_date
from src.claims.qualifications import classify_qualification

__all__ = [
    "normalize_claim",
    "classify_qualification",
    "parse_amount",
    "parse_date",
]
