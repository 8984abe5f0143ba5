"""Matching engine, orchestrator and the request_match entry point."""

from src.matching.engine import match, score_listing
from src.matching.orchestrator import assemble, run
from src.matching.service import request_match, request_match_sync
from src.schemas.matching import InternshipListing, MatchResponse, MatchResult

__all__ = [
    "match",
    "score_listing",
    "run",
    "assemble",
    "request_match",
    "request_match_sync",
    "InternshipListing",
    "MatchResult",
    "MatchResponse",
]
