"""Request service: the externally exposed ``request_match`` operation.

Awaits the two collaborators (document analysis, listing pool) and hands
their resolved output to the pure orchestrator. Collaborator failures follow
one policy:

- DocumentParseError → the claim is treated as absent (logged).
- ServiceUnavailableError → retried once after a short backoff; a document
  that still fails is treated as absent, the listing pool failure surfaces.
- Documents declared mandatory re-raise instead of degrading, and one that
  comes back absent is rejected the same way.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Collection, Mapping
from typing import Any, TypeVar

from src.config import settings
from src.eligibility.engine import evaluate_reconciled
from src.eligibility.reconcile import reconcile
from src.errors import DocumentParseError, ServiceUnavailableError
from src.integrations.document_analysis import DocumentAnalyzer, document_analyzer
from src.integrations.listings import ListingSource, get_listing_source
from src.matching.orchestrator import assemble
from src.models.enums import DocumentKind
from src.schemas.claims import DocumentClaim
from src.schemas.eligibility import EligibilityCriteria
from src.schemas.matching import MatchResponse
from src.schemas.profile import StudentProfile, parse_profile

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _with_retry(call: Callable[[], Awaitable[T]], service: str, backoff: float) -> T:
    """Await ``call``; on ServiceUnavailableError wait ``backoff`` and try exactly once more."""
    try:
        return await call()
    except ServiceUnavailableError as exc:
        logger.warning("%s unavailable (%s), retrying once in %.1fs", service, exc, backoff)
        await asyncio.sleep(backoff)
        return await call()


async def _analyze_one(
    analyzer: DocumentAnalyzer,
    kind: DocumentKind,
    raw: Any,
    mandatory: Collection[DocumentKind],
    backoff: float,
) -> DocumentClaim:
    if isinstance(raw, DocumentClaim):
        claim = raw  # already analyzed upstream
    elif raw is None:
        claim = DocumentClaim.absent(kind)
    else:
        try:
            claim = await _with_retry(
                lambda: analyzer.analyze(kind, raw), f"document analysis ({kind.value})", backoff,
            )
        except (DocumentParseError, ServiceUnavailableError) as exc:
            if kind in mandatory:
                logger.error("Mandatory %s document could not be analyzed: %s", kind.value, exc)
                raise
            logger.warning("%s document treated as absent: %s", kind.value, exc)
            return DocumentClaim.absent(kind, warning=str(exc))

    # An analyzer in bypass mode, or a document reported as not present,
    # yields an absent claim without raising
    if kind in mandatory and not claim.present:
        reason = "; ".join(claim.warnings) or "no claim extracted"
        logger.error("Mandatory %s document came back absent: %s", kind.value, reason)
        raise DocumentParseError(f"Mandatory {kind.value} document is absent: {reason}", kind=kind.value)
    return claim


async def analyze_documents(
    documents: Mapping[DocumentKind | str, Any] | None,
    analyzer: DocumentAnalyzer,
    mandatory: Collection[DocumentKind] = frozenset(),
    backoff: float | None = None,
) -> dict[DocumentKind, DocumentClaim]:
    """Analyze all supplied documents concurrently.

    A mandatory document that was not supplied at all, or that comes back
    absent, is treated like one that could not be read. The first failure
    cancels the analyses still in flight.
    """
    backoff = settings.integrations.retry_backoff_seconds if backoff is None else backoff
    supplied = {DocumentKind(kind): raw for kind, raw in (documents or {}).items()}

    missing = [k for k in mandatory if supplied.get(k) is None]
    if missing:
        names = ", ".join(sorted(k.value for k in missing))
        raise DocumentParseError(f"Mandatory document(s) missing: {names}", kind=names)

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = {
                kind: tg.create_task(_analyze_one(analyzer, kind, raw, mandatory, backoff))
                for kind, raw in supplied.items()
            }
    except* (DocumentParseError, ServiceUnavailableError) as group:
        # Surface the pipeline error itself, not the group wrapping it
        raise group.exceptions[0] from None
    return {kind: task.result() for kind, task in tasks.items()}


async def request_match(
    profile: StudentProfile | Mapping[str, Any],
    documents: Mapping[DocumentKind | str, Any] | None = None,
    limit: int | None = None,
    *,
    analyzer: DocumentAnalyzer | None = None,
    listing_source: ListingSource | None = None,
    mandatory: Collection[DocumentKind] = frozenset(),
    criteria: EligibilityCriteria | None = None,
) -> MatchResponse:
    """Validate, analyze documents, evaluate, and (only if eligible) rank listings.

    Args:
        profile: StudentProfile or raw profile mapping.
        documents: Raw documents (or pre-built claims) keyed by document kind.
        limit: Max results; defaults to the configured default limit.
        analyzer: Document analysis collaborator (defaults to the HTTP client).
        listing_source: Listing pool (defaults to the configured source).
        mandatory: Document kinds whose failure must abort the request.
        criteria: Rule set override.

    Raises:
        InvalidProfileError: Profile failed structural validation.
        DocumentParseError: A mandatory document is missing or unreadable.
        ServiceUnavailableError: A collaborator is still down after one retry.
    """
    student = parse_profile(profile)
    mandatory = frozenset(DocumentKind(k) for k in mandatory)
    backoff = settings.integrations.retry_backoff_seconds

    claims = await analyze_documents(documents, analyzer or document_analyzer, mandatory, backoff)
    reconciled = reconcile(student, claims)
    verdict = evaluate_reconciled(reconciled, criteria)

    if not verdict.eligible:
        # The listing pool is not even queried
        return assemble(reconciled, verdict, (), limit)

    source = listing_source or get_listing_source()
    listings = await _with_retry(lambda: source.fetch_candidates(reconciled), "listing pool", backoff)
    return assemble(reconciled, verdict, listings, limit)


def request_match_sync(
    profile: StudentProfile | Mapping[str, Any],
    documents: Mapping[DocumentKind | str, Any] | None = None,
    limit: int | None = None,
    **kwargs: Any,
) -> MatchResponse:
    """Blocking wrapper for CLI callers outside an event loop."""
    return asyncio.run(request_match(profile, documents, limit, **kwargs))
