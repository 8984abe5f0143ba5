"""Reconciliation: merge document claims over self-reported profile data.

Documents are the source of truth: a present claim fact overwrites the
self-reported value for the same field. A missing document never changes
anything, so the self-reported value stands unverified.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from pydantic import ValidationError

from src.models.enums import ClaimField, DocumentKind
from src.schemas.claims import DocumentClaim
from src.schemas.profile import ReconciledProfile, StudentProfile

logger = logging.getLogger(__name__)

# When two documents speak to the same field, the earlier kind wins.
CLAIM_PRECEDENCE: tuple[DocumentKind, ...] = (
    DocumentKind.ID,
    DocumentKind.EDUCATION,
    DocumentKind.INCOME,
    DocumentKind.ADDRESS,
    DocumentKind.RESUME,
)

Claims = Mapping[DocumentKind | str, DocumentClaim] | Iterable[DocumentClaim] | None


def _index_claims(claims: Claims) -> dict[DocumentKind, DocumentClaim]:
    if claims is None:
        return {}
    if isinstance(claims, Mapping):
        return {DocumentKind(kind): claim for kind, claim in claims.items()}
    return {claim.kind: claim for claim in claims}


def reconcile(profile: StudentProfile, claims: Claims = None) -> ReconciledProfile:
    """Overlay present claim facts onto the profile.

    A fact whose value does not fit the profile field is dropped with a
    warning, so the next document in precedence order (or the self-reported
    value) still gets a chance to supply that field.

    Args:
        profile: Self-reported snapshot.
        claims: Claims keyed by document kind (or an iterable of claims).

    Returns:
        A new ReconciledProfile; the inputs are left untouched.
    """
    indexed = _index_claims(claims)
    data = profile.model_dump()
    data.pop("verified_fields", None)
    verified: set[ClaimField] = set()

    for kind in CLAIM_PRECEDENCE:
        claim = indexed.get(kind)
        if claim is None or not claim.present:
            continue
        for fact in claim.facts:
            if fact.field in verified:
                continue
            candidate = {**data, fact.field.value: fact.value}
            try:
                StudentProfile.model_validate(candidate)
            except ValidationError as exc:
                logger.warning(
                    "Dropping %s claim value for %s (%r): %s",
                    kind.value,
                    fact.field.value,
                    fact.value,
                    exc.errors()[0]["msg"],
                )
                continue
            data = candidate
            verified.add(fact.field)

    data["verified_fields"] = frozenset(verified)
    return ReconciledProfile.model_validate(data)
