"""Match API — FastAPI router exposing request_match over HTTP.

Ineligibility is a normal 200 response carrying the verdict; only
malformed input (422) and collaborator outages (503) are errors.
"""
# ruff: noqa: B008

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field

from src.errors import DocumentParseError, InvalidProfileError, ServiceUnavailableError
from src.integrations.document_analysis import DocumentAnalyzer, document_analyzer
from src.integrations.listings import ListingSource, get_listing_source
from src.matching.service import request_match
from src.models.enums import DocumentKind

logger = logging.getLogger(__name__)

router = APIRouter(tags=["matching"])


class MatchRequest(BaseModel):
    """POST /match body."""

    profile: dict[str, Any]
    documents: dict[DocumentKind, Any] = Field(default_factory=dict)
    limit: int | None = Field(default=None, ge=0, le=50)
    mandatory_documents: list[DocumentKind] = Field(default_factory=list)


def get_document_analyzer() -> DocumentAnalyzer:
    return document_analyzer


def get_listings() -> ListingSource:
    return get_listing_source()


@router.post("/match")
async def match_internships(
    body: MatchRequest,
    analyzer: DocumentAnalyzer = Depends(get_document_analyzer),
    listing_source: ListingSource = Depends(get_listings),
) -> dict[str, Any]:
    """Check eligibility and return ranked internships for eligible applicants."""
    try:
        response = await request_match(
            body.profile,
            body.documents,
            body.limit,
            analyzer=analyzer,
            listing_source=listing_source,
            mandatory=frozenset(body.mandatory_documents),
        )
    except InvalidProfileError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "errors": jsonable_encoder(exc.errors)},
        ) from exc
    except DocumentParseError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "document": exc.kind}) from exc
    except ServiceUnavailableError as exc:
        logger.error("Match request failed, %s unavailable: %s", exc.service, exc)
        raise HTTPException(status_code=503, detail=exc.user_message) from exc

    return response.model_dump(mode="json")
