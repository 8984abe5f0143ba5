"""Listing pool accessors — where candidate internships come from.

The matching engine treats whatever these return as an opaque,
already-deduplicated sequence. Two sources ship: a static JSON catalog
and an HTTP listing pool.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from src.config import settings
from src.errors import ServiceUnavailableError
from src.schemas.matching import InternshipListing
from src.schemas.profile import StudentProfile

logger = logging.getLogger(__name__)

SERVICE_NAME = "listing_pool"


class ListingSource(Protocol):
    """Anything that can supply candidate listings for a profile."""

    async def fetch_candidates(self, profile: StudentProfile) -> list[InternshipListing]: ...


def parse_listings(payload: Any) -> list[InternshipListing]:
    """Validate a listing payload (a list, or {"listings": [...]}).

    Entries that fail validation are skipped with a warning.
    """
    if isinstance(payload, dict):
        payload = payload.get("listings", payload.get("internships", []))
    if not isinstance(payload, list):
        raise ServiceUnavailableError(
            f"Listing payload must be a list, got {type(payload).__name__}",
            service=SERVICE_NAME,
        )

    listings: list[InternshipListing] = []
    for index, entry in enumerate(payload):
        try:
            listings.append(InternshipListing.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping invalid listing #%d: %s", index, exc.errors(include_url=False))
    return listings


class CatalogListingSource:
    """Static JSON catalog on disk. Read on every call; nothing is cached."""

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path or settings.integrations.listing_catalog_path)

    async def fetch_candidates(self, profile: StudentProfile) -> list[InternshipListing]:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            logger.error("Listing catalog not found: %s", self._path)
            raise ServiceUnavailableError(f"Listing catalog {self._path} not found", service=SERVICE_NAME) from exc
        except json.JSONDecodeError as exc:
            raise ServiceUnavailableError(
                f"Listing catalog {self._path} is not valid JSON", service=SERVICE_NAME,
            ) from exc
        return parse_listings(payload)


class HttpListingSource:
    """Remote listing pool.

    Endpoint: GET {url}?location=...&skills=a,b
    """

    def __init__(self, url: str | None = None) -> None:
        self._url = url or settings.integrations.listing_pool_url
        self._timeout = httpx.Timeout(settings.integrations.listing_pool_timeout, connect=5.0)

    async def fetch_candidates(self, profile: StudentProfile) -> list[InternshipListing]:
        params: dict[str, str] = {}
        location = profile.location_preference or profile.residence
        if location:
            params["location"] = location
        if profile.skills:
            params["skills"] = ",".join(sorted(profile.skills))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._url, params=params)
                response.raise_for_status()
                payload = response.json()

        except httpx.TimeoutException as exc:
            logger.warning("Listing pool timeout")
            raise ServiceUnavailableError("Listing pool timed out", service=SERVICE_NAME) from exc

        except httpx.HTTPStatusError as exc:
            logger.warning("Listing pool HTTP error %s", exc.response.status_code)
            raise ServiceUnavailableError(
                f"Listing pool returned HTTP {exc.response.status_code}",
                service=SERVICE_NAME,
            ) from exc

        except httpx.TransportError as exc:
            logger.warning("Listing pool unreachable: %s", exc)
            raise ServiceUnavailableError("Listing pool unreachable", service=SERVICE_NAME) from exc

        except ValueError as exc:
            raise ServiceUnavailableError("Listing pool returned invalid JSON", service=SERVICE_NAME) from exc

        return parse_listings(payload)


def get_listing_source() -> ListingSource:
    """HTTP pool when a URL is configured, otherwise the static catalog."""
    if settings.integrations.listing_pool_url:
        return HttpListingSource()
    return CatalogListingSource()
