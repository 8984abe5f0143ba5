"""Async httpx client for the external document analysis service.

The service extracts structured fields from an uploaded document; this
client turns its JSON answer into a DocumentClaim via the claim normalizer.
No OCR happens here.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Protocol

import httpx

from src.claims.normalizer import normalize_claim
from src.config import settings
from src.errors import DocumentParseError, ServiceUnavailableError
from src.models.enums import DocumentKind
from src.schemas.claims import DocumentClaim

logger = logging.getLogger(__name__)

SERVICE_NAME = "document_analysis"

# Status codes meaning "this document is unreadable", not "service down"
_PARSE_FAILURE_STATUSES = frozenset({400, 413, 415, 422})


class DocumentAnalyzer(Protocol):
    """Anything that can turn a raw document into a claim."""

    async def analyze(self, kind: DocumentKind, raw_document: Any) -> DocumentClaim: ...


class HttpDocumentAnalyzer:
    """Thin async wrapper around the document analysis endpoint.

    Endpoint: POST {base_url}/analyze
    Auth: X-API-Key header
    """

    def __init__(self) -> None:
        self._base_url = settings.integrations.document_analysis_url.rstrip("/")
        self._api_key = settings.integrations.document_analysis_api_key
        self._timeout = httpx.Timeout(settings.integrations.document_analysis_timeout, connect=5.0)

    @property
    def _bypass_mode(self) -> bool:
        """Return True if no service URL is configured (dev/test bypass)."""
        return not self._base_url

    async def analyze(self, kind: DocumentKind, raw_document: Any) -> DocumentClaim:
        """Send a document for analysis and normalize the answer.

        Raises:
            DocumentParseError: The service rejected the document or answered with garbage.
            ServiceUnavailableError: Timeout, connection failure or 5xx.
        """
        kind = DocumentKind(kind)
        if self._bypass_mode:
            logger.debug("Document analysis bypass mode active (no URL configured)")
            return DocumentClaim.absent(kind, "document analysis not configured")

        headers = {"X-API-Key": self._api_key} if self._api_key else {}
        body = {"kind": kind.value, "document": _encode_document(raw_document)}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(f"{self._base_url}/analyze", json=body, headers=headers)
                response.raise_for_status()
                payload = response.json()

        except httpx.TimeoutException as exc:
            logger.warning("Document analysis timeout for %s document", kind.value)
            raise ServiceUnavailableError("Document analysis timed out", service=SERVICE_NAME) from exc

        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("Document analysis HTTP error %s for %s document", status, kind.value)
            if status in _PARSE_FAILURE_STATUSES:
                raise DocumentParseError(
                    f"Document rejected by analysis service (HTTP {status})",
                    kind=kind.value,
                ) from exc
            raise ServiceUnavailableError(
                f"Document analysis returned HTTP {status}",
                service=SERVICE_NAME,
            ) from exc

        except httpx.TransportError as exc:
            logger.warning("Document analysis unreachable: %s", exc)
            raise ServiceUnavailableError("Document analysis unreachable", service=SERVICE_NAME) from exc

        except ValueError as exc:
            raise DocumentParseError("Analysis service returned invalid JSON", kind=kind.value) from exc

        if isinstance(payload, dict) and isinstance(payload.get("fields"), dict):
            payload = payload["fields"]
        return normalize_claim(kind, payload)


def _encode_document(raw_document: Any) -> Any:
    """Bytes go over the wire as base64; data URIs and dicts pass through."""
    if isinstance(raw_document, bytes | bytearray):
        return {"encoding": "base64", "data": base64.b64encode(raw_document).decode("ascii")}
    return raw_document


# Module-level singleton
document_analyzer = HttpDocumentAnalyzer()
