"""Exception taxonomy for the eligibility & matching pipeline.

Ineligibility is NOT an error: it is a normal outcome carried by
EligibilityVerdict. These exceptions cover malformed input and
collaborator failures only.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all pipeline errors."""


class InvalidProfileError(EngineError):
    """Raised when a profile fails structural validation (negative age, bad income...).

    Fatal to the request and never retried.
    """

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class DocumentParseError(EngineError):
    """Raised when a document cannot be normalized into a claim.

    The caller treats the claim as absent unless the document is mandatory.
    """

    def __init__(self, message: str, kind: str | None = None, raw_output: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.raw_output = raw_output


class ServiceUnavailableError(EngineError):
    """Raised when a collaborator (document analysis, listing pool) is transiently unreachable."""

    def __init__(self, message: str, service: str) -> None:
        super().__init__(message)
        self.service = service

    @property
    def user_message(self) -> str:
        return "The service is temporarily unavailable. Please try again in a few minutes."
