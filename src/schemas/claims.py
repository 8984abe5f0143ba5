"""Pydantic schemas for document claims.

A DocumentClaim holds the typed facts extracted from one supporting document.
Claims are produced by the claim normalizer and only ever read by the engine.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import ClaimField, DocumentKind


class ClaimFact(BaseModel):
    """A single typed fact, e.g. {field: family_income_annual, value: 650000}."""

    model_config = ConfigDict(frozen=True)

    field: ClaimField
    value: Any
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class DocumentClaim(BaseModel):
    """Typed facts extracted from one document kind."""

    model_config = ConfigDict(frozen=True)

    kind: DocumentKind
    present: bool = True
    facts: tuple[ClaimFact, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def absent(cls, kind: DocumentKind, warning: str | None = None) -> DocumentClaim:
        """Claim for a document that was not supplied or could not be read."""
        return cls(kind=kind, present=False, warnings=(warning,) if warning else ())

    def get(self, field: ClaimField) -> ClaimFact | None:
        """Return the fact for ``field``, or None. Absent claims carry no facts."""
        if not self.present:
            return None
        for fact in self.facts:
            if fact.field == field:
                return fact
        return None

    @property
    def fields(self) -> frozenset[ClaimField]:
        if not self.present:
            return frozenset()
        return frozenset(f.field for f in self.facts)
