"""Claim normalizer — raw document analysis output → typed DocumentClaim.

The document analysis collaborator returns loosely structured JSON per
document. This module maps it onto ClaimFacts keyed by profile field,
parsing Indian amounts and dates along the way. A value that cannot be
parsed is dropped with a warning; only output that is not a JSON object
at all fails the whole claim.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import date
from typing import Any

from src.claims.parsing import (
    age_on,
    parse_age,
    parse_amount,
    parse_analysis_json,
    parse_bool,
    parse_date,
)
from src.claims.qualifications import classify_qualification
from src.claims.validator import validate_facts
from src.models.enums import ClaimField, DocumentKind, EmploymentStatus, GuardianEmploymentType
from src.schemas.claims import ClaimFact, DocumentClaim
from src.schemas.profile import normalize_terms

logger = logging.getLogger(__name__)

_OTHER_SCHEME_RE = re.compile(r"\bnaps\b|\bnats\b|apprenticeship scheme|internship scheme")


class _FactCollector:
    """Accumulates facts and per-value parse warnings for one document."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data
        raw_conf = data.get("confidence")
        self._confidence: dict[str, Any] = raw_conf if isinstance(raw_conf, dict) else {}
        self.facts: list[ClaimFact] = []
        self.warnings: list[str] = []

    def first(self, *keys: str) -> tuple[str, Any] | tuple[None, None]:
        """Return the first key with a non-empty value."""
        for key in keys:
            value = self._data.get(key)
            if value is not None and value != "":
                return key, value
        return None, None

    def add(
        self,
        claim_field: ClaimField,
        keys: tuple[str, ...],
        parse: Callable[[Any], Any],
    ) -> None:
        key, raw = self.first(*keys)
        if key is None:
            return
        try:
            value = parse(raw)
        except (ValueError, TypeError) as exc:
            self.warnings.append(f"Could not parse {key}: {exc}")
            return
        if value is None:
            return
        self.facts.append(ClaimFact(
            field=claim_field,
            value=value,
            confidence=self._confidence_for(key, claim_field),
        ))

    def _confidence_for(self, key: str, claim_field: ClaimField) -> float:
        raw = self._confidence.get(key, self._confidence.get(claim_field.value, 1.0))
        try:
            conf = float(raw)
        except (TypeError, ValueError):
            self.warnings.append(f"Bad confidence for {key}: {raw!r}")
            return 1.0
        return min(max(conf, 0.0), 1.0)


# ── Field parsers ────────────────────────────────────────────────────


def _nationality_to_citizenship(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"indian", "india", "in", "ind"}:
        return True
    try:
        return parse_bool(text)
    except ValueError:
        return False  # any other stated nationality


def _qualification_text(value: Any) -> str:
    text = " ".join(str(value).split())
    if not text:
        raise ValueError("empty qualification")
    return text


def _guardian_type(value: Any) -> GuardianEmploymentType:
    text = str(value).strip().lower()
    try:
        return GuardianEmploymentType(re.sub(r"[\s_]+", "-", text))
    except ValueError:
        pass
    if "contract" in text:
        return GuardianEmploymentType.CONTRACTUAL
    if "permanent" in text and re.search(r"gov|psu|public sector", text):
        return GuardianEmploymentType.PERMANENT_GOVT
    return GuardianEmploymentType.NONE


def _employment_status(value: Any) -> EmploymentStatus:
    text = re.sub(r"[\s_]+", "-", str(value).strip().lower())
    try:
        return EmploymentStatus(text)
    except ValueError:
        pass
    if "student" in text:
        return EmploymentStatus.FULL_TIME_STUDENT
    if "part" in text:
        return EmploymentStatus.PART_TIME
    if "full" in text or text in {"employed", "working"}:
        return EmploymentStatus.FULL_TIME
    if text in {"none", "unemployed", "not-employed", "jobless"}:
        return EmploymentStatus.UNEMPLOYED
    raise ValueError(f"Unknown employment status {value!r}")


def _full_time_enrollment(value: Any) -> EmploymentStatus | None:
    return EmploymentStatus.FULL_TIME_STUDENT if parse_bool(value) else None


def _mentions_other_scheme(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, list | tuple):
        value = " ".join(str(v) for v in value)
    text = str(value).lower()
    try:
        return parse_bool(text)
    except ValueError:
        return bool(_OTHER_SCHEME_RE.search(text))


def _monthly_to_annual(value: Any) -> Any:
    return parse_amount(value) * 12


def _place(value: Any) -> str:
    text = " ".join(str(value).split())
    if not text:
        raise ValueError("empty location")
    return text


# ── Per-document extractors ──────────────────────────────────────────


def _extract_id(c: _FactCollector, reference_date: date) -> None:
    key, dob = c.first("date_of_birth", "dob", "birth_date")
    if key is not None:
        c.add(ClaimField.AGE, (key,), lambda v: age_on(parse_date(v), reference_date))
    else:
        c.add(ClaimField.AGE, ("age",), parse_age)
    if c.first("citizenship")[0] is not None:
        c.add(ClaimField.CITIZENSHIP, ("citizenship",), parse_bool)
    else:
        c.add(ClaimField.CITIZENSHIP, ("nationality",), _nationality_to_citizenship)


def _extract_education(c: _FactCollector, reference_date: date) -> None:
    c.add(ClaimField.QUALIFICATION, ("qualification", "degree", "course"), _qualification_text)
    key, text = c.first("qualification", "degree", "course")
    if key is not None and classify_qualification(str(text)) is None:
        c.warnings.append(f"Unrecognised qualification {text!r}")
    c.add(ClaimField.INSTITUTE_NAME, ("institute_name", "institute", "institution"), _place)
    c.add(ClaimField.ATTENDS_PREMIER_INSTITUTE, ("premier_institute",), parse_bool)
    c.add(ClaimField.EMPLOYMENT_STATUS, ("enrolled_full_time",), _full_time_enrollment)


def _extract_income(c: _FactCollector, reference_date: date) -> None:
    if c.first("annual_income", "family_income", "income")[0] is not None:
        c.add(ClaimField.FAMILY_INCOME_ANNUAL, ("annual_income", "family_income", "income"), parse_amount)
    else:
        c.add(ClaimField.FAMILY_INCOME_ANNUAL, ("monthly_income",), _monthly_to_annual)
    c.add(ClaimField.GUARDIAN_EMPLOYMENT, ("guardian_employment", "parent_employment"), _guardian_type)


def _extract_address(c: _FactCollector, reference_date: date) -> None:
    c.add(ClaimField.RESIDENCE, ("city", "district", "state", "location"), _place)


def _extract_resume(c: _FactCollector, reference_date: date) -> None:
    c.add(ClaimField.SKILLS, ("skills",), normalize_terms)
    c.add(ClaimField.EMPLOYMENT_STATUS, ("employment_status", "current_status"), _employment_status)
    c.add(ClaimField.OTHER_SCHEME, ("other_schemes", "enrolled_in_other_scheme"), _mentions_other_scheme)


EXTRACTORS: dict[DocumentKind, Callable[[_FactCollector, date], None]] = {
    DocumentKind.ID: _extract_id,
    DocumentKind.EDUCATION: _extract_education,
    DocumentKind.INCOME: _extract_income,
    DocumentKind.ADDRESS: _extract_address,
    DocumentKind.RESUME: _extract_resume,
}


def normalize_claim(
    kind: DocumentKind | str,
    raw: str | dict[str, Any] | None,
    reference_date: date | None = None,
) -> DocumentClaim:
    """Convert raw document analysis output into a DocumentClaim.

    Args:
        kind: Which document the output belongs to.
        raw: Analysis output (dict or JSON text). None means the document is absent.
        reference_date: Date ages are computed against (defaults to today).

    Returns:
        A present claim with validated facts, or an absent claim.

    Raises:
        DocumentParseError: If the output is not a JSON object.
    """
    kind = DocumentKind(kind)
    if raw is None:
        return DocumentClaim.absent(kind)

    data = parse_analysis_json(raw, kind=kind.value)
    if data.get("present") is False:
        return DocumentClaim.absent(kind)

    collector = _FactCollector(data)
    EXTRACTORS[kind](collector, reference_date or date.today())

    vr = validate_facts(collector.facts)
    warnings = collector.warnings + vr.warnings
    if warnings:
        logger.debug("Claim %s normalized with warnings: %s", kind.value, warnings)

    return DocumentClaim(
        kind=kind,
        present=True,
        facts=tuple(vr.facts),
        warnings=tuple(warnings),
    )
