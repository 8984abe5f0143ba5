"""Tests for document-claim parsing, validation and normalization.

All synchronous, no I/O.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.claims import normalize_claim, parse_amount, parse_date
from src.claims.parsing import age_on, parse_age, parse_analysis_json, parse_bool
from src.claims.validator import validate_facts
from src.errors import DocumentParseError
from src.models.enums import ClaimField, DocumentKind, EmploymentStatus, GuardianEmploymentType
from src.schemas.claims import ClaimFact, DocumentClaim

REFERENCE = date(2025, 1, 1)


def _value(claim: DocumentClaim, field: ClaimField):
    fact = claim.get(field)
    assert fact is not None, f"{field.value} missing from {claim.facts}"
    return fact.value


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


class TestParseAmount:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("6,50,000", Decimal("650000")),
            ("₹8 lakh", Decimal("800000")),
            ("8 LPA", Decimal("800000")),
            ("Rs. 4.5 lakhs", Decimal("450000")),
            ("Rs 3,00,000 p.a.", Decimal("300000")),
            ("1.2 crore", Decimal("12000000")),
            ("12k", Decimal("12000")),
            ("650000 total", Decimal("650000")),
            (650000, Decimal("650000")),
            (7.5, Decimal("7.5")),
        ],
    )
    def test_formats(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["not disclosed", True, None, ["650000"]])
    def test_rejects_non_amounts(self, raw):
        with pytest.raises(ValueError):
            parse_amount(raw)


class TestParseDate:
    @pytest.mark.parametrize("raw", ["2002-05-14", "14/05/2002", "14-05-2002", "14.05.2002", "14 May 2002"])
    def test_formats(self, raw):
        assert parse_date(raw) == date(2002, 5, 14)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unrecognised date format"):
            parse_date("2002/14/05")

    def test_age_on_birthday(self):
        assert age_on(date(2002, 5, 14), date(2024, 5, 13)) == 21
        assert age_on(date(2002, 5, 14), date(2024, 5, 14)) == 22


class TestScalarParsers:
    def test_parse_age(self):
        assert parse_age("22 years") == 22
        assert parse_age(22.0) == 22
        with pytest.raises(ValueError):
            parse_age(True)

    def test_parse_bool(self):
        assert parse_bool("Yes") is True
        assert parse_bool("no") is False
        with pytest.raises(ValueError):
            parse_bool("maybe")


class TestParseAnalysisJson:
    def test_plain_object(self):
        assert parse_analysis_json('{"age": 22}') == {"age": 22}

    def test_markdown_fences_and_trailing_comma(self):
        raw = '```json\n{"age": 22, "nationality": "Indian",}\n```'
        assert parse_analysis_json(raw) == {"age": 22, "nationality": "Indian"}

    def test_invalid_json_raises(self):
        with pytest.raises(DocumentParseError) as exc_info:
            parse_analysis_json("this is not json", kind="income")
        assert exc_info.value.kind == "income"
        assert exc_info.value.raw_output == "this is not json"

    def test_non_object_raises(self):
        with pytest.raises(DocumentParseError, match="Expected a JSON object"):
            parse_analysis_json("[1, 2]")


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class TestValidateFacts:
    def test_valid_facts_kept(self):
        vr = validate_facts([ClaimFact(field=ClaimField.AGE, value=22)])
        assert len(vr.facts) == 1
        assert vr.warnings == []

    def test_low_confidence_dropped(self):
        vr = validate_facts([ClaimFact(field=ClaimField.AGE, value=22, confidence=0.3)])
        assert vr.facts == []
        assert "Low confidence" in vr.warnings[0]

    @pytest.mark.parametrize(
        "fact",
        [
            ClaimFact(field=ClaimField.AGE, value=150),
            ClaimFact(field=ClaimField.FAMILY_INCOME_ANNUAL, value=Decimal("-1")),
            ClaimFact(field=ClaimField.FAMILY_INCOME_ANNUAL, value=Decimal("5000000000")),
            ClaimFact(field=ClaimField.SKILLS, value=frozenset()),
        ],
    )
    def test_out_of_bounds_dropped(self, fact):
        vr = validate_facts([fact])
        assert vr.facts == []
        assert len(vr.warnings) == 1

    def test_duplicate_field_keeps_first(self):
        vr = validate_facts([
            ClaimFact(field=ClaimField.AGE, value=22),
            ClaimFact(field=ClaimField.AGE, value=30),
        ])
        assert [f.value for f in vr.facts] == [22]
        assert "Duplicate" in vr.warnings[0]


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


class TestNormalizeIdentity:
    def test_dob_becomes_age(self):
        claim = normalize_claim(DocumentKind.ID, {"dob": "14/05/2002", "nationality": "Indian"}, REFERENCE)
        assert claim.present is True
        assert _value(claim, ClaimField.AGE) == 22
        assert _value(claim, ClaimField.CITIZENSHIP) is True

    def test_explicit_age(self):
        claim = normalize_claim("id", {"age": "26"}, REFERENCE)
        assert _value(claim, ClaimField.AGE) == 26

    def test_foreign_nationality(self):
        claim = normalize_claim(DocumentKind.ID, {"nationality": "Nepalese"}, REFERENCE)
        assert _value(claim, ClaimField.CITIZENSHIP) is False

    def test_bad_date_is_a_warning(self):
        claim = normalize_claim(DocumentKind.ID, {"dob": "sometime in 2002"}, REFERENCE)
        assert claim.get(ClaimField.AGE) is None
        assert any("dob" in w for w in claim.warnings)


class TestNormalizeEducation:
    def test_qualification_and_institute(self):
        claim = normalize_claim(
            DocumentKind.EDUCATION,
            {"qualification": "B.Sc Mathematics", "institute": "IIT Delhi"},
        )
        assert _value(claim, ClaimField.QUALIFICATION) == "B.Sc Mathematics"
        assert _value(claim, ClaimField.INSTITUTE_NAME) == "IIT Delhi"
        assert claim.warnings == ()

    def test_unrecognised_qualification_warns(self):
        claim = normalize_claim(DocumentKind.EDUCATION, {"degree": "Certificate of Merit"})
        assert _value(claim, ClaimField.QUALIFICATION) == "Certificate of Merit"
        assert any("Unrecognised qualification" in w for w in claim.warnings)

    def test_full_time_enrollment(self):
        claim = normalize_claim(DocumentKind.EDUCATION, {"enrolled_full_time": "yes"})
        assert _value(claim, ClaimField.EMPLOYMENT_STATUS) == EmploymentStatus.FULL_TIME_STUDENT

    def test_not_enrolled_adds_nothing(self):
        claim = normalize_claim(DocumentKind.EDUCATION, {"enrolled_full_time": "no"})
        assert claim.get(ClaimField.EMPLOYMENT_STATUS) is None


class TestNormalizeIncome:
    def test_lakh_amount(self):
        claim = normalize_claim(DocumentKind.INCOME, {"annual_income": "₹6.5 lakh"})
        assert _value(claim, ClaimField.FAMILY_INCOME_ANNUAL) == Decimal("650000")

    def test_monthly_income_annualised(self):
        claim = normalize_claim(DocumentKind.INCOME, {"monthly_income": "40,000"})
        assert _value(claim, ClaimField.FAMILY_INCOME_ANNUAL) == Decimal("480000")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Permanent Government employee", GuardianEmploymentType.PERMANENT_GOVT),
            ("Permanent PSU staff", GuardianEmploymentType.PERMANENT_GOVT),
            ("contract worker", GuardianEmploymentType.CONTRACTUAL),
            ("self-employed farmer", GuardianEmploymentType.NONE),
        ],
    )
    def test_guardian_employment(self, raw, expected):
        claim = normalize_claim(DocumentKind.INCOME, {"guardian_employment": raw})
        assert _value(claim, ClaimField.GUARDIAN_EMPLOYMENT) == expected

    def test_unparsable_income_dropped_with_warning(self):
        claim = normalize_claim(DocumentKind.INCOME, {"annual_income": "not disclosed"})
        assert claim.present is True
        assert claim.facts == ()
        assert any("annual_income" in w for w in claim.warnings)


class TestNormalizeAddressAndResume:
    def test_address_residence(self):
        claim = normalize_claim(DocumentKind.ADDRESS, {"city": "Pune", "state": "Maharashtra"})
        assert _value(claim, ClaimField.RESIDENCE) == "Pune"

    def test_resume_fields(self):
        claim = normalize_claim(
            DocumentKind.RESUME,
            {
                "skills": "Python, React , python",
                "employment_status": "Working full time",
                "other_schemes": "Completed NAPS apprenticeship",
            },
        )
        assert _value(claim, ClaimField.SKILLS) == frozenset({"python", "react"})
        assert _value(claim, ClaimField.EMPLOYMENT_STATUS) == EmploymentStatus.FULL_TIME
        assert _value(claim, ClaimField.OTHER_SCHEME) is True

    def test_unknown_employment_status_warns(self):
        claim = normalize_claim(DocumentKind.RESUME, {"employment_status": "on sabbatical"})
        assert claim.get(ClaimField.EMPLOYMENT_STATUS) is None
        assert len(claim.warnings) == 1


class TestNormalizeClaimEnvelope:
    def test_none_is_absent(self):
        claim = normalize_claim(DocumentKind.INCOME, None)
        assert claim.present is False
        assert claim.get(ClaimField.FAMILY_INCOME_ANNUAL) is None

    def test_present_false_is_absent(self):
        claim = normalize_claim(DocumentKind.INCOME, {"present": False, "annual_income": "100000"})
        assert claim.present is False
        assert claim.fields == frozenset()

    def test_json_text_with_fences(self):
        raw = '```json\n{"annual_income": "6,50,000",}\n```'
        claim = normalize_claim(DocumentKind.INCOME, raw)
        assert _value(claim, ClaimField.FAMILY_INCOME_ANNUAL) == Decimal("650000")

    def test_malformed_output_raises(self):
        with pytest.raises(DocumentParseError):
            normalize_claim(DocumentKind.INCOME, "Sorry, I could not read this document.")

    def test_low_confidence_fact_ignored(self):
        claim = normalize_claim(
            DocumentKind.ID,
            {"age": 22, "nationality": "Indian", "confidence": {"age": 0.3}},
        )
        assert claim.get(ClaimField.AGE) is None
        assert _value(claim, ClaimField.CITIZENSHIP) is True

    def test_implausible_age_ignored(self):
        claim = normalize_claim(DocumentKind.ID, {"age": 150})
        assert claim.get(ClaimField.AGE) is None

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            normalize_claim("passport_photo", {})
