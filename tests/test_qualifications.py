"""Tests for the free-text qualification classifier."""

from __future__ import annotations

import pytest

from src.claims.qualifications import classify_qualification, tier_rank
from src.models.enums import QualificationTier


class TestClassifyQualification:
    @pytest.mark.parametrize(
        ("text", "tier"),
        [
            ("Class 10", QualificationTier.CLASS_10),
            ("10th pass", QualificationTier.CLASS_10),
            ("Class X", QualificationTier.CLASS_10),
            ("SSLC", QualificationTier.CLASS_10),
            ("12th", QualificationTier.CLASS_12),
            ("HSC Science", QualificationTier.CLASS_12),
            ("ITI (Electrician)", QualificationTier.ITI),
            ("Polytechnic", QualificationTier.POLYTECHNIC),
            ("Diploma", QualificationTier.DIPLOMA),
            ("Diploma in Civil Engineering", QualificationTier.DIPLOMA),
            ("B.Tech in Computer Science", QualificationTier.GRADUATE),
            ("B.Com", QualificationTier.GRADUATE),
            ("BA", QualificationTier.GRADUATE),
            ("B.Sc Mathematics", QualificationTier.GRADUATE),
            ("Graduate", QualificationTier.GRADUATE),
            ("M.Tech", QualificationTier.POSTGRADUATE),
            ("MA English", QualificationTier.POSTGRADUATE),
            ("Masters in Economics", QualificationTier.POSTGRADUATE),
            ("LLM", QualificationTier.PROFESSIONAL),
            ("CS", QualificationTier.CS),
            ("Company Secretary", QualificationTier.CS),
            ("CA", QualificationTier.CA),
            ("Chartered Accountant", QualificationTier.CA),
            ("MBA", QualificationTier.MBA),
            ("PGDM", QualificationTier.MBA),
            ("MBBS", QualificationTier.MBBS),
            ("Bachelor of Medicine", QualificationTier.MBBS),
            ("Ph.D. in Physics", QualificationTier.PHD),
        ],
    )
    def test_known_qualifications(self, text, tier):
        assert classify_qualification(text) == tier

    def test_highest_tier_wins(self):
        assert classify_qualification("B.Com, MBA") == QualificationTier.MBA
        assert classify_qualification("B.Tech + M.Tech") == QualificationTier.POSTGRADUATE

    def test_computer_science_is_not_company_secretary(self):
        assert classify_qualification("B.Sc CS") == QualificationTier.GRADUATE

    @pytest.mark.parametrize(
        ("text", "tier"),
        [
            ("B.Com, CA", QualificationTier.CA),
            ("Graduate, CA", QualificationTier.CA),
            ("CA Final", QualificationTier.CA),
            ("FCA", QualificationTier.CA),
            ("CS Executive", QualificationTier.CS),
            ("B.Com + CS Professional", QualificationTier.CS),
        ],
    )
    def test_professional_abbreviation_alongside_degree(self, text, tier):
        assert classify_qualification(text) == tier

    @pytest.mark.parametrize(
        ("text", "tier"),
        [
            ("B.Tech in CS", QualificationTier.GRADUATE),
            ("B.Tech (CS)", QualificationTier.GRADUATE),
            ("B.Sc CA", QualificationTier.GRADUATE),
            ("BCA", QualificationTier.GRADUATE),
            ("MCA", QualificationTier.POSTGRADUATE),
            ("Diploma in CS Engineering", QualificationTier.DIPLOMA),
            ("B.Sc Computer Science (CS)", QualificationTier.GRADUATE),
        ],
    )
    def test_subject_abbreviation_is_not_professional(self, text, tier):
        assert classify_qualification(text) == tier

    def test_mathematics_is_not_ma(self):
        assert classify_qualification("Diploma in Mathematics") == QualificationTier.DIPLOMA

    @pytest.mark.parametrize("text", [None, "", "   ", "Self taught", "Class 8"])
    def test_unknown_returns_none(self, text):
        assert classify_qualification(text) is None


class TestTierRank:
    def test_ascending_order(self):
        assert tier_rank(QualificationTier.CLASS_10) == 0
        assert tier_rank(QualificationTier.GRADUATE) < tier_rank(QualificationTier.POSTGRADUATE)
        assert tier_rank(QualificationTier.PHD) == len(QualificationTier) - 1

    def test_every_tier_ranked(self):
        ranks = [tier_rank(t) for t in QualificationTier]
        assert sorted(ranks) == list(range(len(QualificationTier)))
