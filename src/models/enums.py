"""Domain enums used across Pydantic schemas and the rule engine.

All enums use str mixin so they serialize as their wire values in JSON.
"""

from __future__ import annotations

from enum import Enum


class EmploymentStatus(str, Enum):
    """Applicant's current occupation — drives the employment rule."""

    UNEMPLOYED = "unemployed"
    PART_TIME = "part-time"
    FULL_TIME = "full-time"
    FULL_TIME_STUDENT = "full-time-student"


class GuardianEmploymentType(str, Enum):
    """Employment of parent, guardian or spouse."""

    NONE = "none"
    CONTRACTUAL = "contractual"
    PERMANENT_GOVT = "permanent-govt"  # includes PSU permanent staff


class QualificationTier(str, Enum):
    """Closed enumeration of education levels the engine reasons about.

    Declaration order is ascending: the classifier picks the highest tier
    mentioned in a free-text qualification.
    """

    CLASS_10 = "class10"
    CLASS_12 = "class12"
    ITI = "iti"
    POLYTECHNIC = "polytechnic"
    DIPLOMA = "diploma"
    GRADUATE = "graduate"
    POSTGRADUATE = "postgraduate"
    PROFESSIONAL = "professional"  # LLM, MD, M.Tech-equivalent professional degrees
    CS = "cs"
    CA = "ca"
    MBA = "mba"
    MBBS = "mbbs"
    PHD = "phd"


class DocumentKind(str, Enum):
    """Supporting documents an applicant may upload."""

    ID = "id"
    EDUCATION = "education"
    INCOME = "income"
    ADDRESS = "address"
    RESUME = "resume"


class ClaimField(str, Enum):
    """Profile fields a document fact can speak to.

    Values match the StudentProfile attribute names so reconciliation is a
    direct field overwrite.
    """

    AGE = "age"
    CITIZENSHIP = "citizenship"
    QUALIFICATION = "qualification"
    INSTITUTE_NAME = "institute_name"
    ATTENDS_PREMIER_INSTITUTE = "attends_premier_institute"
    EMPLOYMENT_STATUS = "employment_status"
    FAMILY_INCOME_ANNUAL = "family_income_annual"
    GUARDIAN_EMPLOYMENT = "parent_guardian_employment_type"
    OTHER_SCHEME = "enrolled_in_other_govt_scheme"
    RESIDENCE = "residence"
    SKILLS = "skills"


class RuleId(str, Enum):
    """Admission rules, in the order they are reported."""

    CITIZENSHIP = "citizenship"
    AGE_RANGE = "age-range"
    QUALIFICATION_FLOOR = "qualification-floor"
    QUALIFICATION_CEILING = "qualification-ceiling"
    EMPLOYMENT = "employment"
    INSTITUTE = "institute"
    OTHER_SCHEME = "other-scheme"
    INCOME_CEILING = "income-ceiling"
    GUARDIAN_EMPLOYMENT = "guardian-employment"
