"""Value parsing for document analysis output.

Handles the messy reality of extracted text: markdown-fenced JSON,
Indian number formats ("6,50,000", "₹8 lakh"), assorted date formats.
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from src.errors import DocumentParseError

_MULTIPLIERS: dict[str, Decimal] = {
    "k": Decimal("1000"),
    "thousand": Decimal("1000"),
    "l": Decimal("100000"),
    "lakh": Decimal("100000"),
    "lakhs": Decimal("100000"),
    "lac": Decimal("100000"),
    "lacs": Decimal("100000"),
    "lpa": Decimal("100000"),
    "cr": Decimal("10000000"),
    "crore": Decimal("10000000"),
    "crores": Decimal("10000000"),
}

_AMOUNT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(lakhs?|lacs?|lpa|l|crores?|cr|k|thousand)?\b")
_CURRENCY_RE = re.compile(r"₹|\brs\.?|\binr\b|/-|\bper annum\b|\bp\.?a\.?$|\bannual(?:ly)?\b")

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%d.%m.%Y", "%d %b %Y", "%d %B %Y")

_TRUE_WORDS = {"true", "yes", "y", "1"}
_FALSE_WORDS = {"false", "no", "n", "0"}


def parse_amount(value: Any) -> Decimal:
    """Parse an income figure into a Decimal number of rupees.

    Raises:
        ValueError: If the value holds no recognisable amount.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, int | Decimal):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if not isinstance(value, str):
        raise ValueError(f"Not an amount: {value!r}")

    text = _CURRENCY_RE.sub(" ", value.lower()).replace(",", "")
    match = _AMOUNT_RE.search(text)
    if match is None:
        raise ValueError(f"No amount found in {value!r}")

    try:
        amount = Decimal(match.group(1))
    except InvalidOperation as exc:
        raise ValueError(f"Bad amount in {value!r}") from exc

    unit = match.group(2)
    if unit:
        amount *= _MULTIPLIERS[unit]
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def parse_date(value: Any) -> date:
    """Parse a date of birth in ISO or Indian day-first formats."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date format: {value!r}")


def age_on(birthdate: date, reference: date) -> int:
    """Completed years between birthdate and reference."""
    years = reference.year - birthdate.year
    if (reference.month, reference.day) < (birthdate.month, birthdate.day):
        years -= 1
    return years


def parse_age(value: Any) -> int:
    """Parse an explicit age ("22", 22, "22 years")."""
    if isinstance(value, bool):
        raise ValueError(f"Not an age: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        match = re.search(r"\d+", value)
        if match:
            return int(match.group())
    raise ValueError(f"Not an age: {value!r}")


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"Not a boolean: {value!r}")


def parse_analysis_json(raw: str | dict[str, Any], kind: str | None = None) -> dict[str, Any]:
    """Parse document analysis output into a dict.

    Handles common generative-extractor quirks:
        - Markdown code fences (```json ... ```)
        - Trailing commas before closing braces/brackets
        - Leading/trailing whitespace

    Raises:
        DocumentParseError: If the output is not a JSON object.
    """
    if isinstance(raw, dict):
        return raw
    if not isinstance(raw, str):
        raise DocumentParseError(
            f"Unsupported analysis output type: {type(raw).__name__}",
            kind=kind,
        )

    cleaned = _strip_markdown_fences(raw.strip())
    cleaned = _fix_trailing_commas(cleaned)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(
            f"Invalid JSON from document analysis: {exc}",
            kind=kind,
            raw_output=raw,
        ) from exc

    if not isinstance(data, dict):
        raise DocumentParseError(
            f"Expected a JSON object, got {type(data).__name__}",
            kind=kind,
            raw_output=raw,
        )
    return data


def _strip_markdown_fences(text: str) -> str:
    """Remove markdown code fences wrapping JSON."""
    # Match ```json ... ``` or ``` ... ```
    match = re.search(r"```(?:json)?\s*\n?(.*?)\n?\s*```", text, re.DOTALL)
    if match:
        return match.group(1).strip()
    return text


def _fix_trailing_commas(text: str) -> str:
    """Remove trailing commas before } or ]."""
    return re.sub(r",\s*([}\]])", r"\1", text)
