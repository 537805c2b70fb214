"""
Parsers and validators for intake answers.

Each parser takes the raw text, the chosen options and the answers
collected so far, and returns a ParseResult. A failed result carries the
message shown to the user before the question is asked again.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional


_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Loose formats accepted besides strict YYYY-MM-DD
_DATE_FORMATS = (
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y.%m.%d",
)


@dataclass
class ParseResult:
    ok: bool
    value: Any = None
    error: str = ""


def _accept(value: Any) -> ParseResult:
    return ParseResult(ok=True, value=value)


def _reject(error: str) -> ParseResult:
    return ParseResult(ok=False, error=error)


def parse_date_like(text: str) -> Optional[str]:
    """
    Normalise a date-ish string to YYYY-MM-DD.

    A strict YYYY-MM-DD match is returned as typed; anything else must parse
    with one of the loose formats. Returns None when nothing matches.
    """
    value = (text or "").strip()
    if _ISO_DATE.match(value):
        return value
    # Collapse internal whitespace so "March  15,2025" still parses
    value = re.sub(r"\s+", " ", value.replace(",", ", ")).replace(" ,", ",")
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def _as_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_required_text(text: str, options: list[str], answers) -> ParseResult:
    value = (text or "").strip()
    if not value:
        return _reject("Please enter a response.")
    return _accept(value)


def parse_choice(text: str, options: list[str], answers) -> ParseResult:
    """First chosen option wins; typed text is the fallback, kept verbatim."""
    if options:
        return _accept(options[0])
    value = (text or "").strip()
    if not value:
        return _reject("Please pick one of the options or type an answer.")
    return _accept(value)


def parse_start_date(text: str, options: list[str], answers) -> ParseResult:
    parsed = parse_date_like(text)
    if not parsed:
        return _reject("Please use a valid date like 2025-03-15.")
    return _accept(parsed)


def parse_end_date(text: str, options: list[str], answers) -> ParseResult:
    parsed = parse_date_like(text)
    if not parsed:
        return _reject("Please use a valid date like 2025-11-30.")

    start = _as_date(answers.start_date) if answers is not None else None
    end = _as_date(parsed)
    if start and end and end < start:
        return _reject(f"The end date must be on or after the start date ({answers.start_date}).")
    return _accept(parsed)


def parse_budget(text: str, options: list[str], answers) -> ParseResult:
    cleaned = re.sub(r"[$,\s]", "", text or "")
    try:
        amount = float(cleaned)
    except ValueError:
        return _reject("Please enter a positive number for budget.")
    if not math.isfinite(amount):
        return _reject("Please enter a positive number for budget.")
    rounded = int(math.floor(amount + 0.5))
    if rounded <= 0:
        return _reject("Please enter a positive number for budget.")
    return _accept(rounded)


def parse_team_size(text: str, options: list[str], answers) -> ParseResult:
    digits = re.sub(r"[^0-9]", "", text or "")
    if not digits or int(digits) <= 0:
        return _reject("Please enter an estimated team size (e.g., 5).")
    return _accept(int(digits))


def parse_constraints(text: str, options: list[str], answers) -> ParseResult:
    if options:
        items = [o.strip() for o in options]
    else:
        items = [s.strip() for s in (text or "").split(",")]

    unique: list[str] = []
    for item in items:
        if not item or item.lower() == "none":
            continue
        if item not in unique:
            unique.append(item)
    return _accept(tuple(unique))


def parse_done_tasks(text: str, options: list[str], answers) -> ParseResult:
    value = (text or "").strip()
    if not value and options:
        value = ", ".join(options)
    if not value or value.lower() == "none":
        return _accept(())
    return _accept(tuple(s.strip() for s in value.split(",") if s.strip()))
