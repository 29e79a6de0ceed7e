"""
Parser for receipt filenames.

Users name uploaded receipts with whitespace-separated terms, in any order:

    2024-01-15 Costco Home-Garden $25.00 (patio chairs).pdf

Each term is classified on its own:
  - "$25.00"      -> amount (sign dropped, stored as absolute value)
  - "2024-01-15"  -> date; "01-15" is a month-day date whose year is inferred
  - "(...)"       -> memo, parentheses stripped
  - first remaining term  -> payee
  - second remaining term -> category, hyphens become ":" separators

Parsing never fails. A term that does not fit its pattern (e.g. "$12.5" or
"2024-13-01") is treated as a plain term and may become the payee or
category instead.
"""

import re
from dataclasses import dataclass
import datetime as dt
from decimal import Decimal

from receipt_matcher.parsers.date_inference import infer_year

# Parenthesised groups stay together even if they contain spaces
_TERM_RE = re.compile(r"\([^)]*\)|\S+")

_AMOUNT_RE = re.compile(r"^-?\$-?(\d+(?:\.\d{2})?)$")
_FULL_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_MONTH_DAY_RE = re.compile(r"^(\d{1,2})-(\d{1,2})$")
_MEMO_RE = re.compile(r"^\((.*)\)$")

# Only alphabetic extensions, so "$25.00" keeps its cents
_EXTENSION_RE = re.compile(r"\.[A-Za-z][A-Za-z0-9]{0,4}$")

_MULTIPLE_SPACES_RE = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class ParsedFilename:
    """Typed terms extracted from a receipt filename. Every field is optional."""

    date: dt.date | None = None
    amount: Decimal | None = None
    payee: str | None = None
    category: str | None = None
    memo: str | None = None

    @property
    def has_date(self) -> bool:
        return self.date is not None


def strip_extension(filename: str) -> str:
    """Remove a trailing file extension such as ".pdf" or ".jpeg"."""
    return _EXTENSION_RE.sub("", filename.strip())


def parse_receipt_filename(filename: str, today: dt.date | None = None) -> ParsedFilename:
    """
    Parse a receipt filename into its typed terms.

    Args:
        filename: Original filename, with or without extension
        today: Reference date for month-day year inference (defaults to today)

    Returns:
        ParsedFilename with the fields that could be recognized.
    """
    if today is None:
        today = dt.date.today()

    parsed_date: dt.date | None = None
    amount: Decimal | None = None
    memo: str | None = None
    plain_terms: list[str] = []

    for term in _TERM_RE.findall(strip_extension(filename)):
        term_amount = _parse_amount(term)
        if term_amount is not None:
            if amount is None:
                amount = term_amount
            continue

        term_date = _parse_date(term, today)
        if term_date is not None:
            if parsed_date is None:
                parsed_date = term_date
            continue

        memo_match = _MEMO_RE.match(term)
        if memo_match:
            text = _MULTIPLE_SPACES_RE.sub(" ", memo_match.group(1).strip())
            if memo is None and text:
                memo = text
            continue

        plain_terms.append(term)

    payee = plain_terms[0] if plain_terms else None
    category = None
    if len(plain_terms) > 1:
        category = _category_path(plain_terms[1])

    return ParsedFilename(
        date=parsed_date,
        amount=amount,
        payee=payee,
        category=category,
        memo=memo,
    )


def _parse_amount(term: str) -> Decimal | None:
    match = _AMOUNT_RE.match(term)
    if not match:
        return None
    return abs(Decimal(match.group(1)))


def _parse_date(term: str, today: dt.date) -> dt.date | None:
    """Full or month-day date, or None if the term is not a valid date."""
    match = _FULL_DATE_RE.match(term)
    if match:
        year, month, day = (int(g) for g in match.groups())
        try:
            return dt.date(year, month, day)
        except ValueError:
            return None

    match = _MONTH_DAY_RE.match(term)
    if match:
        month, day = (int(g) for g in match.groups())
        return infer_year(month, day, today)

    return None


def _category_path(term: str) -> str | None:
    """Rewrite "Home-Garden" as "Home:Garden", dropping empty segments."""
    segments = [s for s in term.split("-") if s]
    if not segments:
        return None
    return ":".join(segments)


def sanitize_category(category: str | None) -> str:
    """
    Normalize a category path before it is stored on a transaction.

    Rules:
      - Trim whitespace and collapse repeated spaces
      - Capitalize the first letter of every word (rest of the word untouched)
      - Remove whitespace around ":" and drop empty segments

    Examples:
      "homeAndGarden"       -> "HomeAndGarden"
      "Home    and Garden"  -> "Home And Garden"
      "Home :Garden"        -> "Home:Garden"
      "Home: "              -> "Home"
      "  "                  -> ""
    """
    if not category or not category.strip():
        return ""

    segments = []
    for segment in category.split(":"):
        segment = _MULTIPLE_SPACES_RE.sub(" ", segment.strip())
        if not segment:
            continue
        words = [w[:1].upper() + w[1:] for w in segment.split(" ")]
        segments.append(" ".join(words))

    return ":".join(segments)
