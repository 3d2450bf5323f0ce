# -*- coding: utf-8 -*-
"""fields.py
Typed transaction fields from one merged text unit.

The extractor works on a single string (a row joined back together, or an
OCR line after continuation merging):

1.  the first date-shaped token by position becomes the transaction date;
2.  every amount-shaped token left over is parsed to a signed ``Decimal``;
3.  what remains, minus configured boilerplate, is the description;
4.  the number of amounts decides debit / credit / balance.

No bank-specific constants are used; boilerplate phrases come from the
configuration.
"""
from __future__ import annotations

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Pattern, Sequence, Tuple, Union

from .config import DEFAULT_CONFIG, ExtractionConfig
from .models import TransactionRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants & regex helpers
# ---------------------------------------------------------------------------
MONTHS_FULL = r"January|February|March|April|May|June|July|August|September|October|November|December"
MONTHS_ABBR = r"Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec"
MONTHS_RE = f"{MONTHS_FULL}|{MONTHS_ABBR}"

MONTH_NUMBERS = {
    name: idx
    for idx, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"], start=1
    )
}

# Alternatives are ordered longest-first so that at a given position
# 03/01/2024 is not read as the shorter 03/01.
DATE_RE = re.compile(
    rf"""(?<![\d/])(?:
        (?P<iso_y>\d{{4}})-(?P<iso_m>\d{{1,2}})-(?P<iso_d>\d{{1,2}})(?!\d)                          # 2024-03-15
      | (?P<mdy_m>\d{{1,2}})/(?P<mdy_d>\d{{1,2}})/(?P<mdy_y>\d{{4}}|\d{{2}})(?![\d/])               # 03/15/2024, 3/15/24
      | (?P<dmy_d>\d{{1,2}})[\s-]+(?P<dmy_mon>(?:{MONTHS_RE}))\b\.?,?[\s-]+(?P<dmy_y>\d{{4}})(?!\d)  # 15 Mar 2024
      | (?P<md_m>\d{{1,2}})/(?P<md_d>\d{{1,2}})(?![\d/])                                            # 03/15
    )""",
    re.IGNORECASE | re.VERBOSE,
)

# A sign glued to a word ("ATM-60.00") is read as the amount's sign.
AMOUNT_LEAD = r"(?:(?<![\w.,/$-])(?:-\$?|\$-?)?|(?<=[^\W\d_])-\$?)"
AMOUNT_RE = re.compile(AMOUNT_LEAD + r"(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}(?!\d)")
AMOUNT_DECIMAL_COMMA_RE = re.compile(AMOUNT_LEAD + r"(?:\d{1,3}(?:\.\d{3})+|\d+),\d{2}(?!\d)")

WHITESPACE_RE = re.compile(r"\s+")

Amounts = Tuple[Optional[Decimal], Optional[Decimal], Optional[Decimal]]


def amount_pattern(config: Optional[ExtractionConfig] = None) -> Pattern[str]:
    config = config or DEFAULT_CONFIG
    return AMOUNT_DECIMAL_COMMA_RE if config.decimal_comma else AMOUNT_RE


def find_date(text: str) -> Optional[re.Match]:
    """First date-shaped token by position, valid or not."""
    return DATE_RE.search(text)


def has_amount(text: str, config: Optional[ExtractionConfig] = None) -> bool:
    return amount_pattern(config).search(text) is not None


# ---------------------------------------------------------------------------
# Token parsing
# ---------------------------------------------------------------------------

def _expand_year(token: str) -> int:
    year = int(token)
    if len(token) == 2:
        # Same pivot as strptime's %y
        year += 2000 if year < 69 else 1900
    return year


def parse_date_match(match: re.Match, default_year: Optional[int] = None) -> Optional[date]:
    """Calendar date for a ``DATE_RE`` match, ``None`` when it is not a real date."""
    g = match.groupdict()
    try:
        if g["iso_y"]:
            return date(int(g["iso_y"]), int(g["iso_m"]), int(g["iso_d"]))
        if g["mdy_m"]:
            return date(_expand_year(g["mdy_y"]), int(g["mdy_m"]), int(g["mdy_d"]))
        if g["dmy_d"]:
            month = MONTH_NUMBERS[g["dmy_mon"][:3].lower()]
            return date(int(g["dmy_y"]), month, int(g["dmy_d"]))
        year = default_year or date.today().year
        return date(year, int(g["md_m"]), int(g["md_d"]))
    except ValueError:
        return None


def parse_amount(token: str, decimal_comma: bool = False) -> Optional[Decimal]:
    """Signed ``Decimal`` for an amount token; ``None`` if it does not parse."""
    cleaned = token.replace("$", "").strip()
    negative = cleaned.startswith("-")
    cleaned = cleaned.lstrip("-")
    if decimal_comma:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    return -value if negative else value


def strip_boilerplate(text: str, phrases: Sequence[str]) -> str:
    for phrase in phrases:
        if not phrase:
            continue
        text = re.sub(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)", " ", text, flags=re.IGNORECASE)
    return WHITESPACE_RE.sub(" ", text).strip()


def _cut(text: str, spans: List[Tuple[int, int]]) -> str:
    pieces = []
    pos = 0
    for start, end in spans:
        pieces.append(text[pos:start])
        pos = end
    pieces.append(text[pos:])
    return " ".join(pieces)


# ---------------------------------------------------------------------------
# Amount disambiguation
# ---------------------------------------------------------------------------

def assign_amounts(amounts: Sequence[Decimal]) -> Amounts:
    """Map parsed amounts to ``(debit, credit, balance)`` by how many there are.

    * one amount: negative is a debit, anything else a credit;
    * two amounts: the smaller magnitude is the transaction, the larger the
      running balance (first wins a tie);
    * three or more: positional ``debit, credit, balance``; extras ignored.
    """
    if not amounts:
        return None, None, None

    if len(amounts) == 1:
        return _by_sign(amounts[0]) + (None,)

    if len(amounts) == 2:
        first, second = amounts
        if abs(second) < abs(first):
            txn, balance = second, first
        else:
            txn, balance = first, second
        return _by_sign(txn) + (balance,)

    first, second, third = amounts[:3]
    debit = first if first > 0 else None
    credit = second if second > 0 else None
    return debit, credit, third


def _by_sign(value: Decimal) -> Tuple[Optional[Decimal], Optional[Decimal]]:
    if value < 0:
        return abs(value), None
    return None, value


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def extract_transaction(
    unit: Union[str, Sequence[str]],
    config: Optional[ExtractionConfig] = None,
) -> Optional[TransactionRecord]:
    """Build a :class:`TransactionRecord` from one text unit or row.

    Returns ``None`` when the unit has no date token or the date is not a
    real calendar date.  Never raises on malformed data.
    """
    config = config or DEFAULT_CONFIG
    text = unit if isinstance(unit, str) else "  ".join(unit)

    m_date = find_date(text)
    if not m_date:
        logger.debug(f"No date in unit, skipping: {text!r}")
        return None
    txn_date = parse_date_match(m_date, config.default_year)
    if txn_date is None:
        logger.debug(f"Invalid date {m_date.group(0)!r}, skipping unit")
        return None

    rest = _cut(text, [m_date.span()])

    pattern = amount_pattern(config)
    amounts: List[Decimal] = []
    spans: List[Tuple[int, int]] = []
    for m in pattern.finditer(rest):
        spans.append(m.span())
        value = parse_amount(m.group(0), config.decimal_comma)
        if value is None:
            logger.debug(f"Dropping malformed amount {m.group(0)!r}")
            continue
        amounts.append(value)

    description = strip_boilerplate(_cut(rest, spans), config.boilerplate_phrases)
    debit, credit, balance = assign_amounts(amounts)

    return TransactionRecord(
        date=txn_date,
        description=description,
        debit=debit,
        credit=credit,
        balance=balance,
    )
