# -*- coding: utf-8 -*-
"""Plain data containers shared by the reconstruction and extraction stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

# A fully column-split record of cell strings, left to right.
Row = List[str]

TRANSACTION_COLUMNS = ["Date", "Description", "Debit", "Credit", "Balance"]


@dataclass(frozen=True)
class PositionedFragment:
    """One span of text from a PDF text layer.

    ``y`` is the baseline in page units with larger values higher on the page.
    ``page`` keeps concatenated pages in reading order.
    """

    text: str
    x: float
    y: float
    width: float
    page: int = 0

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class Line:
    """Fragments sharing a vertical band, ordered left to right."""

    y: float
    page: int = 0
    fragments: List[PositionedFragment] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(f.text.strip() for f in self.fragments)


@dataclass(frozen=True)
class TransactionRecord:
    date: date
    description: str
    debit: Optional[Decimal] = None
    credit: Optional[Decimal] = None
    balance: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        """Export-friendly mapping: ISO date string and float amounts."""
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "debit": _as_float(self.debit),
            "credit": _as_float(self.credit),
            "balance": _as_float(self.balance),
        }

    def to_row(self) -> Dict[str, Any]:
        d = self.to_dict()
        return {
            "Date": d["date"],
            "Description": d["description"],
            "Debit": d["debit"],
            "Credit": d["credit"],
            "Balance": d["balance"],
        }


def _as_float(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None
