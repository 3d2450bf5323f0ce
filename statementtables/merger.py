# -*- coding: utf-8 -*-
"""Join wrapped description lines onto the transaction they belong to.

Statements often wrap a long description onto one or more physical lines
that carry neither a date nor an amount, e.g.::

    03/02/2024  Wire Transfer
                ref: INV-2291
    03/03/2024  Subscription        9.99

Each *transaction start* opens a window that collects such continuation
lines until the next start.  A line that looks like a new transaction always
closes the window, even when OCR has misread a token; that is accepted.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import DEFAULT_CONFIG, ExtractionConfig
from .fields import find_date, has_amount

logger = logging.getLogger(__name__)


def is_transaction_start(line: str, config: Optional[ExtractionConfig] = None) -> bool:
    """A date plus an amount, or a line that opens with a date."""
    m_date = find_date(line)
    if not m_date:
        return False
    if has_amount(line, config):
        return True
    return not line[: m_date.start()].strip()


def is_continuation(line: str, config: Optional[ExtractionConfig] = None) -> bool:
    return bool(line.strip()) and find_date(line) is None and not has_amount(line, config)


def transaction_starts(lines: Sequence[str], config: Optional[ExtractionConfig] = None) -> List[int]:
    return [i for i, line in enumerate(lines) if is_transaction_start(line, config)]


def merge_lines(
    lines: Sequence[str],
    config: Optional[ExtractionConfig] = None,
    starts: Optional[Sequence[int]] = None,
) -> List[str]:
    """Return one merged text unit per transaction-start line.

    ``starts`` may carry precomputed start positions; by default they are
    detected with :func:`is_transaction_start`.  Lines before the first start
    are dropped, and lines inside a window that carry a date or an amount
    without being a start are skipped.
    """
    if lines is None:
        raise TypeError("merge_lines() requires a sequence of lines, got None")
    config = config or DEFAULT_CONFIG
    if starts is None:
        starts = transaction_starts(lines, config)

    merged: List[str] = []
    bounds = list(starts) + [len(lines)]
    for start, end in zip(bounds, bounds[1:]):
        parts = [lines[start].strip()]
        for line in lines[start + 1 : end]:
            if is_continuation(line, config):
                parts.append(line.strip())
            elif line.strip():
                logger.debug(f"Skipping non-continuation line inside window: {line!r}")
        merged.append(" ".join(parts))

    logger.debug(f"Merged {len(lines)} lines into {len(merged)} transaction units")
    return merged
