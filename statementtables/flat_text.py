# -*- coding: utf-8 -*-
"""Column splitting for text without geometry (OCR output).

OCR keeps inter-word spacing roughly intact, so two or more consecutive
whitespace characters are taken as a column break.
"""
from __future__ import annotations

import logging
import re
from typing import List

from .models import Row

logger = logging.getLogger(__name__)

COLUMN_BREAK_RE = re.compile(r"\s{2,}")


def split_text_line(line: str) -> Row:
    """Split a single line on whitespace runs; empty segments are dropped."""
    return [seg.strip() for seg in COLUMN_BREAK_RE.split(line.strip()) if seg.strip()]


def rows_from_text(text: str) -> List[Row]:
    """Turn a text block into rows, keeping single-column lines."""
    if text is None:
        raise TypeError("rows_from_text() requires a string, got None")
    rows: List[Row] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        row = split_text_line(line)
        if row:
            rows.append(row)
    logger.info(f"Flat-text reconstruction produced {len(rows)} rows")
    return rows
