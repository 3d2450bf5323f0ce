# -*- coding: utf-8 -*-
"""geometry.py
Row and column reconstruction from positioned PDF text fragments.

Two stages:
1.  ``cluster_lines`` buckets fragments that share a baseline (within a
    vertical tolerance) into *physical lines*, top to bottom.
2.  ``split_columns`` walks each line left to right and starts a new cell
    whenever the horizontal gap to the previous fragment is wider than a few
    average characters.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_CONFIG, ExtractionConfig
from .models import Line, PositionedFragment, Row

logger = logging.getLogger(__name__)

__all__ = [
    "cluster_lines",
    "average_char_width",
    "split_columns",
    "rows_from_fragments",
]


# ---------------------------------------------------------------------------
# Line clustering
# ---------------------------------------------------------------------------

def cluster_lines(
    fragments: Sequence[PositionedFragment],
    config: Optional[ExtractionConfig] = None,
) -> List[Line]:
    """Group fragments into lines ordered top to bottom.

    Fragments are pre-sorted by (page, descending ``y``, ascending ``x``) so
    that the greedy pass is correct for interleaved input.  A fragment joins
    the open line when its ``y`` is strictly closer than
    ``config.vertical_tolerance`` to the line's representative ``y`` (the
    first member's); otherwise it opens a new line.
    """
    if fragments is None:
        raise TypeError("cluster_lines() requires a sequence of fragments, got None")
    config = config or DEFAULT_CONFIG
    tol = config.vertical_tolerance

    usable = [f for f in fragments if f.text and f.text.strip()]
    if not usable:
        return []

    ordered = sorted(usable, key=lambda f: (f.page, -f.y, f.x))
    lines: List[Line] = []
    current: Optional[Line] = None
    for frag in ordered:
        if current is not None and frag.page == current.page and abs(frag.y - current.y) < tol:
            current.fragments.append(frag)
            continue
        current = Line(y=frag.y, page=frag.page, fragments=[frag])
        lines.append(current)

    for line in lines:
        line.fragments.sort(key=lambda f: f.x)

    logger.debug(f"Clustered {len(usable)} fragments into {len(lines)} lines")
    return lines


# ---------------------------------------------------------------------------
# Column splitting
# ---------------------------------------------------------------------------

def average_char_width(fragments: Iterable[PositionedFragment], default: float) -> float:
    total_width = 0.0
    total_chars = 0
    for frag in fragments:
        total_width += frag.width
        total_chars += len(frag.text)
    if total_chars == 0 or total_width <= 0:
        return default
    return total_width / total_chars


def split_columns(line: Line, config: Optional[ExtractionConfig] = None) -> Row:
    """Split one clustered line into trimmed cell strings.

    A gap *strictly* wider than ``avg_char_width * k`` closes the current
    cell; ties stay in the same cell.  Smaller gaps join fragments with one
    space, or with nothing when the glyphs already touch.
    """
    config = config or DEFAULT_CONFIG
    frags = line.fragments
    if not frags:
        return []
    if len(frags) == 1:
        cell = frags[0].text.strip()
        return [cell] if cell else []

    avg = average_char_width(frags, config.default_char_width)
    threshold = avg * config.space_threshold_multiplier

    row: Row = []
    current = frags[0].text
    for prev, frag in zip(frags, frags[1:]):
        gap = frag.x - prev.right
        if gap > threshold:
            row.append(current.strip())
            current = frag.text
        elif gap > config.min_join_gap:
            current += " " + frag.text
        else:
            current += frag.text
    row.append(current.strip())

    while row and not row[-1]:
        row.pop()
    return row


def rows_from_fragments(
    fragments: Sequence[PositionedFragment],
    config: Optional[ExtractionConfig] = None,
) -> List[Row]:
    """Cluster and split in one go, discarding rows with no content."""
    config = config or DEFAULT_CONFIG
    rows: List[Row] = []
    for line in cluster_lines(fragments, config):
        row = split_columns(line, config)
        if any(cell for cell in row):
            rows.append(row)
    logger.info(f"Geometry reconstruction produced {len(rows)} rows")
    return rows
