"""Table reconstruction strategies.

Both paths produce the same thing, an ordered list of rows, so callers pick a
strategy once and stay agnostic of where the rows came from.
"""

import logging
from typing import List, Optional, Sequence, Union

from .config import DEFAULT_CONFIG, ExtractionConfig
from .flat_text import rows_from_text
from .geometry import rows_from_fragments
from .models import PositionedFragment, Row

logger = logging.getLogger(__name__)

Source = Union[str, Sequence[PositionedFragment]]


class TableReconstructionStrategy:
  name = "base"

  def reconstruct(self, source, config: Optional[ExtractionConfig] = None) -> List[Row]:
    raise NotImplementedError


class GeometryStrategy(TableReconstructionStrategy):
  """Rows from positioned PDF text-layer fragments."""

  name = "geometry"

  def reconstruct(self, source, config=None):
    if isinstance(source, str):
      raise TypeError("GeometryStrategy expects positioned fragments, not text")
    return rows_from_fragments(source, config or DEFAULT_CONFIG)


class FlatTextStrategy(TableReconstructionStrategy):
  """Rows from a text block split on whitespace runs (OCR fallback)."""

  name = "flat_text"

  def reconstruct(self, source, config=None):
    if not isinstance(source, str):
      raise TypeError("FlatTextStrategy expects a text block")
    return rows_from_text(source)


def usable_fragment_count(fragments: Sequence[PositionedFragment]) -> int:
  return sum(1 for f in fragments if f.text and f.text.strip())


def select_strategy(fragments: Sequence[PositionedFragment],
                    config: Optional[ExtractionConfig] = None) -> TableReconstructionStrategy:
  """Very little text in the PDF layer means a scanned document: use OCR text."""
  config = config or DEFAULT_CONFIG
  count = usable_fragment_count(fragments or [])
  if count < config.ocr_fragment_threshold:
    logger.info(f"Only {count} text fragments found, selecting flat-text (OCR) strategy")
    return FlatTextStrategy()
  return GeometryStrategy()


def reconstruct_table(source: Source, config: Optional[ExtractionConfig] = None) -> List[Row]:
  """Rows from either a fragment sequence (geometry) or a text block (flat text)."""
  if source is None:
    raise TypeError("reconstruct_table() requires fragments or text, got None")
  strategy = FlatTextStrategy() if isinstance(source, str) else GeometryStrategy()
  return strategy.reconstruct(source, config or DEFAULT_CONFIG)
