"""Transaction extraction on top of table reconstruction.

``TransactionExtractor`` is the swappable contract.  The heuristic engine
below merges continuation lines and runs the field extractor on each unit;
``llm_extractor.LLMTransactionExtractor`` is a hosted alternative that
honours the same contract.
"""

import logging
from typing import List, Optional

from .config import DEFAULT_CONFIG, ExtractionConfig
from .fields import extract_transaction
from .merger import merge_lines
from .models import PositionedFragment, TransactionRecord
from .strategies import reconstruct_table

logger = logging.getLogger(__name__)

CELL_SEPARATOR = "  "


def lines_from_source(source, config: Optional[ExtractionConfig] = None) -> List[str]:
  """Normalise text, fragments, rows or lines into a list of text lines.

  Rows are joined with two spaces so the column boundaries survive as
  whitespace runs.
  """
  if source is None:
    raise TypeError("expected text, fragments or rows, got None")
  config = config or DEFAULT_CONFIG

  if isinstance(source, str):
    return [line for line in source.splitlines() if line.strip()]

  items = list(source)
  if not items:
    return []
  if isinstance(items[0], PositionedFragment):
    items = reconstruct_table(items, config)

  lines = []
  for item in items:
    line = item if isinstance(item, str) else CELL_SEPARATOR.join(c for c in item if c)
    if line.strip():
      lines.append(line)
  return lines


class TransactionExtractor:
  """Turns a document's rows or text into transaction records."""

  def extract(self, source) -> List[TransactionRecord]:
    raise NotImplementedError


class HeuristicTransactionExtractor(TransactionExtractor):

  def __init__(self, config: Optional[ExtractionConfig] = None):
    self.config = config or DEFAULT_CONFIG

  def extract(self, source) -> List[TransactionRecord]:
    lines = lines_from_source(source, self.config)
    units = merge_lines(lines, self.config)

    records = []
    skipped = 0
    for unit in units:
      record = extract_transaction(unit, self.config)
      if record is None:
        skipped += 1
        continue
      records.append(record)

    logger.info(f"Extracted {len(records)} transactions from {len(lines)} lines ({skipped} units skipped)")
    return records


def extract_transactions(rows_or_text, config: Optional[ExtractionConfig] = None,
                         extractor: Optional[TransactionExtractor] = None) -> List[TransactionRecord]:
  """Transaction records from text, positioned fragments or reconstructed rows."""
  extractor = extractor or HeuristicTransactionExtractor(config)
  return extractor.extract(rows_or_text)
