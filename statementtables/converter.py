"""Converts PDF statements into row tables or transaction lists.

The PDF text layer is tried first; when it yields too few fragments the
document is treated as scanned and its OCR text goes down the flat-text path.
"""

import logging
import os
from typing import Callable, List, Optional

import pandas as pd

from . import sources
from .config import DEFAULT_CONFIG, ExtractionConfig
from .exceptions import FileTooLargeError, UnsupportedFileError
from .exporters import rows_to_dataframe, transactions_to_dataframe, write_dataframe
from .models import Row, TransactionRecord
from .strategies import FlatTextStrategy, select_strategy
from .transactions import HeuristicTransactionExtractor, TransactionExtractor

logger = logging.getLogger(__name__)

MODES = ('rows', 'transactions')


class StatementConverter:
  def __init__(self, config: Optional[ExtractionConfig] = None,
               extractor: Optional[TransactionExtractor] = None):
    self.config = config or DEFAULT_CONFIG
    self.extractor = extractor or HeuristicTransactionExtractor(self.config)

  def validate(self, pdf_path: str) -> None:
    """Reject missing, non-PDF or oversized files before any parsing."""
    if not os.path.isfile(pdf_path):
      raise UnsupportedFileError(f"{pdf_path} does not exist")
    if not pdf_path.lower().endswith('.pdf'):
      raise UnsupportedFileError(f"{pdf_path} is not a PDF. Please upload a PDF.")
    size = os.path.getsize(pdf_path)
    if size > self.config.max_file_size:
      raise FileTooLargeError(pdf_path, size, self.config.max_file_size)

  def extract_rows(self, pdf_path: str) -> List[Row]:
    self.validate(pdf_path)
    if self.config.pdf_engine not in sources.ENGINES:
      raise ValueError(f"Unknown PDF engine {self.config.pdf_engine!r}; expected one of {sources.ENGINES}")
    try:
      fragments = sources.fragments_from_pdf(pdf_path, self.config.pdf_engine)
    except Exception as e:
      raise UnsupportedFileError(f"{pdf_path} could not be read as a PDF: {e}") from e
    strategy = select_strategy(fragments, self.config)

    if isinstance(strategy, FlatTextStrategy):
      text = sources.ocr_text_from_pdf(pdf_path, dpi=self.config.ocr_dpi)
      rows = strategy.reconstruct(text, self.config)
    else:
      rows = strategy.reconstruct(fragments, self.config)

    if not rows:
      logger.warning(f"No data extracted from {pdf_path}")
    else:
      logger.info(f"{strategy.name} strategy extracted {len(rows)} rows from {pdf_path}")
    return rows

  def extract_transactions(self, pdf_path: str) -> List[TransactionRecord]:
    rows = self.extract_rows(pdf_path)
    if not rows:
      return []
    return self.extractor.extract(rows)

  def convert_single(self, pdf_path: str, mode: str = 'rows') -> pd.DataFrame:
    """Process a single PDF into a DataFrame."""
    if mode not in MODES:
      raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
    if mode == 'transactions':
      return transactions_to_dataframe(self.extract_transactions(pdf_path))
    return rows_to_dataframe(self.extract_rows(pdf_path))

  def convert_multiple(self, pdf_paths: List[str], mode: str = 'rows',
                       progress_callback: Optional[Callable] = None) -> pd.DataFrame:
    """Process multiple PDF files and combine results; failed files are skipped."""
    all_results = []
    total_files = len(pdf_paths)

    for i, path in enumerate(pdf_paths):
      name = os.path.basename(path)
      if progress_callback:
        progress_callback(i * 100 // max(total_files, 1), f'Processing {name}...')

      try:
        results = self.convert_single(path, mode)
      except (UnsupportedFileError, FileTooLargeError) as e:
        logger.warning(f"Skipping {path}: {e}")
        continue
      except Exception as e:
        logger.error(f"Error processing {path}: {str(e)}")
        continue

      if not results.empty:
        results['source_file'] = name
        all_results.append(results)

    if progress_callback:
      progress_callback(100, 'Processing complete!')

    if all_results:
      return pd.concat(all_results, ignore_index=True)
    return pd.DataFrame()

  def convert(self, pdf_paths: List[str], output_path: str, mode: str = 'rows') -> str:
    """Convert PDFs and write the combined table to csv, xlsx or json."""
    df = self.convert_multiple(pdf_paths, mode)
    return write_dataframe(df, output_path, sheet_name='Transactions' if mode == 'transactions' else 'Sheet1')
