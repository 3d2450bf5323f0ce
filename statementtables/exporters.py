"""Tabular output for reconstructed rows and transaction records."""

import json
import logging
import os
from typing import Sequence

import pandas as pd

from .exceptions import ExportError
from .models import TRANSACTION_COLUMNS, Row, TransactionRecord

logger = logging.getLogger(__name__)

FORMATS = ("csv", "xlsx", "json")


def rows_to_dataframe(rows: Sequence[Row]) -> pd.DataFrame:
  """Ragged rows padded to the widest row, columns named col_1..col_n."""
  if not rows:
    return pd.DataFrame()
  width = max(len(r) for r in rows)
  padded = [list(r) + [''] * (width - len(r)) for r in rows]
  return pd.DataFrame(padded, columns=[f'col_{i + 1}' for i in range(width)])


def transactions_to_dataframe(records: Sequence[TransactionRecord]) -> pd.DataFrame:
  return pd.DataFrame([r.to_row() for r in records], columns=TRANSACTION_COLUMNS)


def format_for_path(path: str) -> str:
  ext = os.path.splitext(path)[1].lower().lstrip('.')
  if ext not in FORMATS:
    raise ExportError(f"Unsupported export format '{ext}'; expected one of {', '.join(FORMATS)}")
  return ext


def write_dataframe(df: pd.DataFrame, path: str, sheet_name: str = 'Sheet1') -> str:
  fmt = format_for_path(path)
  if fmt == 'csv':
    df.to_csv(path, index=False)
  elif fmt == 'xlsx':
    with pd.ExcelWriter(path, engine='openpyxl') as writer:
      df.to_excel(writer, sheet_name=sheet_name, index=False)
  else:
    records = json.loads(df.to_json(orient='records'))
    with open(path, 'w', encoding='utf-8') as f:
      json.dump(records, f, indent=2)
  logger.info(f"Saved {len(df)} rows to {path}")
  return path


def export_rows(rows: Sequence[Row], path: str) -> str:
  """Write the raw row table; JSON keeps the array-of-arrays shape."""
  if format_for_path(path) == 'json':
    with open(path, 'w', encoding='utf-8') as f:
      json.dump([list(r) for r in rows], f, indent=2)
    logger.info(f"Saved {len(rows)} rows to {path}")
    return path
  return write_dataframe(rows_to_dataframe(rows), path)


def export_transactions(records: Sequence[TransactionRecord], path: str) -> str:
  if format_for_path(path) == 'json':
    with open(path, 'w', encoding='utf-8') as f:
      json.dump([r.to_dict() for r in records], f, indent=2)
    logger.info(f"Saved {len(records)} transactions to {path}")
    return path
  return write_dataframe(transactions_to_dataframe(records), path, sheet_name='Transactions')

