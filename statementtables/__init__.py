"""
Statement Tables Package

Recovers rows, columns and typed transactions from PDF text layers and OCR text.
"""

from .config import ExtractionConfig
from .converter import StatementConverter
from .fields import extract_transaction
from .models import PositionedFragment, TransactionRecord
from .strategies import FlatTextStrategy, GeometryStrategy, reconstruct_table, select_strategy
from .transactions import HeuristicTransactionExtractor, TransactionExtractor, extract_transactions

__version__ = "1.0.0"

__all__ = [
    "ExtractionConfig",
    "StatementConverter",
    "PositionedFragment",
    "TransactionRecord",
    "GeometryStrategy",
    "FlatTextStrategy",
    "TransactionExtractor",
    "HeuristicTransactionExtractor",
    "reconstruct_table",
    "select_strategy",
    "extract_transaction",
    "extract_transactions",
]
