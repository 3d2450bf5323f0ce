"""Tunable parameters for table reconstruction and transaction extraction.

Every entry point takes an :class:`ExtractionConfig` value instead of reading
module-level constants, so tests can vary thresholds per case.  The defaults
are the empirically tuned values; ``from_env`` lets operators adjust them
without code changes.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

DEFAULT_BOILERPLATE = (
    "purchase authorized on",
    "recurring payment authorized on",
    "pos purchase",
)


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ExtractionConfig:
    # Geometry
    vertical_tolerance: float = 5.0
    space_threshold_multiplier: float = 2.5
    min_join_gap: float = 1.0
    default_char_width: float = 5.0

    # Field extraction
    boilerplate_phrases: Tuple[str, ...] = field(default=DEFAULT_BOILERPLATE)
    default_year: Optional[int] = None
    decimal_comma: bool = False

    # Document handling
    max_file_size: int = 20 * 1024 * 1024
    ocr_fragment_threshold: int = 20
    ocr_dpi: int = 300
    pdf_engine: str = "pdfplumber"

    def with_overrides(self, **changes) -> "ExtractionConfig":
        """Return a copy with the given fields replaced (``None`` values are ignored)."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "boilerplate_phrases" in changes:
            changes["boilerplate_phrases"] = tuple(changes["boilerplate_phrases"])
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = "STATEMENT_TABLES_") -> "ExtractionConfig":
        base = cls()
        phrases = os.getenv(prefix + "BOILERPLATE")
        return cls(
            vertical_tolerance=_env_float(prefix + "VERTICAL_TOLERANCE", base.vertical_tolerance),
            space_threshold_multiplier=_env_float(prefix + "SPACE_MULTIPLIER", base.space_threshold_multiplier),
            min_join_gap=_env_float(prefix + "MIN_JOIN_GAP", base.min_join_gap),
            default_char_width=_env_float(prefix + "DEFAULT_CHAR_WIDTH", base.default_char_width),
            boilerplate_phrases=(
                tuple(p.strip() for p in phrases.split("|") if p.strip()) if phrases else base.boilerplate_phrases
            ),
            default_year=_env_int(prefix + "DEFAULT_YEAR", base.default_year),
            decimal_comma=_env_bool(prefix + "DECIMAL_COMMA", base.decimal_comma),
            max_file_size=_env_int(prefix + "MAX_FILE_SIZE", base.max_file_size),
            ocr_fragment_threshold=_env_int(prefix + "OCR_FRAGMENT_THRESHOLD", base.ocr_fragment_threshold),
            ocr_dpi=_env_int(prefix + "OCR_DPI", base.ocr_dpi),
            pdf_engine=os.getenv(prefix + "PDF_ENGINE", base.pdf_engine),
        )


DEFAULT_CONFIG = ExtractionConfig()
