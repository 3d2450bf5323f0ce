"""Adapters around the external PDF text-layer and OCR engines.

These are the only places that touch a PDF file; everything downstream works
on the fragments or text they return.
"""

import logging
from typing import List

import pdfplumber

from .models import PositionedFragment

# OCR imports with fallbacks
try:
    import pytesseract
    from pdf2image import convert_from_path
    OCR_AVAILABLE = True
except ImportError:
    OCR_AVAILABLE = False

logger = logging.getLogger(__name__)

ENGINES = ("pdfplumber", "pymupdf")

TESSERACT_CONFIG = "-c preserve_interword_spaces=1 --psm 3"


def fragments_from_pdf(pdf_path: str, engine: str = "pdfplumber") -> List[PositionedFragment]:
    """Positioned words for every page, pages concatenated in order.

    ``y`` is converted to a bottom-up baseline (page height minus the word's
    bottom edge) so larger values are higher on the page.
    """
    if engine == "pdfplumber":
        return _fragments_pdfplumber(pdf_path)
    if engine == "pymupdf":
        return _fragments_pymupdf(pdf_path)
    raise ValueError(f"Unknown PDF engine {engine!r}; expected one of {ENGINES}")


def _fragments_pdfplumber(pdf_path: str) -> List[PositionedFragment]:
    fragments: List[PositionedFragment] = []
    with pdfplumber.open(pdf_path) as pdf:
        for page_num, page in enumerate(pdf.pages):
            words = page.extract_words(keep_blank_chars=False, use_text_flow=False)
            for word in words:
                fragments.append(
                    PositionedFragment(
                        text=word["text"],
                        x=float(word["x0"]),
                        y=float(page.height) - float(word["bottom"]),
                        width=float(word["x1"]) - float(word["x0"]),
                        page=page_num,
                    )
                )
            logger.info(f"Page {page_num + 1}: {len(words)} words from pdfplumber")
    return fragments


def _fragments_pymupdf(pdf_path: str) -> List[PositionedFragment]:
    import fitz  # PyMuPDF

    fragments: List[PositionedFragment] = []
    with fitz.open(pdf_path) as doc:
        for page_num, page in enumerate(doc):
            height = page.rect.height
            words = page.get_text("words")
            for x0, y0, x1, y1, text, *_ in words:
                fragments.append(
                    PositionedFragment(text=text, x=x0, y=height - y1, width=x1 - x0, page=page_num)
                )
            logger.info(f"Page {page_num + 1}: {len(words)} words from PyMuPDF")
    return fragments


def ocr_text_from_pdf(pdf_path: str, dpi: int = 300) -> str:
    """Rasterise each page and OCR it, keeping inter-word spacing."""
    if not OCR_AVAILABLE:
        logger.error("OCR libraries not available. Install: pip install pytesseract pdf2image")
        return ""

    logger.info(f"Starting OCR of {pdf_path}")
    images = convert_from_path(pdf_path, dpi=dpi)
    logger.info(f"Converted PDF to {len(images)} images")

    pages = []
    for page_num, image in enumerate(images):
        text = pytesseract.image_to_string(image, config=TESSERACT_CONFIG)
        logger.info(f"OCR extracted {len(text)} characters from page {page_num + 1}")
        pages.append(text)
    return "\n".join(pages)
