import argparse
import logging
import sys

from .config import ExtractionConfig
from .converter import MODES, StatementConverter
from .exceptions import StatementError


def build_parser():
  parser = argparse.ArgumentParser(description='Extract tables and transactions from PDF bank statements')
  parser.add_argument('pdfs', nargs='+', help='Input PDF files')
  parser.add_argument('--output', required=True, help='Output file (.csv, .xlsx or .json)')
  parser.add_argument('--mode', choices=MODES, default='rows', help='Raw row table or typed transactions')
  parser.add_argument('--engine', choices=('pdfplumber', 'pymupdf'), help='PDF text-layer engine')
  parser.add_argument('--space-multiplier', type=float, help='Column gap threshold, in average character widths')
  parser.add_argument('--vertical-tolerance', type=float, help='Max baseline difference within one line')
  parser.add_argument('--year', type=int, help='Year for dates printed without one (e.g. 03/15)')
  parser.add_argument('--decimal-comma', action='store_true', default=None, help='Amounts written as 1.234,56')
  parser.add_argument('--llm', action='store_true', help='Use the hosted language-model extractor')
  parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
  return parser


def main(argv=None):
  args = build_parser().parse_args(argv)
  logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                      format='%(levelname)s | %(message)s')

  config = ExtractionConfig.from_env().with_overrides(
    pdf_engine=args.engine,
    space_threshold_multiplier=args.space_multiplier,
    vertical_tolerance=args.vertical_tolerance,
    default_year=args.year,
    decimal_comma=args.decimal_comma,
  )

  extractor = None
  if args.llm:
    from .llm_extractor import LLMTransactionExtractor
    extractor = LLMTransactionExtractor()

  converter = StatementConverter(config, extractor)
  try:
    converter.convert(args.pdfs, args.output, mode=args.mode)
  except StatementError as e:
    logging.getLogger(__name__).error(str(e))
    return 1
  return 0


if __name__ == '__main__':
  sys.exit(main())
