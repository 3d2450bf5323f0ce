import unittest

from statementtables.flat_text import rows_from_text, split_text_line


OCR_PAGE = """
ACME BANK                                   Statement Period 03/01/2024 - 03/31/2024

Date        Description                    Withdrawals     Deposits      Balance
03/01/2024  Payroll Deposit                                2,500.00      3,705.33
03/02/2024  Coffee Shop                    4.50                          3,700.83

Page 1 of 2
"""


class FlatTextTest(unittest.TestCase):
  def test_blank_lines_dropped_and_columns_split(self):
    rows = rows_from_text(OCR_PAGE)
    self.assertEqual(rows[0], ['ACME BANK', 'Statement Period 03/01/2024 - 03/31/2024'])
    self.assertEqual(rows[1], ['Date', 'Description', 'Withdrawals', 'Deposits', 'Balance'])
    self.assertEqual(rows[2], ['03/01/2024', 'Payroll Deposit', '2,500.00', '3,705.33'])
    self.assertEqual(len(rows), 5)

  def test_single_column_lines_are_kept(self):
    self.assertIn(['Page 1 of 2'], rows_from_text(OCR_PAGE))

  def test_single_spaces_do_not_split(self):
    self.assertEqual(split_text_line('  Coffee Shop Purchase  '), ['Coffee Shop Purchase'])

  def test_tabs_and_mixed_whitespace_count_as_breaks(self):
    self.assertEqual(split_text_line('03/02\t\tRent \t1,200.00'), ['03/02', 'Rent', '1,200.00'])

  def test_windows_line_endings(self):
    self.assertEqual(rows_from_text('a  b\r\n\r\nc'), [['a', 'b'], ['c']])

  def test_empty_text(self):
    self.assertEqual(rows_from_text(''), [])
    self.assertEqual(rows_from_text('   \n\n  '), [])

  def test_feeding_cells_back_does_not_subdivide_them(self):
    rows = rows_from_text(OCR_PAGE)
    cells = [cell for row in rows for cell in row]
    again = rows_from_text('\n'.join(cells))
    self.assertEqual(again, [[cell] for cell in cells])
    rejoined = rows_from_text('\n'.join('  '.join(row) for row in rows))
    self.assertEqual(rejoined, rows)


if __name__ == '__main__':
  unittest.main()
