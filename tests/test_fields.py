import unittest
from datetime import date
from decimal import Decimal

from statementtables.config import ExtractionConfig
from statementtables.fields import assign_amounts, extract_transaction, parse_amount


class DateTest(unittest.TestCase):
  def test_formats(self):
    cases = {
      '2024-03-15 Coffee 4.50': date(2024, 3, 15),
      '03/15/2024 Coffee 4.50': date(2024, 3, 15),
      '3/5/24 Coffee 4.50': date(2024, 3, 5),
      '15 Mar 2024 Coffee 4.50': date(2024, 3, 15),
      '1 September 2023 Coffee 4.50': date(2023, 9, 1),
      '12/31/99 Coffee 4.50': date(1999, 12, 31),
    }
    for text, expected in cases.items():
      with self.subTest(text=text):
        self.assertEqual(extract_transaction(text).date, expected)

  def test_month_day_uses_configured_year(self):
    record = extract_transaction('03/15 Coffee 4.50', ExtractionConfig(default_year=2023))
    self.assertEqual(record.date, date(2023, 3, 15))

  def test_first_date_by_position_wins(self):
    record = extract_transaction('03/02/2024 Purchase authorized on 02/28 Corner Deli 12.00')
    self.assertEqual(record.date, date(2024, 3, 2))
    self.assertEqual(record.description, '02/28 Corner Deli')

  def test_no_date_is_not_a_transaction(self):
    self.assertIsNone(extract_transaction('Total withdrawals 1,234.00'))
    self.assertIsNone(extract_transaction(''))

  def test_invalid_calendar_date_is_not_guessed(self):
    self.assertIsNone(extract_transaction('2024-02-30 Rent 1,200.00'))
    self.assertIsNone(extract_transaction('04/31/2024 Rent 1,200.00'))
    self.assertIsNone(extract_transaction('32 Jan 2024 Rent 1,200.00'))


class AmountTest(unittest.TestCase):
  def test_round_trip_two_amounts(self):
    record = extract_transaction('2024-03-15  Coffee Shop Purchase   -4.50  1,205.33')
    self.assertEqual(record.date.isoformat(), '2024-03-15')
    self.assertEqual(record.description, 'Coffee Shop Purchase')
    self.assertEqual(record.debit, Decimal('4.50'))
    self.assertIsNone(record.credit)
    self.assertEqual(record.balance, Decimal('1205.33'))

  def test_single_positive_amount_is_credit(self):
    record = extract_transaction('03/01/2024 Payroll Deposit 2500.00')
    self.assertEqual(record.date.isoformat(), '2024-03-01')
    self.assertIsNone(record.debit)
    self.assertEqual(record.credit, Decimal('2500.00'))
    self.assertIsNone(record.balance)

  def test_two_amounts_smaller_magnitude_is_transaction(self):
    record = extract_transaction('01 Mar 2024 ATM Withdrawal -60.00 940.00')
    self.assertEqual(record.debit, Decimal('60.00'))
    self.assertIsNone(record.credit)
    self.assertEqual(record.balance, Decimal('940.00'))
    self.assertEqual(record.description, 'ATM Withdrawal')

  def test_two_amounts_balance_first(self):
    record = extract_transaction('03/05/2024 Refund 1,000.00 25.00')
    self.assertEqual(record.credit, Decimal('25.00'))
    self.assertEqual(record.balance, Decimal('1000.00'))

  def test_three_or_more_amounts_are_positional(self):
    record = extract_transaction('03/06/2024 Transfer 10.00 0.00 990.00 5.00 7.00')
    self.assertEqual(record.debit, Decimal('10.00'))
    self.assertIsNone(record.credit)
    self.assertEqual(record.balance, Decimal('990.00'))
    self.assertEqual(record.description, 'Transfer')

  def test_zero_amounts_still_a_record(self):
    record = extract_transaction('03/07/2024 Account note')
    self.assertEqual(record.description, 'Account note')
    self.assertIsNone(record.debit)
    self.assertIsNone(record.credit)
    self.assertIsNone(record.balance)

  def test_date_only_gives_minimal_record(self):
    record = extract_transaction('03/07/2024')
    self.assertEqual(record.date, date(2024, 3, 7))
    self.assertEqual(record.description, '')

  def test_currency_sign_and_separators(self):
    self.assertEqual(parse_amount('$1,234.56'), Decimal('1234.56'))
    self.assertEqual(parse_amount('-$1,234.56'), Decimal('-1234.56'))
    self.assertEqual(parse_amount('$-0.99'), Decimal('-0.99'))

  def test_minus_sign_glued_to_word(self):
    record = extract_transaction('03/01/2024 ATM-60.00 940.00')
    self.assertEqual(record.description, 'ATM')
    self.assertEqual(record.debit, Decimal('60.00'))
    self.assertIsNone(record.credit)
    self.assertEqual(record.balance, Decimal('940.00'))

  def test_malformed_tokens_do_not_parse(self):
    for token in ('', '-', '--', '$', '12.3.4', 'N/A'):
      self.assertIsNone(parse_amount(token), token)
    self.assertIsNone(parse_amount('1.2,3,4', decimal_comma=True))

  def test_decimal_comma_statements(self):
    config = ExtractionConfig(decimal_comma=True)
    record = extract_transaction('15 Mar 2024  Miete  -1.200,00  3.450,75', config)
    self.assertEqual(record.debit, Decimal('1200.00'))
    self.assertEqual(record.balance, Decimal('3450.75'))
    self.assertEqual(record.description, 'Miete')

  def test_numbers_without_cents_stay_in_description(self):
    record = extract_transaction('03/02/2024 Check 1042 cleared 150.00')
    self.assertEqual(record.description, 'Check 1042 cleared')
    self.assertEqual(record.credit, Decimal('150.00'))

  def test_row_input_is_flattened(self):
    record = extract_transaction(['03/01/2024', 'Payroll Deposit', '2,500.00', '3,705.33'])
    self.assertEqual(record.credit, Decimal('2500.00'))
    self.assertEqual(record.balance, Decimal('3705.33'))


class BoilerplateTest(unittest.TestCase):
  def test_default_phrase_removed(self):
    record = extract_transaction('03/02/2024 PURCHASE AUTHORIZED ON Corner Deli -12.00')
    self.assertEqual(record.description, 'Corner Deli')

  def test_phrases_are_configurable(self):
    config = ExtractionConfig(boilerplate_phrases=('card transaction',))
    record = extract_transaction('03/02/2024 Card Transaction Grocer -40.00', config)
    self.assertEqual(record.description, 'Grocer')
    record = extract_transaction('03/02/2024 Purchase authorized on Grocer -40.00', config)
    self.assertEqual(record.description, 'Purchase authorized on Grocer')


class AssignAmountsTest(unittest.TestCase):
  def test_counts(self):
    D = Decimal
    self.assertEqual(assign_amounts([]), (None, None, None))
    self.assertEqual(assign_amounts([D('-5.00')]), (D('5.00'), None, None))
    self.assertEqual(assign_amounts([D('0.00')]), (None, D('0.00'), None))
    self.assertEqual(assign_amounts([D('5.00'), D('5.00')]), (None, D('5.00'), D('5.00')))
    self.assertEqual(assign_amounts([D('1.00'), D('2.00'), D('3.00'), D('4.00')]), (D('1.00'), D('2.00'), D('3.00')))


if __name__ == '__main__':
  unittest.main()
