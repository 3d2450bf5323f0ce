import os
import unittest
from unittest import mock

from statementtables.config import DEFAULT_BOILERPLATE, ExtractionConfig


class ConfigTest(unittest.TestCase):
  def test_defaults(self):
    config = ExtractionConfig()
    self.assertEqual(config.space_threshold_multiplier, 2.5)
    self.assertEqual(config.vertical_tolerance, 5.0)
    self.assertEqual(config.max_file_size, 20 * 1024 * 1024)
    self.assertEqual(config.boilerplate_phrases, DEFAULT_BOILERPLATE)

  def test_overrides_ignore_none(self):
    config = ExtractionConfig().with_overrides(vertical_tolerance=3.0, default_year=None,
                                               boilerplate_phrases=['a', 'b'])
    self.assertEqual(config.vertical_tolerance, 3.0)
    self.assertIsNone(config.default_year)
    self.assertEqual(config.boilerplate_phrases, ('a', 'b'))

  def test_from_env(self):
    env = {
      'STATEMENT_TABLES_SPACE_MULTIPLIER': '2.0',
      'STATEMENT_TABLES_DEFAULT_YEAR': '2023',
      'STATEMENT_TABLES_DECIMAL_COMMA': 'true',
      'STATEMENT_TABLES_BOILERPLATE': 'card purchase | online transfer',
      'STATEMENT_TABLES_VERTICAL_TOLERANCE': 'not-a-number',
    }
    with mock.patch.dict(os.environ, env):
      config = ExtractionConfig.from_env()
    self.assertEqual(config.space_threshold_multiplier, 2.0)
    self.assertEqual(config.default_year, 2023)
    self.assertTrue(config.decimal_comma)
    self.assertEqual(config.boilerplate_phrases, ('card purchase', 'online transfer'))
    self.assertEqual(config.vertical_tolerance, 5.0)


if __name__ == '__main__':
  unittest.main()
