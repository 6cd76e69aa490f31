"""
Test suite for lib/utils.py
"""

import datetime
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))
from lib.utils import getAgeInYears, jsonDumps, load_dotenv


class TestUtils(unittest.TestCase):

    def test_age_in_years_is_calendar_year_difference(self):
        """Test that only years are taken into account"""
        today = datetime.date(2026, 1, 1)
        self.assertEqual(getAgeInYears(datetime.date(1995, 2, 1), today), 31)
        self.assertEqual(getAgeInYears(datetime.date(1995, 12, 31), datetime.date(1996, 1, 1)), 1)
        self.assertEqual(getAgeInYears(datetime.date(2026, 12, 31), today), 0)
        self.assertEqual(getAgeInYears(datetime.date(2030, 1, 1), today), -4)

    def test_age_in_years_accepts_datetime(self):
        """Test datetime birth dates"""
        self.assertEqual(getAgeInYears(datetime.datetime(2000, 5, 5, 12, 0), datetime.date(2020, 1, 1)), 20)

    def test_age_in_years_defaults_to_today(self):
        """Test default date is today"""
        thisYear = datetime.date.today().year
        self.assertEqual(getAgeInYears(datetime.date(thisYear - 10, 1, 1)), 10)

    def test_json_dumps_compact_and_sorted(self):
        """Test default jsonDumps output"""
        self.assertEqual(jsonDumps({"b": 2, "a": [1, "ы"]}), '{"a":[1,"ы"],"b":2}')

    def test_json_dumps_pretty(self):
        """Test that indent disables compact separators"""
        self.assertEqual(jsonDumps({"a": 1}, indent=2), '{\n  "a": 1\n}')

    def test_json_dumps_unknown_types_use_str(self):
        """Test default=str fallback"""
        self.assertEqual(jsonDumps({"d": datetime.date(2020, 1, 2)}), '{"d":"2020-01-02"}')

    def test_load_dotenv(self):
        """Test parsing of .env file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, ".env")
            with open(path, "wt") as f:
                f.write('MAPCACHE_TEST_A="quoted"\nMAPCACHE_TEST_B = plain\n# comment\nbroken line\n')

            self.assertEqual(
                load_dotenv(path, populateEnv=False),
                {"MAPCACHE_TEST_A": "quoted", "MAPCACHE_TEST_B": "plain"},
            )
            self.assertNotIn("MAPCACHE_TEST_A", os.environ)

    def test_load_dotenv_missing_file(self):
        """Test that missing .env file is skipped"""
        self.assertEqual(load_dotenv("/nonexistent/path/.env"), {})


if __name__ == "__main__":
    unittest.main()
