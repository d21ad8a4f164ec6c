import sys
import unittest
from pathlib import Path

# Add parent directory to path so we can import our modules
sys.path.append(str(Path(__file__).parent.parent))

from vex_fixer.timestamps import normalize_timestamp, is_rfc3339_utc, parse_source_timestamp
from vex_fixer.errors import TimestampFormatError


class TestNormalizeTimestamp(unittest.TestCase):
    def test_microseconds_kept(self):
        self.assertEqual(normalize_timestamp("2024-01-15 10:30:00.123456"), "2024-01-15T10:30:00.123456Z")

    def test_trailing_zeros_trimmed(self):
        self.assertEqual(normalize_timestamp("2024-01-15 10:30:00.120000"), "2024-01-15T10:30:00.12Z")
        self.assertEqual(normalize_timestamp("2024-01-15 10:30:00.000001"), "2024-01-15T10:30:00.000001Z")

    def test_zero_fraction_omitted_but_z_kept(self):
        self.assertEqual(normalize_timestamp("2024-01-15 10:30:00.000000"), "2024-01-15T10:30:00Z")

    def test_no_offset_applied(self):
        """The source has no timezone, so the wall time is taken as UTC."""
        self.assertEqual(normalize_timestamp("1999-12-31 23:59:59.999999"), "1999-12-31T23:59:59.999999Z")

    def test_leap_day(self):
        self.assertEqual(normalize_timestamp("2024-02-29 00:00:00.500000"), "2024-02-29T00:00:00.5Z")

    def test_same_input_same_output(self):
        value = "2023-06-01 12:00:00.654321"
        self.assertEqual(normalize_timestamp(value), normalize_timestamp(value))

    def test_output_is_rfc3339(self):
        for value in ("2024-01-15 10:30:00.123456", "2024-01-15 10:30:00.000000", "2020-03-01 07:08:09.100000"):
            self.assertTrue(is_rfc3339_utc(normalize_timestamp(value)), value)

    def test_parse_returns_aware_utc(self):
        parsed = parse_source_timestamp("2024-01-15 10:30:00.123456")
        self.assertEqual(parsed.utcoffset().total_seconds(), 0)
        self.assertEqual(parsed.microsecond, 123456)


class TestMalformedTimestamps(unittest.TestCase):
    BAD_VALUES = [
        "",
        "2024-01-15T10:30:00.123456",    # wrong separator
        "2024-01-15 10:30:00",           # missing microseconds
        "2024-01-15 10:30:00.123",       # short fraction
        "2024-01-15 10:30:00.1234567",   # long fraction
        "2024-1-15 10:30:00.123456",     # one-digit month
        "2024/01/15 10:30:00.123456",
        "2024-01-15 10:30:00.123456Z",   # already normalized
        "2024-01-15T10:30:00.123456Z",
        "abcd-01-15 10:30:00.123456",
        "2024-13-01 10:30:00.123456",    # month out of range
        "2023-02-29 10:30:00.123456",    # not a leap year
        "2024-01-15 24:00:00.000000",
        "2024-01-15 10:60:00.000000",
        " 2024-01-15 10:30:00.123456",
    ]

    def test_rejects_malformed_strings(self):
        for value in self.BAD_VALUES:
            with self.subTest(value=value):
                with self.assertRaises(TimestampFormatError) as cm:
                    normalize_timestamp(value)
                self.assertEqual(cm.exception.value, value)

    def test_rejects_non_strings(self):
        for value in (None, 20240115, 1.5, ["2024-01-15 10:30:00.123456"]):
            with self.subTest(value=value):
                with self.assertRaises(TimestampFormatError):
                    normalize_timestamp(value)

    def test_error_message_names_value(self):
        with self.assertRaises(TimestampFormatError) as cm:
            normalize_timestamp("yesterday")
        self.assertIn("'yesterday'", str(cm.exception))

    def test_year_zero_is_rejected(self):
        """datetime cannot represent year 0, so it is refused like any other bad value."""
        with self.assertRaises(TimestampFormatError):
            normalize_timestamp("0000-01-15 10:30:00.123456")


class TestIsRfc3339Utc(unittest.TestCase):
    def test_accepts_normalized_values(self):
        self.assertTrue(is_rfc3339_utc("2024-01-15T10:30:00Z"))
        self.assertTrue(is_rfc3339_utc("2024-01-15T10:30:00.123456789Z"))

    def test_rejects_other_values(self):
        self.assertFalse(is_rfc3339_utc("2024-01-15 10:30:00.123456"))
        self.assertFalse(is_rfc3339_utc("2024-01-15T10:30:00+00:00"))
        self.assertFalse(is_rfc3339_utc("2024-01-15T10:30:00.120Z"))
        self.assertFalse(is_rfc3339_utc("2024-02-30T10:30:00Z"))
        self.assertFalse(is_rfc3339_utc(None))


if __name__ == '__main__':
    unittest.main()
