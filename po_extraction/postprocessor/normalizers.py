"""
Data Normalizers Module.

This module provides the two leaf normalizers used by every stage:
    - NumericNormalizer: locale-noisy amounts and quantities to Decimal
    - DateNormalizer: day-first dates and spreadsheet serials to ISO

Neither normalizer raises on bad input. A numeric value that cannot be
read becomes ``Decimal(0)``; a date that cannot be read becomes None so
the caller can keep the raw text for display.
"""

import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dateutil import parser as date_parser

from po_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class NumericNormalizer:
    """
    Normalizes amount/quantity strings to Decimal.

    Currency markers are removed first, then every character that is
    not a digit, ``.`` or ``-``. Whatever remains is parsed as a
    decimal; an empty or malformed remainder yields zero.

    Example:
        >>> normalizer = NumericNormalizer()
        >>> normalizer.normalize("1,234.50")
        Decimal('1234.50')
        >>> normalizer.normalize("Rs. 2,000")
        Decimal('2000')
        >>> normalizer.normalize("abc")
        Decimal('0')
    """

    CURRENCY_MARKERS = re.compile(r'(?:\bRs\.?|\bINR\b|\bUSD\b|\bEUR\b|[₹$€£])', re.IGNORECASE)
    NON_NUMERIC = re.compile(r'[^0-9.\-]')

    def normalize(self, value: Any) -> Decimal:
        if value is None or isinstance(value, bool):
            return Decimal(0)
        if isinstance(value, Decimal):
            return value if value.is_finite() else Decimal(0)
        if isinstance(value, int):
            return Decimal(value)
        if isinstance(value, float):
            if value != value or value in (float('inf'), float('-inf')):
                return Decimal(0)
            return Decimal(str(value))

        text = self.CURRENCY_MARKERS.sub('', str(value))
        text = self.NON_NUMERIC.sub('', text)
        if not text:
            return Decimal(0)

        try:
            return Decimal(text)
        except InvalidOperation:
            logger.debug(f"Could not parse number: {value!r}")
            return Decimal(0)


class DateNormalizer:
    """
    Normalizes day-first purchase order dates to ``YYYY-MM-DD``.

    Rules, tried in order:
        1. date/datetime objects and spreadsheet serial numbers
           (days since 1899-12-30)
        2. ``DD-MM-YYYY`` (``.`` and ``/`` accepted as separators)
        3. ``DD-MM-YY``, the year always taken as 20YY
        4. ``DD-MON-YY`` / ``DD-MON-YYYY`` with an English month
           abbreviation (``SEPT`` included)
        5. strings already in ISO form

    Anything else, including impossible calendar dates, gives None.

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("01-Jan-24")
        "2024-01-01"
        >>> normalizer.normalize("15/03/2024")
        "2024-03-15"
        >>> normalizer.normalize(45366)
        "2024-03-15"
    """

    SERIAL_EPOCH = datetime(1899, 12, 30)

    MONTHS = {
        'JAN': 1, 'FEB': 2, 'MAR': 3, 'APR': 4, 'MAY': 5, 'JUN': 6,
        'JUL': 7, 'AUG': 8, 'SEP': 9, 'SEPT': 9, 'OCT': 10, 'NOV': 11,
        'DEC': 12,
    }

    NUMERIC_FULL = re.compile(r'^(\d{1,2})-(\d{1,2})-(\d{4})$')
    NUMERIC_SHORT = re.compile(r'^(\d{1,2})-(\d{1,2})-(\d{2})$')
    MONTH_NAME = re.compile(r'^(\d{1,2})-([A-Za-z]{3,4})-(\d{2}|\d{4})$')
    ISO = re.compile(r'^\d{4}-\d{2}-\d{2}$')

    # Finds a candidate date inside a longer header value
    EMBEDDED_DATE = re.compile(
        r'\b(\d{1,2}[-/.](?:\d{1,2}|[A-Za-z]{3,4})[-/.](?:\d{4}|\d{2}))\b'
    )

    def normalize(self, value: Any) -> Optional[str]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, (int, float, Decimal)):
            return self._from_serial(value)

        text = str(value).strip()
        if not text:
            return None
        cleaned = text.replace('.', '-').replace('/', '-')
        cleaned = re.sub(r'\s*-\s*', '-', cleaned)

        match = self.NUMERIC_FULL.match(cleaned)
        if match:
            day, month, year = match.groups()
            return self._build(int(year), int(month), int(day))

        match = self.NUMERIC_SHORT.match(cleaned)
        if match:
            day, month, year = match.groups()
            return self._build(int(year) + 2000, int(month), int(day))

        match = self.MONTH_NAME.match(cleaned)
        if match:
            day, month_name, year = match.groups()
            month = self.MONTHS.get(month_name.upper())
            if month is None:
                return None
            year_value = int(year) + 2000 if len(year) == 2 else int(year)
            return self._build(year_value, month, int(day))

        if self.ISO.match(text):
            try:
                return date_parser.isoparse(text).date().isoformat()
            except ValueError:
                return None

        return None

    def extract_date(self, text: str) -> Optional[str]:
        """
        Normalize ``text``, or else the first date embedded in it.

        Header captures such as ``"12.03.2024 Rev 0"`` carry trailing
        text the plain rules reject.
        """
        normalized = self.normalize(text)
        if normalized or not isinstance(text, str):
            return normalized
        for match in self.EMBEDDED_DATE.finditer(text):
            normalized = self.normalize(match.group(1))
            if normalized:
                return normalized
        return None

    def _from_serial(self, serial: Any) -> Optional[str]:
        try:
            moment = self.SERIAL_EPOCH + timedelta(days=float(serial))
        except (OverflowError, ValueError):
            logger.debug(f"Serial date out of range: {serial!r}")
            return None
        return moment.date().isoformat()

    @staticmethod
    def _build(year: int, month: int, day: int) -> Optional[str]:
        try:
            return date(year, month, day).isoformat()
        except ValueError:
            return None


_numeric_normalizer = NumericNormalizer()
_date_normalizer = DateNormalizer()


def normalize_numeric(value: Any) -> Decimal:
    """
    Parse a locale-noisy number; unreadable input gives ``Decimal(0)``.

    Example:
        >>> normalize_numeric("1,234.50")
        Decimal('1234.50')
        >>> normalize_numeric("")
        Decimal('0')
    """
    return _numeric_normalizer.normalize(value)


def normalize_date(value: Any) -> Optional[str]:
    """
    Normalize a PO date to ``YYYY-MM-DD``, or None when unresolved.

    Example:
        >>> normalize_date("01-Jan-24")
        "2024-01-01"
        >>> normalize_date("not a date") is None
        True
    """
    return _date_normalizer.normalize(value)


def extract_date(text: str) -> Optional[str]:
    """Normalize ``text`` or the first date found inside it."""
    return _date_normalizer.extract_date(text)
