from datetime import date, datetime
from decimal import Decimal

from po_extraction.postprocessor.normalizers import extract_date, normalize_date, normalize_numeric


def test_numeric_strips_thousands_separator():
    assert normalize_numeric("1,234.50") == Decimal("1234.50")


def test_numeric_unparsable_is_zero():
    assert normalize_numeric("abc") == Decimal(0)
    assert normalize_numeric("") == Decimal(0)
    assert normalize_numeric(None) == Decimal(0)
    assert normalize_numeric("1.2.3") == Decimal(0)


def test_numeric_currency_markers():
    assert normalize_numeric("Rs. 2,000") == Decimal("2000")
    assert normalize_numeric("₹ 1,500.75") == Decimal("1500.75")
    assert normalize_numeric("INR 99") == Decimal("99")


def test_numeric_native_values():
    assert normalize_numeric(12) == Decimal(12)
    assert normalize_numeric(45.5) == Decimal("45.5")
    assert normalize_numeric(float("nan")) == Decimal(0)
    assert normalize_numeric("-15") == Decimal(-15)


def test_date_month_abbreviation():
    assert normalize_date("01-Jan-24") == "2024-01-01"
    assert normalize_date("05-SEPT-2023") == "2023-09-05"
    assert normalize_date("7-jul-2024") == "2024-07-07"


def test_date_numeric_forms():
    assert normalize_date("15/03/2024") == "2024-03-15"
    assert normalize_date("12.03.24") == "2024-03-12"
    assert normalize_date("1-2-2024") == "2024-02-01"


def test_two_digit_year_always_2000s():
    assert normalize_date("01-01-99") == "2099-01-01"


def test_date_unresolved_is_none():
    assert normalize_date("not a date") is None
    assert normalize_date("") is None
    assert normalize_date(None) is None
    assert normalize_date("31-02-2024") is None
    assert normalize_date("01-Foo-24") is None


def test_date_serial_and_objects():
    assert normalize_date(45366) == "2024-03-15"
    assert normalize_date(datetime(2024, 3, 15, 10, 30)) == "2024-03-15"
    assert normalize_date(date(2024, 3, 15)) == "2024-03-15"


def test_date_iso_passthrough():
    assert normalize_date("2024-03-15") == "2024-03-15"


def test_extract_date_inside_longer_value():
    assert extract_date("12.03.2024 Rev 0") == "2024-03-12"
    assert extract_date("TBD") is None
