import time
from decimal import Decimal

from po_extraction import parse_text_document
from po_extraction.extraction.company_parsers import parse_sidel_items
from po_extraction.extraction.company_profiles import CompanyCode
from po_extraction.extraction.line_items import (
    LineItemMapper,
    TableContext,
    map_row_to_item,
    parse_column_items,
    parse_company_items,
    parse_fallback_items,
    parse_structured_items,
)
from po_extraction.extraction.parse_result import LineItem


def test_column_tier_reads_wrapped_row():
    items, tier = LineItemMapper().map([
        "100234   Bracket Assembly   12   NOS   150",
        "  continuation of description",
    ])

    assert tier == "columns"
    assert len(items) == 1
    assert items[0].drawing_no == "100234"
    assert items[0].description == "Bracket Assembly"
    assert items[0].quantity == Decimal(12)
    assert items[0].unit == "NOS"
    assert items[0].rate == Decimal(150)


def test_structured_tier_wins_first():
    line = "300123456 Gear shaft 15-Mar-24 1,250.00 10 NOS 9 9 12,500.00"
    items, tier = LineItemMapper().map([line], CompanyCode.SIDEL)

    assert tier == "structured"
    item = items[0]
    assert item.drawing_no == "300123456"
    assert item.description == "Gear shaft"
    assert item.delivery_date == "2024-03-15"
    assert item.rate == Decimal("1250.00")
    assert item.quantity == Decimal(10)
    assert item.cgst_percent == Decimal(9)
    assert item.sgst_percent == Decimal(9)


def test_company_tier_for_sidel():
    lines = ["Gear shaft", "300123456 10 NOS 1,250.00 12500.00"]
    items, tier = LineItemMapper().map(lines, CompanyCode.SIDEL)

    assert tier == "company"
    assert items[0].description == "Gear shaft"
    assert items[0].quantity == Decimal(10)
    assert items[0].rate == Decimal("1250.00")


def test_company_tier_not_applicable_without_parser():
    context = TableContext(table_lines=["x"], company_code=CompanyCode.PHOENIX)
    assert parse_company_items(context) is None


def test_sidel_quantity_without_unit():
    items = parse_sidel_items(["300123457 Coupling 4 880.00"])

    assert items[0].description == "Coupling"
    assert items[0].quantity == Decimal(4)
    assert items[0].rate == Decimal("880.00")


def test_sidel_rate_two_tokens_after_quantity():
    items = parse_sidel_items(["300123458 Bush 6 NOS 75.50 453.00"])

    assert items[0].description == "Bush"
    assert items[0].unit == "NOS"
    assert items[0].rate == Decimal("75.50")


def test_sidel_description_defaults_to_code():
    items = parse_sidel_items(["300123459 2 NOS 10 20"])
    assert items[0].description == "Item 300123459"


def test_fallback_tier_five_lines():
    lines = [
        "ref 1001 lorem",
        "ref 1002 ipsum",
        "ref 1003 dolor",
        "ref 1004 sit",
        "ref 1005 amet",
    ]
    items, tier = LineItemMapper().map(lines)

    assert tier == "fallback"
    assert len(items) == 5
    assert all(item.quantity == Decimal(1) and item.rate == Decimal(0) for item in items)
    assert items[0].drawing_no == "ref"
    assert items[0].description == "1001 lorem"


def test_fallback_is_capped():
    context = TableContext(table_lines=[f"line {n}" for n in range(8)])
    assert len(parse_fallback_items(context, limit=5)) == 5


def test_fallback_without_digits_uses_first_lines():
    context = TableContext(table_lines=["alpha beta", "gamma delta"])
    items = parse_fallback_items(context)
    assert [item.drawing_no for item in items] == ["alpha", "gamma"]


def test_tiers_without_table_are_not_applicable():
    context = TableContext(table_lines=[])
    assert parse_structured_items(context) is None
    assert parse_column_items(context) is None
    assert parse_fallback_items(context) is None
    assert LineItemMapper().map([]) == ([], None)


def test_first_non_empty_tier_short_circuits():
    calls = []

    def tier(name, result):
        def run(context):
            calls.append(name)
            return result
        return name, run

    mapper = LineItemMapper()
    mapper.tiers = [
        tier("one", None),
        tier("two", []),
        tier("three", [LineItem(description="x")]),
        tier("four", [LineItem(description="y")]),
    ]
    items, name = mapper.map(["anything"])

    assert name == "three"
    assert calls == ["one", "two", "three"]


def test_row_without_unit_uses_numeric_columns():
    item = map_row_to_item("A-100   Bracket   4   250.00", 0)

    assert item.description == "Bracket"
    assert item.quantity == Decimal(4)
    assert item.rate == Decimal("250.00")
    assert item.unit == "NOS"


def test_row_tax_columns_follow_rate():
    item = map_row_to_item("100234   Bracket   12   NOS   150   9   9", 0)

    assert item.rate == Decimal(150)
    assert item.cgst_percent == Decimal(9)
    assert item.sgst_percent == Decimal(9)
    assert item.igst_percent == Decimal(0)


def test_non_item_rows_rejected():
    assert map_row_to_item("100   Address of site   5   2", 0) is None
    assert map_row_to_item("abc   def", 0) is None


def test_row_unit_is_upper_cased():
    item = map_row_to_item("100234   Bracket   12   nos   150", 0)

    assert item.unit == "NOS"
    assert item.quantity == Decimal(12)


def test_long_digit_run_parses_quickly():
    started = time.perf_counter()
    result = parse_text_document("Item Description\n" + "1" * 40000)

    assert time.perf_counter() - started < 2.0
    assert result.item_count == 1
