from decimal import Decimal

from po_extraction.extraction.grid_mapper import (
    DrawingListParser,
    SpreadsheetColumnMapper,
    build_column_map,
    classify_header_cell,
    find_grid_date,
    find_grid_po_number,
    scan_unmapped_items,
    _parse_qty,
)
from po_extraction.extraction.parse_result import ColumnMap, UNASSIGNED


def test_column_map_first_match_wins():
    columns = build_column_map(["Drawing No", "Description", "Qty", "Quantity"])

    assert columns["quantity"] == 2
    assert columns["drawingNo"] == 0
    assert columns["description"] == 1


def test_column_map_never_overwrites():
    columns = ColumnMap()
    assert columns.assign("rate", 3)
    assert not columns.assign("rate", 7)
    assert columns["rate"] == 3
    assert columns["unit"] == UNASSIGNED
    assert not columns.has("unit")


def test_header_cell_classification():
    assert classify_header_cell("drawing file") == "drawingFile"
    assert classify_header_cell("file type") is None
    assert classify_header_cell("item code") == "drawingNo"
    assert classify_header_cell("part description") == "description"
    assert classify_header_cell("unit cost") == "rate"
    assert classify_header_cell("uom") == "unit"
    assert classify_header_cell("rev") == "revision"
    assert classify_header_cell("hsn code") == "hsnCode"
    assert classify_header_cell("delivery date") == "deliveryDate"
    assert classify_header_cell("cgst %") == "cgstPercent"
    assert classify_header_cell("remarks") == "remarks"
    assert classify_header_cell("material") == "drawingNo"
    assert classify_header_cell("sr no") is None


def test_header_row_found_below_title_rows():
    rows = [
        ["ACME ENGINEERING"],
        [],
        ["Sr", "Item Description", "Qty"],
        ["1", "Plate", "4"],
    ]
    index, columns = SpreadsheetColumnMapper().locate(rows)

    assert index == 2
    assert columns["description"] == 1
    assert columns["quantity"] == 2


def test_header_row_outside_scan_window():
    rows = [["filler"]] * 3 + [["Drawing No", "Qty"]]
    index, columns = SpreadsheetColumnMapper(scan_rows=3).locate(rows)

    assert index == UNASSIGNED
    assert columns is None


def test_row_scan_without_header():
    items = scan_unmapped_items([
        ["Bolt M8 zinc plated", "100", "2.50"],
        ["Total", "250"],
        ["x", "y"],
    ])

    assert len(items) == 1
    assert items[0].description == "Bolt M8 zinc plated"
    assert items[0].quantity == Decimal(100)
    assert items[0].rate == Decimal("2.50")


def test_grid_po_number_and_date():
    lines = ["ORDER # 7781 dated 03/02/2024"]

    assert find_grid_po_number(lines) == "7781"
    assert find_grid_date(lines) == "2024-02-03"
    assert find_grid_po_number(["Order acknowledgement"]) == ""


def test_drawing_register_mapped():
    records = DrawingListParser().parse([
        ["Drawing No", "Rev", "Description", "Qty", "Remarks", "Drawing File"],
        ["DRW-101", "B", "Base plate", 2, "urgent", "drw101.pdf"],
        ["", "", "", "", "", ""],
    ])

    assert len(records) == 1
    record = records[0]
    assert record.drawing_no == "DRW-101"
    assert record.revision == "B"
    assert record.description == "Base plate"
    assert record.qty == 2
    assert record.remarks == "urgent"
    assert record.drawing_file == "drw101.pdf"


def test_drawing_register_positional_fallback():
    records = DrawingListParser().parse([
        ["PN-4410", "A", "Shaft", "3"],
        ["ab", "x"],
        ["PN-4411", "", "Collar", ""],
    ])

    assert [r.drawing_no for r in records] == ["PN-4410", "PN-4411"]
    assert records[0].qty == 3
    assert records[1].qty == 1
    assert records[1].description == "Collar"


def test_drawing_codes_in_data_are_not_header_cues():
    rows = [["DRW-100", "A", "Shaft", "3"], ["DRW-101", "B", "Collar", "1"]]

    assert SpreadsheetColumnMapper().locate(rows) == (UNASSIGNED, None)
    records = DrawingListParser().parse(rows)
    assert [r.drawing_no for r in records] == ["DRW-100", "DRW-101"]
    assert records[0].qty == 3


def test_drawing_qty_parsing():
    assert _parse_qty("4 nos") == 4
    assert _parse_qty("abc") == 1
    assert _parse_qty(0) == 1
    assert _parse_qty(2.0) == 2
