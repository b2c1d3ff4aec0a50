import json
from decimal import Decimal

import pytest

from po_extraction import (
    GridDocument,
    TextDocument,
    parse_drawing_grid,
    parse_grid_document,
    parse_text_document,
)
from po_extraction.utils.exceptions import InvalidDocumentError


def test_grid_clean_header():
    result = parse_grid_document([
        ["Drawing No", "Description", "Qty", "Rate"],
        ["DRW-100", "Steel Bracket", "5", "250"],
    ])

    assert result.item_count == 1
    item = result.items[0]
    assert item.drawing_no == "DRW-100"
    assert item.description == "Steel Bracket"
    assert item.quantity == Decimal(5)
    assert item.rate == Decimal(250)
    assert item.unit == "NOS"
    assert item.cgst_percent == Decimal(0)
    assert item.delivery_date is None


def test_grid_header_fields_and_extra_columns():
    result = parse_grid_document(GridDocument.from_rows([
        ["PHOENIX MECANO INDIA PVT LTD"],
        ["PO No: PM/2024/118", "", "Date: 05-04-2024"],
        [],
        ["Sr No", "Item Code", "Description", "Qty", "UOM", "Rate", "CGST %", "SGST %"],
        [1, "PM-101", "Hinge plate", 10, "pcs", 45.5, 9, 9],
        ["", "", "Total", "", "", 455],
    ]))

    header = result.header
    assert header.company_code == "PHOENIX"
    assert header.company_name == "PHOENIX MECANO INDIA PVT LTD"
    assert header.po_number == "PM/2024/118"
    assert header.po_date == "2024-04-05"

    assert result.item_count == 1
    item = result.items[0]
    assert item.drawing_no == "PM-101"
    assert item.unit == "PCS"
    assert item.rate == Decimal("45.5")
    assert item.cgst_percent == Decimal(9)
    assert item.sgst_percent == Decimal(9)


def test_grid_without_header_row_scans():
    result = parse_grid_document([
        ["ORDER # 7781 dated 03/02/2024"],
        ["Bolt M8 zinc plated", "100", "2.50"],
    ])

    assert result.header.po_number == "7781"
    assert result.items[0].drawing_no == "DRW-1"
    assert result.items[0].quantity == Decimal(100)


def test_grid_drawing_codes_are_not_a_header_row():
    result = parse_grid_document([
        ["DRW-100", "Steel Bracket", "5", "250"],
        ["DRW-101", "Hex Bolt", "2", "10"],
    ])

    assert result.item_count == 2
    assert [item.quantity for item in result.items] == [Decimal(5), Decimal(2)]
    assert [item.rate for item in result.items] == [Decimal(250), Decimal(10)]


def test_text_sidel_end_to_end(sidel_po_text):
    result = parse_text_document(sidel_po_text)

    assert result.header.company_code == "SIDEL"
    assert result.header.po_number == "4500012345"
    assert len(result.items) == 1
    assert result.items[0].drawing_no == "300123456"
    assert result.items[0].description == "Gear shaft"


def test_text_document_wrapper(sidel_po_text):
    assert parse_text_document(TextDocument(sidel_po_text)).to_dict() == \
        parse_text_document(sidel_po_text).to_dict()


def test_parsing_is_idempotent(sidel_po_text):
    assert parse_text_document(sidel_po_text).to_json() == parse_text_document(sidel_po_text).to_json()


def test_no_table_is_degraded_not_failure():
    result = parse_text_document("Purchase Order No: 77\nPayment Terms: 30 days")

    assert result.header is not None
    assert result.header.po_number == "77"
    assert result.header.credit_days == "30"
    assert result.items == []


def test_descriptions_never_empty(sidel_po_text):
    documents = [
        sidel_po_text,
        "Item  Description\n100234   Bracket Assembly   12   NOS   150\nref 12\n",
        "Item  Description\n\x00\x01 ### 12 ##\n",
    ]
    for text in documents:
        for item in parse_text_document(text).items:
            assert item.description
            assert item.drawing_no


def test_nonsense_content_never_raises():
    parse_text_document("")
    parse_text_document(None)
    parse_grid_document([])
    parse_grid_document([[None, object()], ()])


def test_wrong_argument_shape_raises():
    with pytest.raises(InvalidDocumentError):
        parse_text_document(123)
    with pytest.raises(InvalidDocumentError):
        parse_grid_document("not a grid")
    with pytest.raises(InvalidDocumentError):
        parse_grid_document([["a"], "row"])


def test_json_output_uses_camel_case_numbers(sidel_po_text):
    data = json.loads(parse_text_document(sidel_po_text).to_json())

    assert data["header"]["poNumber"] == "4500012345"
    assert data["items"][0]["drawingNo"] == "300123456"
    assert data["items"][0]["quantity"] == 10
    assert data["items"][0]["rate"] == 1250


def test_drawing_grid_entry_point():
    records = parse_drawing_grid([["Drawing No", "Rev"], ["DRW-9", "C"]])
    assert records[0].to_dict()["drawingNo"] == "DRW-9"
    assert records[0].revision == "C"
