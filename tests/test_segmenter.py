from po_extraction.extraction.segmenter import TextSegmenter, is_table_header_line


def test_segments_header_table_footer(sidel_po_text):
    sections = TextSegmenter().segment(sidel_po_text)

    assert sections.header_text.startswith("SIDEL INDIA PVT LTD")
    assert sections.header_text.endswith("Payment Terms: 45 days from receipt")
    assert sections.table_lines == ["Gear shaft", "300123456 10 NOS 1,250.00 12500.00"]
    assert sections.footer_text.startswith("Total Value")


def test_table_header_line_belongs_to_no_region(sidel_po_text):
    sections = TextSegmenter().segment(sidel_po_text)
    everything = "\n".join([sections.header_text, sections.table_text, sections.footer_text])

    assert "Item   Description" not in everything


def test_no_table_header_is_degraded_mode():
    text = "Purchase Order No: 77\nThank you"
    sections = TextSegmenter().segment(text)

    assert sections.header_text == text
    assert sections.table_lines == []
    assert sections.footer_text == ""


def test_empty_text():
    sections = TextSegmenter().segment("")
    assert not sections.has_table
    assert sections.header_text == ""


def test_material_qty_header():
    assert is_table_header_line("Material Code   Qty   Rate")
    assert not is_table_header_line("Item 10 shipped")


def test_table_runs_to_end_without_terminator():
    sections = TextSegmenter().segment("Head\nItem  Description\nrow one\nrow two")
    assert sections.table_lines == ["row one", "row two"]
    assert sections.footer_text == ""
