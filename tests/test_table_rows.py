from po_extraction.extraction.table_rows import (
    chunk_table_rows,
    is_column_label_line,
    reconstruct_rows,
    sanitize_table_lines,
)


def test_wrapped_row_is_merged():
    rows = reconstruct_rows([
        "100234   Bracket Assembly   12   NOS   150",
        "  continuation of description",
    ])

    assert rows == ["100234   Bracket Assembly   12   NOS   150 continuation of description"]


def test_continuation_without_open_row_is_dropped():
    assert chunk_table_rows(["no gap here", "A1   Plate   2"]) == ["A1   Plate   2"]


def test_sanitize_drops_noise_lines():
    lines = [
        "",
        "15-Mar-24",
        "GSTIN: 27AAACS1234A1Z5",
        "Description   Qty   Rate",
        "----------------",
        "100234   Bracket   12   NOS   150",
    ]
    assert sanitize_table_lines(lines) == ["100234   Bracket   12   NOS   150"]


def test_sanitize_stops_at_total():
    lines = [
        "100234   Bracket   12   NOS   150",
        "Grand Total   1800",
        "100235   Not an item   1   NOS   1",
    ]
    assert sanitize_table_lines(lines) == ["100234   Bracket   12   NOS   150"]


def test_column_label_line():
    assert is_column_label_line("Sr. No   Description   Qty   Rate")
    assert not is_column_label_line("100234   Bracket   12   NOS")
    assert not is_column_label_line("Description of gear housing")
