import csv

import openpyxl
import pytest

from po_extraction.extraction.parse_result import GridDocument, TextDocument
from po_extraction.input_handler import InputHandler, PdfTextExtractor, SpreadsheetReader, TextExtractor
from po_extraction.input_handler import pdf_processor
from po_extraction.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    UnsupportedFileTypeError,
)


class _FakePage:
    def __init__(self, text):
        self.text = text

    def extract_text(self, **kwargs):
        return self.text


class _FakePdf:
    def __init__(self, texts):
        self.pages = [_FakePage(text) for text in texts]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class _StaticExtractor(TextExtractor):
    def __init__(self, text):
        self.text = text

    def extract(self, data):
        return self.text


def _write_workbook(path, rows):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    workbook.save(path)


def test_reads_workbook(tmp_path):
    path = tmp_path / "po.xlsx"
    _write_workbook(path, [
        ["Drawing No", "Description", "Qty", "Rate"],
        ["DRW-100", None, 5, 250],
    ])

    grid = SpreadsheetReader().read(path)

    assert isinstance(grid, GridDocument)
    assert grid.rows[0] == ("Drawing No", "Description", "Qty", "Rate")
    assert grid.rows[1] == ("DRW-100", "", 5, 250)


def test_reads_csv(tmp_path):
    path = tmp_path / "po.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerows([["Drawing No", "Qty"], ["DRW-7", "3"]])

    grid = SpreadsheetReader().read(path)
    assert grid.rows == (("Drawing No", "Qty"), ("DRW-7", "3"))


def test_corrupt_workbook(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip archive")

    with pytest.raises(CorruptedFileError):
        SpreadsheetReader().read(path)


def test_unsupported_spreadsheet_extension(tmp_path):
    with pytest.raises(UnsupportedFileTypeError):
        SpreadsheetReader().read(tmp_path / "po.ods")


def test_reads_spreadsheet_bytes(tmp_path):
    path = tmp_path / "po.xlsx"
    _write_workbook(path, [["Drawing No", "Qty"], ["DRW-3", 4]])
    reader = SpreadsheetReader()

    workbook_grid = reader.read_bytes(path.read_bytes(), ".XLSX")
    csv_grid = reader.read_bytes("Drawing No,Qty\r\nDRW-3,4\r\n".encode("utf-8-sig"), ".csv")

    assert workbook_grid.rows == (("Drawing No", "Qty"), ("DRW-3", 4))
    assert csv_grid.rows == (("Drawing No", "Qty"), ("DRW-3", "4"))
    with pytest.raises(UnsupportedFileTypeError):
        reader.read_bytes(b"data", ".ods")
    with pytest.raises(CorruptedFileError):
        reader.read_bytes(b"not a zip archive")


def test_pdf_pages_joined_and_capped(monkeypatch):
    monkeypatch.setattr(
        pdf_processor.pdfplumber, "open",
        lambda stream: _FakePdf(["page one", None, "page three"])
    )

    assert PdfTextExtractor(max_pages=2).extract(b"%PDF") == "page one\n"
    assert PdfTextExtractor(max_pages=5).extract(b"%PDF") == "page one\n\npage three"


def test_pdf_open_failure(monkeypatch):
    def broken(stream):
        raise ValueError("no trailer")

    monkeypatch.setattr(pdf_processor.pdfplumber, "open", broken)

    with pytest.raises(CorruptedFileError):
        PdfTextExtractor().extract(b"%PDF")


def test_empty_pdf_bytes():
    assert PdfTextExtractor().extract(b"") == ""


def test_handler_loads_by_modality(tmp_path):
    pdf = tmp_path / "order.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    sheet = tmp_path / "order.csv"
    sheet.write_text("Drawing No,Qty\nDRW-1,2\n", encoding="utf-8")

    handler = InputHandler(text_extractor=_StaticExtractor("PO No: 1"))

    assert handler.load(pdf) == TextDocument("PO No: 1")
    assert isinstance(handler.load(sheet), GridDocument)


def test_handler_errors(tmp_path):
    handler = InputHandler()

    with pytest.raises(DocumentNotFoundError):
        handler.load(tmp_path / "missing.pdf")

    doc = tmp_path / "order.docx"
    doc.write_bytes(b"x")
    with pytest.raises(UnsupportedFileTypeError):
        handler.load(doc)

    empty = tmp_path / "empty.csv"
    empty.write_bytes(b"")
    with pytest.raises(CorruptedFileError):
        handler.load(empty)


def test_collect_files(tmp_path):
    for name in ("b.pdf", "a.csv", "notes.txt"):
        (tmp_path / name).write_bytes(b"x")

    files = InputHandler().collect_files(tmp_path)
    assert [f.name for f in files] == ["a.csv", "b.pdf"]

    with pytest.raises(DocumentNotFoundError):
        InputHandler().collect_files(tmp_path / "nope")
