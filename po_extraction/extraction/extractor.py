"""
Purchase Order Extractor.

Entry points of the extraction engine. Both pipelines end in the same
ParseResult: a header plus ordered line items.

    text:  segment -> detect company -> header fields -> line item tiers
    grid:  locate header row -> detect company -> header fields
           -> column-map read, else keyword row scan

The engine is synchronous and keeps no state between calls; the only
shared data is the read-only company registry. Malformed content never
raises: it degrades to default header fields and fewer (or no) items.
Only arguments of the wrong shape raise InvalidDocumentError.
"""

from typing import Any, List, Optional, Sequence, Union

from config import get_config
from po_extraction.utils.exceptions import InvalidDocumentError
from po_extraction.utils.logger import get_logger
from po_extraction.postprocessor.processor import PostProcessor
from .company_profiles import CompanyCode, CompanyDetector
from .grid_mapper import (
    DrawingListParser,
    SpreadsheetColumnMapper,
    find_grid_date,
    find_grid_po_number,
    read_mapped_items,
    row_text,
    scan_unmapped_items,
)
from .header_fields import HeaderFieldExtractor
from .line_items import LineItemMapper
from .parse_result import DrawingRecord, GridDocument, ParseResult, TextDocument
from .segmenter import TextSegmenter

# Initialize module logger
logger = get_logger(__name__)


class PurchaseOrderExtractor:
    """
    Converts purchase order text or grids into ParseResults.

    One instance can serve any number of documents, including
    concurrently: no per-document state is stored on it.

    Example:
        >>> extractor = PurchaseOrderExtractor()
        >>> result = extractor.parse_text(pdf_text)
        >>> result.header.po_number, len(result.items)
        ("4500012345", 3)
    """

    def __init__(self) -> None:
        self.segmenter = TextSegmenter()
        self.detector = CompanyDetector()
        self.header_extractor = HeaderFieldExtractor()
        self.line_item_mapper = LineItemMapper()
        self.column_mapper = SpreadsheetColumnMapper()
        self.post_processor = PostProcessor()
        self.grid_header_rows = int(get_config("parsing.grid_header_text_rows", 20))

    # -------------------------------------------------------------------------
    # Text stream
    # -------------------------------------------------------------------------

    def parse_text(self, document: Union[str, TextDocument]) -> ParseResult:
        """
        Parse text extracted from a purchase order PDF.

        Args:
            document: The extracted text, or a TextDocument.

        Returns:
            ParseResult; without a recognisable table the items are empty.

        Raises:
            InvalidDocumentError: If the argument is not text.
        """
        content = _text_content(document)
        sections = self.segmenter.segment(content)

        company_code = self.detector.detect(sections.header_scope or content)
        header = self.header_extractor.extract(
            sections.header_text,
            sections.footer_text,
            company_code,
            fallback_text=content
        )

        raw_items, tier = self.line_item_mapper.map(sections.table_lines, company_code)
        result = ParseResult(
            header=self.post_processor.finalize_header(header),
            items=self.post_processor.finalize_items(raw_items),
        )

        logger.info(
            f"Parsed PO text: company={company_code}, po={result.header.po_number or 'N/A'}, "
            f"items={result.item_count} (tier: {tier or 'none'})"
        )
        return result

    # -------------------------------------------------------------------------
    # Spreadsheet grid
    # -------------------------------------------------------------------------

    def parse_grid(self, document: Union[Sequence[Sequence[Any]], GridDocument]) -> ParseResult:
        """
        Parse a purchase order grid read from a spreadsheet.

        Args:
            document: Rows of cell values, or a GridDocument.

        Returns:
            ParseResult.

        Raises:
            InvalidDocumentError: If the argument is not a grid.
        """
        rows = _grid_rows(document)
        header_index, columns = self.column_mapper.locate(rows)

        limit = self.grid_header_rows
        if header_index != -1:
            limit = min(limit, header_index)
        header_lines = [line for line in (row_text(row) for row in rows[:limit]) if line]
        header_text = '\n'.join(header_lines)

        company_code = self.detector.detect(header_text)
        header = self.header_extractor.extract(header_text, '', company_code)
        if not header.po_number:
            header.po_number = find_grid_po_number(header_lines)
        if not header.po_date:
            header.po_date = find_grid_date(header_lines)

        raw_items = read_mapped_items(rows, header_index, columns)
        tier = 'columns'
        if not raw_items:
            raw_items = scan_unmapped_items(rows) or []
            tier = 'scan' if raw_items else None

        result = ParseResult(
            header=self.post_processor.finalize_header(header),
            items=self.post_processor.finalize_items(raw_items),
        )

        logger.info(
            f"Parsed PO grid: company={company_code}, po={result.header.po_number or 'N/A'}, "
            f"items={result.item_count} (tier: {tier or 'none'})"
        )
        return result

    def parse_drawings(self, document: Union[Sequence[Sequence[Any]], GridDocument]) -> List[DrawingRecord]:
        """Parse a customer drawing register grid."""
        return DrawingListParser(self.column_mapper).parse(_grid_rows(document))


def _text_content(document: Any) -> str:
    if isinstance(document, TextDocument):
        document = document.content
    if document is None:
        return ''
    if not isinstance(document, str):
        raise InvalidDocumentError("text", f"expected str, got {type(document).__name__}")
    return document


def _is_row(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _grid_rows(document: Any) -> Sequence[Sequence[Any]]:
    if isinstance(document, GridDocument):
        return document.rows
    if document is None:
        return ()
    if not isinstance(document, (list, tuple)):
        raise InvalidDocumentError("grid", f"expected a sequence of rows, got {type(document).__name__}")
    for index, row in enumerate(document):
        if not _is_row(row):
            raise InvalidDocumentError("grid", f"row {index} is {type(row).__name__}, not a sequence of cells")
    return document


_default_extractor: Optional[PurchaseOrderExtractor] = None


def _extractor() -> PurchaseOrderExtractor:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = PurchaseOrderExtractor()
    return _default_extractor


def parse_text_document(content: Union[str, TextDocument]) -> ParseResult:
    """
    Parse purchase order text extracted from a PDF.

    Example:
        >>> result = parse_text_document(text)
        >>> [item.drawing_no for item in result.items]
        ["100234"]
    """
    return _extractor().parse_text(content)


def parse_grid_document(rows: Union[Sequence[Sequence[Any]], GridDocument]) -> ParseResult:
    """
    Parse a purchase order grid read from a spreadsheet.

    Example:
        >>> result = parse_grid_document([
        ...     ["Drawing No", "Description", "Qty", "Rate"],
        ...     ["DRW-100", "Steel Bracket", "5", "250"],
        ... ])
        >>> result.items[0].quantity, result.items[0].unit
        (Decimal('5'), "NOS")
    """
    return _extractor().parse_grid(rows)


def parse_drawing_grid(rows: Union[Sequence[Sequence[Any]], GridDocument]) -> List[DrawingRecord]:
    """Parse a customer drawing register grid into DrawingRecords."""
    return _extractor().parse_drawings(rows)


__all__ = [
    'PurchaseOrderExtractor',
    'parse_text_document',
    'parse_grid_document',
    'parse_drawing_grid',
    'CompanyCode',
]
