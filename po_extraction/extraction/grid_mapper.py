"""
Spreadsheet Column Mapper (grid path).

Customer spreadsheets have no fixed layout. The mapper looks for a
header row among the first rows of the grid, assigns column indices to
semantic fields from the header cell labels, and then reads the rows
below positionally.

Purchase order grids fall back to a keyword-driven row scan when no
header row is found. Drawing registers fall back to a fixed column
order when the first cell looks like an identifier.
"""

import re
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Tuple

from config import get_config
from po_extraction.utils.helpers import cell_text, clean_text, join_nonempty
from po_extraction.utils.logger import get_logger
from po_extraction.postprocessor.normalizers import normalize_date, normalize_numeric
from .parse_result import ColumnMap, DrawingRecord, LineItem, UNASSIGNED

# Initialize module logger
logger = get_logger(__name__)

PO_ITEMS = 'po_items'
DRAWINGS = 'drawings'

DRAWING_CUES = ('drawing', 'drw', 'part no', 'item code')
GENERIC_CODE_CUES = ('item', 'code', 'part', 'material')
DESCRIPTION_CUES = ('desc',)
QUANTITY_CUES = ('qty', 'quantity')
RATE_CUES = ('rate', 'price', 'unit cost')

# Row text that never describes an item
EXCLUDED_ROW_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r'^cgst', r'^sgst', r'^igst', r'^\s*tax', r'^\s*total', r'^\s*sub\s*total',
    r'^\s*grand\s*total', r'^\s*amount', r'^gst\s*\d+', r'^taxable', r'^remarks',
    r'^condition', r'^sign', r'^authori[sz]ed', r'^payment', r'^delivery\s*date',
    r'^po\b', r'^order\b',
))

# First cell of a summary row under a mapped header
SUMMARY_ROW = re.compile(
    r'^(?:sub\s*total|grand\s*total|total|cgst|sgst|igst|gst|tax|taxable|amount|round\s*off)\b',
    re.IGNORECASE
)

NUMERIC_CELL = re.compile(r'^\d+[\d.,]*$')
HAS_LETTER = re.compile(r'[A-Za-z]')
HAS_DIGIT = re.compile(r'\d')
IDENTIFIER_LIKE = re.compile(r'[A-Za-z0-9]')
LEADING_INT = re.compile(r'^\s*(-?\d+)')

GRID_PO_NUMBER = re.compile(r'\b(?:PO|ORDER)\b\s*(?:NO\b\.?|#)?\s*[:\-]?\s*([A-Z0-9][A-Z0-9\-./]*)', re.IGNORECASE)
GRID_DATE = re.compile(r'\b(\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4}|\d{4}-\d{2}-\d{2})\b')

DESCRIPTION_LIMIT = 100
MAX_QUANTITY = Decimal(1000000)


def _has_any(cell: str, cues: Sequence[str]) -> bool:
    return any(cue in cell for cue in cues)


def row_cells(row: Sequence[Any]) -> List[str]:
    """Render every cell of a row as clean text."""
    return [cell_text(value) for value in row]


def row_text(row: Sequence[Any], separator: str = '  ') -> str:
    """Join the non-blank cells of a row, column gap preserved."""
    return join_nonempty(row_cells(row), separator)


def is_header_row(cells: Sequence[str], mode: str = PO_ITEMS) -> bool:
    """
    Check if a row of lower-cased cells is a column header row.

    Any drawing/item-number cue qualifies. For purchase order grids a
    row with both a description cue and a quantity cue also qualifies.
    Only cells without digits count as labels, so data values such as
    ``drw-100`` never make a row a header row.
    """
    cells = [cell for cell in cells if not HAS_DIGIT.search(cell)]
    if any(_has_any(cell, DRAWING_CUES) for cell in cells):
        return True
    if mode == PO_ITEMS:
        has_description = any(_has_any(cell, DESCRIPTION_CUES) for cell in cells)
        has_quantity = any(_has_any(cell, QUANTITY_CUES) for cell in cells)
        return has_description and has_quantity
    return False


def classify_header_cell(cell: str) -> Optional[str]:
    """
    Name the field a lower-cased header label stands for, if any.

    Example:
        >>> classify_header_cell("drawing file")
        "drawingFile"
        >>> classify_header_cell("file type") is None
        True
        >>> classify_header_cell("item description")
        "description"
    """
    if 'drawing_file' in cell or 'drawing file' in cell or ('file' in cell and 'type' not in cell):
        return 'drawingFile'
    if _has_any(cell, DRAWING_CUES):
        return 'drawingNo'
    if 'cgst' in cell:
        return 'cgstPercent'
    if 'sgst' in cell:
        return 'sgstPercent'
    if 'igst' in cell:
        return 'igstPercent'
    if 'rev' in cell:
        return 'revision'
    if _has_any(cell, DESCRIPTION_CUES):
        return 'description'
    if _has_any(cell, QUANTITY_CUES):
        return 'quantity'
    if _has_any(cell, RATE_CUES):
        return 'rate'
    if 'unit' in cell or 'uom' in cell:
        return 'unit'
    if 'hsn' in cell:
        return 'hsnCode'
    if 'delivery' in cell or 'due date' in cell:
        return 'deliveryDate'
    if 'disc' in cell:
        return 'discount'
    if 'remark' in cell or 'note' in cell:
        return 'remarks'
    if _has_any(cell, GENERIC_CODE_CUES):
        return 'drawingNo'
    return None


def build_column_map(header_row: Sequence[Any]) -> ColumnMap:
    """
    Assign header columns to fields, first matching column wins.

    Example:
        >>> columns = build_column_map(["Drawing No", "Description", "Qty", "Qty"])
        >>> columns['quantity']
        2
    """
    columns = ColumnMap()
    for index, cell in enumerate(row_cells(header_row)):
        name = classify_header_cell(cell.lower())
        if name is not None:
            columns.assign(name, index)
    return columns


class SpreadsheetColumnMapper:
    """
    Locates the header row of a grid and builds its ColumnMap.

    Attributes:
        scan_rows: How many leading rows may hold the header row

    Example:
        >>> mapper = SpreadsheetColumnMapper()
        >>> index, columns = mapper.locate(rows)
        >>> index, columns['drawingNo']
        (0, 0)
    """

    def __init__(self, scan_rows: Optional[int] = None) -> None:
        self.scan_rows = int(scan_rows or get_config("parsing.header_scan_rows", 50))

    def find_header_row(self, rows: Sequence[Sequence[Any]], mode: str = PO_ITEMS) -> int:
        for index, row in enumerate(rows[:self.scan_rows]):
            cells = [cell.lower() for cell in row_cells(row)]
            if is_header_row(cells, mode):
                return index
        return UNASSIGNED

    def locate(
        self,
        rows: Sequence[Sequence[Any]],
        mode: str = PO_ITEMS
    ) -> Tuple[int, Optional[ColumnMap]]:
        """
        Find the header row and map its columns.

        Returns:
            (header row index, ColumnMap), or (-1, None) when no header
            row exists within the scan window.
        """
        index = self.find_header_row(rows, mode)
        if index == UNASSIGNED:
            logger.debug(f"No header row within the first {self.scan_rows} rows")
            return UNASSIGNED, None
        columns = build_column_map(rows[index])
        logger.debug(f"Header row {index}: {columns}")
        return index, columns


def _cell(row: Sequence[Any], index: int) -> Any:
    if index == UNASSIGNED or index >= len(row):
        return None
    return row[index]


def _text(row: Sequence[Any], index: int) -> str:
    return cell_text(_cell(row, index))


def is_excluded_row(cells: Sequence[str]) -> bool:
    text = ' '.join(cell for cell in cells if cell).lower()
    return any(pattern.search(text) for pattern in EXCLUDED_ROW_PATTERNS)


# =============================================================================
# PURCHASE ORDER LINE ITEM TIERS
# =============================================================================

def read_mapped_items(
    rows: Sequence[Sequence[Any]],
    header_index: int,
    columns: Optional[ColumnMap]
) -> Optional[List[LineItem]]:
    """
    Read the rows below the header row through the column map.

    Rows with neither a drawing number nor a description are skipped,
    as are total/tax rows. A row with only a drawing number uses it as
    its description.
    """
    if columns is None:
        return None

    items: List[LineItem] = []
    for row in rows[header_index + 1:]:
        cells = row_cells(row)
        first = next((cell for cell in cells if cell), '')
        if not first or SUMMARY_ROW.match(first):
            continue

        drawing_no = _text(row, columns['drawingNo'])
        description = _text(row, columns['description'])
        if not drawing_no and not description:
            continue

        delivery_raw = _cell(row, columns['deliveryDate'])
        items.append(LineItem(
            drawing_no=drawing_no,
            description=description or drawing_no,
            quantity=normalize_numeric(_cell(row, columns['quantity'])),
            unit=_text(row, columns['unit']).upper(),
            rate=normalize_numeric(_cell(row, columns['rate'])),
            cgst_percent=normalize_numeric(_cell(row, columns['cgstPercent'])),
            sgst_percent=normalize_numeric(_cell(row, columns['sgstPercent'])),
            igst_percent=normalize_numeric(_cell(row, columns['igstPercent'])),
            delivery_date=normalize_date(delivery_raw) or cell_text(delivery_raw) or None,
            discount=normalize_numeric(_cell(row, columns['discount'])),
            hsn_code=_text(row, columns['hsnCode']) or None,
            revision_no=_text(row, columns['revision']) or None,
        ))
    return items


def scan_unmapped_items(rows: Sequence[Sequence[Any]]) -> Optional[List[LineItem]]:
    """
    Keyword-driven scan of a grid with no header row.

    A row qualifies when it has a numeric cell and a text cell that
    reads like a description. The first numeric cell is the quantity
    and the last one the rate.
    """
    if not rows:
        return None

    items: List[LineItem] = []
    for row in rows:
        cells = [cell for cell in row_cells(row) if cell]
        if len(cells) < 2 or is_excluded_row(cells):
            continue

        numbers = [cell for cell in cells if NUMERIC_CELL.match(cell)]
        if not numbers:
            continue
        description = next(
            (cell for cell in cells
             if 3 < len(cell) < 200 and HAS_LETTER.search(cell) and not cell.isdigit()),
            ''
        )
        if not description:
            continue

        quantity = normalize_numeric(numbers[0])
        rate = normalize_numeric(numbers[-1])
        if not Decimal(0) < quantity < MAX_QUANTITY:
            continue

        items.append(LineItem(
            description=description[:DESCRIPTION_LIMIT],
            quantity=max(quantity, Decimal(1)),
            rate=rate,
        ))
    return items


def find_grid_po_number(lines: Sequence[str]) -> str:
    """First ``PO No``/``Order #`` token carrying a digit, upper-cased."""
    for line in lines:
        for match in GRID_PO_NUMBER.finditer(line):
            token = clean_text(match.group(1)).upper()
            if any(char.isdigit() for char in token):
                return token
    return ''


def find_grid_date(lines: Sequence[str]) -> str:
    """First date-like token that normalizes, as an ISO date."""
    for line in lines:
        for match in GRID_DATE.finditer(line):
            normalized = normalize_date(match.group(1))
            if normalized:
                return normalized
    return ''


# =============================================================================
# DRAWING REGISTER
# =============================================================================

def _parse_qty(value: Any) -> int:
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        try:
            qty = int(value)
        except (OverflowError, ValueError):
            return 1
        return qty or 1
    match = LEADING_INT.match(cell_text(value))
    return (int(match.group(1)) or 1) if match else 1


class DrawingListParser:
    """
    Reads a customer drawing register grid into DrawingRecords.

    Example:
        >>> records = DrawingListParser().parse([
        ...     ["Drawing No", "Rev", "Description", "Qty"],
        ...     ["DRW-101", "B", "Base plate", 2],
        ... ])
        >>> records[0].drawing_no, records[0].revision, records[0].qty
        ("DRW-101", "B", 2)
    """

    def __init__(self, mapper: Optional[SpreadsheetColumnMapper] = None) -> None:
        self.mapper = mapper or SpreadsheetColumnMapper()

    def parse(self, rows: Sequence[Sequence[Any]]) -> List[DrawingRecord]:
        if not rows:
            return []

        header_index, columns = self.mapper.locate(rows, DRAWINGS)
        if columns is not None:
            records = self._read_mapped(rows[header_index + 1:], columns)
        else:
            records = self._read_positional(rows)

        logger.info(f"Drawing register parsed: {len(records)} drawings")
        return records

    @staticmethod
    def _read_mapped(rows: Sequence[Sequence[Any]], columns: ColumnMap) -> List[DrawingRecord]:
        records = []
        for row in rows:
            drawing_no = _text(row, columns['drawingNo'])
            if not drawing_no:
                continue
            records.append(DrawingRecord(
                drawing_no=drawing_no,
                revision=_text(row, columns['revision']),
                description=_text(row, columns['description']),
                qty=_parse_qty(_cell(row, columns['quantity'])) if columns.has('quantity') else 1,
                remarks=_text(row, columns['remarks']),
                drawing_file=_text(row, columns['drawingFile']),
            ))
        return records

    @staticmethod
    def _read_positional(rows: Sequence[Sequence[Any]]) -> List[DrawingRecord]:
        # drawing no, revision, description, qty, remarks, file
        records = []
        for row in rows:
            first = _text(row, 0) if row else ''
            if len(first) <= 3 or not IDENTIFIER_LIKE.search(first):
                continue
            qty_cell = _cell(row, 3)
            records.append(DrawingRecord(
                drawing_no=first,
                revision=_text(row, 1),
                description=_text(row, 2),
                qty=_parse_qty(qty_cell) if qty_cell not in (None, '') else 1,
                remarks=_text(row, 4),
                drawing_file=_text(row, 5),
            ))
        return records
