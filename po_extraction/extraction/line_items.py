"""
Line Item Mapper (text-stream path).

Line items are extracted by an ordered list of tiers. Each tier either
does not apply (None) or returns the items it found; the first tier
returning at least one item wins and later tiers are never run.

Tiers, in priority order:
    1. structured   one full-row pattern over the raw table text
    2. company      the detected company's dedicated parser
    3. columns      generic column heuristic over reconstructed rows
    4. fallback     first lines carrying a number, one item each
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from config import get_config
from po_extraction.utils.helpers import clean_text
from po_extraction.utils.logger import get_logger
from po_extraction.postprocessor.normalizers import normalize_date, normalize_numeric
from .company_parsers import specialized_parser_for
from .company_profiles import CompanyCode
from .parse_result import LineItem
from .table_rows import UNIT_KEYWORDS, chunk_table_rows, sanitize_table_lines

# Initialize module logger
logger = get_logger(__name__)

# code, description, delivery date, rate, qty, unit, cgst %, sgst %, amount
STRUCTURED_ROW = re.compile(
    r'(?<!\d)(\d{6,})\s+([A-Za-z0-9,\-/(). ]+?)\s+'
    r'(\d{2}[-/][A-Za-z0-9]{3}[-/]\d{2,4}|\d{2}[-/]\d{2}[-/]\d{2,4})\s+'
    r'([\d,]+(?:\.\d+)?)\s+(\d+(?:\.\d+)?)\s+'
    r'(PCS|PC|NOS|EA|SET|UNIT|KG|LTR|MTR|PACK|PAIR)\s+'
    r'(\d+(?:\.\d+)?)\s+(\d+(?:\.\d+)?)\s+([\d,]+(?:\.\d+)?)',
    re.IGNORECASE
)

COLUMN_SPLIT = re.compile(r'\s{2,}')
PLAIN_NUMBER = re.compile(r'^-?\d+(?:\.\d+)?$')
NON_ITEM_DESCRIPTION = re.compile(r'^(?:gstin|cin|address)', re.IGNORECASE)
HAS_DIGITS = re.compile(r'\d+')


@dataclass
class TableContext:
    """
    Inputs shared by all tiers for one document.

    Attributes:
        table_lines: Raw table region lines
        company_code: Detected company
        sanitized_lines: Table lines with noise removed (computed once)
    """
    table_lines: Sequence[str]
    company_code: CompanyCode = CompanyCode.UNKNOWN
    sanitized_lines: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.table_lines = list(self.table_lines or ())
        if not self.sanitized_lines:
            self.sanitized_lines = sanitize_table_lines(self.table_lines)

    @property
    def table_text(self) -> str:
        return '\n'.join(self.table_lines)


def parse_structured_items(context: TableContext) -> Optional[List[LineItem]]:
    """
    Read rigidly formatted tables with a single full-row pattern.

    Example row:
        ``300123456 Gear shaft 15-Mar-24 1,250.00 10 NOS 9 9 12,500.00``
    """
    if not context.table_lines:
        return None

    items: List[LineItem] = []
    for match in STRUCTURED_ROW.finditer(context.table_text):
        code, desc, delivery, rate, qty, unit, cgst, sgst, amount = match.groups()
        items.append(LineItem(
            drawing_no=clean_text(code),
            description=clean_text(desc),
            quantity=normalize_numeric(qty),
            unit=clean_text(unit).upper(),
            rate=normalize_numeric(rate),
            cgst_percent=normalize_numeric(cgst),
            sgst_percent=normalize_numeric(sgst),
            delivery_date=normalize_date(delivery) or clean_text(delivery),
        ))
        logger.debug(f"Structured row {code}: amount {normalize_numeric(amount)}")
    return items


def parse_company_items(context: TableContext) -> Optional[List[LineItem]]:
    """Apply the detected company's dedicated parser, if it has one."""
    parser = specialized_parser_for(context.company_code)
    if parser is None:
        return None
    return parser(context.sanitized_lines)


def _part(parts: Sequence[str], index: int) -> str:
    return parts[index] if 0 <= index < len(parts) else ''


def map_row_to_item(row: str, index: int) -> Optional[LineItem]:
    """
    Map one reconstructed row to a LineItem with the column heuristic.

    The row is split on column gaps. The column before a unit keyword
    is the quantity and the one after it the rate; without a unit
    keyword, the first two plain numbers are used, then the last two
    columns. The rate is followed by up to three tax percentages.
    Column 0 is the drawing number and the columns up to the quantity
    make the description.

    Returns:
        LineItem, or None when the row has too few columns or no
        usable description.

    Example:
        >>> item = map_row_to_item("100234   Bracket Assembly   12   NOS   150", 0)
        >>> item.drawing_no, item.quantity, item.unit, item.rate
        ("100234", Decimal('12'), "NOS", Decimal('150'))
    """
    parts = [p for p in (clean_text(part) for part in COLUMN_SPLIT.split(row)) if p]
    if len(parts) < 3:
        return None

    numeric_indices = [
        idx for idx, part in enumerate(parts)
        if PLAIN_NUMBER.match(part.replace(',', ''))
    ]
    unit_index = next(
        (idx for idx, part in enumerate(parts) if part.upper() in UNIT_KEYWORDS),
        -1
    )

    qty_index = unit_index - 1 if unit_index > 0 else -1
    rate_index = unit_index + 1 if unit_index > -1 else -1

    if qty_index <= 0 and numeric_indices:
        qty_index = numeric_indices[0]
    if (rate_index <= 0 or rate_index == qty_index) and len(numeric_indices) > 1:
        rate_index = numeric_indices[1]
    if qty_index <= 0 and len(parts) >= 3:
        qty_index = len(parts) - 2
    if rate_index <= 0 or rate_index == qty_index:
        rate_index = len(parts) - 1

    desc_end = qty_index if qty_index > 0 else len(parts)
    if 0 < unit_index < desc_end:
        desc_end = unit_index
    if desc_end <= 1:
        desc_end = len(parts) - 2 if len(parts) > 3 else 2

    description = clean_text(' '.join(parts[1:desc_end])) or parts[1]
    if not description or NON_ITEM_DESCRIPTION.match(description):
        return None

    return LineItem(
        drawing_no=parts[0] or f"DRW-{index + 1}",
        description=description,
        quantity=normalize_numeric(_part(parts, qty_index)) if qty_index > -1 else normalize_numeric(1),
        unit=parts[unit_index].upper() if unit_index > -1 else 'NOS',
        rate=normalize_numeric(_part(parts, rate_index)),
        cgst_percent=normalize_numeric(_part(parts, rate_index + 1)),
        sgst_percent=normalize_numeric(_part(parts, rate_index + 2)),
        igst_percent=normalize_numeric(_part(parts, rate_index + 3)),
    )


def parse_column_items(context: TableContext) -> Optional[List[LineItem]]:
    """Reconstruct logical rows and map each with the column heuristic."""
    if not context.sanitized_lines:
        return None
    rows = chunk_table_rows(context.sanitized_lines)
    items = []
    for index, row in enumerate(rows):
        item = map_row_to_item(row, index)
        if item is not None:
            items.append(item)
    return items


def parse_fallback_items(context: TableContext, limit: int = 5) -> Optional[List[LineItem]]:
    """
    Last resort: one item per leading line, first token as the code.

    Lines carrying a digit sequence are preferred; without any, the
    first lines of the table are used as they are.
    """
    lines = [line.strip() for line in context.table_lines if line and line.strip()]
    if not lines:
        return None
    candidates = [line for line in lines if HAS_DIGITS.search(line)]
    source = candidates or lines

    items = []
    for index, line in enumerate(source[:limit]):
        tokens = line.split()
        code = tokens[0]
        items.append(LineItem(
            drawing_no=clean_text(code) or f"DRW-{index + 1}",
            description=clean_text(' '.join(tokens[1:])) or clean_text(line),
            quantity=normalize_numeric(1),
            rate=normalize_numeric(0),
        ))
    return items


Tier = Tuple[str, Callable[[TableContext], Optional[List[LineItem]]]]


class LineItemMapper:
    """
    Runs the line item tiers in priority order.

    Example:
        >>> mapper = LineItemMapper()
        >>> items, tier = mapper.map(sections.table_lines, CompanyCode.UNKNOWN)
        >>> tier
        "columns"
    """

    def __init__(self) -> None:
        self.fallback_limit = int(get_config("parsing.fallback_item_count", 5))
        self.tiers: List[Tier] = [
            ('structured', parse_structured_items),
            ('company', parse_company_items),
            ('columns', parse_column_items),
            ('fallback', lambda context: parse_fallback_items(context, self.fallback_limit)),
        ]

    def map(
        self,
        table_lines: Sequence[str],
        company_code: CompanyCode = CompanyCode.UNKNOWN
    ) -> Tuple[List[LineItem], Optional[str]]:
        """
        Extract line items from the table region.

        Args:
            table_lines: Raw table lines from the segmenter.
            company_code: Detected company.

        Returns:
            (items, name of the winning tier or None).
        """
        context = TableContext(table_lines=table_lines, company_code=company_code)
        for name, tier in self.tiers:
            items = tier(context)
            if items is None:
                logger.debug(f"Tier '{name}' not applicable")
                continue
            if items:
                logger.debug(f"Tier '{name}' produced {len(items)} items")
                return items, name
            logger.debug(f"Tier '{name}' produced no items")
        return [], None
