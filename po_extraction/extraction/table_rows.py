"""
Table Row Reconstructor (text-stream path).

PDF text extraction breaks long table cells over several physical
lines. This module drops the noise lines found inside item tables and
glues wrapped continuations back onto the row they belong to.

Two steps:
    1. sanitize_table_lines: blank, date-only, contact/identity and
       column-label lines are dropped; a total/terms/signature line
       ends the table.
    2. chunk_table_rows: a line with a column gap (two or more spaces)
       that starts with a letter or digit opens a new logical row;
       any other line continues the previous row.
"""

import re
from typing import List, Sequence

from po_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

DATE_ONLY_PATTERN = re.compile(r'^\d{1,2}\s*[-/]\s*[A-Za-z]{3,4}\s*[-/]\s*\d{2,4}$')

ROW_STOP_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r'subtotal',
    r'\btotal\b',
    r'grand\s*total',
    r'amount\s*payable',
    r'authori[sz]ed',
    r'terms\s*(?:&|and)?\s*conditions',
    r'\bremarks\b',
))

ROW_IGNORE_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r'\bgstin\b',
    r'\bcin\b',
    r'\b(?:tele)?phone\b',
    r'\bmobile\b',
    r'\bfax\b',
    r'\be-?mail\b',
    r'\bwebsite\b',
    r'\baddress\b',
    r'\bpin\s*code\b',
    r'\bdistrict\b',
    r'\bstate\b',
    r'\bcountry\b',
))

# Words that make up a repeated column-label line
COLUMN_LABEL_WORDS = frozenset((
    'item', 'code', 'material', 'description', 'desc', 'qty', 'quantity',
    'rate', 'unit', 'uom', 'hsn', 'sac', 'no', 'sr', 's', 'sl', 'amount',
    'price', 'per', 'delivery', 'date', 'value', 'drawing', 'part', 'rev',
    'cgst', 'sgst', 'igst', 'tax', 'disc', 'discount', 'total',
))

# Units of measure recognised in item rows
UNIT_KEYWORDS = (
    'NOS', 'PC', 'PCS', 'EA', 'SET', 'UNIT', 'PAIR', 'PACK', 'KG',
    'LTR', 'LITRE', 'MTR', 'METER', 'ROLL', 'LOT',
)

SEPARATOR_ONLY = re.compile(r'^[=\-_.\s]+$')
COLUMN_GAP = re.compile(r'\s{2,}')
ROW_START = re.compile(r'^[A-Za-z0-9]')
_WORD = re.compile(r'[A-Za-z]+')


def is_column_label_line(line: str) -> bool:
    """
    Check if a line only repeats table column labels.

    Example:
        >>> is_column_label_line("Sr. No   Description   Qty   Rate")
        True
        >>> is_column_label_line("100234   Bracket   12   NOS")
        False
    """
    if any(char.isdigit() for char in line):
        return False
    words = [word.lower() for word in _WORD.findall(line)]
    return bool(words) and all(word in COLUMN_LABEL_WORDS for word in words)


def is_stop_line(line: str) -> bool:
    return any(pattern.search(line) for pattern in ROW_STOP_PATTERNS)


def sanitize_table_lines(lines: Sequence[str]) -> List[str]:
    """
    Drop noise lines from the table region.

    Processing stops entirely at the first stop line, which guards
    against totals the segmenter did not recognise as a terminator.

    Args:
        lines: Raw table lines in document order.

    Returns:
        Kept lines, unmodified.
    """
    sanitized: List[str] = []
    for raw in lines:
        trimmed = (raw or '').strip()
        if not trimmed:
            continue
        if DATE_ONLY_PATTERN.match(trimmed):
            continue
        if is_stop_line(trimmed):
            logger.debug(f"Table rows end at: {trimmed[:40]!r}")
            break
        if any(pattern.search(trimmed) for pattern in ROW_IGNORE_PATTERNS):
            continue
        if is_column_label_line(trimmed):
            continue
        if SEPARATOR_ONLY.match(trimmed):
            continue
        sanitized.append(raw)
    return sanitized


def chunk_table_rows(lines: Sequence[str]) -> List[str]:
    """
    Merge wrapped continuation lines into logical rows.

    Example:
        >>> chunk_table_rows([
        ...     "100234   Bracket Assembly   12   NOS   150",
        ...     "  continuation of description",
        ... ])
        ['100234   Bracket Assembly   12   NOS   150 continuation of description']
    """
    rows: List[str] = []
    for raw in lines:
        line = (raw or '').replace('\r', '')
        trimmed = line.strip()
        if not trimmed:
            continue
        if COLUMN_GAP.search(trimmed) and ROW_START.match(trimmed):
            rows.append(line.rstrip())
            continue
        if rows:
            rows[-1] = f"{rows[-1]} {trimmed}".strip()
    return rows


def reconstruct_rows(lines: Sequence[str]) -> List[str]:
    """Sanitize table lines and return one string per logical row."""
    return chunk_table_rows(sanitize_table_lines(lines))
