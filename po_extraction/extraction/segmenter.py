"""
Text Segmenter.

Splits text extracted from a PDF into header, table and footer regions
by locating the item table's own header line. The table header line
itself belongs to no region. Without a table header line the whole
text is header text and the table is empty.
"""

import re
from typing import List

from po_extraction.utils.logger import get_logger
from .parse_result import Sections

# Initialize module logger
logger = get_logger(__name__)

# Lines that end the item table; the matching line opens the footer
TABLE_TERMINATORS = (
    'subtotal',
    'total value',
    'grand total',
    'amount payable',
    'terms & conditions',
    'terms and conditions',
    'remarks',
)

_LINE_BREAK = re.compile(r'\r?\n')


def is_table_header_line(line: str) -> bool:
    """
    Check if a line is the column header row of the item table.

    Example:
        >>> is_table_header_line("Item  Description  Qty  Rate")
        True
        >>> is_table_header_line("Material Code   Qty")
        True
    """
    lowered = line.lower()
    return (
        ('item' in lowered and 'description' in lowered)
        or ('material' in lowered and 'qty' in lowered)
    )


def is_terminator_line(line: str) -> bool:
    lowered = line.strip().lower()
    return bool(lowered) and any(marker in lowered for marker in TABLE_TERMINATORS)


class TextSegmenter:
    """
    Splits PO text into Sections.

    Example:
        >>> sections = TextSegmenter().segment(text)
        >>> sections.table_lines[:1]
        ['100234   Bracket Assembly   12   NOS   150']
    """

    def segment(self, text: str) -> Sections:
        if not text:
            return Sections()

        lines: List[str] = _LINE_BREAK.split(text)

        header_index = next(
            (i for i, line in enumerate(lines) if is_table_header_line(line)),
            -1
        )
        if header_index == -1:
            logger.debug("No table header line found; treating text as header only")
            return Sections(header_text=text)

        table_end = len(lines)
        for i in range(header_index + 1, len(lines)):
            if is_terminator_line(lines[i]):
                table_end = i
                break

        sections = Sections(
            header_text='\n'.join(lines[:header_index]),
            table_lines=lines[header_index + 1:table_end],
            footer_text='\n'.join(lines[table_end:]),
        )
        logger.debug(
            f"Segmented text: header line {header_index}, "
            f"{len(sections.table_lines)} table lines, footer from line {table_end}"
        )
        return sections


def segment_text(text: str) -> Sections:
    """Split ``text`` into header, table and footer regions."""
    return TextSegmenter().segment(text)
