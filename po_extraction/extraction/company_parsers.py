"""
Company-Specific Line Item Parsers.

Some customers print item tables that the generic column heuristic
cannot read. Each such customer gets a dedicated parser here, selected
by CompanyCode in ``specialized_parser_for``.
"""

import re
from typing import Callable, List, Optional, Sequence

from po_extraction.utils.helpers import clean_text, is_numeric_token
from po_extraction.utils.logger import get_logger
from po_extraction.postprocessor.normalizers import normalize_numeric
from .company_profiles import CompanyCode
from .parse_result import LineItem
from .table_rows import DATE_ONLY_PATTERN, UNIT_KEYWORDS

# Initialize module logger
logger = get_logger(__name__)

LineItemParser = Callable[[Sequence[str]], List[LineItem]]

_SIDEL_ITEM_LINE = re.compile(r'^(\d{6,})\s+(.+)$')
_SIDEL_END_MARKERS = ('total value', 'grand total', 'amount payable')
_HAS_LETTER = re.compile(r'[A-Za-z]')
_NUMERIC_ONLY = re.compile(r'^[-\d.,]+$')


def parse_sidel_items(lines: Sequence[str]) -> List[LineItem]:
    """
    Parse Sidel India item rows.

    Sidel rows open with a numeric material code of six or more digits.
    The quantity is the number printed right before a unit keyword
    (else the first number), and the rate sits two tokens after the
    quantity. Sidel often prints the description on its own line
    above the coded row; such lines are held as the pending
    description for the next coded row.

    Args:
        lines: Sanitized table lines.

    Returns:
        Parsed line items, possibly empty.

    Example:
        >>> items = parse_sidel_items(["Gear shaft", "300123456 10 NOS 1,250.00 12500.00"])
        >>> items[0].description, items[0].quantity, items[0].rate
        ("Gear shaft", Decimal('10'), Decimal('1250.00'))
    """
    items: List[LineItem] = []
    pending_description = ''

    for raw in lines or ():
        line = clean_text(raw)
        if not line:
            continue
        lowered = line.lower()
        if any(marker in lowered for marker in _SIDEL_END_MARKERS):
            break
        if 'gst' in lowered or DATE_ONLY_PATTERN.match(line):
            continue

        match = _SIDEL_ITEM_LINE.match(line)
        if not match:
            if _HAS_LETTER.search(line):
                pending_description = line
            continue

        code, rest = match.groups()
        tokens = rest.split()

        quantity = normalize_numeric(None)
        unit = 'NOS'
        qty_index = -1
        for i, token in enumerate(tokens):
            following = tokens[i + 1].upper() if i + 1 < len(tokens) else ''
            if is_numeric_token(token) and following in UNIT_KEYWORDS:
                quantity = normalize_numeric(token)
                unit = following
                qty_index = i
                break

        if qty_index == -1:
            qty_index = next((i for i, token in enumerate(tokens) if is_numeric_token(token)), -1)
            if qty_index > -1:
                quantity = normalize_numeric(tokens[qty_index])

        rate = normalize_numeric(None)
        rate_index = qty_index + 2 if qty_index > -1 else -1
        if 0 <= rate_index < len(tokens):
            rate = normalize_numeric(tokens[rate_index])
        else:
            following_number = next(
                (token for token in tokens[qty_index + 1:] if is_numeric_token(token)),
                None
            )
            if following_number is not None:
                rate = normalize_numeric(following_number)

        description = clean_text(' '.join(tokens[:qty_index])) if qty_index > 0 else ''
        if not description or _NUMERIC_ONLY.match(description):
            description = pending_description or f"Item {code}"
        pending_description = ''

        items.append(LineItem(
            drawing_no=code,
            description=description,
            quantity=quantity if quantity else normalize_numeric(1),
            unit=unit,
            rate=rate,
        ))

    logger.debug(f"Sidel parser produced {len(items)} items")
    return items


def specialized_parser_for(code) -> Optional[LineItemParser]:
    """
    Return the dedicated line item parser for a company, if any.

    Example:
        >>> specialized_parser_for(CompanyCode.SIDEL) is parse_sidel_items
        True
        >>> specialized_parser_for(CompanyCode.PHOENIX) is None
        True
    """
    try:
        code = CompanyCode(code)
    except ValueError:
        return None

    if code is CompanyCode.SIDEL:
        return parse_sidel_items
    return None
