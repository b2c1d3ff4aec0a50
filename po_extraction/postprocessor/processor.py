"""
Field Defaulting Post-Processor.

Every line item produced by any tier, and every header, passes through
the PostProcessor before it reaches a ParseResult. This is where the
output invariants are enforced:
    - description is never empty (such items are dropped)
    - drawing number is never empty (``DRW-{n}`` is synthesized)
    - every numeric field is a finite Decimal
    - blank optional strings become None
"""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List, Optional

from config import get_config
from po_extraction.utils.helpers import clean_text
from po_extraction.utils.logger import get_logger
from po_extraction.extraction.parse_result import HeaderFields, LineItem
from .normalizers import normalize_date, normalize_numeric

# Initialize module logger
logger = get_logger(__name__)

NUMERIC_FIELDS = ('rate', 'cgst_percent', 'sgst_percent', 'igst_percent', 'discount')
OPTIONAL_TEXT_FIELDS = ('hsn_code', 'revision_no', 'purchase_req_no', 'customer_reference')


class PostProcessor:
    """
    Applies field defaults to extracted records.

    Example:
        >>> processor = PostProcessor()
        >>> items = processor.finalize_items([LineItem(description="Bracket", quantity=Decimal(0))])
        >>> items[0].drawing_no, items[0].quantity, items[0].unit
        ("DRW-1", Decimal('1'), "NOS")
    """

    def __init__(self) -> None:
        self.default_unit = get_config("parsing.default_unit", "NOS")
        self.default_currency = get_config("parsing.default_currency", "INR")

    def finalize_items(self, items: Iterable[LineItem]) -> List[LineItem]:
        """
        Default every item and drop those without a description.

        Synthesized drawing numbers count kept items, starting at 1.
        """
        finalized: List[LineItem] = []
        dropped = 0
        for item in items:
            processed = self.finalize_item(item, len(finalized) + 1)
            if processed is None:
                dropped += 1
                continue
            finalized.append(processed)

        if dropped:
            logger.debug(f"Dropped {dropped} items without a description")
        return finalized

    def finalize_item(self, item: LineItem, position: int) -> Optional[LineItem]:
        description = clean_text(item.description)
        if not description:
            return None

        quantity = self._decimal(item.quantity)
        if quantity == 0:
            quantity = Decimal(1)

        changes = {
            'description': description,
            'drawing_no': clean_text(item.drawing_no) or f"DRW-{position}",
            'quantity': quantity,
            'unit': clean_text(item.unit) or self.default_unit,
            'delivery_date': self._delivery_date(item.delivery_date),
        }
        for name in NUMERIC_FIELDS:
            changes[name] = self._decimal(getattr(item, name))
        for name in OPTIONAL_TEXT_FIELDS:
            changes[name] = clean_text(getattr(item, name)) or None

        return replace(item, **changes)

    def finalize_header(self, header: HeaderFields) -> HeaderFields:
        """Clean every header value; an empty currency takes the default."""
        changes = {attr: clean_text(getattr(header, attr)) for attr in HeaderFields.KEYS}
        changes['currency'] = changes['currency'].upper() or self.default_currency
        return replace(header, **changes)

    @staticmethod
    def _decimal(value) -> Decimal:
        if isinstance(value, Decimal) and value.is_finite():
            return value
        return normalize_numeric(value)

    @staticmethod
    def _delivery_date(value) -> Optional[str]:
        if value is None:
            return None
        text = clean_text(value)
        if not text:
            return None
        return normalize_date(text) or text
