"""
Parse Result Data Classes.

This module defines the data structures that flow through the
extraction engine: the two raw document shapes, the intermediate
sections and column map, and the canonical output record.

Attribute names are snake_case; ``to_dict`` emits the camelCase keys
consumed by the order-entry forms (``drawingNo``, ``poNumber``, ...).
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple


# =============================================================================
# RAW DOCUMENTS
# =============================================================================

@dataclass(frozen=True)
class TextDocument:
    """Text already extracted from a PDF."""
    content: str


@dataclass(frozen=True)
class GridDocument:
    """Cell grid already read from a spreadsheet, row by row."""
    rows: Tuple[Tuple[Any, ...], ...]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> 'GridDocument':
        return cls(rows=tuple(tuple(row) for row in rows))


# =============================================================================
# INTERMEDIATE STRUCTURES
# =============================================================================

@dataclass
class Sections:
    """
    Header / table / footer split of a text document.

    Attributes:
        header_text: Lines before the table header line
        table_lines: Lines between the table header line and the terminator
        footer_text: Terminator line and everything after it
    """
    header_text: str = ''
    table_lines: List[str] = field(default_factory=list)
    footer_text: str = ''

    @property
    def table_text(self) -> str:
        return '\n'.join(self.table_lines)

    @property
    def header_scope(self) -> str:
        """Header and footer text together, for fields placed near the table."""
        return '\n'.join(part for part in (self.header_text, self.footer_text) if part)

    @property
    def has_table(self) -> bool:
        return bool(self.table_lines)


UNASSIGNED = -1


class ColumnMap:
    """
    Semantic field name to spreadsheet column index.

    Each field is assigned at most once per document: the first column
    claiming a field keeps it and later claims are ignored.

    Example:
        >>> columns = ColumnMap()
        >>> columns.assign('quantity', 2)
        True
        >>> columns.assign('quantity', 5)
        False
        >>> columns['quantity']
        2
    """

    # Fields every column map knows about
    CORE_FIELDS = (
        'drawingNo', 'description', 'quantity', 'rate', 'unit',
        'drawingFile', 'revision', 'remarks',
    )
    # Extra purchase order columns read when present
    EXTRA_FIELDS = (
        'hsnCode', 'deliveryDate', 'discount',
        'cgstPercent', 'sgstPercent', 'igstPercent',
    )
    FIELDS = CORE_FIELDS + EXTRA_FIELDS

    def __init__(self) -> None:
        self._indices: Dict[str, int] = {name: UNASSIGNED for name in self.FIELDS}

    def assign(self, name: str, index: int) -> bool:
        """Claim ``index`` for ``name`` unless the field is already taken."""
        if self._indices.get(name, UNASSIGNED) != UNASSIGNED:
            return False
        self._indices[name] = index
        return True

    def __getitem__(self, name: str) -> int:
        return self._indices.get(name, UNASSIGNED)

    def has(self, name: str) -> bool:
        return self[name] != UNASSIGNED

    def assigned(self) -> Dict[str, int]:
        return {k: v for k, v in self._indices.items() if v != UNASSIGNED}

    def __repr__(self) -> str:
        return f"ColumnMap({self.assigned()})"


# =============================================================================
# OUTPUT RECORDS
# =============================================================================

@dataclass
class HeaderFields:
    """
    Canonical purchase order header.

    Every field defaults to an empty string except ``currency``.
    ``po_date`` holds an ISO date when the raw value could be read,
    otherwise the raw text.
    """
    company_code: str = ''
    company_name: str = ''
    customer_gstin: str = ''
    billing_address: str = ''
    po_number: str = ''
    po_date: str = ''
    payment_terms: str = ''
    credit_days: str = ''
    freight_terms: str = ''
    packing_forwarding: str = ''
    insurance_terms: str = ''
    currency: str = 'INR'
    delivery_terms: str = ''
    remarks: str = ''
    plant: str = ''
    order_type: str = ''

    KEYS = {
        'company_code': 'companyCode',
        'company_name': 'companyName',
        'customer_gstin': 'customerGstin',
        'billing_address': 'billingAddress',
        'po_number': 'poNumber',
        'po_date': 'poDate',
        'payment_terms': 'paymentTerms',
        'credit_days': 'creditDays',
        'freight_terms': 'freightTerms',
        'packing_forwarding': 'packingForwarding',
        'insurance_terms': 'insuranceTerms',
        'currency': 'currency',
        'delivery_terms': 'deliveryTerms',
        'remarks': 'remarks',
        'plant': 'plant',
        'order_type': 'orderType',
    }

    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, attr) for attr, key in self.KEYS.items()}


@dataclass
class LineItem:
    """
    One purchase order line.

    Attributes:
        drawing_no: Drawing / item code, synthesized as ``DRW-{n}`` if missing
        description: Item description, never empty in a ParseResult
        quantity: Ordered quantity (default 1)
        unit: Unit of measure (default ``NOS``)
        rate: Unit rate (default 0)
        cgst_percent, sgst_percent, igst_percent: Tax percentages
        delivery_date: ISO date, raw text, or None
        discount: Discount amount or percentage as printed
    """
    drawing_no: str = ''
    description: str = ''
    quantity: Decimal = Decimal(1)
    unit: str = 'NOS'
    rate: Decimal = Decimal(0)
    cgst_percent: Decimal = Decimal(0)
    sgst_percent: Decimal = Decimal(0)
    igst_percent: Decimal = Decimal(0)
    delivery_date: Optional[str] = None
    discount: Decimal = Decimal(0)
    hsn_code: Optional[str] = None
    revision_no: Optional[str] = None
    purchase_req_no: Optional[str] = None
    customer_reference: Optional[str] = None

    KEYS = {
        'drawing_no': 'drawingNo',
        'description': 'description',
        'quantity': 'quantity',
        'unit': 'unit',
        'rate': 'rate',
        'cgst_percent': 'cgstPercent',
        'sgst_percent': 'sgstPercent',
        'igst_percent': 'igstPercent',
        'delivery_date': 'deliveryDate',
        'discount': 'discount',
        'hsn_code': 'hsnCode',
        'revision_no': 'revisionNo',
        'purchase_req_no': 'purchaseReqNo',
        'customer_reference': 'customerReference',
    }

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in self.KEYS.items()}


@dataclass
class ParseResult:
    """
    The engine's only output: a header plus ordered line items.

    Example:
        >>> result = parse_text_document(text)
        >>> result.header.po_number
        "4500012345"
        >>> print(result.to_json())
    """
    header: HeaderFields = field(default_factory=HeaderFields)
    items: List[LineItem] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'header': self.header.to_dict(),
            'items': [item.to_dict() for item in self.items],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON; decimals are written as plain numbers."""
        return json.dumps(self.to_dict(), indent=indent, default=json_default)

    def __repr__(self) -> str:
        return (
            f"ParseResult("
            f"company={self.header.company_code or 'N/A'}, "
            f"po={self.header.po_number or 'N/A'}, "
            f"items={self.item_count})"
        )


@dataclass
class DrawingRecord:
    """One row of a customer drawing register."""
    drawing_no: str
    revision: str = ''
    description: str = ''
    qty: int = 1
    remarks: str = ''
    drawing_file: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'drawingNo': self.drawing_no,
            'revision': self.revision,
            'description': self.description,
            'qty': self.qty,
            'remarks': self.remarks,
            'drawingFile': self.drawing_file,
        }


def json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
