"""
Purchase Order Extraction System - Application Package.

Converts externally authored purchase orders into a canonical record:
a header of key business fields plus ordered line items. Two input
modalities are supported: text already extracted from a PDF and cell
grids already read from a spreadsheet.

Modules:
    - extraction: segmentation, header fields, line item tiers, grids
    - postprocessor: numeric/date normalization and field defaulting
    - input_handler: PDF text and spreadsheet reading adapters
    - utils: logging, exceptions, text helpers

Architecture:
    Input → (Text Segmenter | Column Mapper) → Header Fields
          → Company Detector → Line Item Tiers → Post-Processing
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

from .extraction import (
    PurchaseOrderExtractor,
    parse_drawing_grid,
    parse_grid_document,
    parse_text_document,
)
from .extraction.parse_result import (
    DrawingRecord,
    GridDocument,
    HeaderFields,
    LineItem,
    ParseResult,
    TextDocument,
)

__all__ = [
    'PurchaseOrderExtractor',
    'parse_text_document',
    'parse_grid_document',
    'parse_drawing_grid',
    'ParseResult',
    'HeaderFields',
    'LineItem',
    'DrawingRecord',
    'TextDocument',
    'GridDocument',
]
