"""
Extraction Engine for the PO Extraction System.

This module provides:
    - Company profile registry and detection
    - Text segmentation into header, table and footer
    - Header field extraction
    - Table row reconstruction and tiered line item mapping
    - Spreadsheet column mapping and drawing register parsing
"""

from .company_profiles import CompanyCode, CompanyDetector, detect_company
from .extractor import (
    PurchaseOrderExtractor,
    parse_drawing_grid,
    parse_grid_document,
    parse_text_document,
)

__all__ = [
    'CompanyCode',
    'CompanyDetector',
    'detect_company',
    'PurchaseOrderExtractor',
    'parse_text_document',
    'parse_grid_document',
    'parse_drawing_grid',
]
