"""
Post-Processing Module for the PO Extraction System.

This module provides functionality for:
    - Numeric normalization (locale noise to Decimal)
    - Date normalization (day-first dates and serials to ISO)
    - Field defaulting of headers and line items
"""

from .normalizers import (
    DateNormalizer,
    NumericNormalizer,
    extract_date,
    normalize_date,
    normalize_numeric,
)
from .processor import PostProcessor

__all__ = [
    'PostProcessor',
    'DateNormalizer',
    'NumericNormalizer',
    'normalize_date',
    'normalize_numeric',
    'extract_date',
]
