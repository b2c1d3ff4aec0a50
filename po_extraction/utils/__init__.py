"""
Utility Module for the PO Extraction System.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Exception hierarchy
    - Text clean-up helpers
"""

from .logger import setup_logger, get_logger
from .helpers import clean_text, is_numeric_token, join_nonempty

__all__ = [
    'setup_logger',
    'get_logger',
    'clean_text',
    'is_numeric_token',
    'join_nonempty'
]
