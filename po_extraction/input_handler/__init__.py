"""
Input Handler Module for the Purchase Order Extraction System.

Adapters that turn files into engine documents:
    - PDF files: text layer via pdfplumber (TextDocument)
    - Workbooks (.xlsx, .xlsm) via openpyxl and CSV files (GridDocument)
"""

from .handler import InputHandler
from .pdf_processor import PdfTextExtractor, TextExtractor
from .spreadsheet_reader import SpreadsheetReader

__all__ = ['InputHandler', 'TextExtractor', 'PdfTextExtractor', 'SpreadsheetReader']
