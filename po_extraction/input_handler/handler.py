"""
Main Input Handler Module.

This module provides the InputHandler class, the file-level interface
in front of the extraction engine. It detects the modality of a file
from its extension and delegates to the matching reader:

    .pdf              -> PdfTextExtractor  -> TextDocument
    .xlsx/.xlsm/.csv  -> SpreadsheetReader -> GridDocument

Usage:
    from po_extraction.input_handler import InputHandler

    handler = InputHandler()
    document = handler.load("customer_po.pdf")
"""

from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from po_extraction.extraction.parse_result import GridDocument, TextDocument
from po_extraction.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    InputError,
    UnsupportedFileTypeError,
)
from po_extraction.utils.logger import get_logger
from .pdf_processor import PdfTextExtractor, TextExtractor
from .spreadsheet_reader import SpreadsheetReader

# Initialize module logger
logger = get_logger(__name__)

Document = Union[TextDocument, GridDocument]


class InputHandler:
    """
    Loads purchase order files as engine documents.

    Attributes:
        supported_extensions: Set of accepted file extensions
        text_extractor: TextExtractor used for PDFs
        spreadsheet_reader: SpreadsheetReader used for workbooks and CSV

    Example:
        >>> handler = InputHandler()
        >>> document = handler.load("po_items.xlsx")
        >>> isinstance(document, GridDocument)
        True
    """

    TEXT_EXTENSIONS = {'.pdf'}
    GRID_EXTENSIONS = {'.xlsx', '.xlsm', '.csv'}

    def __init__(
        self,
        text_extractor: Optional[TextExtractor] = None,
        spreadsheet_reader: Optional[SpreadsheetReader] = None
    ) -> None:
        self.supported_extensions = {
            ext.lower() for ext in get_config(
                "input.supported_extensions",
                sorted(self.TEXT_EXTENSIONS | self.GRID_EXTENSIONS)
            )
        }
        self.text_extractor = text_extractor or PdfTextExtractor()
        self.spreadsheet_reader = spreadsheet_reader or SpreadsheetReader()

        logger.debug(f"InputHandler initialized with extensions: {sorted(self.supported_extensions)}")

    def detect_modality(self, filepath: Union[str, Path]) -> str:
        """
        Detect the input modality of a file.

        Returns:
            'text' for PDFs, 'grid' for spreadsheets.

        Raises:
            UnsupportedFileTypeError: If the extension is not accepted.
        """
        extension = Path(filepath).suffix.lower()
        if extension in self.supported_extensions:
            if extension in self.TEXT_EXTENSIONS:
                return 'text'
            if extension in self.GRID_EXTENSIONS:
                return 'grid'
        raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists, is supported and is not empty.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            UnsupportedFileTypeError: If the extension is not accepted.
            CorruptedFileError: If the file is empty.
        """
        path = Path(filepath)
        if not path.exists():
            raise DocumentNotFoundError(str(filepath))
        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        self.detect_modality(path)

        if path.stat().st_size == 0:
            raise CorruptedFileError(str(filepath), "File is empty")
        return path

    def load(self, filepath: Union[str, Path]) -> Document:
        """
        Load a file as a TextDocument or GridDocument.

        Args:
            filepath: Path to a PDF, workbook or CSV file.

        Returns:
            TextDocument for PDFs, GridDocument for spreadsheets.
        """
        path = self.validate_file(filepath)
        logger.info(f"Loading file: {path.name}")

        if self.detect_modality(path) == 'text':
            return TextDocument(self.text_extractor.extract_file(path))
        return self.spreadsheet_reader.read(path)

    def collect_files(self, directory: Union[str, Path], recursive: bool = False) -> List[Path]:
        """
        List the supported files of a directory, sorted by path.

        Raises:
            DocumentNotFoundError: If the directory does not exist.
        """
        directory = Path(directory)
        if not directory.exists():
            raise DocumentNotFoundError(str(directory))
        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        pattern = "**/*" if recursive else "*"
        files = [
            path for path in directory.glob(pattern)
            if path.is_file() and path.suffix.lower() in self.supported_extensions
        ]
        files = sorted(files)

        logger.info(f"Found {len(files)} files to process in {directory}")
        return files
