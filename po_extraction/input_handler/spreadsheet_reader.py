"""
Spreadsheet Reader Module.

Reads one worksheet of a customer spreadsheet into a plain grid of
cell values (a GridDocument) for the grid pipeline. Workbooks are read
with openpyxl in read-only, values-only mode; CSV files with the
standard csv module.
"""

import csv
import io
from pathlib import Path
from typing import Any, List, Union

import openpyxl

from config import get_config
from po_extraction.extraction.parse_result import GridDocument
from po_extraction.utils.exceptions import CorruptedFileError, UnsupportedFileTypeError
from po_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class SpreadsheetReader:
    """
    Reads .xlsx/.xlsm workbooks and .csv files into GridDocuments.

    Attributes:
        sheet_index: Worksheet read from multi-sheet workbooks

    Example:
        >>> grid = SpreadsheetReader().read("po_items.xlsx")
        >>> grid.rows[0]
        ('Drawing No', 'Description', 'Qty', 'Rate')
    """

    WORKBOOK_EXTENSIONS = {'.xlsx', '.xlsm'}
    CSV_EXTENSIONS = {'.csv'}

    def __init__(self, sheet_index: int = None) -> None:
        if sheet_index is None:
            sheet_index = get_config("input.spreadsheet.sheet_index", 0)
        self.sheet_index = int(sheet_index)

    @property
    def supported_extensions(self) -> set:
        return self.WORKBOOK_EXTENSIONS | self.CSV_EXTENSIONS

    def read(self, filepath: Union[str, Path]) -> GridDocument:
        """
        Read a spreadsheet file.

        Raises:
            UnsupportedFileTypeError: For extensions other than xlsx/xlsm/csv.
            CorruptedFileError: If the file cannot be decoded.
        """
        path = Path(filepath)
        extension = path.suffix.lower()
        if extension in self.WORKBOOK_EXTENSIONS:
            rows = self._read_workbook(path.read_bytes(), str(path))
        elif extension in self.CSV_EXTENSIONS:
            rows = self._read_csv(path.read_bytes(), str(path))
        else:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

        logger.info(f"Read {len(rows)} rows from {path.name}")
        return GridDocument.from_rows(rows)

    def read_bytes(self, data: bytes, extension: str = '.xlsx') -> GridDocument:
        """Read spreadsheet content held in memory."""
        extension = extension.lower()
        if extension in self.WORKBOOK_EXTENSIONS:
            return GridDocument.from_rows(self._read_workbook(data, '<workbook bytes>'))
        if extension in self.CSV_EXTENSIONS:
            return GridDocument.from_rows(self._read_csv(data, '<csv bytes>'))
        raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

    def _read_workbook(self, data: bytes, source: str) -> List[List[Any]]:
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except Exception as e:
            logger.error(f"Could not open workbook {source}: {e}")
            raise CorruptedFileError(source, str(e))

        try:
            sheets = workbook.worksheets
            if not sheets:
                logger.warning(f"Workbook has no worksheets: {source}")
                return []
            index = self.sheet_index if self.sheet_index < len(sheets) else 0
            sheet = sheets[index]
            logger.debug(f"Reading sheet '{sheet.title}' of {[s.title for s in sheets]}")
            return [
                ['' if value is None else value for value in row]
                for row in sheet.iter_rows(values_only=True)
            ]
        finally:
            workbook.close()

    @staticmethod
    def _read_csv(data: bytes, source: str) -> List[List[Any]]:
        try:
            text = data.decode('utf-8-sig')
        except UnicodeDecodeError:
            text = data.decode('latin-1')
        try:
            return [list(row) for row in csv.reader(io.StringIO(text))]
        except csv.Error as e:
            raise CorruptedFileError(source, str(e))
