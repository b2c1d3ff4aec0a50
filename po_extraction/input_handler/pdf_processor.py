"""
PDF Text Extraction Module.

The engine never decodes PDFs itself; it depends only on the
TextExtractor interface defined here. PdfTextExtractor implements it
with pdfplumber, keeping the column spacing of each page's text layer
so that item tables stay split on multi-space gaps.

Scanned (image-only) PDFs yield little or no text; OCR is not
attempted.
"""

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

import pdfplumber

from config import get_config
from po_extraction.utils.exceptions import CorruptedFileError
from po_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class TextExtractor(ABC):
    """Turns PDF bytes into plain text, pages separated by newlines."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        raise NotImplementedError

    def extract_file(self, filepath: Union[str, Path]) -> str:
        path = Path(filepath)
        return self.extract(path.read_bytes())


class PdfTextExtractor(TextExtractor):
    """
    pdfplumber-backed TextExtractor.

    Attributes:
        max_pages: Maximum number of pages read per document
        layout: Whether to keep horizontal layout (column gaps)

    Example:
        >>> extractor = PdfTextExtractor()
        >>> text = extractor.extract_file("customer_po.pdf")
    """

    def __init__(self, max_pages: int = None, layout: bool = True) -> None:
        self.max_pages = int(max_pages or get_config("input.pdf.max_pages", 20))
        self.layout = layout

        logger.debug(f"PdfTextExtractor initialized (max_pages={self.max_pages}, layout={self.layout})")

    def extract(self, data: bytes) -> str:
        """
        Extract the text layer of every page.

        Args:
            data: Raw PDF bytes.

        Returns:
            Text of all pages joined by newlines.

        Raises:
            CorruptedFileError: If pdfplumber cannot open the document.
        """
        if not data:
            return ''

        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = pdf.pages[:self.max_pages]
                if len(pdf.pages) > self.max_pages:
                    logger.warning(
                        f"PDF has {len(pdf.pages)} pages, limiting to {self.max_pages}"
                    )
                texts = [self._page_text(page) for page in pages]
        except Exception as e:
            logger.error(f"PDF text extraction failed: {e}")
            raise CorruptedFileError("<pdf bytes>", str(e))

        text = '\n'.join(texts)
        if len(text.strip()) < 50:
            logger.warning("PDF has almost no text layer; it may be a scanned document")
        return text

    def extract_file(self, filepath: Union[str, Path]) -> str:
        path = Path(filepath)
        logger.info(f"Extracting text: {path.name}")
        try:
            return self.extract(path.read_bytes())
        except CorruptedFileError as e:
            raise CorruptedFileError(str(path), e.details.get("reason"))

    def _page_text(self, page) -> str:
        if self.layout:
            return page.extract_text(layout=True) or ''
        return page.extract_text() or ''
