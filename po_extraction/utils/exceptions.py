"""
Custom Exceptions Module.

This module defines the exceptions used throughout the purchase order
extraction system. Document *content* never raises: unparsable values
fall back to defaults and missing structure degrades to fallback
behaviour. Exceptions are reserved for configuration problems, input
adapter failures and contract violations at the engine boundary.

Exception Hierarchy:
    POExtractionError (base)
    ├── ConfigurationError
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   ├── DocumentNotFoundError
    │   └── CorruptedFileError
    └── ExtractionError
        └── InvalidDocumentError
"""


class POExtractionError(Exception):
    """
    Base exception for all PO extraction errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(POExtractionError):
    """Raised when the settings file is missing or malformed."""
    pass


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(POExtractionError):
    """Base exception for input adapter errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when a file type has no registered reader.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".pdf", ".xlsx"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class DocumentNotFoundError(InputError):
    """Raised when an input file cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a PDF or workbook cannot be decoded."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# EXTRACTION ERRORS
# =============================================================================

class ExtractionError(POExtractionError):
    """Base exception for engine errors."""
    pass


class InvalidDocumentError(ExtractionError):
    """
    Raised when an entry point receives an argument of the wrong shape.

    Example:
        >>> raise InvalidDocumentError("grid", "expected a sequence of rows, got int")
    """

    def __init__(self, modality: str, reason: str = None):
        message = f"Invalid {modality} document"
        details = {"modality": modality, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'POExtractionError',
    'ConfigurationError',
    'InputError',
    'UnsupportedFileTypeError',
    'DocumentNotFoundError',
    'CorruptedFileError',
    'ExtractionError',
    'InvalidDocumentError',
]
