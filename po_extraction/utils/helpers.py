"""
Helper Utilities Module.

Small text helpers shared by the text-stream and grid pipelines.
Functions here must never raise on arbitrary cell or line content.

Functions:
    - clean_text: Collapse whitespace in any value
    - cell_text: Render a spreadsheet cell as clean text
    - is_numeric_token: Test whether a token looks like a number
    - join_nonempty: Join the non-blank parts of a sequence
"""

import re
from datetime import date, datetime
from typing import Any, Iterable

_WHITESPACE = re.compile(r'\s+')
_NUMERIC_TOKEN = re.compile(r'^-?[\d,.]+$')


def clean_text(value: Any) -> str:
    """
    Collapse runs of whitespace and strip the result.

    Args:
        value: Any value; None becomes an empty string.

    Returns:
        Cleaned text.

    Example:
        >>> clean_text("  Steel\\n  Bracket ")
        "Steel Bracket"
    """
    if value is None:
        return ''
    return _WHITESPACE.sub(' ', str(value)).strip()


def cell_text(value: Any) -> str:
    """
    Render a grid cell as text.

    Integral floats lose their trailing ``.0`` so that codes read from
    numeric cells (``100234.0``) keep their printed form. Dates are
    rendered in ISO form.

    Example:
        >>> cell_text(100234.0)
        "100234"
        >>> cell_text(None)
        ""
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return clean_text(value)


def is_numeric_token(token: str) -> bool:
    """
    Check if a token is made only of digits, separators and a sign.

    Example:
        >>> is_numeric_token("1,250.00")
        True
        >>> is_numeric_token("NOS")
        False
    """
    return bool(token) and bool(_NUMERIC_TOKEN.match(token)) and any(c.isdigit() for c in token)


def join_nonempty(parts: Iterable[Any], separator: str = ' ') -> str:
    """Join the non-blank cleaned parts with ``separator``."""
    return separator.join(p for p in (clean_text(part) for part in parts) if p)
