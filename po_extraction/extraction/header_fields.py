"""
Header Field Extractor.

Populates HeaderFields from the free text around the item table.
Each field owns an ordered list of labelled patterns; the first
pattern whose capture group is non-empty wins. Fields that are often
printed below the table (terms, remarks, plant) are searched in the
header and footer together; identity fields (name, GSTIN, address,
currency) only in the header.
"""

import re
from typing import List, Optional, Pattern, Sequence, Tuple

from config import get_config
from po_extraction.utils.helpers import clean_text
from po_extraction.utils.logger import get_logger
from po_extraction.postprocessor.normalizers import extract_date
from .company_profiles import COMPANY_PROFILES, CompanyCode, get_profile
from .parse_result import HeaderFields

# Initialize module logger
logger = get_logger(__name__)

HEADER = 'header'
HEADER_AND_FOOTER = 'header_and_footer'

# A label value stops at the next column gap (two or more spaces)
_VALUE = r'(.+?)(?=\s{2,}|$)'


def _compile(*sources: str) -> Tuple[Pattern, ...]:
    return tuple(re.compile(source, re.IGNORECASE | re.MULTILINE) for source in sources)


# (attribute, scope, patterns) in extraction order
FIELD_PATTERNS: Sequence[Tuple[str, str, Tuple[Pattern, ...]]] = (
    ('customer_gstin', HEADER, _compile(
        r'GSTIN(?:\s*No)?\.?\s*[:\-]?\s*([A-Z0-9]+)',
    )),
    ('po_number', HEADER_AND_FOOTER, _compile(
        rf'Purchase\s*Order\s*(?:No|Number)\b\.?\s*[:\-]?[ \t]*{_VALUE}',
        rf'\bPO\s*(?:No|Number)\b\.?\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('po_date', HEADER_AND_FOOTER, _compile(
        rf'\bPO\s*Date\s*[:\-]?[ \t]*{_VALUE}',
        rf'Order\s*Date\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('payment_terms', HEADER_AND_FOOTER, _compile(
        rf'Payment\s*Terms\s*[:\-]?[ \t]*{_VALUE}',
        rf'\bTerms\s*:[ \t]*{_VALUE}',
    )),
    ('credit_days', HEADER_AND_FOOTER, _compile(
        r'Credit\s*(?:Days|Period)\s*[:\-]?\s*(\d+)',
    )),
    ('freight_terms', HEADER_AND_FOOTER, _compile(
        rf'Freight(?:\s*Terms)?\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('packing_forwarding', HEADER_AND_FOOTER, _compile(
        rf'Packing(?:\s*&\s*Forwarding)?\s*[:\-]?[ \t]*{_VALUE}',
        rf'\bP\s*&\s*F\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('insurance_terms', HEADER_AND_FOOTER, _compile(
        rf'Insurance\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('currency', HEADER, _compile(
        r'Currency\s*[:\-]?\s*(\w+)',
    )),
    ('delivery_terms', HEADER_AND_FOOTER, _compile(
        rf'Delivery\s*Terms\s*[:\-]?[ \t]*{_VALUE}',
        rf'Delivery\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('remarks', HEADER_AND_FOOTER, _compile(
        rf'Remarks\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('plant', HEADER_AND_FOOTER, _compile(
        rf'\bPlant\s*[:\-]?[ \t]*{_VALUE}',
    )),
    ('order_type', HEADER_AND_FOOTER, _compile(
        rf'Order\s*Type\s*[:\-]?[ \t]*{_VALUE}',
    )),
)

# Printed company names: registered names first, then generic labels
COMPANY_NAME_PATTERNS: Tuple[Pattern, ...] = tuple(
    pattern for profile in COMPANY_PROFILES for pattern in profile.name_patterns
) + _compile(rf'(?:Buyer|Customer|Company|Supplier)\s*[:\-]?[ \t]*{_VALUE}')

ADDRESS_LABELS = ('Billing Address', 'Address')

_CREDIT_DAYS = re.compile(r'(\d+)\s*day', re.IGNORECASE)


def extract_field(text: str, patterns: Sequence[Pattern]) -> str:
    """
    Return the first non-empty capture among ``patterns``, cleaned.

    Example:
        >>> extract_field("Plant: Pune", _compile(r'Plant\\s*:\\s*(.+)'))
        "Pune"
    """
    if not text:
        return ''
    for pattern in patterns:
        for match in pattern.finditer(text):
            value = clean_text(match.group(1))
            if value:
                return value
    return ''


def extract_address_block(text: str, labels: Sequence[str] = ADDRESS_LABELS) -> str:
    """
    Read up to five lines following an address label.

    The block ends at the first blank line and never looks further
    than 200 characters past the label.
    """
    if not text:
        return ''
    for label in labels:
        pattern = re.compile(rf'{re.escape(label)}\s*[:\-]?\s*([\s\S]{{0,200}})', re.IGNORECASE)
        match = pattern.search(text)
        if not match:
            continue
        segment = re.split(r'\n\s*\n', match.group(1))[0]
        lines = [clean_text(line) for line in segment.split('\n')]
        lines = [line for line in lines if line][:5]
        if lines:
            return ', '.join(lines)
    return ''


def derive_credit_days(payment_terms: str) -> str:
    """
    Pull the day count out of a payment terms phrase.

    Example:
        >>> derive_credit_days("45 days from receipt")
        "45"
    """
    match = _CREDIT_DAYS.search(payment_terms or '')
    return match.group(1) if match else ''


class HeaderFieldExtractor:
    """
    Extracts canonical header fields from header and footer text.

    Example:
        >>> extractor = HeaderFieldExtractor()
        >>> header = extractor.extract(sections.header_text, sections.footer_text,
        ...                            CompanyCode.SIDEL)
        >>> header.company_name
        "SIDEL INDIA PVT LTD"
    """

    def __init__(self) -> None:
        self.default_currency = get_config("parsing.default_currency", "INR")

    def extract(
        self,
        header_text: str,
        footer_text: str = '',
        company_code: CompanyCode = CompanyCode.UNKNOWN,
        fallback_text: Optional[str] = None
    ) -> HeaderFields:
        """
        Build HeaderFields for one document.

        Args:
            header_text: Text before the item table.
            footer_text: Text after the item table.
            company_code: Detected company, used for the name fallback.
            fallback_text: Searched for header-and-footer fields when both
                regions are empty (e.g. the whole document).

        Returns:
            Populated HeaderFields; unmatched fields keep their defaults.
        """
        scope = '\n'.join(part for part in (header_text, footer_text) if part)
        if not scope and fallback_text:
            scope = fallback_text

        header = HeaderFields(currency=self.default_currency)
        header.company_code = str(company_code)

        for attribute, where, patterns in FIELD_PATTERNS:
            text = header_text if where == HEADER else scope
            value = extract_field(text, patterns)
            if value:
                setattr(header, attribute, value)

        if header.po_date:
            header.po_date = extract_date(header.po_date) or header.po_date

        if not header.credit_days:
            header.credit_days = derive_credit_days(header.payment_terms)

        header.company_name = extract_field(header_text, COMPANY_NAME_PATTERNS)
        if not header.company_name:
            profile = get_profile(company_code)
            header.company_name = profile.display_name if profile else ''

        header.billing_address = extract_address_block(header_text)

        found: List[str] = [
            attr for attr in HeaderFields.KEYS
            if attr not in ('currency', 'company_code') and getattr(header, attr)
        ]
        logger.debug(f"Header fields found: {', '.join(found) or 'none'}")
        return header
