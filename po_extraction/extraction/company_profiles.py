"""
Company Profile Registry and Detector.

Known PO-issuing customers are described by a static registry built
once at import time and never mutated. Detection scans header/footer
text against each profile's keywords in registration order; the first
profile with any matching keyword wins.
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple

from po_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class CompanyCode(str, Enum):
    """Codes of the customers with a known PO layout."""
    SIDEL = "SIDEL"
    PHOENIX = "PHOENIX"
    BOSSAR = "BOSSAR"
    TECHPIONEER = "TECHPIONEER"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CompanyProfile:
    """
    Static description of a known customer.

    Attributes:
        code: Registry code
        display_name: Name used when the header carries no explicit name
        keywords: Detection patterns (case-insensitive)
        name_patterns: Patterns whose first group is the printed company name
    """
    code: CompanyCode
    display_name: str
    keywords: Tuple[Pattern, ...]
    name_patterns: Tuple[Pattern, ...] = ()

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.keywords)


def _patterns(*sources: str) -> Tuple[Pattern, ...]:
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


# Printed names run to the end of the line
_NAME_TAIL = r'[ \tA-Za-z0-9.&()\-]+'

COMPANY_PROFILES: Tuple[CompanyProfile, ...] = (
    CompanyProfile(
        code=CompanyCode.SIDEL,
        display_name="Sidel India Pvt Ltd",
        keywords=_patterns(r'SIDEL\s+INDIA', r'SIDEL\s+PVT'),
        name_patterns=_patterns(rf'(SIDEL{_NAME_TAIL})'),
    ),
    CompanyProfile(
        code=CompanyCode.PHOENIX,
        display_name="Phoenix",
        keywords=_patterns(r'PHOENIX'),
        name_patterns=_patterns(rf'(PHOENIX{_NAME_TAIL})'),
    ),
    CompanyProfile(
        code=CompanyCode.BOSSAR,
        display_name="Bossar",
        keywords=_patterns(r'BOSSAR'),
        name_patterns=_patterns(rf'(BOSSAR{_NAME_TAIL})'),
    ),
    CompanyProfile(
        code=CompanyCode.TECHPIONEER,
        display_name="SP TECHPIONEER PVT. LTD.",
        keywords=_patterns(r'TECHPIONEER'),
        name_patterns=_patterns(rf'((?:SP\s+)?TECHPIONEER{_NAME_TAIL})'),
    ),
)

PROFILES_BY_CODE: Mapping[CompanyCode, CompanyProfile] = MappingProxyType(
    {profile.code: profile for profile in COMPANY_PROFILES}
)


def get_profile(code: CompanyCode):
    """Return the profile registered for ``code``, or None."""
    return PROFILES_BY_CODE.get(code)


class CompanyDetector:
    """
    Detects the issuing customer from header and footer text.

    Example:
        >>> CompanyDetector().detect("SIDEL INDIA PVT LTD, Plot 5")
        <CompanyCode.SIDEL: 'SIDEL'>
        >>> CompanyDetector().detect("Acme Tools")
        <CompanyCode.UNKNOWN: 'UNKNOWN'>
    """

    def __init__(self, profiles: Tuple[CompanyProfile, ...] = COMPANY_PROFILES) -> None:
        self.profiles = profiles

    def detect(self, text: str) -> CompanyCode:
        source = text or ''
        for profile in self.profiles:
            if profile.matches(source):
                logger.debug(f"Detected company profile: {profile.code}")
                return profile.code
        return CompanyCode.UNKNOWN


def detect_company(text: str) -> CompanyCode:
    """Return the code of the first registered profile matching ``text``."""
    return CompanyDetector().detect(text)
