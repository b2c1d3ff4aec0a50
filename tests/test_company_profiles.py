import pytest

from po_extraction.extraction.company_parsers import parse_sidel_items, specialized_parser_for
from po_extraction.extraction.company_profiles import (
    PROFILES_BY_CODE,
    CompanyCode,
    detect_company,
    get_profile,
)


def test_detects_sidel():
    assert detect_company("SIDEL INDIA PVT LTD\nPlot 5, Chakan") is CompanyCode.SIDEL


def test_detection_is_case_insensitive():
    assert detect_company("Phoenix Mecano India") is CompanyCode.PHOENIX


def test_unknown_company():
    assert detect_company("Acme Tools Ltd") is CompanyCode.UNKNOWN
    assert detect_company("") is CompanyCode.UNKNOWN


def test_first_registered_profile_wins():
    assert detect_company("BOSSAR packaging, agent for PHOENIX") is CompanyCode.PHOENIX


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        PROFILES_BY_CODE[CompanyCode.UNKNOWN] = None


def test_profile_lookup():
    assert get_profile(CompanyCode.TECHPIONEER).display_name == "SP TECHPIONEER PVT. LTD."
    assert get_profile(CompanyCode.UNKNOWN) is None


def test_specialized_parser_dispatch():
    assert specialized_parser_for(CompanyCode.SIDEL) is parse_sidel_items
    assert specialized_parser_for("SIDEL") is parse_sidel_items
    assert specialized_parser_for(CompanyCode.PHOENIX) is None
    assert specialized_parser_for("NOT-A-CODE") is None
