import pytest

from config import ConfigurationManager, get_config
from po_extraction.postprocessor import PostProcessor
from po_extraction.utils.exceptions import ConfigurationError


def test_bundled_settings():
    assert get_config("parsing.header_scan_rows") == 50
    assert get_config("parsing.default_unit") == "NOS"
    assert get_config("missing.key", "fallback") == "fallback"


def test_custom_settings(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("parsing:\n  default_unit: PCS\n", encoding="utf-8")

    ConfigurationManager(str(path))

    assert get_config("parsing.default_unit") == "PCS"
    assert PostProcessor().default_unit == "PCS"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigurationManager(str(tmp_path / "absent.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("parsing: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigurationManager(str(path))


def test_root_must_be_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigurationManager(str(path))
