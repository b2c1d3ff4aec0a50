import logging
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config import ConfigurationManager  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def restore_logging():
    app_logger = logging.getLogger("po_extraction")
    level = app_logger.level
    yield app_logger
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(level)
    app_logger.propagate = True


SIDEL_PO_TEXT = "\n".join([
    "SIDEL INDIA PVT LTD",
    "Purchase Order No: 4500012345",
    "PO Date: 12.03.2024",
    "Payment Terms: 45 days from receipt",
    "Item   Description   Qty   Unit   Rate   Amount",
    "Gear shaft",
    "300123456 10 NOS 1,250.00 12500.00",
    "Total Value   12500.00",
    "Freight: Extra at actuals",
])


@pytest.fixture
def sidel_po_text():
    return SIDEL_PO_TEXT
