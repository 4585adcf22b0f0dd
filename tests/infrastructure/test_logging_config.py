"""Tests for log formatting and request-id stamping."""

import json
import logging

import pytest

from storefront.infrastructure.logging_config import (
    REQUEST_ID_CTX,
    RequestIdFilter,
    configure_logging,
)


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _installed(root):
    return [h for h in root.handlers if getattr(h, "_storefront", False)]


class TestRequestIdFilter:

    def test_default_marker_outside_requests(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "-"

    def test_copies_current_request_id(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        token = REQUEST_ID_CTX.set("req-42")
        try:
            RequestIdFilter().filter(record)
        finally:
            REQUEST_ID_CTX.reset(token)
        assert record.request_id == "req-42"


class TestConfigureLogging:

    def test_json_lines_carry_request_id_and_extras(self, root_logger, capsys):
        configure_logging("INFO", "json")
        token = REQUEST_ID_CTX.set("req-7")
        try:
            logging.getLogger("storefront.orders").info("order placed", extra={"order_id": 7})
        finally:
            REQUEST_ID_CTX.reset(token)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["message"] == "order placed"
        assert entry["levelname"] == "INFO"
        assert entry["request_id"] == "req-7"
        assert entry["order_id"] == 7

    def test_text_format(self, root_logger, capsys):
        configure_logging("WARNING", "text")
        logging.getLogger("storefront.orders").info("hidden")
        logging.getLogger("storefront.orders").warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "WARNING  storefront.orders [-] shown" in err

    def test_reconfiguring_replaces_handler(self, root_logger):
        configure_logging("INFO", "json")
        configure_logging("DEBUG", "text")
        assert len(_installed(root_logger)) == 1
        assert root_logger.level == logging.DEBUG
