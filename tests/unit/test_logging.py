"""Unit tests for the structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest

from image_discovery.utils.logging import configure_logging, get_logger


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    yield stream
    # Restore the default stdout configuration for the rest of the suite.
    configure_logging()


class TestConfigureLogging:
    def test_json_output(self, log_stream: io.StringIO) -> None:
        configure_logging(log_level="INFO", json_output=True, stream=log_stream)

        get_logger("tests.json").info("escalation_level_started", level="thematic")

        record = json.loads(log_stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "escalation_level_started"
        assert record["level"] == "info"
        assert record["logger_name"] == "tests.json"
        assert "timestamp" in record

    def test_level_filtering(self, log_stream: io.StringIO) -> None:
        configure_logging(log_level="WARNING", json_output=True, stream=log_stream)

        logger = get_logger("tests.filter")
        logger.info("dropped")
        logger.warning("kept")

        output = log_stream.getvalue()
        assert "dropped" not in output
        assert "kept" in output

    def test_stdlib_records_share_the_stream(self, log_stream: io.StringIO) -> None:
        configure_logging(log_level="INFO", json_output=True, stream=log_stream)

        logging.getLogger("httpx").warning("upstream slow")

        assert "upstream slow" in log_stream.getvalue()

    def test_events_carry_service_name(self, log_stream: io.StringIO) -> None:
        configure_logging(log_level="INFO", json_output=True, stream=log_stream)

        get_logger("tests.service").info("app_started")
        logging.getLogger("uvicorn.error").warning("bind retry")

        records = [json.loads(line) for line in log_stream.getvalue().strip().splitlines()]
        assert [record["service"] for record in records] == ["image-discovery"] * 2

    def test_http_client_chatter_held_at_warning(self, log_stream: io.StringIO) -> None:
        configure_logging(log_level="DEBUG", json_output=True, stream=log_stream)

        logging.getLogger("httpx").info("HTTP Request: POST /chat/completions")
        logging.getLogger("openai").warning("retrying request")
        logging.getLogger("uvicorn").info("application startup")

        output = log_stream.getvalue()
        assert "HTTP Request" not in output
        assert "retrying request" in output
        assert "application startup" in output

    def test_stricter_level_applies_to_http_clients(self, log_stream: io.StringIO) -> None:
        configure_logging(log_level="ERROR", json_output=True, stream=log_stream)

        logging.getLogger("httpcore").warning("connection reset")

        assert log_stream.getvalue() == ""
        assert logging.getLogger("httpcore").level == logging.ERROR

    def test_json_serializes_tracebacks(self, log_stream: io.StringIO) -> None:
        configure_logging(log_level="INFO", json_output=True, stream=log_stream)

        try:
            raise ValueError("bad candidate url")
        except ValueError:
            get_logger("tests.exc").exception("candidate_rejected")

        record = json.loads(log_stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "candidate_rejected"
        assert "ValueError: bad candidate url" in record["exception"]
