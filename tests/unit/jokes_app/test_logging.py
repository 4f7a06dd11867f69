"""Tests for logging configuration and URL redaction."""

import logging

from jokes_app.logging_config import get_logger, log_with_context, setup_logging
from jokes_app.middleware.logging_middleware import redact_sensitive_data


class TestRedaction:
    def test_redacts_password_and_token(self):
        url = "http://testserver/login?username=kody&password=twixrox&token=abc123"

        redacted = redact_sensitive_data(url)

        assert "twixrox" not in redacted
        assert "abc123" not in redacted
        assert "username=kody" in redacted
        assert "password=***REDACTED***" in redacted

    def test_leaves_listing_params_alone(self):
        url = "http://testserver/jokes?userId=u1&searchQuery=cat&sortOrder=asc"

        assert redact_sensitive_data(url) == url


class TestLogging:
    def test_log_with_context_passes_extra_fields(self, caplog):
        logger = get_logger("jokes_app.tests")

        with caplog.at_level(logging.INFO, logger="jokes_app.tests"):
            log_with_context(logger, "info", "Something happened", joke_id="j1", event_type="test_event")

        record = caplog.records[-1]
        assert record.getMessage() == "Something happened"
        assert record.joke_id == "j1"
        assert record.event_type == "test_event"

    def test_setup_logging_writes_json_file(self, tmp_path):
        root = setup_logging("DEBUG", log_dir=tmp_path)
        try:
            get_logger("jokes_app.tests").info("hello", extra={"event_type": "test_event"})
            for handler in root.handlers:
                handler.flush()

            content = (tmp_path / "jokes.log").read_text(encoding="utf-8")
            assert '"message": "hello"' in content
            assert '"event_type": "test_event"' in content
        finally:
            for handler in list(root.handlers):
                handler.close()
            root.handlers.clear()
