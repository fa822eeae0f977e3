"""Unit tests for structured logging configuration."""

import io
import json

import structlog

from rolebridge.core.config import Settings
from rolebridge.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)


def _json_settings() -> Settings:
    return Settings(_env_file=None, environment="testing", log_format="json")


def test_json_logging_writes_to_given_stream():
    stream = io.StringIO()
    configure_logging(_json_settings(), stream=stream)

    get_logger("rolebridge.test").info("Something happened", role_id="abc")

    line = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert line["message"] == "Something happened"
    assert line["role_id"] == "abc"
    assert line["level"] == "info"
    assert line["correlation_id"].startswith("cid_")

    structlog.reset_defaults()


def test_logging_context_binds_and_unbinds():
    stream = io.StringIO()
    configure_logging(_json_settings(), stream=stream)
    logger = get_logger("rolebridge.test")

    with LoggingContext(tool="create_user"):
        logger.info("inside")
    logger.info("outside")

    inside, outside = (json.loads(line) for line in stream.getvalue().strip().splitlines()[-2:])
    assert inside["tool"] == "create_user"
    assert "tool" not in outside

    structlog.reset_defaults()


def test_bound_correlation_id_is_kept():
    stream = io.StringIO()
    configure_logging(_json_settings(), stream=stream)

    bind_correlation_id("cid_fixed")
    try:
        get_logger().info("request")
    finally:
        clear_context()

    line = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert line["correlation_id"] == "cid_fixed"

    structlog.reset_defaults()
