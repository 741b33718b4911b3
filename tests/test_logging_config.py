"""Tests for the process-wide logging setup."""

from unittest.mock import patch

from core import logging_config


def test_configure_logging_runs_once(monkeypatch):
    monkeypatch.setattr(logging_config, "_configured", False)
    with patch.object(logging_config.structlog, "configure") as configure, patch.object(
        logging_config.logging, "basicConfig"
    ) as basic_config:
        logging_config.configure_logging(level="debug", json_logs=True)
        logging_config.configure_logging()

    configure.assert_called_once()
    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == "DEBUG"
    processors = configure.call_args.kwargs["processors"]
    assert isinstance(processors[-1], logging_config.structlog.processors.JSONRenderer)
