"""
Tests for validator configuration and logging setup
(aiml_validator/config.py, aiml_validator/utils/logging_utils.py).

Run: python -m pytest tests/test_config.py -q
"""

import logging
import sys

import pytest

from aiml_validator.config import ValidatorConfig
from aiml_validator.exceptions import ConfigurationError
from aiml_validator.utils.logging_utils import configure_split_stream_logging


class TestValidatorConfig:

    def test_defaults(self):
        config = ValidatorConfig()
        assert config.taxonomy_version == "2.0.1"
        assert config.strict is False
        assert config.debug is False
        assert config.schema_base_url == "https://schemas.meta-aiml.org"
        assert config.request_timeout == 10
        assert config.max_workers == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AIML_VALIDATOR_STRICT", "true")
        monkeypatch.setenv("AIML_VALIDATOR_SCHEMA_BASE_URL", "https://mirror.example.org")
        monkeypatch.setenv("AIML_VALIDATOR_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("AIML_VALIDATOR_MAX_WORKERS", "8")

        config = ValidatorConfig.from_env()

        assert config.strict is True
        assert config.debug is False
        assert config.schema_base_url == "https://mirror.example.org"
        assert config.request_timeout == 2.5
        assert config.max_workers == 8

    def test_from_env_rejects_bad_numbers(self, monkeypatch):
        monkeypatch.setenv("AIML_VALIDATOR_MAX_WORKERS", "many")
        with pytest.raises(ConfigurationError):
            ValidatorConfig.from_env()

    def test_from_mapping(self):
        config = ValidatorConfig.from_mapping({"strict": True, "request_timeout": 5})
        assert config.strict is True
        assert config.request_timeout == 5

    @pytest.mark.parametrize("data", [
        {"verbose": True},
        {"strict": "yes"},
        {"max_workers": 2.0},
        {"max_workers": True},
        {"request_timeout": "10"},
        {"schema_base_url": None},
    ])
    def test_from_mapping_rejects(self, data):
        with pytest.raises(ConfigurationError):
            ValidatorConfig.from_mapping(data)

    def test_from_mapping_requires_mapping(self):
        with pytest.raises(ConfigurationError):
            ValidatorConfig.from_mapping([("strict", True)])

    @pytest.mark.parametrize("kwargs", [{"request_timeout": 0}, {"max_workers": 0}])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            ValidatorConfig(**kwargs)

    def test_with_overrides(self):
        base = ValidatorConfig(debug=True)
        config = base.with_overrides(max_workers=4)

        assert config.debug is True
        assert config.max_workers == 4
        assert base.max_workers == 1
        assert base.with_overrides() is base
        with pytest.raises(ConfigurationError):
            base.with_overrides(unknown=1)


class TestLogging:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_split_streams(self):
        logger = configure_split_stream_logging(level=logging.DEBUG, stderr_level=logging.WARNING)
        stdout_handler, stderr_handler = logger.handlers

        assert stdout_handler.stream is sys.stdout
        assert stderr_handler.stream is sys.stderr
        assert stderr_handler.level == logging.WARNING

        info = logging.LogRecord("x", logging.INFO, __file__, 1, "info", None, None)
        warn = logging.LogRecord("x", logging.WARNING, __file__, 1, "warn", None, None)
        assert stdout_handler.filter(info)
        assert not stdout_handler.filter(warn)

    def test_set_logging_levels(self):
        logger = ValidatorConfig(log_level="warning", print_level="error").set_logging()

        assert logger.name == "aiml_validator"
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger().handlers[1].level == logging.ERROR

    def test_debug_flag_forces_debug_level(self):
        ValidatorConfig(debug=True).set_logging()
        assert logging.getLogger().level == logging.DEBUG
