"""Tests for logging helpers."""
import logging

import pytest

from cloudexpy import setup_logging
from cloudexpy.core.logging import get_logger, redact


class TestGetLogger:
    """Test suite for get_logger."""

    def test_returns_named_logger(self):
        """Test logger carries the requested name."""
        logger = get_logger('cloudexpy.test')

        assert logger.name == 'cloudexpy.test'
        assert logger is logging.getLogger('cloudexpy.test')

    def test_propagates_to_root(self):
        """Test logger propagates so basicConfig() handlers see it."""
        assert get_logger('cloudexpy.test.propagate').propagate is True

    def test_records_reach_caplog(self, caplog):
        """Test records are captured through propagation."""
        logger = get_logger('cloudexpy.test.caplog')

        with caplog.at_level(logging.INFO, logger='cloudexpy.test.caplog'):
            logger.info("hello")

        assert "hello" in caplog.text


class TestSetupLogging:
    """Test suite for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_levels(self):
        names = ['cloudexpy', 'cloudexpy.upload', 'cloudexpy.upload.coordinator']
        saved = {name: logging.getLogger(name).level for name in names}
        yield
        for name, level in saved.items():
            logging.getLogger(name).setLevel(level)

    def test_sets_level(self):
        """Test module loggers take the given level."""
        setup_logging(logging.DEBUG)

        assert logging.getLogger('cloudexpy').level == logging.DEBUG
        assert logging.getLogger('cloudexpy.upload.coordinator').level == logging.DEBUG

    def test_default_level_info(self):
        """Test default level is INFO."""
        setup_logging()

        assert logging.getLogger('cloudexpy.upload').level == logging.INFO


class TestRedact:
    """Test suite for redact."""

    def test_masks_credentials(self):
        """Test signature and api_key are masked."""
        params = {'signature': 'abc', 'api_key': '1234', 'tags': 'a'}

        assert redact(params) == {'signature': '***', 'api_key': '***', 'tags': 'a'}

    def test_input_untouched(self):
        """Test the original mapping is not modified."""
        params = {'signature': 'abc'}
        redact(params)

        assert params == {'signature': 'abc'}
