"""Tests for structured logging configuration."""
import json
import logging
import os
from unittest.mock import patch

import pytest
from flask import Flask

from revenuela.logging_config import configure_logging, JSONFormatter


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Reset root logger state after each test."""
    root = logging.getLogger()
    original_level = root.level
    original_handlers = root.handlers[:]
    yield
    root.setLevel(original_level)
    root.handlers = original_handlers


class TestConfigureLogging:

    def test_default_level_is_info(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop('LOG_LEVEL', None)
            configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_log_level_case_insensitive(self):
        with patch.dict(os.environ, {'LOG_LEVEL': 'debug'}):
            configure_logging()
        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_log_level_defaults_to_info(self):
        with patch.dict(os.environ, {'LOG_LEVEL': 'NONSENSE'}):
            configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_text_format(self, capsys):
        with patch.dict(os.environ, {'LOG_FORMAT': 'text'}):
            configure_logging()
        logging.getLogger('journey.steps').warning("bad steps")
        output = capsys.readouterr().err
        assert 'journey.steps' in output
        assert 'bad steps' in output
        assert 'WARNING' in output

    def test_json_format(self, capsys):
        with patch.dict(os.environ, {'LOG_FORMAT': 'json', 'LOG_LEVEL': 'INFO'}):
            configure_logging()
        logging.getLogger('routes.journeys').info("loaded %d journeys", 3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry['logger'] == 'routes.journeys'
        assert entry['message'] == 'loaded 3 journeys'
        assert entry['level'] == 'INFO'

    def test_single_handler_on_reinit(self):
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_noisy_loggers_quieted(self):
        configure_logging()
        assert logging.getLogger('sqlalchemy.engine').level == logging.WARNING
        assert logging.getLogger('werkzeug').level == logging.WARNING


class TestJSONFormatter:

    def _record(self, msg='loaded'):
        return logging.LogRecord('routes.journeys', logging.INFO, __file__, 1, msg, None, None)

    def test_includes_service_name(self):
        entry = json.loads(JSONFormatter().format(self._record()))
        assert entry['service'] == 'revenuela-backend'

    def test_outside_request_has_no_request_fields(self):
        entry = json.loads(JSONFormatter().format(self._record()))
        assert 'path' not in entry
        assert 'workspaceId' not in entry

    def test_request_context_fields(self):
        app = Flask(__name__)
        with app.test_request_context('/api/journeys?workspaceId=ws-9'):
            entry = json.loads(JSONFormatter().format(self._record()))
        assert entry['method'] == 'GET'
        assert entry['path'] == '/api/journeys'
        assert entry['workspaceId'] == 'ws-9'

    def test_workspace_from_form(self):
        app = Flask(__name__)
        with app.test_request_context('/api/leads/upload-csv', method='POST',
                                      data={'workspaceId': 'ws-3'}):
            entry = json.loads(JSONFormatter().format(self._record()))
        assert entry['workspaceId'] == 'ws-3'

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = logging.LogRecord('x', logging.ERROR, __file__, 1, 'failed', None, sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert 'ValueError: boom' in entry['exception']
