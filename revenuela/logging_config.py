"""
Logging setup for the backend, called once from create_app().

LOG_FORMAT picks "text" (default) or "json"; LOG_LEVEL defaults to INFO. JSON
entries carry the service name and, inside a request, the method, path and
workspaceId so one workspace's journey or import errors can be filtered out.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone

from flask import has_request_context, request

from revenuela.config import SERVICE_NAME


def request_fields():
    """Method, path and workspaceId of the current request, if any."""
    if not has_request_context():
        return {}
    fields = {'method': request.method, 'path': request.path}
    workspace_id = request.args.get('workspaceId') or request.form.get('workspaceId')
    if workspace_id:
        fields['workspaceId'] = workspace_id
    return fields


class JSONFormatter(logging.Formatter):
    """Single-line JSON entries for the log aggregator."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'service': SERVICE_NAME,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update(request_fields())
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


# SQL echo, dev-server access lines, HTTP pool chatter
_NOISY_LOGGERS = [
    'sqlalchemy.engine',
    'werkzeug',
    'urllib3',
]


def configure_logging(app=None):
    """
    Install a single stderr handler on the root logger.

    Environment variables:
        LOG_LEVEL  — Python log level name (default: INFO)
        LOG_FORMAT — "text" (default) or "json"
    """
    level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    log_format = os.getenv('LOG_FORMAT', 'text').lower()

    root = logging.getLogger()
    root.setLevel(level)

    # Re-init replaces the handler rather than stacking another
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if log_format == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s %(name)s — %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))

    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if app is not None:
        app.logger.setLevel(level)
