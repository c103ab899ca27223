"""
Flask application factory.

Creates and configures the app, registers all blueprints.
"""
import importlib

from flask import Flask

MODEL_MODULES = [
    'revenuela.models.crm',
    'revenuela.models.integration',
    'revenuela.models.lead',
    'revenuela.models.sequence',
]


def load_models():
    """Import every model module so Base.metadata and relationships resolve."""
    for name in MODEL_MODULES:
        importlib.import_module(name)


def create_app():
    """Create and configure the Flask application."""
    from revenuela.config import SECRET_KEY
    from revenuela.logging_config import configure_logging

    app = Flask(__name__)

    configure_logging(app)

    app.secret_key = SECRET_KEY
    app.json.sort_keys = False

    # Schema is managed by Alembic — no create_all() here.
    load_models()

    from revenuela.routes.dashboard import bp as dashboard_bp
    from revenuela.routes.journeys import bp as journeys_bp
    from revenuela.routes.leads import bp as leads_bp
    from revenuela.routes.performance import bp as performance_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(journeys_bp)
    app.register_blueprint(leads_bp)
    app.register_blueprint(performance_bp)

    return app
