import logging

from flask import Flask
from hostel.config import DevelopmentConfig
from hostel.extensions import db, migrate


def create_app(config_class=DevelopmentConfig):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # app.logger is the "hostel" logger, so service module loggers inherit this level
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # A misconfigured blob store should stop startup, not the first request
    from hostel.services.blob_store import get_blob_store
    get_blob_store(app.config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Models must be imported for create_all / migrations to see them
    from hostel import models  # noqa: F401

    # Register Blueprints
    from hostel.api.routes.auth import auth_bp
    from hostel.api.routes.booking_requests import requests_bp
    from hostel.api.routes.dashboard import dashboard_bp
    from hostel.api.routes.main import main_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(requests_bp, url_prefix='/api/requests')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')
    app.register_blueprint(main_bp)

    from hostel.cli import register_commands
    register_commands(app)

    return app
