"""Application factory and app-wide configuration.

Run locally with: flask --app backend.app run --port 5000 --debug
"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.app.config import Settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    app = Flask(__name__)
    app.config["SERVICE_NAME"] = settings.SERVICE_NAME

    CORS(
        app,
        resources={rf"{settings.API_PREFIX}/*": {"origins": settings.CORS_ORIGINS}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix=settings.API_PREFIX)
    logging.getLogger(__name__).info(
        "%s ready, API mounted at %s", settings.SERVICE_NAME, settings.API_PREFIX
    )
    return app
