# CORS configuration
import logging

from flask_cors import CORS

logger = logging.getLogger(__name__)


def configure_cors(app, origins):
    # Only the JSON API is cross-origin; the dashboard is served separately.
    CORS(app, resources={
        r"/api/*": {
            "origins": list(origins),
            "methods": ["GET", "POST", "PATCH", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })
    logger.debug("CORS enabled for %s", ", ".join(origins) or "no origins")
    return app
