#!/usr/bin/env python3
"""
AI Visibility Web Interface

Flask app exposing the visibility engine over HTTP.
"""

import logging
from typing import Optional

from flask import Flask

from routes import visibility_bp


def create_app(overrides: Optional[dict] = None) -> Flask:
    """
    Build the Flask app.

    overrides go into app.config; VISIBILITY_COMPLETION, VISIBILITY_CREDENTIALS
    and VISIBILITY_PROVIDER_CONFIG replace the live providers.
    """
    app = Flask(__name__)
    app.config.update(overrides or {})
    app.register_blueprint(visibility_bp)
    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("\n" + "="*60)
    print("  AI Visibility API")
    print("="*60)
    print("  POST http://localhost:5001/api/visibility")
    print("="*60 + "\n")
    app.run(debug=True, port=5001)
