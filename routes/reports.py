"""
Visibility report routes - run the engine for a business.

The route only validates input and serializes the report. Persistence
and auth live with the caller.
"""

from flask import current_app, jsonify, request
from pydantic import ValidationError

from config import credentials_for, load_provider_config
from models import Business, ScorePolicy
from visibility import ConfigurationError, LiveCompletion, check_visibility

from . import visibility_bp


def _provider_config():
    """Provider config, overridable via app.config for tests and deployments."""
    return current_app.config.get("VISIBILITY_PROVIDER_CONFIG") or load_provider_config()


@visibility_bp.route("/api/visibility", methods=["POST"])
def run_visibility_check():
    """
    Query all configured models about a business.

    Body: {"business": {name, type?, location?, website?}, "policy"?: str}
    A bare business object (no "business" key) is accepted too.
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({"error": "No data provided"}), 400

    try:
        business = Business.model_validate(data.get("business", data))
    except ValidationError as e:
        return jsonify({"error": "Invalid business", "message": str(e)}), 400

    try:
        policy = ScorePolicy(data.get("policy", ScorePolicy.EXCLUDE_FAILED.value))
    except ValueError:
        valid = [p.value for p in ScorePolicy]
        return jsonify({"error": "Invalid policy", "valid": valid}), 400

    try:
        cfg = _provider_config()
        complete = current_app.config.get("VISIBILITY_COMPLETION") or LiveCompletion(registry=cfg.registry)
        credentials = current_app.config.get("VISIBILITY_CREDENTIALS") or credentials_for(cfg.registry)
        report = check_visibility(business, cfg.table, complete=complete,
                                  credentials=credentials, policy=policy)
    except ConfigurationError as e:
        return jsonify({"error": "Configuration error", "message": str(e)}), 500

    return jsonify({"business": business.to_dict(), **report.to_dict()})


@visibility_bp.route("/api/health", methods=["GET"])
def health():
    """Service status plus which providers have a credential."""
    try:
        cfg = _provider_config()
    except ConfigurationError as e:
        return jsonify({"status": "error", "message": str(e)}), 500

    credentials = current_app.config.get("VISIBILITY_CREDENTIALS") or credentials_for(cfg.registry)
    providers = {
        pid: {"models": list(cfg.table.models_for(pid)), "configured": bool(credentials(pid))}
        for pid in cfg.table.provider_ids
    }
    return jsonify({"status": "ok", "providers": providers})
