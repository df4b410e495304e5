"""Freeze and resume the live playlist."""
from __future__ import annotations

from flask import jsonify, request

from ...logging_setup import LOGGER
from ...state import get_server
from . import api_bp
from .helpers import coerce_optional_bool, describe_server, server_unavailable


@api_bp.route("/api/stale", methods=["POST"])
def set_stale():
    payload = request.get_json(force=True, silent=True) or {}
    try:
        stale = coerce_optional_bool(payload.get("stale"))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if stale is None:
        return jsonify({"error": "Field 'stale' is required"}), 400

    server = get_server()
    if server is None:
        return server_unavailable()

    try:
        changed = server.set_stale(stale)
    except RuntimeError as exc:
        return jsonify({"error": str(exc)}), 409

    LOGGER.info("Stale flag set to %s (changed=%s)", stale, changed)
    response = describe_server(server)
    response["changed"] = changed
    return jsonify(response)
