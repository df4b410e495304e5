"""Health endpoint exposing playlist timer state."""
from __future__ import annotations

from flask import jsonify

from ...state import get_server
from . import api_bp
from .helpers import describe_server, server_unavailable


@api_bp.route("/api/health")
def health():
    server = get_server()
    if server is None:
        return server_unavailable()
    return jsonify(describe_server(server))
