"""Flask application factory."""
from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, Response, request
from flask_cors import CORS

from .logging_setup import LOGGER, configure_logging, register_request_logging
from .routes import register_routes
from .state import bind_server

if TYPE_CHECKING:  # pragma: no cover
    from .services.hls_server import HlsServer


def _not_found(_error):
    LOGGER.info("Not found handler called for %s %s", request.method, request.full_path.rstrip("?"))
    return Response("Not Found", status=404, mimetype="text/plain")


def create_app(server: "HlsServer") -> Flask:
    configure_logging()

    app = Flask(__name__)
    CORS(app)

    bind_server(app, server)
    if server.options.log_requests:
        register_request_logging(app)
    register_routes(app, server.options)
    app.register_error_handler(404, _not_found)
    app.register_error_handler(405, _not_found)

    return app
