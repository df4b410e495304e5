"""Blueprint registration helpers."""
from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask

from .api import api_bp
from .stream import create_stream_blueprint

if TYPE_CHECKING:  # pragma: no cover
    from ..services.hls_server import HlsServerOptions


def register_routes(app: Flask, options: "HlsServerOptions") -> None:
    app.register_blueprint(create_stream_blueprint(options))
    if options.control_api:
        app.register_blueprint(api_bp)
