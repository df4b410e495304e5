"""Shared application state linking a Flask app to its HLS server."""
from __future__ import annotations

import weakref
from typing import Optional, TYPE_CHECKING

from flask import Flask, current_app

if TYPE_CHECKING:  # pragma: no cover
    from .services.hls_server import HlsServer

EXTENSION_KEY = "mock_hls"


def bind_server(app: Flask, server: "HlsServer") -> None:
    # Weak: the routing table must not keep the server alive.
    app.extensions[EXTENSION_KEY] = weakref.ref(server)


def get_server(app: Optional[Flask] = None) -> Optional["HlsServer"]:
    app = app or current_app
    ref = app.extensions.get(EXTENSION_KEY)
    if ref is None:
        return None
    return ref()
