"""Mock HLS live origin for client testing."""

from .app_factory import create_app
from .services import HlsServer, ServerStartError

__all__ = ["create_app", "HlsServer", "ServerStartError"]
