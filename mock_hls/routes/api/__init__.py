"""JSON control API blueprint."""
from __future__ import annotations

from flask import Blueprint

api_bp = Blueprint("api", __name__)


# Import modules so that decorators run immediately on blueprint creation.
from . import health  # noqa: E402,F401
from . import stale  # noqa: E402,F401

__all__ = ["api_bp"]
