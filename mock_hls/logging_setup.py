"""Logging configuration and request tracing middleware."""
from __future__ import annotations

import logging
from typing import Optional

from flask import request

from .config import DEBUG

LOGGER = logging.getLogger("mock_hls")
_CONFIGURED = False


def configure_logging(debug: Optional[bool] = None) -> logging.Logger:
    global _CONFIGURED
    if debug is None:
        debug = DEBUG
    level = logging.DEBUG if debug else logging.INFO
    if not _CONFIGURED:
        logging.basicConfig(
            level=level,
            format='%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        _CONFIGURED = True
    LOGGER.setLevel(level)
    return LOGGER


def register_request_logging(app) -> None:
    if getattr(app, "_request_logging_registered", False):
        return

    logger = LOGGER

    @app.before_request
    def log_request_info():  # type: ignore[unused-ignore]
        logger.info('📨 %s %s from %s', request.method, request.full_path.rstrip('?'), request.remote_addr)
        for header, value in request.headers:
            logger.debug('      %s: %s', header, value)

    @app.after_request
    def log_response_info(response):  # type: ignore[unused-ignore]
        logger.info('📤 %s %s -> %s', request.method, request.path, response.status_code)
        return response

    app._request_logging_registered = True
