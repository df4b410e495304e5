"""
Mock HLS live server
Serves a sliding-window live playlist with delta updates and looping segments
for testing HLS clients.
"""
from __future__ import annotations

import os
import sys

BASE_DIR = os.path.dirname(__file__)


def _load_env_file(path: str) -> None:
    if not os.path.exists(path):
        return
    try:
        with open(path, 'r', encoding='utf-8') as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith('#'):
                    continue
                if '=' not in line:
                    continue
                key, value = line.split('=', 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError as env_err:
        print(f"⚠️ Could not read .env file ({env_err})")


_load_env_file(os.path.join(BASE_DIR, '.env'))

from mock_hls import HlsServer, ServerStartError
from mock_hls.config import HOST, PORT
from mock_hls.logging_setup import configure_logging


def main() -> None:
    logger = configure_logging()
    server = HlsServer()

    try:
        server.start(PORT, host=HOST)
    except ServerStartError as exc:
        logger.error("❌ Server start error: %s", exc)
        server.close()
        sys.exit(1)

    logger.info("Server has started ( port = %s ). Try to connect now...", server.port)
    logger.info("   %s", server.livestream_url)

    try:
        server.wait()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.close()


if __name__ == '__main__':
    main()
