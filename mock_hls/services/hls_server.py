"""Mock HLS origin: playlist generator, timer, segment store and HTTP listener."""
from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from werkzeug.serving import BaseWSGIServer, make_server

from ..config import (
    BASE_PATH,
    CONTROL_API,
    LOG_REQUESTS,
    PLAYLIST_FILENAME,
    SEEKING_WINDOW_IN_SECONDS,
    SEGMENT_LENGTH,
    SEGMENT_MODE,
    SEGMENT_POOL_SIZE,
    SEGMENTS_DIR,
    SEGMENTS_PATH,
    SERVER_TO_NOW_DIFFERENCE,
    SIMULATE_ENCODING_LATENCY,
    SKIPPABLE_SEGMENTS,
    TARGET_SEGMENT_LENGTH,
    VARIANT_FILENAME,
)
from .clock import ServerClock
from .playlist_cache import PlaylistCache
from .playlist_generator import PlaylistConfig, PlaylistGenerator
from .scheduler import PlaylistScheduler
from .segment_store import SegmentStore

LOGGER = logging.getLogger("mock_hls")


class ServerStartError(RuntimeError):
    """The HTTP listener could not be bound."""


@dataclass(frozen=True)
class HlsServerOptions:
    path: str = BASE_PATH
    playlist_filename: str = PLAYLIST_FILENAME
    variant_filename: str = VARIANT_FILENAME
    segments_path: str = SEGMENTS_PATH
    control_api: bool = CONTROL_API
    log_requests: bool = LOG_REQUESTS


class _HttpListener:
    """Threaded werkzeug server running on a background thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._server: Optional[BaseWSGIServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> Optional[int]:
        server = self._server
        return server.server_port if server is not None else None

    def start(self, app, host: str, port: int) -> int:
        with self._lock:
            if self._server is not None:
                raise ServerStartError("server is already running")
            try:
                server = make_server(host, port, app, threaded=True)
            except (OSError, SystemExit) as exc:
                # werkzeug exits the process on bind failures; surface it instead.
                raise ServerStartError(f"could not bind {host}:{port}: {exc}") from exc
            thread = threading.Thread(target=server.serve_forever, name="hls-http", daemon=True)
            self._server = server
            self._thread = thread
            thread.start()
            return server.server_port

    def stop(self) -> None:
        with self._lock:
            server, thread = self._server, self._thread
            self._server = None
            self._thread = None
        if server is None:
            return
        server.shutdown()
        server.server_close()
        if thread is not None:
            thread.join(timeout=5.0)
        LOGGER.info("🛑 HTTP listener stopped")

    def wait(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is not None:
            thread.join(timeout)


def _dispose(listener: _HttpListener, scheduler: PlaylistScheduler) -> None:
    listener.stop()
    scheduler.cancel()


class HlsServer:
    """A live HLS origin emulating a long-running stream.

    Construction starts the playlist timer right away, so the first playlist
    is rendered before any request is served. Call :meth:`start` to bind the
    HTTP listener and :meth:`close` (or use the server as a context manager)
    to tear everything down.

    ``server_to_now_difference`` shifts the simulated air time into the past,
    see :class:`~mock_hls.services.clock.ServerClock`.
    """

    def __init__(
        self,
        path: str = BASE_PATH,
        server_to_now_difference: float = SERVER_TO_NOW_DIFFERENCE,
        *,
        playlist_filename: str = PLAYLIST_FILENAME,
        variant_filename: str = VARIANT_FILENAME,
        seeking_window_in_seconds: float = SEEKING_WINDOW_IN_SECONDS,
        segment_length: float = SEGMENT_LENGTH,
        skippable_segments: int = SKIPPABLE_SEGMENTS,
        target_segment_length: int = TARGET_SEGMENT_LENGTH,
        simulate_encoding_latency: bool = SIMULATE_ENCODING_LATENCY,
        segments_dir: Union[str, Path] = SEGMENTS_DIR,
        segment_mode: str = SEGMENT_MODE,
        segment_pool_size: int = SEGMENT_POOL_SIZE,
        control_api: bool = CONTROL_API,
        log_requests: bool = LOG_REQUESTS,
        start_updates: bool = True,
        wall_clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        path = (path or "").strip("/")
        if not path:
            raise ValueError("path must not be empty")

        self.options = HlsServerOptions(
            path=path,
            playlist_filename=playlist_filename,
            variant_filename=variant_filename,
            segments_path=SEGMENTS_PATH,
            control_api=control_api,
            log_requests=log_requests,
        )
        self.playlist_config = PlaylistConfig(
            segment_length=segment_length,
            target_segment_length=target_segment_length,
            seeking_window_in_seconds=seeking_window_in_seconds,
            skippable_segments=skippable_segments,
            segments_path=SEGMENTS_PATH,
            simulate_encoding_latency=simulate_encoding_latency,
        )
        self.clock = ServerClock(server_to_now_difference, wall_clock=wall_clock)
        self.cache = PlaylistCache()
        self.generator = PlaylistGenerator(self.playlist_config, self.clock, self.cache)
        self.segment_store = SegmentStore(segments_dir, mode=segment_mode, pool_size=segment_pool_size)
        self.scheduler = PlaylistScheduler(target_segment_length, self.generator.tick)

        from ..app_factory import create_app

        self.app = create_app(self)
        self._listener = _HttpListener()
        self._finalizer = weakref.finalize(self, _dispose, self._listener, self.scheduler)

        if start_updates:
            self.scheduler.resume()

    def __enter__(self) -> "HlsServer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def path(self) -> str:
        return self.options.path

    @property
    def server_to_now_difference(self) -> float:
        return self.clock.server_to_now_difference

    @property
    def is_stale(self) -> bool:
        return not self.scheduler.is_running

    def set_stale(self, stale: bool) -> bool:
        """Freeze (``True``) or resume (``False``) playlist updates.

        Returns whether the call changed anything.
        """
        if stale:
            return self.scheduler.suspend()
        return self.scheduler.resume()

    @property
    def port(self) -> Optional[int]:
        return self._listener.port

    @property
    def livestream_url(self) -> Optional[str]:
        port = self.port
        if port is None:
            return None
        return f"http://localhost:{port}/{self.options.path}/{self.options.playlist_filename}"

    def start(self, port: int = 0, host: str = "127.0.0.1") -> int:
        """Bind the HTTP listener and serve in the background. Returns the port."""
        bound = self._listener.start(self.app, host, port)
        LOGGER.info("🌐 Mock HLS server listening on http://%s:%s/%s/", host, bound, self.options.path)
        return bound

    def wait(self, timeout: Optional[float] = None) -> None:
        self._listener.wait(timeout)

    def stop(self) -> None:
        self._listener.stop()

    def close(self) -> None:
        self._finalizer()
