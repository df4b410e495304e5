"""Playlist generation, scheduling and segment serving."""

from .clock import ServerClock
from .playlist_cache import PlaylistCache, RenderedPlaylists
from .playlist_generator import PlaylistConfig, PlaylistGenerator, WindowState, render_master_playlist
from .scheduler import PlaylistScheduler, SchedulerState
from .segment_store import SegmentNotFound, SegmentPayload, SegmentStore
from .hls_server import HlsServer, HlsServerOptions, ServerStartError

__all__ = [
    "ServerClock",
    "PlaylistCache",
    "RenderedPlaylists",
    "PlaylistConfig",
    "PlaylistGenerator",
    "WindowState",
    "render_master_playlist",
    "PlaylistScheduler",
    "SchedulerState",
    "SegmentNotFound",
    "SegmentPayload",
    "SegmentStore",
    "HlsServer",
    "HlsServerOptions",
    "ServerStartError",
]
