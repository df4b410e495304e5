"""Holder for the most recently rendered playlists."""
from __future__ import annotations

import threading
from typing import NamedTuple


class RenderedPlaylists(NamedTuple):
    full: str
    delta: str


_EMPTY = RenderedPlaylists("", "")


class PlaylistCache:
    """Single-writer, multi-reader store for the (full, delta) playlist pair.

    Both strings are swapped as one immutable tuple, so a reader never sees the
    full playlist of one tick next to the delta playlist of another.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = _EMPTY

    def publish(self, full: str, delta: str) -> RenderedPlaylists:
        rendered = RenderedPlaylists(full, delta)
        with self._lock:
            self._current = rendered
        return rendered

    def snapshot(self) -> RenderedPlaylists:
        with self._lock:
            return self._current

    def read_full(self) -> str:
        return self.snapshot().full

    def read_delta(self) -> str:
        return self.snapshot().delta

    @property
    def is_empty(self) -> bool:
        return self.snapshot() is _EMPTY
