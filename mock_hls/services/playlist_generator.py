"""Sliding-window live playlist generation."""
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..config import (
    INITIAL_MEDIA_SEQUENCE,
    PLAYLIST_VERSION,
    SEEKING_WINDOW_IN_SECONDS,
    SEGMENT_LENGTH,
    SEGMENTS_PATH,
    SIMULATE_ENCODING_LATENCY,
    SKIPPABLE_SEGMENTS,
    TARGET_SEGMENT_LENGTH,
)
from .clock import ServerClock
from .playlist_cache import PlaylistCache, RenderedPlaylists

LOGGER = logging.getLogger("mock_hls")

MPEGURL_CONTENT_TYPE = "application/vnd.apple.mpegurl"

MASTER_BANDWIDTH = 137557
MASTER_CODECS = "mp4a.40.2"


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)
_MILLIS_PER_DAY = 86_400_000


@lru_cache(maxsize=8)
def _date_prefix(day: int) -> str:
    return (_EPOCH + timedelta(days=day)).strftime("%Y-%m-%dT")


def epoch_micros(value: datetime) -> int:
    return (value.astimezone(timezone.utc) - _EPOCH) // _MICROSECOND


def format_epoch_millis(millis: int) -> str:
    """ISO-8601 UTC timestamp for milliseconds since the Unix epoch."""
    day, millis = divmod(millis, _MILLIS_PER_DAY)
    seconds, millis = divmod(millis, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{_date_prefix(day)}{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}Z"


def format_program_date_time(value: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return format_epoch_millis(epoch_micros(value) // 1000)


def render_master_playlist(variant_filename: str) -> str:
    lines = [
        "#EXTM3U",
        "#EXT-X-VERSION:3",
        "#EXT-X-ALLOW-CACHE:NO",
        f'#EXT-X-STREAM-INF:BANDWIDTH={MASTER_BANDWIDTH},CODECS="{MASTER_CODECS}"',
        variant_filename,
    ]
    return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class PlaylistConfig:
    segment_length: float = SEGMENT_LENGTH
    target_segment_length: int = TARGET_SEGMENT_LENGTH
    seeking_window_in_seconds: float = SEEKING_WINDOW_IN_SECONDS
    skippable_segments: int = SKIPPABLE_SEGMENTS
    initial_media_sequence: int = INITIAL_MEDIA_SEQUENCE
    version: int = PLAYLIST_VERSION
    segments_path: str = SEGMENTS_PATH
    simulate_encoding_latency: bool = SIMULATE_ENCODING_LATENCY

    def __post_init__(self) -> None:
        if self.target_segment_length <= 0:
            raise ValueError("target_segment_length must be positive")
        if self.seeking_window_in_seconds <= 0:
            raise ValueError("seeking_window_in_seconds must be positive")
        if self.segment_length <= 0:
            raise ValueError("segment_length must be positive")
        if self.skippable_segments < 0:
            raise ValueError("skippable_segments must not be negative")
        if self.segment_count < 1:
            raise ValueError(
                "seeking window of %ss is shorter than one %ss target segment"
                % (self.seeking_window_in_seconds, self.target_segment_length)
            )

    @property
    def segment_count(self) -> int:
        return int(math.floor(self.seeking_window_in_seconds / self.target_segment_length))

    @property
    def delta_segment_count(self) -> int:
        return min(self.skippable_segments + 1, self.segment_count)

    @property
    def skipped_segments(self) -> int:
        # Constant: segments leave at the top as fast as they arrive at the bottom.
        return self.segment_count - self.delta_segment_count

    @property
    def can_skip_until(self) -> int:
        return self.skippable_segments * self.target_segment_length


@dataclass
class WindowState:
    initial_media_sequence: int
    segment_count: int
    update_count: int = 0
    last_tick_at: Optional[datetime] = field(default=None)

    @property
    def media_sequence(self) -> int:
        return self.initial_media_sequence + self.update_count


class PlaylistGenerator:
    """Renders the full and delta variant playlists once per tick.

    Only the scheduler thread calls :meth:`tick`; request handlers read the
    results from the :class:`PlaylistCache`.
    """

    def __init__(
        self,
        config: PlaylistConfig,
        clock: ServerClock,
        cache: PlaylistCache,
    ) -> None:
        self.config = config
        self.clock = clock
        self.cache = cache
        # Fixed for the generator's lifetime so the window math stays consistent.
        self._segment_count = config.segment_count
        self._state = WindowState(
            initial_media_sequence=config.initial_media_sequence,
            segment_count=self._segment_count,
        )
        self._tick_guard = threading.Lock()

    @property
    def segment_count(self) -> int:
        return self._segment_count

    @property
    def update_count(self) -> int:
        return self._state.update_count

    @property
    def media_sequence(self) -> int:
        """Media sequence of the playlist the next tick will publish."""
        return self._state.media_sequence

    @property
    def last_tick_at(self) -> Optional[datetime]:
        return self._state.last_tick_at

    def _header(self, media_sequence: int) -> List[str]:
        config = self.config
        return [
            "#EXTM3U",
            f"#EXT-X-VERSION:{config.version}",
            f"#EXT-X-MEDIA-SEQUENCE:{media_sequence}",
            f"#EXT-X-TARGETDURATION:{config.target_segment_length}",
            f"#EXT-X-SERVER-CONTROL:CAN-SKIP-UNTIL={config.can_skip_until}",
        ]

    def render(self, now: datetime, update_count: int) -> RenderedPlaylists:
        """Render both playlists for a given air time and tick number."""
        config = self.config
        segment_count = self._segment_count
        if config.simulate_encoding_latency:
            now = now - timedelta(seconds=config.segment_length)

        header = self._header(config.initial_media_sequence + update_count)
        full_lines = list(header)
        delta_lines = list(header)
        delta_lines.append(f"#EXT-X-SKIP:SKIPPED-SEGMENTS={config.skipped_segments}")

        last_index = update_count + segment_count - 1
        first_delta_index = last_index - config.delta_segment_count + 1
        duration = f"#EXTINF:{config.segment_length},"
        newest_us = epoch_micros(now)
        step = config.segment_length * 1_000_000

        for segment_index in range(update_count, update_count + segment_count):
            inverse_index = last_index - segment_index
            pdt_ms = (newest_us - round(inverse_index * step)) // 1000
            entry = (
                f"#EXT-X-PROGRAM-DATE-TIME:{format_epoch_millis(pdt_ms)}",
                duration,
                f"{config.segments_path}/{segment_index}.ts",
            )
            full_lines.extend(entry)
            if segment_index >= first_delta_index:
                delta_lines.extend(entry)

        return RenderedPlaylists("\n".join(full_lines) + "\n", "\n".join(delta_lines) + "\n")

    def tick(self) -> RenderedPlaylists:
        """Publish the current window and advance it by one segment."""
        if not self._tick_guard.acquire(blocking=False):
            raise RuntimeError("PlaylistGenerator.tick() is not reentrant")
        try:
            now = self.clock.now()
            rendered = self.render(now, self._state.update_count)
            self.cache.publish(rendered.full, rendered.delta)
            LOGGER.debug("playlist published, media sequence %d", self._state.media_sequence)
            self._state.last_tick_at = now
            self._state.update_count += 1
            return rendered
        finally:
            self._tick_guard.release()
