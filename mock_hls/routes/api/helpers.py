"""Shared helpers for API routes."""
from __future__ import annotations

from typing import Any, Dict

from flask import jsonify


def coerce_optional_bool(value):
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    raise ValueError("Could not parse boolean value")


def server_unavailable():
    return jsonify({"error": "HLS server is not available"}), 500


def describe_server(server) -> Dict[str, Any]:
    generator = server.generator
    config = server.playlist_config
    last_tick_at = generator.last_tick_at
    return {
        "status": "stale" if server.is_stale else "live",
        "stale": server.is_stale,
        "scheduler": server.scheduler.state.value,
        "port": server.port,
        "livestream_url": server.livestream_url,
        "update_count": generator.update_count,
        "media_sequence": generator.media_sequence - 1 if generator.update_count else None,
        "segment_count": generator.segment_count,
        "skipped_segments": config.skipped_segments,
        "target_duration": config.target_segment_length,
        "segment_length": config.segment_length,
        "server_to_now_difference": server.server_to_now_difference,
        "last_tick_at": last_tick_at.isoformat() if last_tick_at else None,
    }
