"""Application-wide configuration values."""
from __future__ import annotations

import os
from pathlib import Path


def _env_flag(name: str, default: str = "0") -> bool:
    value = os.getenv(name)
    if value is None:
        value = default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


BASE_DIR = Path(__file__).resolve().parent
RESOURCES_DIR = BASE_DIR / "resources"
SEGMENTS_DIR = Path(os.getenv("HLS_MOCK_SEGMENTS_DIR", str(RESOURCES_DIR / "segments")))

HOST = os.getenv("HLS_MOCK_HOST", "0.0.0.0")
PORT = _env_int("HLS_MOCK_PORT", 9080)
DEBUG = _env_flag("HLS_MOCK_DEBUG", "0")
LOG_REQUESTS = _env_flag("HLS_MOCK_LOG_REQUESTS", "0")
CONTROL_API = _env_flag("HLS_MOCK_CONTROL_API", "1")

BASE_PATH = os.getenv("HLS_MOCK_PATH", "mockServer").strip("/") or "mockServer"
PLAYLIST_FILENAME = os.getenv("HLS_MOCK_PLAYLIST", "main-ios.m3u8")
VARIANT_FILENAME = os.getenv("HLS_MOCK_VARIANT", "main-128000-ios.m3u8")
SEGMENTS_PATH = "segments"

SEGMENT_LENGTH = _env_float("HLS_MOCK_SEGMENT_LENGTH", 2.9866666)
TARGET_SEGMENT_LENGTH = _env_int("HLS_MOCK_TARGET_SEGMENT_LENGTH", 3)
SEEKING_WINDOW_IN_SECONDS = _env_float("HLS_MOCK_SEEKING_WINDOW", 18_000.0)  # 5h
SKIPPABLE_SEGMENTS = _env_int("HLS_MOCK_SKIPPABLE_SEGMENTS", 6)
INITIAL_MEDIA_SEQUENCE = 1_000_000
PLAYLIST_VERSION = 3

SERVER_TO_NOW_DIFFERENCE = _env_float("HLS_MOCK_SERVER_TO_NOW_DIFFERENCE", 0.0)
# Newest segment airs one segment behind live time.
SIMULATE_ENCODING_LATENCY = _env_flag("HLS_MOCK_ENCODING_LATENCY", "1")

SEGMENT_MODE = os.getenv("HLS_MOCK_SEGMENT_MODE", "fixed").strip().lower()
if SEGMENT_MODE not in {"fixed", "rotating"}:
    SEGMENT_MODE = "fixed"

SEGMENT_POOL_SIZE = _env_int("HLS_MOCK_SEGMENT_POOL_SIZE", 10)
if SEGMENT_POOL_SIZE < 1:
    SEGMENT_POOL_SIZE = 1
