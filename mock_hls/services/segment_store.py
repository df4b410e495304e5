"""Looping sample segments served for any logical segment index."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config import SEGMENT_MODE, SEGMENT_POOL_SIZE, SEGMENTS_DIR

SEGMENT_CONTENT_TYPE = "video/mp2t"
SEGMENT_EXTENSION = ".ts"
FIXED_SAMPLE_NAME = "sample.ts"
SEGMENT_MODES = {"fixed", "rotating"}


class SegmentNotFound(LookupError):
    """No backing file exists for the requested segment."""


@dataclass
class SegmentPayload:
    stream: BinaryIO
    length: Optional[int]
    path: Path

    def close(self) -> None:
        self.stream.close()


class SegmentStore:
    """Maps ever-increasing playlist indices onto a small pool of files.

    ``fixed`` serves ``sample.ts`` for every index; ``rotating`` serves
    ``{index % pool_size}.ts``.
    """

    def __init__(
        self,
        directory: Union[str, Path] = SEGMENTS_DIR,
        mode: str = SEGMENT_MODE,
        pool_size: int = SEGMENT_POOL_SIZE,
    ) -> None:
        mode = (mode or "fixed").strip().lower()
        if mode not in SEGMENT_MODES:
            raise ValueError(f"Unsupported segment mode: {mode}")
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        self.directory = Path(directory)
        self.mode = mode
        self.pool_size = pool_size

    @staticmethod
    def index_from_name(name: str) -> Optional[int]:
        stem, ext = os.path.splitext(name)
        if ext.lower() != SEGMENT_EXTENSION or not stem.isdigit():
            return None
        return int(stem)

    def path_for(self, index: Optional[int]) -> Path:
        if self.mode == "fixed":
            return self.directory / FIXED_SAMPLE_NAME
        if index is None or index < 0:
            raise SegmentNotFound(f"Not a segment index: {index!r}")
        return self.directory / f"{index % self.pool_size}{SEGMENT_EXTENSION}"

    def open(self, index: Optional[int]) -> SegmentPayload:
        path = self.path_for(index)
        try:
            stream = path.open("rb")
        except OSError as exc:
            raise SegmentNotFound(str(path)) from exc
        try:
            length: Optional[int] = os.fstat(stream.fileno()).st_size
        except OSError:
            length = None
        return SegmentPayload(stream=stream, length=length, path=path)

    def open_name(self, name: str) -> SegmentPayload:
        return self.open(self.index_from_name(name))
