"""Server-side clock shifted by a fixed offset from the wall clock."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ServerClock:
    """Wall-clock time minus a constant ``server_to_now_difference``.

    A client that pins its own clock to a fixed date for testing registers the
    difference between that date and the device time once at startup. The
    server then reports time relative to the same fixed date, so a "live"
    stream can be simulated at any historic moment while time still passes in
    real time::

        fixed_client_date = datetime(1970, 1, 1, 0, 16, 40, tzinfo=timezone.utc)
        difference = (datetime.now(timezone.utc) - fixed_client_date).total_seconds()
        clock = ServerClock(difference)

    The offset is fixed at construction.
    """

    def __init__(
        self,
        server_to_now_difference: float = 0.0,
        wall_clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._difference = timedelta(seconds=float(server_to_now_difference))
        self._wall_clock = wall_clock or _utc_now

    @property
    def server_to_now_difference(self) -> float:
        return self._difference.total_seconds()

    def now(self) -> datetime:
        current = self._wall_clock()
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        return current - self._difference
