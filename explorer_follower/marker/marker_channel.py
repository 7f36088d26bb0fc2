#!/usr/bin/env python3
"""Single-slot hand-off of the latest observed marker id."""
import threading
from typing import Any, Optional, Tuple


class MarkerIdChannel:
    """
    Last-write-wins mailbox between the observation callback and the control loop.

    The observation callback is the only producer and the location resolver the
    only consumer. Rapid observations never queue: a new id simply replaces
    the pending one.

    Each id travels with the stamp of the frames relayed for it. Repeated
    sightings of the pending id keep the stamp of the first one, so a resolver
    waiting for that stamp is not pushed back while the marker stays in view.
    """

    __slots__ = ('_lock', '_marker_id', '_stamp')

    def __init__(self):
        self._lock = threading.Lock()
        self._marker_id: Optional[int] = None
        self._stamp: Any = None

    def publish(self, marker_id: int, stamp: Any = None):
        with self._lock:
            if marker_id != self._marker_id:
                self._stamp = stamp
            self._marker_id = marker_id

    def peek(self) -> Optional[int]:
        """Return the pending marker id without consuming it."""
        with self._lock:
            return self._marker_id

    def pending(self) -> Optional[Tuple[int, Any]]:
        """Return (marker_id, stamp) for the pending id, or None."""
        with self._lock:
            if self._marker_id is None:
                return None
            return (self._marker_id, self._stamp)

    def consume(self, marker_id: int) -> bool:
        """
        Clear the slot if it still holds `marker_id`.

        Returns:
            True if cleared, False if a newer id arrived in the meantime
        """
        with self._lock:
            if self._marker_id != marker_id:
                return False
            self._marker_id = None
            self._stamp = None
            return True
