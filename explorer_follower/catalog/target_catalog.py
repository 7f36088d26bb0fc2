#!/usr/bin/env python3
"""
Target Catalog Module

Holds the explorer lookup locations and the marker locations recorded during
exploration, which become the follower's destinations.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import CatalogIndexError, ConfigurationError, UnsetLocationError


@dataclass(frozen=True, slots=True)
class MarkerLocation:
    """
    A recorded follower destination in the map frame.

    Attributes:
        x: X coordinate in meters (map frame)
        y: Y coordinate in meters (map frame)
        marker_id: ID of the marker found there, None for the home entry
    """
    x: float
    y: float
    marker_id: Optional[int] = None

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        label = 'home' if self.marker_id is None else f'marker {self.marker_id}'
        return f"{label}({self.x:.2f}, {self.y:.2f})"


def parse_waypoint_sequence(waypoint_sequence: Sequence[str]) -> List[Tuple[float, float]]:
    """
    Parse explorer waypoints from a string array parameter.

    Args:
        waypoint_sequence: Waypoint strings
                           Format: ["x:-1.75,y:3.24", "x:-2.6,y:-1.5", ...]

    Returns:
        List of (x, y) tuples in visiting order

    Raises:
        ConfigurationError: If an entry is malformed or the sequence is empty
    """
    waypoints = []
    for i, wp_str in enumerate(waypoint_sequence):
        fields = {}
        try:
            for part in wp_str.split(','):
                key, value = part.split(':', 1)
                fields[key.strip().lower()] = float(value.strip())
        except ValueError as e:
            raise ConfigurationError(f"Failed to parse waypoint {i} '{wp_str}': {e}") from e

        if 'x' not in fields or 'y' not in fields:
            raise ConfigurationError(
                f"Waypoint {i} '{wp_str}' missing required 'x' or 'y' coordinate"
            )
        waypoints.append((fields['x'], fields['y']))

    if not waypoints:
        raise ConfigurationError("At least one explorer waypoint must be configured")
    return waypoints


class TargetCatalog:
    """
    Static explorer waypoints plus dynamically recorded follower destinations.

    With N-1 configured waypoints the waypoint list has N entries, the last one
    being the explorer home. Marker location slots are also N long: slots
    0..N-2 are addressed by marker id and written by the location resolver,
    slot N-1 is the follower home appended at phase transition.
    """

    __slots__ = ('_logger', '_waypoints', '_positions', '_marker_ids', '_is_set')

    def __init__(
        self,
        waypoints: Sequence[Tuple[float, float]],
        explorer_home: Tuple[float, float],
        logger
    ):
        self._logger = logger
        self._waypoints: Tuple[Tuple[float, float], ...] = tuple(
            (float(x), float(y)) for x, y in waypoints
        ) + ((float(explorer_home[0]), float(explorer_home[1])),)

        slot_count = len(self._waypoints)
        self._positions = np.zeros((slot_count, 2), dtype=np.float64)
        self._marker_ids = np.full(slot_count, -1, dtype=np.int64)
        self._is_set = np.zeros(slot_count, dtype=bool)

    # ------------------------------------------------------------------
    # Waypoints
    # ------------------------------------------------------------------

    @property
    def waypoint_count(self) -> int:
        """Total waypoints including the explorer home (N)."""
        return len(self._waypoints)

    @property
    def last_explorer_index(self) -> int:
        """Index of the last waypoint the explorer scans at (N-2)."""
        return self.waypoint_count - 2

    @property
    def home_slot(self) -> int:
        """Marker location slot reserved for the follower home (N-1)."""
        return self.waypoint_count - 1

    @property
    def explorer_home(self) -> Tuple[float, float]:
        return self._waypoints[-1]

    def waypoint(self, index: int) -> Tuple[float, float]:
        """Return the (x, y) of explorer waypoint `index`."""
        if not 0 <= index < self.waypoint_count:
            raise CatalogIndexError(
                f"Waypoint index {index} out of range [0, {self.waypoint_count})"
            )
        return self._waypoints[index]

    # ------------------------------------------------------------------
    # Marker locations
    # ------------------------------------------------------------------

    def is_valid_marker_id(self, marker_id: int) -> bool:
        """Marker ids must address one of the slots 0..N-2."""
        return 0 <= marker_id < self.home_slot

    def has_location(self, index: int) -> bool:
        self._check_slot(index)
        return bool(self._is_set[index])

    def record_marker(self, marker_id: int, x: float, y: float) -> bool:
        """
        Record the map position of a marker.

        A slot is written once per mission; later writes for the same id are
        ignored so a marker seen again from another waypoint keeps its first
        position.

        Returns:
            True if the slot was written, False if it was already recorded
        """
        if not self.is_valid_marker_id(marker_id):
            raise CatalogIndexError(
                f"Marker id {marker_id} out of range [0, {self.home_slot})"
            )
        if self._is_set[marker_id]:
            self._logger.debug(
                f"Marker {marker_id} already recorded at "
                f"({self._positions[marker_id, 0]:.2f}, {self._positions[marker_id, 1]:.2f})"
            )
            return False

        self._positions[marker_id] = (x, y)
        self._marker_ids[marker_id] = marker_id
        self._is_set[marker_id] = True
        return True

    def append_home(self, x: float, y: float) -> bool:
        """Write the follower home into the final slot. Returns False if already set."""
        if self._is_set[self.home_slot]:
            self._logger.warning("Follower home already appended; ignoring")
            return False
        self._positions[self.home_slot] = (x, y)
        self._is_set[self.home_slot] = True
        return True

    def marker_location(self, index: int) -> MarkerLocation:
        """Return the recorded location in slot `index`."""
        self._check_slot(index)
        if not self._is_set[index]:
            raise UnsetLocationError(f"Marker location slot {index} has not been recorded")

        marker_id = int(self._marker_ids[index])
        return MarkerLocation(
            x=float(self._positions[index, 0]),
            y=float(self._positions[index, 1]),
            marker_id=marker_id if marker_id >= 0 else None
        )

    def recorded_count(self) -> int:
        """Number of marker slots (excluding home) written so far."""
        return int(np.count_nonzero(self._is_set[:self.home_slot]))

    def summary(self) -> List[str]:
        """Human-readable lines describing every slot, for logging."""
        lines = []
        for i in range(self.waypoint_count):
            if self._is_set[i]:
                lines.append(f"follower goal {i}: {self.marker_location(i)}")
            else:
                lines.append(f"follower goal {i}: <unset>")
        return lines

    def _check_slot(self, index: int):
        if not 0 <= index < self.waypoint_count:
            raise CatalogIndexError(
                f"Marker location slot {index} out of range [0, {self.waypoint_count})"
            )
