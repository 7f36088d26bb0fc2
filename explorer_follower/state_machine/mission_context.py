#!/usr/bin/env python3
"""Mission context containing shared runtime state."""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..marker import MarkerIdChannel


@dataclass(slots=True)
class MissionContext:
    """
    Shared runtime state for the mission.

    This context object is passed to all states, and the marker channel is
    shared with the observation callback. Waypoint indices are written only
    by the control loop.
    """

    # Goal dispatch progress (-1 = not started)
    explorer_index: int = -1
    follower_index: int = -1

    # Marker id hand-off from the observation callback
    marker_channel: MarkerIdChannel = field(default_factory=MarkerIdChannel)

    # Scanning state variables
    localization_complete: bool = False

    # Outstanding goal, kept for re-dispatch after a failure
    active_goal: Optional[Tuple[float, float]] = None
    goal_retries: int = 0

    def start_goal(self, goal: Tuple[float, float]):
        """Record a freshly dispatched goal."""
        self.active_goal = goal
        self.goal_retries = 0
