#!/usr/bin/env python3
from typing import Optional

from ..states import MissionState, NavStatus
from ..base_state import BaseState


class ExploreGoalActiveState(BaseState):
    """Waits for the explorer to reach its lookup location, then starts scanning."""

    def execute(self) -> Optional[MissionState]:
        """Execute EXPLORE_GOAL_ACTIVE state logic."""
        status = self.explorer.goal_status()

        if status.is_failure:
            return self._handle_goal_failure(self.explorer, status, "EXPLORE_GOAL_ACTIVE")

        if status != NavStatus.SUCCEEDED:
            return None

        self.node.get_logger().info(
            f"EXPLORE_GOAL_ACTIVE: Explorer reached goal #{self.context.explorer_index}. "
            "Rotating to look for a marker."
        )
        self.explorer.rotate(self.params.scan_angular_speed)
        return MissionState.EXPLORE_SCANNING
