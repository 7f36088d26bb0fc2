#!/usr/bin/env python3
from typing import Optional

from ..states import MissionState
from ..base_state import BaseState


class ExploreDispatchingState(BaseState):
    """Sends the explorer to its next lookup location."""

    def execute(self) -> Optional[MissionState]:
        """Execute EXPLORE_AWAITING_DISPATCH state logic."""
        index = self.context.explorer_index + 1
        x, y = self.catalog.waypoint(index)

        self.context.explorer_index = index
        self.context.start_goal((x, y))
        self.context.localization_complete = False
        self.resolver.reset()

        self.node.get_logger().info(
            f"EXPLORE_AWAITING_DISPATCH: Sending goal #{index} to explorer: "
            f"({x:.2f}, {y:.2f})"
        )
        self.explorer.send_goal(x, y)
        return MissionState.EXPLORE_GOAL_ACTIVE
