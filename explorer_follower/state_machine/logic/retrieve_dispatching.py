#!/usr/bin/env python3
from typing import Optional

from ..states import MissionState
from ..base_state import BaseState


class RetrieveDispatchingState(BaseState):
    """Sends the follower to the next recorded marker location."""

    def execute(self) -> Optional[MissionState]:
        """Execute RETRIEVE_AWAITING_DISPATCH state logic."""
        index = self.context.follower_index + 1
        # Raises UnsetLocationError if exploration left a slot empty
        location = self.catalog.marker_location(index)

        self.context.follower_index = index
        self.context.start_goal(location.position)

        self.node.get_logger().info(
            f"RETRIEVE_AWAITING_DISPATCH: Sending goal #{index} to follower: {location}"
        )
        self.follower.send_goal(location.x, location.y)
        return MissionState.RETRIEVE_GOAL_ACTIVE
