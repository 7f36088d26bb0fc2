#!/usr/bin/env python3
from typing import Optional

from ..states import MissionState, NavStatus
from ..base_state import BaseState


class RetrieveGoalActiveState(BaseState):
    """Waits for the follower to reach its destination."""

    def execute(self) -> Optional[MissionState]:
        """Execute RETRIEVE_GOAL_ACTIVE state logic."""
        status = self.follower.goal_status()

        if status.is_failure:
            return self._handle_goal_failure(self.follower, status, "RETRIEVE_GOAL_ACTIVE")

        if status != NavStatus.SUCCEEDED:
            return None

        self.node.get_logger().info(
            f"RETRIEVE_GOAL_ACTIVE: Follower reached goal #{self.context.follower_index}"
        )

        if self.context.follower_index >= self.catalog.home_slot:
            self.node.get_logger().info("MISSION FINISHED!")
            return MissionState.DONE

        return MissionState.RETRIEVE_AWAITING_DISPATCH
