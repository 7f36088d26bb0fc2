#!/usr/bin/env python3
from typing import Optional

from ..states import MissionState
from ..base_state import BaseState


class ExploreScanningState(BaseState):
    """Rotates in place until the observed marker is localized in the map frame."""

    def execute(self) -> Optional[MissionState]:
        """Execute EXPLORE_SCANNING state logic."""
        if self.resolver.attempt():
            self.context.localization_complete = True

        if not self.context.localization_complete:
            # Re-sent every tick; base controllers drop cmd_vel after a timeout
            self.explorer.rotate(self.params.scan_angular_speed)
            return None

        self.explorer.stop()

        if self.context.explorer_index >= self.catalog.last_explorer_index:
            return self._finish_exploring()

        self.node.get_logger().info(
            f"EXPLORE_SCANNING: Marker localized at goal #{self.context.explorer_index}. "
            "Moving on."
        )
        return MissionState.EXPLORE_AWAITING_DISPATCH

    def _finish_exploring(self) -> MissionState:
        """Hand the recorded locations over to the follower."""
        logger = self.node.get_logger()

        home_x, home_y = self.params.follower_home
        self.catalog.append_home(home_x, home_y)

        logger.info("=============")
        for line in self.catalog.summary():
            logger.info(line)
        logger.info("=============")

        if self.params.explorer_return_home:
            x, y = self.catalog.explorer_home
            logger.info(f"EXPLORE_SCANNING: Parking explorer at home ({x:.2f}, {y:.2f})")
            self.explorer.send_goal(x, y)

        logger.info("EXPLORER JOB DONE!")
        return MissionState.RETRIEVE_AWAITING_DISPATCH
