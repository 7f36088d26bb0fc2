#!/usr/bin/env python3
"""Base state class for mission coordinator states."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from .states import MissionState, NavStatus
from .mission_context import MissionContext
from ..catalog import TargetCatalog
from ..marker import LocationResolver
from ..utils import MissionParams

if TYPE_CHECKING:
    from rclpy.node import Node
    from ..controller import RobotInterface


class BaseState(ABC):
    """
    Abstract base class for mission states.

    Each concrete state implements the execute() method containing its specific logic.
    """

    __slots__ = ('node', 'explorer', 'follower', 'catalog', 'resolver', 'params', 'context')

    def __init__(
        self,
        node: 'Node',
        explorer: 'RobotInterface',
        follower: 'RobotInterface',
        catalog: TargetCatalog,
        resolver: LocationResolver,
        params: MissionParams,
        context: MissionContext
    ):
        """
        Initialize base state.

        Args:
            node: ROS2 node for logging
            explorer: Explorer robot (Nav2 goals + cmd_vel)
            follower: Follower robot (Nav2 goals)
            catalog: Explorer waypoints and recorded marker locations
            resolver: Map-frame marker localization
            params: Mission configuration
            context: Shared mission context for runtime state
        """
        self.node = node
        self.explorer = explorer
        self.follower = follower
        self.catalog = catalog
        self.resolver = resolver
        self.params = params
        self.context = context

    @abstractmethod
    def execute(self) -> Optional[MissionState]:
        """
        Execute the state logic.

        Returns:
            New state to transition to, or None to stay in current state
        """
        pass

    def _handle_goal_failure(
        self,
        robot: 'RobotInterface',
        status: NavStatus,
        label: str
    ) -> Optional[MissionState]:
        """
        Re-send the outstanding goal, or abort once the retry limit is spent.

        Re-sending does not advance any waypoint index.
        """
        if self.context.goal_retries >= self.params.goal_retry_limit:
            self.node.get_logger().error(
                f"{label}: Goal {self.context.active_goal} ended {status.name} "
                f"after {self.context.goal_retries} retries. Aborting mission."
            )
            self.explorer.stop()
            return MissionState.ABORTED

        self.context.goal_retries += 1
        x, y = self.context.active_goal
        self.node.get_logger().warning(
            f"{label}: Goal ({x:.2f}, {y:.2f}) ended {status.name}. "
            f"Retrying ({self.context.goal_retries}/{self.params.goal_retry_limit})."
        )
        robot.send_goal(x, y)
        return None
