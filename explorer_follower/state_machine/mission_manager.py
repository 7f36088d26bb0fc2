#!/usr/bin/env python3
"""Mission manager dispatching the current state to its logic class."""
from typing import TYPE_CHECKING, Optional

from .states import MissionState
from .mission_context import MissionContext
from .logic import (
    ExploreDispatchingState,
    ExploreGoalActiveState,
    ExploreScanningState,
    RetrieveDispatchingState,
    RetrieveGoalActiveState,
)
from ..catalog import TargetCatalog
from ..marker import LocationResolver
from ..utils import MissionParams

if TYPE_CHECKING:
    from rclpy.node import Node
    from ..controller import RobotInterface


class MissionManager:
    """
    Manages mission state logic and execution.

    Owns one instance of every state class, all sharing the same context.
    Terminal states (DONE, ABORTED) have no handler.
    """

    INITIAL_STATE = MissionState.EXPLORE_AWAITING_DISPATCH

    def __init__(
        self,
        node: 'Node',
        explorer: 'RobotInterface',
        follower: 'RobotInterface',
        catalog: TargetCatalog,
        resolver: LocationResolver,
        params: MissionParams,
        context: Optional[MissionContext] = None
    ):
        """
        Initialize mission manager.

        Args:
            node: ROS2 node for logging
            explorer: Explorer robot (Nav2 goals + cmd_vel)
            follower: Follower robot (Nav2 goals)
            catalog: Explorer waypoints and recorded marker locations
            resolver: Map-frame marker localization
            params: Mission configuration
            context: Shared runtime state, created if not given
        """
        self.node = node
        self.context = context if context is not None else MissionContext()

        state_args = (node, explorer, follower, catalog, resolver, params, self.context)

        # State handler dispatch table
        self.state_handlers = {
            MissionState.EXPLORE_AWAITING_DISPATCH: ExploreDispatchingState(*state_args),
            MissionState.EXPLORE_GOAL_ACTIVE: ExploreGoalActiveState(*state_args),
            MissionState.EXPLORE_SCANNING: ExploreScanningState(*state_args),
            MissionState.RETRIEVE_AWAITING_DISPATCH: RetrieveDispatchingState(*state_args),
            MissionState.RETRIEVE_GOAL_ACTIVE: RetrieveGoalActiveState(*state_args),
        }

    def execute_state(self, state: MissionState) -> Optional[MissionState]:
        """
        Execute logic for the given state.

        Args:
            state: Current mission state to execute

        Returns:
            New state to transition to, or None to stay in current state
        """
        handler = self.state_handlers.get(state)
        if handler:
            return handler.execute()
        return None
