#!/usr/bin/env python3
"""
Nav2 action client with a pollable goal status.

Handles:
- Blocking wait for the action server at startup
- Non-blocking goal sending
- Goal acceptance/result callbacks folded into a single NavStatus
"""

import threading

from rclpy.node import Node
from rclpy.action import ActionClient
from geometry_msgs.msg import PoseStamped
from action_msgs.msg import GoalStatus
from nav2_msgs.action import NavigateToPose

from ..state_machine.states import NavStatus


_RESULT_STATUS = {
    GoalStatus.STATUS_SUCCEEDED: NavStatus.SUCCEEDED,
    GoalStatus.STATUS_ABORTED: NavStatus.ABORTED,
    GoalStatus.STATUS_CANCELED: NavStatus.CANCELED,
}


class NavigationClient:
    """
    Sends NavigateToPose goals and tracks the status of the latest one.

    Callbacks belonging to an older goal are ignored, so the status always
    describes the goal most recently passed to send_goal().
    """

    def __init__(self, node: Node, action_name: str, robot_name: str):
        """
        Initialize navigation client.

        Args:
            node: ROS2 node
            action_name: NavigateToPose action server name
            robot_name: Name used in log messages
        """
        self._node = node
        self._logger = node.get_logger()
        self._robot_name = robot_name
        self._action_name = action_name
        self._lock = threading.Lock()

        self._status = NavStatus.IDLE
        self._goal_seq = 0

        self._action_client = ActionClient(node, NavigateToPose, action_name)

    def wait_for_server(self, timeout_sec: float = 5.0):
        """Block until the action server is available, logging every timeout."""
        while not self._action_client.wait_for_server(timeout_sec=timeout_sec):
            self._logger.info(
                f"Waiting for {self._action_name} action server to come up "
                f"for {self._robot_name}..."
            )
        self._logger.info(f"{self._action_name} action server is available")

    def send_goal(self, x: float, y: float, frame_id: str = 'map'):
        """
        Send a navigation goal with identity orientation.

        Args:
            x, y: Target position in `frame_id`
            frame_id: Goal frame
        """
        goal = PoseStamped()
        goal.header.frame_id = frame_id
        goal.header.stamp = self._node.get_clock().now().to_msg()
        goal.pose.position.x = float(x)
        goal.pose.position.y = float(y)
        goal.pose.orientation.w = 1.0

        nav_goal = NavigateToPose.Goal()
        nav_goal.pose = goal

        with self._lock:
            self._goal_seq += 1
            seq = self._goal_seq
            self._status = NavStatus.PENDING

        send_future = self._action_client.send_goal_async(nav_goal)
        send_future.add_done_callback(lambda future: self._goal_response_callback(seq, future))
        self._logger.debug(f"[{self._robot_name}] Goal #{seq} sent to ({x:.2f}, {y:.2f})")

    def goal_status(self) -> NavStatus:
        with self._lock:
            return self._status

    def _is_current(self, seq: int) -> bool:
        return seq == self._goal_seq

    def _goal_response_callback(self, seq: int, future):
        """Handle goal acceptance/rejection."""
        try:
            goal_handle = future.result()
        except Exception as e:
            self._logger.error(f"[{self._robot_name}] Goal request failed: {e}")
            self._set_status(seq, NavStatus.REJECTED)
            return

        if not goal_handle.accepted:
            self._logger.warning(f"[{self._robot_name}] Goal REJECTED by server")
            self._set_status(seq, NavStatus.REJECTED)
            return

        with self._lock:
            if not self._is_current(seq):
                return
            self._status = NavStatus.ACTIVE

        result_future = goal_handle.get_result_async()
        result_future.add_done_callback(lambda f: self._goal_result_callback(seq, f))

    def _goal_result_callback(self, seq: int, future):
        """Handle goal result."""
        try:
            status = future.result().status
        except Exception as e:
            self._logger.error(f"[{self._robot_name}] Goal result failed: {e}")
            self._set_status(seq, NavStatus.ABORTED)
            return

        nav_status = _RESULT_STATUS.get(status, NavStatus.ABORTED)
        self._logger.debug(f"[{self._robot_name}] Goal #{seq} result: {nav_status.name}")
        self._set_status(seq, nav_status)

    def _set_status(self, seq: int, status: NavStatus):
        with self._lock:
            if self._is_current(seq):
                self._status = status

