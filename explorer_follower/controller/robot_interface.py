#!/usr/bin/env python3
"""Robot interface for goal dispatch and velocity commands."""
from typing import Optional

from rclpy.node import Node
from geometry_msgs.msg import Twist

from .navigation_client import NavigationClient
from ..state_machine.states import NavStatus


class RobotInterface:
    """Provides high-level interface to one robot's navigation and motion."""

    def __init__(
        self,
        node: Node,
        robot_name: str,
        nav_action_name: str,
        cmd_vel_topic: Optional[str] = None,
        goal_frame: str = 'map',
    ):
        """
        Initialize robot interface.

        Args:
            node: ROS2 node for logging and communication
            robot_name: Name used in log messages
            nav_action_name: NavigateToPose action server name
            cmd_vel_topic: Velocity command topic, None if not driven directly
            goal_frame: Frame navigation goals are expressed in
        """
        self.node = node
        self.robot_name = robot_name
        self.goal_frame = goal_frame

        self.navigation = NavigationClient(node, nav_action_name, robot_name)
        self.cmd_vel_pub = (
            node.create_publisher(Twist, cmd_vel_topic, 5) if cmd_vel_topic else None
        )

    def wait_for_navigation(self, timeout_sec: float = 5.0):
        self.navigation.wait_for_server(timeout_sec=timeout_sec)

    # ========================================================================
    # NAVIGATION
    # ========================================================================

    def send_goal(self, x: float, y: float):
        self.navigation.send_goal(x, y, frame_id=self.goal_frame)

    def goal_status(self) -> NavStatus:
        return self.navigation.goal_status()

    # ========================================================================
    # VELOCITY COMMANDS
    # ========================================================================

    def publish_velocity(self, linear: float = 0.0, angular: float = 0.0):
        """Publish a planar {linear, angular} command."""
        if self.cmd_vel_pub is None:
            self.node.get_logger().warning(
                f"{self.robot_name} has no cmd_vel publisher; dropping velocity command"
            )
            return
        twist_msg = Twist()
        twist_msg.linear.x = float(linear)
        twist_msg.angular.z = float(angular)
        self.cmd_vel_pub.publish(twist_msg)

    def rotate(self, angular_speed: float):
        """Spin in place."""
        self.publish_velocity(0.0, angular_speed)

    def stop(self):
        self.publish_velocity(0.0, 0.0)
