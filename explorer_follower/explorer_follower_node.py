#!/usr/bin/env python3
"""
Thin orchestrator node for the explorer/follower mission.

This node initializes subsystems and drives the mission state machine at a
fixed rate. The heavy lifting is delegated to specialized modules:
- MissionManager: State execution logic
- RobotInterface: Nav2 goals and velocity commands per robot
- FrameRelay / LocationResolver: Marker frames and map-frame localization
- TargetCatalog: Explorer waypoints and follower destinations
- ParameterLoader: Configuration management
"""
from typing import List

import rclpy
from rclpy.node import Node
from rclpy.task import Future
from rclpy.qos import QoSProfile, QoSReliabilityPolicy, QoSDurabilityPolicy, QoSHistoryPolicy
from aruco_opencv_msgs.msg import ArucoDetection
from std_msgs.msg import UInt8

from .catalog import TargetCatalog
from .controller import RobotInterface, TfBridge
from .marker import Detection, FrameRelay, LocationResolver
from .state_machine import MissionContext, MissionManager, MissionState
from .utils.parameter_loader import ParameterLoader


class ExplorerFollower(Node):
    """
    The central orchestrator node for the two-robot search-then-retrieve mission.
    """

    def __init__(self, **kwargs):
        super().__init__('explorer_follower', **kwargs)

        # Load parameters
        self.params = ParameterLoader(self).params

        # Robots
        self.explorer = RobotInterface(
            self,
            'explorer',
            self.params.explorer_nav_action,
            cmd_vel_topic=self.params.explorer_cmd_vel_topic,
            goal_frame=self.params.map_frame
        )
        self.follower = RobotInterface(
            self,
            'follower',
            self.params.follower_nav_action,
            goal_frame=self.params.map_frame
        )

        # Targets
        self.catalog = TargetCatalog(
            self.params.explorer_targets,
            self.params.explorer_home,
            logger=self.get_logger()
        )

        # Marker frames and localization
        self.tf_bridge = TfBridge(self)
        context = MissionContext()

        self.frame_relay = FrameRelay(
            self.tf_bridge,
            context.marker_channel,
            camera_frame=self.params.camera_frame,
            marker_frame=self.params.marker_frame,
            secondary_frame=self.params.secondary_frame,
            vertical_offset=self.params.marker_vertical_offset,
            is_valid_marker_id=self.catalog.is_valid_marker_id,
            logger=self.get_logger()
        )
        self.resolver = LocationResolver(
            self.tf_bridge,
            self.catalog,
            context.marker_channel,
            target_frame=self.params.map_frame,
            source_frame=self.params.secondary_frame,
            retry_interval=self.params.lookup_retry_interval,
            clock=self._now_sec,
            logger=self.get_logger()
        )

        # Initialize mission manager with all dependencies
        self.mission_manager = MissionManager(
            self,
            self.explorer,
            self.follower,
            self.catalog,
            self.resolver,
            self.params,
            context=context
        )

        # Wait for both navigation stacks before anything is dispatched
        self.explorer.wait_for_navigation(self.params.server_wait_timeout)
        self.follower.wait_for_navigation(self.params.server_wait_timeout)

        self._setup_observation_sub()

        # Current mission state
        self.mission_state = MissionManager.INITIAL_STATE
        self.finished = Future()
        state_qos = QoSProfile(
            reliability=QoSReliabilityPolicy.RELIABLE,
            durability=QoSDurabilityPolicy.TRANSIENT_LOCAL,
            history=QoSHistoryPolicy.KEEP_LAST,
            depth=1
        )
        self.state_pub = self.create_publisher(UInt8, 'mission_state', state_qos)
        self._last_published_state = None

        # Start main control loop
        self.main_timer = self.create_timer(
            1.0 / self.params.control_rate_hz, self._main_logic_loop
        )

        self.get_logger().info(
            f"Explorer/Follower node started with {self.catalog.waypoint_count - 1} "
            f"lookup locations. Current state: {self.mission_state.name}"
        )

    def _setup_observation_sub(self):
        """Initialize ArUco subscriber."""
        qos_profile = QoSProfile(
            reliability=QoSReliabilityPolicy.BEST_EFFORT,
            durability=QoSDurabilityPolicy.VOLATILE,
            history=QoSHistoryPolicy.KEEP_LAST,
            depth=5
        )
        self.aruco_sub = self.create_subscription(
            ArucoDetection,
            self.params.observation_topic,
            self._aruco_callback,
            qos_profile
        )

    def _now_sec(self) -> float:
        return self.get_clock().now().nanoseconds / 1e9

    def _publish_mission_state(self):
        """Publish mission state transitions for monitoring dashboards."""
        current_value = self.mission_state.value
        if current_value == self._last_published_state:
            return
        msg = UInt8()
        msg.data = current_value
        self.state_pub.publish(msg)
        self._last_published_state = current_value

    # ========================================================================
    # ROS2 CALLBACK METHODS
    # ========================================================================

    def _aruco_callback(self, msg: ArucoDetection):
        """Relay the first detected marker into tf and hand its id to the resolver."""
        self.frame_relay.handle_observation(detections_from_msg(msg))

    # ========================================================================
    # MAIN CONTROL LOOP
    # ========================================================================

    def _main_logic_loop(self):
        """
        Main state machine control loop.

        Delegates state execution to the MissionManager.
        """
        self._publish_mission_state()

        if self.mission_state.is_terminal:
            return

        new_state = self.mission_manager.execute_state(self.mission_state)
        if new_state is not None and new_state != self.mission_state:
            self.get_logger().info(
                f"Transition {self.mission_state.name} -> {new_state.name}"
            )
            self.mission_state = new_state

        if self.mission_state.is_terminal:
            self._publish_mission_state()
            self.main_timer.cancel()
            if not self.finished.done():
                self.finished.set_result(self.mission_state)


def detections_from_msg(msg: ArucoDetection) -> List[Detection]:
    """Convert an ArucoDetection message into Detection records, in message order."""
    detections = []
    for marker in msg.markers:
        position = marker.pose.position
        orientation = marker.pose.orientation
        detections.append(Detection(
            marker_id=int(marker.marker_id),
            translation=(position.x, position.y, position.z),
            rotation=(orientation.x, orientation.y, orientation.z, orientation.w),
        ))
    return detections


def main(args=None):
    """Main entry point for the explorer/follower node."""
    rclpy.init(args=args)
    node = ExplorerFollower()
    try:
        rclpy.spin_until_future_complete(node, node.finished)
        if node.finished.done():
            final_state: MissionState = node.finished.result()
            node.get_logger().info(f"Mission ended in state {final_state.name}")
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
