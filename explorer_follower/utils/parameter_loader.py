#!/usr/bin/env python3
"""Parameter loading and management for the explorer/follower mission."""
from rclpy.node import Node

from ..catalog import parse_waypoint_sequence
from ..exceptions import ConfigurationError
from .mission_params import MissionParams


class ParameterLoader:
    """Manages ROS2 parameters for the mission coordinator."""

    def __init__(self, node: Node):
        """Initialize parameter loader with ROS2 node."""
        self.node = node
        self._declare_all_parameters()
        self.params = self._load_all_parameters()

    def _declare_all_parameters(self):
        """Declare all ROS2 parameters with default values."""
        defaults = MissionParams()

        # Target parameters
        self.node.declare_parameter('explorer_targets', [''])
        self.node.declare_parameter('explorer_home', list(defaults.explorer_home))
        self.node.declare_parameter('follower_home', list(defaults.follower_home))
        self.node.declare_parameter('explorer_return_home', defaults.explorer_return_home)

        # Frame parameters
        self.node.declare_parameter('map_frame', defaults.map_frame)
        self.node.declare_parameter('camera_frame', defaults.camera_frame)
        self.node.declare_parameter('marker_frame', defaults.marker_frame)
        self.node.declare_parameter('secondary_frame', defaults.secondary_frame)
        self.node.declare_parameter('marker_vertical_offset', defaults.marker_vertical_offset)

        # Interface parameters
        self.node.declare_parameter('explorer_nav_action', defaults.explorer_nav_action)
        self.node.declare_parameter('follower_nav_action', defaults.follower_nav_action)
        self.node.declare_parameter('explorer_cmd_vel_topic', defaults.explorer_cmd_vel_topic)
        self.node.declare_parameter('observation_topic', defaults.observation_topic)

        # Timing and recovery parameters
        self.node.declare_parameter('control_rate_hz', defaults.control_rate_hz)
        self.node.declare_parameter('scan_angular_speed', defaults.scan_angular_speed)
        self.node.declare_parameter('lookup_retry_interval_s', defaults.lookup_retry_interval)
        self.node.declare_parameter('server_wait_timeout_s', defaults.server_wait_timeout)
        self.node.declare_parameter('goal_retry_limit', defaults.goal_retry_limit)

    def _load_all_parameters(self) -> MissionParams:
        """Load all parameters into a MissionParams record."""
        # Targets - raw string array, parsed here so bad config fails at startup
        target_param = self.node.get_parameter('explorer_targets')
        target_strings = [s for s in target_param.get_parameter_value().string_array_value if s]
        explorer_targets = tuple(parse_waypoint_sequence(target_strings))

        explorer_home = self._get_point('explorer_home')
        follower_home = self._get_point('follower_home')

        params = MissionParams(
            explorer_targets=explorer_targets,
            explorer_home=explorer_home,
            follower_home=follower_home,
            explorer_return_home=self._get_bool('explorer_return_home'),
            map_frame=self._get_string('map_frame'),
            camera_frame=self._get_string('camera_frame'),
            marker_frame=self._get_string('marker_frame'),
            secondary_frame=self._get_string('secondary_frame'),
            marker_vertical_offset=self._get_double('marker_vertical_offset'),
            explorer_nav_action=self._get_string('explorer_nav_action'),
            follower_nav_action=self._get_string('follower_nav_action'),
            explorer_cmd_vel_topic=self._get_string('explorer_cmd_vel_topic'),
            observation_topic=self._get_string('observation_topic'),
            control_rate_hz=self._get_double('control_rate_hz'),
            scan_angular_speed=self._get_double('scan_angular_speed'),
            lookup_retry_interval=self._get_double('lookup_retry_interval_s'),
            server_wait_timeout=self._get_double('server_wait_timeout_s'),
            goal_retry_limit=self._get_integer('goal_retry_limit'),
        )

        if params.control_rate_hz <= 0.0:
            raise ConfigurationError(
                f"control_rate_hz must be positive, got {params.control_rate_hz}"
            )
        return params

    def _get_string(self, name: str) -> str:
        return self.node.get_parameter(name).get_parameter_value().string_value

    def _get_double(self, name: str) -> float:
        return self.node.get_parameter(name).get_parameter_value().double_value

    def _get_integer(self, name: str) -> int:
        return self.node.get_parameter(name).get_parameter_value().integer_value

    def _get_bool(self, name: str) -> bool:
        return self.node.get_parameter(name).get_parameter_value().bool_value

    def _get_point(self, name: str):
        values = list(self.node.get_parameter(name).get_parameter_value().double_array_value)
        if len(values) != 2:
            raise ConfigurationError(f"Parameter '{name}' must be [x, y], got {values}")
        return (values[0], values[1])
