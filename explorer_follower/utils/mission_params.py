#!/usr/bin/env python3
"""Mission configuration record shared by the node and the state machine."""
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True, slots=True)
class MissionParams:
    """Resolved mission parameters. Defaults match config/mission.yaml."""

    # Targets
    explorer_targets: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)
    explorer_home: Tuple[float, float] = (-4.0, 2.5)
    follower_home: Tuple[float, float] = (-4.0, 3.5)
    explorer_return_home: bool = False

    # Frames
    map_frame: str = 'map'
    camera_frame: str = 'explorer_tf/camera_rgb_optical_frame'
    marker_frame: str = 'marker_frame'
    secondary_frame: str = 'secondary_frame'
    marker_vertical_offset: float = 0.4

    # Interfaces
    explorer_nav_action: str = '/explorer/navigate_to_pose'
    follower_nav_action: str = '/follower/navigate_to_pose'
    explorer_cmd_vel_topic: str = 'explorer/cmd_vel'
    observation_topic: str = 'aruco_detections'

    # Timing and recovery
    control_rate_hz: float = 10.0
    scan_angular_speed: float = 0.1
    lookup_retry_interval: float = 1.0
    server_wait_timeout: float = 5.0
    goal_retry_limit: int = 3
