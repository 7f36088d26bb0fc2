"""Controller module: Nav2, cmd_vel and tf2 adapters."""
from .navigation_client import NavigationClient
from .robot_interface import RobotInterface
from .tf_bridge import TfBridge

__all__ = ['NavigationClient', 'RobotInterface', 'TfBridge']
