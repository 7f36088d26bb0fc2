"""State machine module for the explorer/follower mission."""
from .states import MissionState, MissionPhase, NavStatus
from .mission_manager import MissionManager
from .mission_context import MissionContext

__all__ = ['MissionState', 'MissionPhase', 'NavStatus', 'MissionManager', 'MissionContext']
