"""Mission configuration utilities.

ParameterLoader needs rclpy and is imported from its module directly.
"""
from .mission_params import MissionParams

__all__ = ['MissionParams']
