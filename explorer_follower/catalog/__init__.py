from .target_catalog import TargetCatalog, MarkerLocation, parse_waypoint_sequence


__all__ = [
    'TargetCatalog',
    'MarkerLocation',
    'parse_waypoint_sequence',
]
