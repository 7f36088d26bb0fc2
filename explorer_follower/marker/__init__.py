"""Marker hand-off, tf relay and map-frame resolution."""
from .observation import Detection, FrameTransform, IDENTITY_ROTATION
from .marker_channel import MarkerIdChannel
from .frame_relay import FrameRelay
from .location_resolver import LocationResolver

__all__ = [
    'Detection',
    'FrameTransform',
    'IDENTITY_ROTATION',
    'MarkerIdChannel',
    'FrameRelay',
    'LocationResolver',
]
