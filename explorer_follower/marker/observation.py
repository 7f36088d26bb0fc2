#!/usr/bin/env python3
"""Value types exchanged with the perception and transform-store collaborators."""
from dataclasses import dataclass
from typing import Tuple


Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]  # (x, y, z, w)

IDENTITY_ROTATION: Quaternion = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True, slots=True)
class Detection:
    """A single marker detection in the sensor-local (camera optical) frame."""
    marker_id: int
    translation: Vector3
    rotation: Quaternion = IDENTITY_ROTATION


@dataclass(frozen=True, slots=True)
class FrameTransform:
    """A named transform to publish: pose of `child_frame` in `parent_frame`."""
    parent_frame: str
    child_frame: str
    translation: Vector3
    rotation: Quaternion = IDENTITY_ROTATION
