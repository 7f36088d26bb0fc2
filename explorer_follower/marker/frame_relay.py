#!/usr/bin/env python3
"""
Frame Relay Module

Re-publishes a marker observation as two chained tf frames so the marker can
later be resolved in the map frame:

    camera_frame -> marker_frame -> secondary_frame

`marker_frame` is the observed marker pose, `secondary_frame` sits a fixed
distance along the marker's z axis, in front of the tag face.
"""

from typing import Callable, List, Optional, Sequence

from .marker_channel import MarkerIdChannel
from .observation import Detection, FrameTransform, IDENTITY_ROTATION


class FrameRelay:
    """Turns marker detections into tf publications and marker id hand-offs."""

    def __init__(
        self,
        transform_sink,
        channel: MarkerIdChannel,
        camera_frame: str,
        marker_frame: str,
        secondary_frame: str,
        logger,
        vertical_offset: float = 0.4,
        is_valid_marker_id: Optional[Callable[[int], bool]] = None
    ):
        """
        Initialize frame relay.

        Args:
            transform_sink: Object with send_transforms(Sequence[FrameTransform])
                            returning the stamp the frames were sent with
            channel: Marker id hand-off to the location resolver
            camera_frame: Sensor optical frame the detections are expressed in
            marker_frame: Name of the frame published at the marker pose
            secondary_frame: Name of the offset frame resolved in the map
            logger: Node logger
            vertical_offset: Offset of secondary_frame along marker z (meters)
            is_valid_marker_id: Optional predicate rejecting ids with no slot
        """
        self.transform_sink = transform_sink
        self.channel = channel
        self.camera_frame = camera_frame
        self.marker_frame = marker_frame
        self.secondary_frame = secondary_frame
        self.vertical_offset = vertical_offset
        self.is_valid_marker_id = is_valid_marker_id
        self.logger = logger

    def build_transforms(self, detection: Detection) -> List[FrameTransform]:
        """Return the marker frame and its offset child for a detection."""
        marker = FrameTransform(
            parent_frame=self.camera_frame,
            child_frame=self.marker_frame,
            translation=tuple(float(v) for v in detection.translation),
            rotation=tuple(float(v) for v in detection.rotation),
        )
        secondary = FrameTransform(
            parent_frame=self.marker_frame,
            child_frame=self.secondary_frame,
            translation=(0.0, 0.0, self.vertical_offset),
            rotation=IDENTITY_ROTATION,
        )
        return [marker, secondary]

    def handle_observation(self, detections: Sequence[Detection]) -> Optional[int]:
        """
        Relay one observation batch.

        Only the first detection is used; empty batches are ignored.

        Returns:
            The relayed marker id, or None if nothing was relayed
        """
        if not detections:
            return None

        first = detections[0]
        if len(detections) > 1:
            self.logger.debug(
                f"Observation holds {len(detections)} markers; "
                f"using first (id {first.marker_id})"
            )

        if self.is_valid_marker_id is not None and not self.is_valid_marker_id(first.marker_id):
            self.logger.warning(
                f"Ignoring marker {first.marker_id}: no follower slot for this id"
            )
            return None

        # Frames go out before the id, and the id carries their stamp so the
        # resolver can tell them apart from the previous marker's frames
        stamp = self.transform_sink.send_transforms(self.build_transforms(first))
        self.channel.publish(first.marker_id, stamp)
        return first.marker_id
