#!/usr/bin/env python3
"""tf2 adapter: publishes relayed marker frames and resolves them in the map."""
from typing import Optional, Sequence, Tuple

from rclpy.time import Time
from rclpy.node import Node
import tf2_ros
from tf2_ros import TransformException
from geometry_msgs.msg import TransformStamped

from ..exceptions import TransformUnavailableError
from ..marker import FrameTransform


class TfBridge:
    """
    Transform sink and source backed by tf2.

    send_transforms() broadcasts on /tf and returns the stamp it used.
    lookup_planar() asks the buffer for the latest available transform without
    waiting, and treats a result older than `not_before` as unavailable.
    """

    def __init__(self, node: Node):
        self.node = node

        self.tf_broadcaster = tf2_ros.TransformBroadcaster(node)
        self.tf_buffer = tf2_ros.Buffer()
        self.tf_listener = tf2_ros.TransformListener(self.tf_buffer, node)

    def send_transforms(self, transforms: Sequence[FrameTransform]) -> Time:
        now = self.node.get_clock().now()
        stamp = now.to_msg()
        self.tf_broadcaster.sendTransform([to_transform_msg(t, stamp) for t in transforms])
        return now

    def lookup_planar(
        self,
        target_frame: str,
        source_frame: str,
        not_before: Optional[Time] = None
    ) -> Tuple[float, float]:
        """
        Return the (x, y) of `source_frame` origin expressed in `target_frame`.

        Raises:
            TransformUnavailableError: chain incomplete, or the newest transform
                the buffer holds is stamped before `not_before`
        """
        try:
            tf = self.tf_buffer.lookup_transform(target_frame, source_frame, Time())
        except TransformException as ex:
            raise TransformUnavailableError(str(ex)) from ex

        # Until /tf delivers the new marker frames the buffer still answers
        # with whatever marker was relayed before
        if not_before is not None:
            stamp = Time.from_msg(tf.header.stamp, clock_type=not_before.clock_type)
            if stamp < not_before:
                raise TransformUnavailableError(
                    f"{target_frame} -> {source_frame} is stale: "
                    f"{stamp.nanoseconds} < {not_before.nanoseconds} ns"
                )

        t = tf.transform.translation
        return (t.x, t.y)


def to_transform_msg(transform: FrameTransform, stamp) -> TransformStamped:
    """Convert a FrameTransform into a stamped tf message."""
    tx, ty, tz = transform.translation
    qx, qy, qz, qw = transform.rotation

    ts = TransformStamped()
    ts.header.stamp = stamp
    ts.header.frame_id = transform.parent_frame
    ts.child_frame_id = transform.child_frame
    ts.transform.translation.x = float(tx)
    ts.transform.translation.y = float(ty)
    ts.transform.translation.z = float(tz)
    ts.transform.rotation.x = float(qx)
    ts.transform.rotation.y = float(qy)
    ts.transform.rotation.z = float(qz)
    ts.transform.rotation.w = float(qw)
    return ts
